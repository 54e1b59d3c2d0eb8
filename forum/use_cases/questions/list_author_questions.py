"""ListAuthorQuestionsUseCase: a member's questions on their profile page.

Business rules:
  1. Verify the author exists (raise EntityNotFoundError if not)
  2. The author looking at their own profile is the OWNER and sees
     hidden questions too; everybody else is a VISITOR and gets the
     visibility policy
  3. Return the page together with the item and page counts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from forum.domain.common.errors import EntityNotFoundError, InvalidArgumentError
from forum.domain.common.uow import UnitOfWork
from forum.domain.questions.models import QuestionPage, SortKey, ViewerRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListAuthorQuestionsQuery:
    """Immutable value object describing the profile listing."""

    author_id: int
    viewer_id: int | None = None
    sort_key: SortKey = SortKey.CREATION
    page: int = 1

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvalidArgumentError(f"page must be >= 1, got {self.page}")

    @property
    def role(self) -> ViewerRole:
        if self.viewer_id is not None and self.viewer_id == self.author_id:
            return ViewerRole.OWNER
        return ViewerRole.VISITOR


@dataclass(frozen=True)
class ListAuthorQuestionsResult:
    """What the use case returns to the caller."""

    page: QuestionPage
    total_count: int


class ListAuthorQuestionsUseCase:
    """List one member's questions, paginated and sorted."""

    def execute(
        self, uow: UnitOfWork, query: ListAuthorQuestionsQuery
    ) -> ListAuthorQuestionsResult:
        with uow:
            author = uow.users.get_by_id(query.author_id)
            if author is None:
                raise EntityNotFoundError("User", query.author_id)

            role = query.role
            logger.info(
                "Listing questions of user %s as %s (page=%d)",
                query.author_id, role.value, query.page,
            )
            view = uow.authored_questions(role)
            items = view.list_for(author, query.sort_key, query.page)
            total_count = view.count_for(author)
            total_pages = view.page_count_for(author)

        return ListAuthorQuestionsResult(
            page=QuestionPage(items=tuple(items), page=query.page, total_pages=total_pages),
            total_count=total_count,
        )
