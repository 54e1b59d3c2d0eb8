"""ListQuestionFeedUseCase: one page of an interactive question feed.

This use case owns the business rules for reading a feed:
  1. Validate the page number and feed parameters
  2. For the per-tag feed, verify the tag exists (raise EntityNotFoundError)
  3. Read the page and the feed's page count through the repository
  4. Return a QuestionPage (empty page is a valid, empty feed)

The use case depends ONLY on domain ports, never on SQLAlchemy,
FastAPI, or any other infrastructure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from forum.domain.common.errors import EntityNotFoundError, InvalidArgumentError
from forum.domain.common.uow import UnitOfWork
from forum.domain.questions.models import FeedType, QuestionPage

logger = logging.getLogger(__name__)


# ── Query (input) ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListQuestionFeedQuery:
    """Immutable value object describing which feed page to read."""

    feed: FeedType = FeedType.ALL
    page: int = 1
    tag_id: int | None = None
    exclude_answered: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "feed", FeedType(self.feed))
        if self.page < 1:
            raise InvalidArgumentError(f"page must be >= 1, got {self.page}")
        if self.feed == FeedType.TAG and self.tag_id is None:
            raise InvalidArgumentError("tag feed requires a tag_id")


# ── Result (output) ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class ListQuestionFeedResult:
    """What the use case returns to the caller."""

    page: QuestionPage


# ── Use Case ────────────────────────────────────────────────────────────


class ListQuestionFeedUseCase:
    """Read one page of the home, unsolved, unanswered or per-tag feed."""

    def execute(
        self, uow: UnitOfWork, query: ListQuestionFeedQuery
    ) -> ListQuestionFeedResult:
        with uow:
            questions = uow.questions

            if query.feed == FeedType.TAG:
                tag = uow.tags.get_by_id(query.tag_id)
                if tag is None:
                    raise EntityNotFoundError("Tag", query.tag_id)
                items = questions.with_tag_visible(
                    tag, query.page, query.exclude_answered
                )
                total_pages = questions.number_of_pages(tag, query.exclude_answered)
            elif query.feed == FeedType.UNSOLVED:
                items = questions.unsolved_visible(query.page)
                total_pages = questions.total_pages_unsolved_visible()
            elif query.feed == FeedType.UNANSWERED:
                items = questions.unanswered(query.page)
                total_pages = questions.total_pages_without_answers()
            else:
                items = questions.all_visible(query.page)
                total_pages = questions.number_of_pages()

            logger.debug(
                "Feed %s page %d: %d items of %d pages",
                query.feed.value, query.page, len(items), total_pages,
            )

        return ListQuestionFeedResult(
            page=QuestionPage(items=tuple(items), page=query.page, total_pages=total_pages)
        )
