"""SQLAlchemy Unit of Work: concrete implementation of the domain UoW port.

Wraps a SQLAlchemy Session and exposes repository instances that share
the same session, so a use case reads every feed through one
connection and one visibility policy.
"""

from __future__ import annotations

from typing import Self

from sqlalchemy.orm import Session, sessionmaker

from forum.domain.common.uow import UnitOfWork
from forum.domain.questions.models import PAGE_SIZE, RELATED_COUNT, TAG_PAGE_SIZE, ViewerRole
from forum.domain.questions.ports import VisibilityPolicy
from forum.infra.db.repositories.question_repo import SqlQuestionRepository
from forum.infra.db.repositories.tag_repo import SqlTagRepository
from forum.infra.db.repositories.user_repo import SqlUserRepository
from forum.infra.db.repositories.with_author_repo import SqlAuthorPaginatedRepository
from forum.models.question import Question


class SqlUnitOfWork(UnitOfWork):
    """Transactional boundary backed by a SQLAlchemy Session."""

    def __init__(
        self,
        session_factory: sessionmaker,
        visibility: VisibilityPolicy,
        *,
        page_size: int = PAGE_SIZE,
        tag_page_size: int = TAG_PAGE_SIZE,
        related_count: int = RELATED_COUNT,
    ) -> None:
        self._session_factory = session_factory
        self._visibility = visibility
        self._page_size = page_size
        self._tag_page_size = tag_page_size
        self._related_count = related_count

    def __enter__(self) -> Self:
        self.session: Session = self._session_factory()
        self.questions = SqlQuestionRepository(
            self.session,
            self._visibility,
            page_size=self._page_size,
            tag_page_size=self._tag_page_size,
            related_count=self._related_count,
        )
        self.users = SqlUserRepository(self.session)
        self.tags = SqlTagRepository(self.session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self.rollback()
        self.session.close()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def authored_questions(self, role: ViewerRole) -> SqlAuthorPaginatedRepository:
        return SqlAuthorPaginatedRepository(
            self.session, Question, role, self._visibility, page_size=self._page_size
        )
