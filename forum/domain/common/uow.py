"""Unit of Work port.

A use case opens the unit of work with ``with uow:`` and reads through
the repositories it exposes.  Concrete implementations live in infra/.
"""

from __future__ import annotations

import abc
from typing import Self

from forum.domain.questions.models import ViewerRole
from forum.domain.questions.ports import (
    AuthorPaginatedRepository,
    QuestionRepository,
    TagRepository,
    UserRepository,
)


class UnitOfWork(abc.ABC):
    """Transactional boundary shared by the forum repositories."""

    questions: QuestionRepository
    users: UserRepository
    tags: TagRepository

    @abc.abstractmethod
    def __enter__(self) -> Self:
        ...

    @abc.abstractmethod
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abc.abstractmethod
    def commit(self) -> None:
        ...

    @abc.abstractmethod
    def rollback(self) -> None:
        ...

    @abc.abstractmethod
    def authored_questions(self, role: ViewerRole) -> AuthorPaginatedRepository:
        """Per-author view over questions, filtered according to *role*."""
        ...
