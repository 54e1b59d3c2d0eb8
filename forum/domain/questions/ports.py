"""Ports (abstract interfaces) for the question feeds domain.

These define WHAT the domain needs from the outside world without
specifying HOW it's provided.  Concrete implementations live in infra/.

Note: No infrastructure types (Session, Engine) appear here.
Repositories receive their session through the UnitOfWork,
not through method parameters.
"""

from __future__ import annotations

import abc
from datetime import datetime

from ..common.query import FilterSpec
from .models import QuestionFeedItem, SortKey


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


class VisibilityPolicy(abc.ABC):
    """Decide which rows the current actor may see."""

    @abc.abstractmethod
    def apply_filter(self, filters: FilterSpec) -> FilterSpec:
        """Return a copy of *filters* with visibility predicates added.

        Must not mutate *filters* or alter its existing predicates.
        """
        ...


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


class AuthorPaginatedRepository(abc.ABC):
    """Paginated listing of one member's own items (questions or answers)."""

    @abc.abstractmethod
    def list_for(self, user: object, sort_key: SortKey | str, page: int) -> list[object]:
        ...

    @abc.abstractmethod
    def count_for(self, user: object) -> int:
        ...

    @abc.abstractmethod
    def page_count_for(self, user: object) -> int:
        ...


class QuestionRepository(abc.ABC):
    """Read questions through the feed contracts; ``save`` is a pass-through."""

    @abc.abstractmethod
    def save(self, question: object) -> None:
        ...

    @abc.abstractmethod
    def get_by_id(self, question_id: int) -> object | None:
        """Return the question, or None when no row has this id."""
        ...

    @abc.abstractmethod
    def load(self, question: object) -> object | None:
        """Re-read *question* by its id."""
        ...

    # -- Paginated feeds --------------------------------------------------

    @abc.abstractmethod
    def all_visible(self, page: int) -> list[object]:
        ...

    @abc.abstractmethod
    def unsolved_visible(self, page: int) -> list[object]:
        ...

    @abc.abstractmethod
    def unanswered(self, page: int) -> list[object]:
        ...

    @abc.abstractmethod
    def with_tag_visible(
        self, tag: object, page: int, exclude_answered: bool = False
    ) -> list[object]:
        ...

    @abc.abstractmethod
    def posts_to_paginate_by(
        self, user: object, sort_key: SortKey | str, page: int
    ) -> list[object]:
        """A member's questions as a visitor sees them (visibility policy applied)."""
        ...

    # -- Fixed-size lists -------------------------------------------------

    @abc.abstractmethod
    def ordered_by_creation_date(
        self, max_results: int, tag: object | None = None
    ) -> list[QuestionFeedItem]:
        ...

    @abc.abstractmethod
    def get_related_to(self, question: object) -> list[object]:
        ...

    @abc.abstractmethod
    def hot(self, since: datetime, count: int) -> list[object]:
        ...

    @abc.abstractmethod
    def top(self, section: str, count: int) -> list[object]:
        ...

    @abc.abstractmethod
    def random_unanswered(
        self, after: datetime, before: datetime, count: int
    ) -> list[object]:
        ...

    # -- Counts -------------------------------------------------------------

    @abc.abstractmethod
    def count_with_author(self, user: object) -> int:
        ...

    @abc.abstractmethod
    def number_of_pages_to(self, user: object) -> int:
        ...

    @abc.abstractmethod
    def number_of_pages(
        self, tag: object | None = None, exclude_answered: bool = False
    ) -> int:
        """Pages of the home feed, or of the tag feed with the same filters."""
        ...

    @abc.abstractmethod
    def total_pages_unsolved_visible(self) -> int:
        ...

    @abc.abstractmethod
    def total_pages_without_answers(self) -> int:
        ...


class UserRepository(abc.ABC):
    """Look up forum members."""

    @abc.abstractmethod
    def get_by_id(self, user_id: int) -> object | None:
        ...


class TagRepository(abc.ABC):
    """Look up tags."""

    @abc.abstractmethod
    def get_by_id(self, tag_id: int) -> object | None:
        ...

    @abc.abstractmethod
    def find_by_name(self, name: str) -> object | None:
        ...


__all__ = [
    "VisibilityPolicy",
    "AuthorPaginatedRepository",
    "QuestionRepository",
    "UserRepository",
    "TagRepository",
]
