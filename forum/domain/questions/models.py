"""Domain models for the question feeds bounded context.

Pure value objects and enums that represent feed concepts
independently of any infrastructure (ORM, HTTP, caching).
All dataclasses use frozen=True for immutability.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Feed contracts
# ---------------------------------------------------------------------------

PAGE_SIZE = 35  # home, unsolved, unanswered and per-author feeds
TAG_PAGE_SIZE = 50  # per-tag feed
RELATED_COUNT = 5  # "related questions" box
SPAM_BOUNDARY = -5  # questions scored below this are hidden from non-moderators


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SortKey(str, Enum):
    """Named ordering criteria for question listings."""

    RECENCY = "recency"  # last_updated_at desc
    CREATION = "creation"  # created_at desc
    VIEWS = "views"
    ANSWERED = "answered"
    VOTED = "voted"
    RANDOM = "random"


class FeedType(str, Enum):
    """Paginated interactive feeds."""

    ALL = "all"
    UNSOLVED = "unsolved"
    UNANSWERED = "unanswered"
    TAG = "tag"


class ViewerRole(str, Enum):
    """Who is looking at a per-author listing.

    The owner sees their own hidden items; a visitor gets the
    visibility policy applied.
    """

    OWNER = "owner"
    VISITOR = "visitor"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Actor:
    """The member a listing is rendered for (None id = anonymous)."""

    user_id: int | None = None
    is_moderator: bool = False

    @classmethod
    def anonymous(cls) -> Actor:
        return cls()


@dataclass(frozen=True)
class QuestionFeedItem:
    """Read-only projection used by syndication (RSS) output."""

    id: int
    title: str
    body: str
    author_name: str
    created_at: datetime


@dataclass(frozen=True)
class QuestionPage:
    """One page of a feed plus the number of pages the feed spans.

    Bundles the items with the page metadata so callers get a single
    aggregate instead of ``(list, int)`` tuples.
    """

    items: tuple[Any, ...]
    page: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def is_empty(self) -> bool:
        return not self.items


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "PAGE_SIZE",
    "TAG_PAGE_SIZE",
    "RELATED_COUNT",
    "SPAM_BOUNDARY",
    "SortKey",
    "FeedType",
    "ViewerRole",
    "Actor",
    "QuestionFeedItem",
    "QuestionPage",
]
