"""Declarative feed definitions.

Each function describes one listing as data: the predicates, the
ordering, the page window, and which visibility check the listing
gets.  Repositories apply the visibility scope and translate the
spec; nothing here touches a store.

Visibility differs across feeds:

* interactive listings run the full visibility policy;
* syndication, hot, top and random feeds only check the moderation
  flag;
* related questions apply no visibility check at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..common.errors import InvalidArgumentError
from ..common.query import FilterSpec, PageSpec, QuerySpec
from .models import PAGE_SIZE, RELATED_COUNT, TAG_PAGE_SIZE, SortKey
from .sorting import sort_for, top_section_sort


class VisibilityScope(str, Enum):
    POLICY = "policy"  # actor-dependent visibility policy
    FLAG_ONLY = "flag_only"  # moderation "invisible" flag only
    NONE = "none"


@dataclass(frozen=True)
class FeedQuery:
    """A feed's query plus the visibility check it must receive."""

    spec: QuerySpec
    visibility: VisibilityScope


def _recent(
    filters: FilterSpec, page: int, page_size: int, stride: int | None = None
) -> FeedQuery:
    return FeedQuery(
        spec=QuerySpec(
            filters=filters,
            sort=sort_for(SortKey.RECENCY),
            page=PageSpec(page=page, per_page=page_size, stride=stride),
        ),
        visibility=VisibilityScope.POLICY,
    )


def _top_n(filters: FilterSpec, sort_key: SortKey, count: int, scope: VisibilityScope) -> FeedQuery:
    return FeedQuery(
        spec=QuerySpec(
            filters=filters,
            sort=sort_for(sort_key),
            page=PageSpec(page=1, per_page=count),
        ),
        visibility=scope,
    )


# ── Interactive, paginated feeds ─────────────────────────────────────────


def all_visible(page: int, page_size: int = PAGE_SIZE) -> FeedQuery:
    return _recent(FilterSpec(), page, page_size)


def unsolved_visible(page: int, page_size: int = PAGE_SIZE) -> FeedQuery:
    return _recent(FilterSpec().add_null("solution_id"), page, page_size)


def unanswered(page: int, page_size: int = PAGE_SIZE) -> FeedQuery:
    return _recent(FilterSpec().add_equals("answer_count", 0), page, page_size)


def with_tag_visible(
    tag_id: int,
    page: int,
    exclude_answered: bool = False,
    page_size: int = TAG_PAGE_SIZE,
    stride: int = PAGE_SIZE,
) -> FeedQuery:
    """Up to *page_size* rows, starting *stride* rows per page in.

    The stride matches the page size the tag feed's page count uses, so
    every counted page starts on a row that exists.
    """
    filters = FilterSpec().add_tag(tag_id)
    if exclude_answered:
        filters.add_equals("answer_count", 0)
    return _recent(filters, page, page_size, stride)


def by_author(
    author_id: int,
    sort_key: SortKey | str,
    page: int,
    page_size: int = PAGE_SIZE,
) -> FeedQuery:
    """One member's own items; the caller decides the visibility scope."""
    return FeedQuery(
        spec=QuerySpec(
            filters=FilterSpec().add_categorical("author_id", (author_id,)),
            sort=sort_for(sort_key),
            page=PageSpec(page=page, per_page=page_size),
        ),
        visibility=VisibilityScope.POLICY,
    )


# ── Fixed-size lists ─────────────────────────────────────────────────────


def ordered_by_creation_date(max_results: int, tag_id: int | None = None) -> FeedQuery:
    """Newest questions for syndication output."""
    return _top_n(FilterSpec().add_tag(tag_id), SortKey.CREATION, max_results, VisibilityScope.FLAG_ONLY)


def related_to(tag_id: int, count: int = RELATED_COUNT) -> FeedQuery:
    return _top_n(FilterSpec().add_tag(tag_id), SortKey.CREATION, count, VisibilityScope.NONE)


def hot(since: datetime, count: int) -> FeedQuery:
    filters = FilterSpec().add_range("created_at", min_value=since, min_inclusive=False)
    return _top_n(filters, SortKey.VOTED, count, VisibilityScope.FLAG_ONLY)


def top(section: str, count: int) -> FeedQuery:
    return FeedQuery(
        spec=QuerySpec(
            filters=FilterSpec(),
            sort=top_section_sort(section),
            page=PageSpec(page=1, per_page=count),
        ),
        visibility=VisibilityScope.FLAG_ONLY,
    )


def random_unanswered(after: datetime, before: datetime, count: int) -> FeedQuery:
    if after > before:
        raise InvalidArgumentError(f"time window is inverted: {after} > {before}")
    filters = (
        FilterSpec()
        .add_null("solution_id")
        .add_range("created_at", min_value=after, max_value=before)
    )
    return _top_n(filters, SortKey.RANDOM, count, VisibilityScope.FLAG_ONLY)


__all__ = [
    "VisibilityScope",
    "FeedQuery",
    "all_visible",
    "unsolved_visible",
    "unanswered",
    "with_tag_visible",
    "by_author",
    "ordered_by_creation_date",
    "related_to",
    "hot",
    "top",
    "random_unanswered",
]
