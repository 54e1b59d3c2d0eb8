"""Query values shared by every listing: predicates, ordering, page window.

A feed is described entirely by a ``QuerySpec``.  Nothing here knows
about SQL; the infra layer owns the single translation step, and test
fakes evaluate the same values in memory.

Canonical location: ``forum.domain.common.query``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .errors import InvalidArgumentError

RANDOM_SORT_FIELD = "random"

Bound = float | int | datetime


# ── Page arithmetic ─────────────────────────────────────────────────────


def offset_for(page: int, page_size: int) -> int:
    """Row offset of a 1-based *page*."""
    if page < 1:
        raise InvalidArgumentError(f"page must be >= 1, got {page}")
    return page_size * (page - 1)


def page_count_for(total_count: int, page_size: int) -> int:
    """Pages needed to show *total_count* rows (0 rows, 0 pages)."""
    pages, remainder = divmod(total_count, page_size)
    return pages + 1 if remainder else pages


# ── Predicates ──────────────────────────────────────────────────────────


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FilterMode(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class RangeFilter:
    """``min <= field <= max``; either side may be open or exclusive."""

    field: str
    min_value: Bound | None = None
    max_value: Bound | None = None
    min_inclusive: bool = True
    max_inclusive: bool = True


@dataclass(frozen=True)
class CategoricalFilter:
    field: str
    values: tuple[str | int, ...]
    mode: FilterMode = FilterMode.INCLUDE


@dataclass(frozen=True)
class BooleanFilter:
    field: str
    value: bool


@dataclass(frozen=True)
class NullFilter:
    """``field IS NULL``, or ``IS NOT NULL`` when *is_null* is False."""

    field: str
    is_null: bool = True


@dataclass(frozen=True)
class TagFilter:
    """Question carries the tag with this id."""

    tag_id: int


@dataclass
class FilterSpec:
    """Conjunction of predicates, assembled with chained ``add_*`` calls.

    Every ``add_*`` returns ``self``.  Calls that would add nothing
    (a range without bounds, no categorical values, a ``None`` tag) are
    ignored, so feed definitions can pass optional arguments straight
    through.
    """

    range_filters: list[RangeFilter] = field(default_factory=list)
    categorical_filters: list[CategoricalFilter] = field(default_factory=list)
    boolean_filters: list[BooleanFilter] = field(default_factory=list)
    null_filters: list[NullFilter] = field(default_factory=list)
    tag_filters: list[TagFilter] = field(default_factory=list)

    def add_range(
        self,
        field_name: str,
        min_value: Bound | None = None,
        max_value: Bound | None = None,
        *,
        min_inclusive: bool = True,
        max_inclusive: bool = True,
    ) -> FilterSpec:
        if min_value is None and max_value is None:
            return self
        self.range_filters.append(
            RangeFilter(field_name, min_value, max_value, min_inclusive, max_inclusive)
        )
        return self

    def add_equals(self, field_name: str, value: float | int) -> FilterSpec:
        return self.add_range(field_name, min_value=value, max_value=value)

    def add_categorical(
        self,
        field_name: str,
        values: tuple[str | int, ...] | list[str | int],
        mode: FilterMode = FilterMode.INCLUDE,
    ) -> FilterSpec:
        if values:
            self.categorical_filters.append(CategoricalFilter(field_name, tuple(values), mode))
        return self

    def add_boolean(self, field_name: str, value: bool) -> FilterSpec:
        self.boolean_filters.append(BooleanFilter(field_name, value))
        return self

    def add_null(self, field_name: str, is_null: bool = True) -> FilterSpec:
        self.null_filters.append(NullFilter(field_name, is_null))
        return self

    def add_tag(self, tag_id: int | None) -> FilterSpec:
        if tag_id is not None:
            self.tag_filters.append(TagFilter(tag_id))
        return self

    def copy(self) -> FilterSpec:
        """Shallow copy; appending to it leaves this spec untouched."""
        return FilterSpec(
            range_filters=list(self.range_filters),
            categorical_filters=list(self.categorical_filters),
            boolean_filters=list(self.boolean_filters),
            null_filters=list(self.null_filters),
            tag_filters=list(self.tag_filters),
        )

    def is_empty(self) -> bool:
        return not any(
            (
                self.range_filters,
                self.categorical_filters,
                self.boolean_filters,
                self.null_filters,
                self.tag_filters,
            )
        )


# ── Ordering and page window ────────────────────────────────────────────


@dataclass(frozen=True)
class SortSpec:
    field: str = "last_updated_at"
    order: SortOrder = SortOrder.DESC

    @property
    def is_random(self) -> bool:
        return self.field == RANDOM_SORT_FIELD


@dataclass
class PageSpec:
    """1-based page number and page size; both must be positive.

    *stride* is how many rows each earlier page skips.  It defaults to
    *per_page*; a feed whose pages are longer than its stride shows the
    tail of the previous page again at the top of the next one.
    """

    page: int = 1
    per_page: int = 35
    stride: int | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise InvalidArgumentError(f"page must be >= 1, got {self.page}")
        if self.per_page < 1:
            raise InvalidArgumentError(f"per_page must be >= 1, got {self.per_page}")
        if self.stride is not None and self.stride < 1:
            raise InvalidArgumentError(f"stride must be >= 1, got {self.stride}")

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.stride or self.per_page)

    @property
    def limit(self) -> int:
        return self.per_page


@dataclass
class QuerySpec:
    filters: FilterSpec = field(default_factory=FilterSpec)
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageSpec = field(default_factory=PageSpec)


__all__ = [
    "RANDOM_SORT_FIELD",
    "offset_for",
    "page_count_for",
    "SortOrder",
    "FilterMode",
    "RangeFilter",
    "CategoricalFilter",
    "BooleanFilter",
    "NullFilter",
    "TagFilter",
    "FilterSpec",
    "SortSpec",
    "PageSpec",
    "QuerySpec",
]
