"""SQLAlchemy query builder for question feeds.

Translates domain FilterSpec / SortSpec / PageSpec into SQLAlchemy
WHERE, ORDER BY, and LIMIT/OFFSET clauses.  This is the only place
where feed definitions meet SQL.

Works on any model exposing the mapped fields below (``Question`` and
``Solution``); tag membership only exists on ``Question``.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import asc, desc, distinct, func
from sqlalchemy.orm import Query, joinedload, selectinload

from forum.domain.common.query import (
    BooleanFilter,
    CategoricalFilter,
    FilterMode,
    FilterSpec,
    NullFilter,
    PageSpec,
    RangeFilter,
    SortOrder,
    SortSpec,
    TagFilter,
)
from forum.models.question import Question, QuestionInformation, Tag

logger = logging.getLogger(__name__)

# ── Column resolution ───────────────────────────────────────────────────

# Maps domain filter/sort field names to model attribute names.
# Fields NOT in this map are unknown and skipped.
_FIELD_MAP: dict[str, str] = {
    "id": "id",
    "author_id": "author_id",
    "author": "author_id",  # alias
    "last_touched_by_id": "last_touched_by_id",
    "created_at": "created_at",
    "last_updated_at": "last_updated_at",
    "updated_at": "last_updated_at",  # alias
    "views": "views",
    "vote_count": "vote_count",
    "votes": "vote_count",  # alias
    "answer_count": "answer_count",
    "solution_id": "solution_id",
    "solution": "solution_id",  # alias
    "question_id": "question_id",
    "invisible": "invisible",
}

# Ordering used when a sort field cannot be resolved.
_FALLBACK_SORT_FIELD = "vote_count"

# Dialects whose random function is spelled rand().
_RAND_DIALECTS = frozenset({"mysql", "mariadb"})


# ── Public API ──────────────────────────────────────────────────────────


def resolve_column(model: type, field_name: str) -> Any | None:
    """Return the mapped column for *field_name* on *model*, or None."""
    attr = _FIELD_MAP.get(field_name)
    if attr is None:
        return None
    return getattr(model, attr, None)


def apply_filters(query: Query, filters: FilterSpec, model: type = Question) -> Query:
    """Apply all FilterSpec constraints as SQLAlchemy WHERE clauses."""
    for rf in filters.range_filters:
        query = _apply_range_filter(query, rf, model)
    for cf in filters.categorical_filters:
        query = _apply_categorical_filter(query, cf, model)
    for bf in filters.boolean_filters:
        query = _apply_boolean_filter(query, bf, model)
    for nf in filters.null_filters:
        query = _apply_null_filter(query, nf, model)
    for tf in filters.tag_filters:
        query = _apply_tag_filter(query, tf, model)
    return query


def apply_sort(query: Query, sort: SortSpec, model: type = Question) -> Query:
    """Apply ORDER BY for *sort*.

    ``random`` shuffles in the database.  Unknown fields fall back to
    vote count descending.  Column orderings get ``id`` as a
    tie-breaker so that consecutive pages never overlap.
    """
    if sort.is_random:
        return query.order_by(_random_function(query))

    col = resolve_column(model, sort.field)
    if col is None:
        logger.warning("Unknown sort field %r; ordering by %s", sort.field, _FALLBACK_SORT_FIELD)
        return query.order_by(desc(resolve_column(model, _FALLBACK_SORT_FIELD)), desc(model.id))

    order_fn = asc if sort.order == SortOrder.ASC else desc
    return query.order_by(order_fn(col), order_fn(model.id))


def apply_page(query: Query, page: PageSpec) -> Query:
    """Apply LIMIT/OFFSET for *page*."""
    return query.offset(page.offset).limit(page.limit)


def count_rows(query: Query, model: type = Question) -> int:
    """Count distinct root rows matched by *query*."""
    return query.with_entities(func.count(distinct(model.id))).scalar() or 0


def with_list_loads(query: Query) -> Query:
    """Eager-load what question listings render: authors, title, tags, solution."""
    return query.options(
        joinedload(Question.author),
        joinedload(Question.last_touched_by),
        joinedload(Question.information).selectinload(QuestionInformation.tags),
        joinedload(Question.solution),
    )


def with_feed_item_loads(query: Query) -> Query:
    """Eager-load what the syndication projection reads."""
    return query.options(
        joinedload(Question.author),
        joinedload(Question.information),
    )


# ── Private helpers ─────────────────────────────────────────────────────


def _apply_range_filter(query: Query, rf: RangeFilter, model: type) -> Query:
    """Apply a range filter with inclusive or exclusive bounds."""
    col = resolve_column(model, rf.field)
    if col is None:
        logger.warning("Skipping range filter on unknown field %r", rf.field)
        return query
    if rf.min_value is not None:
        query = query.filter(col >= rf.min_value if rf.min_inclusive else col > rf.min_value)
    if rf.max_value is not None:
        query = query.filter(col <= rf.max_value if rf.max_inclusive else col < rf.max_value)
    return query


def _apply_categorical_filter(query: Query, cf: CategoricalFilter, model: type) -> Query:
    """Apply an include/exclude categorical filter on a column."""
    col = resolve_column(model, cf.field)
    if col is None:
        logger.warning("Skipping categorical filter on unknown field %r", cf.field)
        return query
    if cf.mode == FilterMode.EXCLUDE:
        return query.filter(~col.in_(cf.values))
    return query.filter(col.in_(cf.values))


def _apply_boolean_filter(query: Query, bf: BooleanFilter, model: type) -> Query:
    col = resolve_column(model, bf.field)
    if col is None:
        logger.warning("Skipping boolean filter on unknown field %r", bf.field)
        return query
    return query.filter(col == bf.value)


def _apply_null_filter(query: Query, nf: NullFilter, model: type) -> Query:
    col = resolve_column(model, nf.field)
    if col is None:
        logger.warning("Skipping null filter on unknown field %r", nf.field)
        return query
    return query.filter(col.is_(None) if nf.is_null else col.isnot(None))


def _apply_tag_filter(query: Query, tf: TagFilter, model: type) -> Query:
    """Tag membership as a correlated EXISTS, so one row per question."""
    if model is not Question:
        logger.warning("Skipping tag filter on %s: only questions carry tags", model.__name__)
        return query
    return query.filter(
        Question.information.has(QuestionInformation.tags.any(Tag.id == tf.tag_id))
    )


def _random_function(query: Query):
    dialect = query.session.get_bind().dialect.name
    return func.rand() if dialect in _RAND_DIALECTS else func.random()
