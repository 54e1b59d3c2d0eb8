"""Sort strategy selector: named sort criteria → SortSpec."""

from __future__ import annotations

import logging

from ..common.query import RANDOM_SORT_FIELD, SortOrder, SortSpec
from .models import SortKey

logger = logging.getLogger(__name__)

_SORTS: dict[SortKey, SortSpec] = {
    SortKey.RECENCY: SortSpec(field="last_updated_at", order=SortOrder.DESC),
    SortKey.CREATION: SortSpec(field="created_at", order=SortOrder.DESC),
    SortKey.VIEWS: SortSpec(field="views", order=SortOrder.DESC),
    SortKey.ANSWERED: SortSpec(field="answer_count", order=SortOrder.DESC),
    SortKey.VOTED: SortSpec(field="vote_count", order=SortOrder.DESC),
    SortKey.RANDOM: SortSpec(field=RANDOM_SORT_FIELD),
}

# "top" page sections; anything else ranks by votes.
_TOP_SECTIONS: dict[str, SortKey] = {
    "viewed": SortKey.VIEWS,
    "answered": SortKey.ANSWERED,
    "voted": SortKey.VOTED,
}

FALLBACK_SORT_KEY = SortKey.VOTED


def sort_for(key: SortKey | str) -> SortSpec:
    """Return the ordering for *key*; unknown keys order by vote count."""
    try:
        return _SORTS[SortKey(key)]
    except ValueError:
        logger.debug("Unknown sort key %r, ordering by %s", key, FALLBACK_SORT_KEY.value)
        return _SORTS[FALLBACK_SORT_KEY]


def top_section_sort(section: str) -> SortSpec:
    """Ordering for a "top questions" section.

    ``"viewed"`` and ``"answered"`` pick their counters; every other
    value, including unknown ones, falls back to vote count.
    """
    key = _TOP_SECTIONS.get(section)
    if key is None:
        logger.debug("Unknown top section %r, ordering by %s", section, FALLBACK_SORT_KEY.value)
        key = FALLBACK_SORT_KEY
    return _SORTS[key]


__all__ = ["FALLBACK_SORT_KEY", "sort_for", "top_section_sort"]
