"""Visibility policies: which questions an actor may see in listings.

A policy receives a FilterSpec and returns a new one with its own
predicates appended.  It never mutates the input or touches
predicates unrelated to visibility.
"""

from __future__ import annotations

from .models import SPAM_BOUNDARY, Actor
from .ports import VisibilityPolicy
from ..common.query import FilterSpec


class InvisibleForUsersRule(VisibilityPolicy):
    """Hide moderated and spam-scored items from everyone but moderators."""

    def __init__(self, actor: Actor, *, spam_boundary: int = SPAM_BOUNDARY) -> None:
        self._actor = actor
        self._spam_boundary = spam_boundary

    def apply_filter(self, filters: FilterSpec) -> FilterSpec:
        result = filters.copy()
        if self._actor.is_moderator:
            return result
        return (
            result
            .add_boolean("invisible", False)
            .add_range("vote_count", min_value=self._spam_boundary)
        )


class PassThroughVisibility(VisibilityPolicy):
    """Applies no visibility predicate (owner looking at their own items)."""

    def apply_filter(self, filters: FilterSpec) -> FilterSpec:
        return filters.copy()


__all__ = ["InvisibleForUsersRule", "PassThroughVisibility"]
