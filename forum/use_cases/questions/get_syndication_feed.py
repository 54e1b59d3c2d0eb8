"""GetSyndicationFeedUseCase: newest questions for RSS output.

Business rules:
  1. Optionally restrict to one tag, looked up by name
     (raise EntityNotFoundError for an unknown tag)
  2. Only the moderation flag is checked; syndication output is the
     same for every reader
  3. Return the read-only feed projection, newest first
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from forum.domain.common.errors import EntityNotFoundError, InvalidArgumentError
from forum.domain.common.uow import UnitOfWork
from forum.domain.questions.models import QuestionFeedItem

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 20


@dataclass(frozen=True)
class GetSyndicationFeedQuery:
    """Immutable value object describing the requested feed."""

    max_results: int | None = None  # None: the use case default
    tag_name: str | None = None

    def __post_init__(self) -> None:
        if self.max_results is not None and self.max_results < 1:
            raise InvalidArgumentError(
                f"max_results must be >= 1, got {self.max_results}"
            )


@dataclass(frozen=True)
class GetSyndicationFeedResult:
    """What the use case returns to the caller."""

    items: tuple[QuestionFeedItem, ...]


class GetSyndicationFeedUseCase:
    """Build the item list of the site-wide or per-tag RSS feed."""

    def __init__(self, default_max_results: int = DEFAULT_MAX_RESULTS) -> None:
        self._default_max_results = default_max_results

    def execute(
        self, uow: UnitOfWork, query: GetSyndicationFeedQuery
    ) -> GetSyndicationFeedResult:
        with uow:
            tag = None
            if query.tag_name:
                tag = uow.tags.find_by_name(query.tag_name)
                if tag is None:
                    raise EntityNotFoundError("Tag", query.tag_name)
                logger.info("Syndication feed for tag %s", query.tag_name)

            max_results = query.max_results or self._default_max_results
            items = uow.questions.ordered_by_creation_date(max_results, tag)

        return GetSyndicationFeedResult(items=tuple(items))
