"""GetQuestionUseCase: fetch one question by id.

Business rules:
  1. Look the question up with an explicit presence check
  2. Raise EntityNotFoundError if no row has the id
  3. Optionally attach the related-questions box (same leading tag)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from forum.domain.common.errors import EntityNotFoundError
from forum.domain.common.uow import UnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetQuestionQuery:
    """Immutable value object describing the lookup."""

    question_id: int
    include_related: bool = False


@dataclass(frozen=True)
class GetQuestionResult:
    """What the use case returns to the caller."""

    question: object
    related: tuple[object, ...] = ()


class GetQuestionUseCase:
    """Retrieve a single question, failing fast when it does not exist."""

    def execute(self, uow: UnitOfWork, query: GetQuestionQuery) -> GetQuestionResult:
        with uow:
            question = uow.questions.get_by_id(query.question_id)
            if question is None:
                raise EntityNotFoundError("Question", query.question_id)

            related: tuple[object, ...] = ()
            if query.include_related:
                related = tuple(uow.questions.get_related_to(question))
                logger.debug(
                    "Question %s: %d related questions", query.question_id, len(related)
                )

        return GetQuestionResult(question=question, related=related)
