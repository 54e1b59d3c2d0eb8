"""Dependency injection bootstrap: the single place that binds ports to adapters.

Every factory function here can be used as a web framework dependency
target.  Callers never import concrete implementations directly; they
depend on the abstractions returned by these factories.

Example usage::

    from forum.wiring.bootstrap import get_uow, get_list_question_feed_use_case

    uow = next(get_uow(actor))
    result = get_list_question_feed_use_case().execute(uow, query)
"""

from __future__ import annotations

from typing import Iterator

from sqlalchemy.orm import sessionmaker

from forum.config import settings
from forum.database import build_engine, build_session_factory
from forum.domain.questions.models import Actor
from forum.domain.questions.ports import VisibilityPolicy
from forum.domain.questions.visibility import InvisibleForUsersRule
from forum.infra.db.uow import SqlUnitOfWork
from forum.use_cases.questions.get_question import GetQuestionUseCase
from forum.use_cases.questions.get_syndication_feed import GetSyndicationFeedUseCase
from forum.use_cases.questions.list_author_questions import ListAuthorQuestionsUseCase
from forum.use_cases.questions.list_question_feed import ListQuestionFeedUseCase


# ── Session factory ─────────────────────────────────────────────────────

_session_factory: sessionmaker | None = None


def get_session_factory() -> sessionmaker:
    """Return a singleton session factory bound to ``settings.database_url``."""
    global _session_factory
    if _session_factory is None:
        engine = build_engine(settings.database_url, echo=settings.database_echo)
        _session_factory = build_session_factory(engine)
    return _session_factory


# ── Policies ────────────────────────────────────────────────────────────


def get_visibility_policy(actor: Actor | None = None) -> VisibilityPolicy:
    """Visibility rule for *actor* (anonymous when None)."""
    return InvisibleForUsersRule(
        actor or Actor.anonymous(),
        spam_boundary=settings.spam_boundary,
    )


# ── Unit of Work ─────────────────────────────────────────────────────────


def build_uow(
    session_factory: sessionmaker,
    actor: Actor | None = None,
) -> SqlUnitOfWork:
    """Build a SqlUnitOfWork with page sizes taken from settings."""
    return SqlUnitOfWork(
        session_factory,
        get_visibility_policy(actor),
        page_size=settings.page_size,
        tag_page_size=settings.tag_page_size,
        related_count=settings.related_count,
    )


def get_uow(actor: Actor | None = None) -> Iterator[SqlUnitOfWork]:
    """Yield a SqlUnitOfWork bound to the configured database."""
    yield build_uow(get_session_factory(), actor)


# ── Use Cases ────────────────────────────────────────────────────────────


def get_list_question_feed_use_case() -> ListQuestionFeedUseCase:
    return ListQuestionFeedUseCase()


def get_question_use_case() -> GetQuestionUseCase:
    return GetQuestionUseCase()


def get_list_author_questions_use_case() -> ListAuthorQuestionsUseCase:
    return ListAuthorQuestionsUseCase()


def get_syndication_feed_use_case() -> GetSyndicationFeedUseCase:
    return GetSyndicationFeedUseCase(
        default_max_results=settings.syndication_max_results
    )
