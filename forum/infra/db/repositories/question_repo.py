"""SQLAlchemy implementation of QuestionRepository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.orm import Query, Session

from forum.domain.common.query import FilterSpec, page_count_for
from forum.domain.questions import feeds
from forum.domain.questions.feeds import FeedQuery, VisibilityScope
from forum.domain.questions.models import (
    PAGE_SIZE,
    RELATED_COUNT,
    TAG_PAGE_SIZE,
    QuestionFeedItem,
    SortKey,
    ViewerRole,
)
from forum.domain.questions.ports import QuestionRepository, VisibilityPolicy
from forum.infra.db.repositories.with_author_repo import SqlAuthorPaginatedRepository
from forum.infra.query.question_query import (
    apply_filters,
    apply_page,
    apply_sort,
    count_rows,
    with_feed_item_loads,
    with_list_loads,
)
from forum.models.question import Question, Tag, User

logger = logging.getLogger(__name__)


class SqlQuestionRepository(QuestionRepository):
    """Read questions through the feed definitions via SQLAlchemy."""

    def __init__(
        self,
        session: Session,
        visibility: VisibilityPolicy,
        *,
        page_size: int = PAGE_SIZE,
        tag_page_size: int = TAG_PAGE_SIZE,
        related_count: int = RELATED_COUNT,
    ) -> None:
        self._session = session
        self._visibility = visibility
        self._page_size = page_size
        self._tag_page_size = tag_page_size
        self._related_count = related_count
        self._with_author = SqlAuthorPaginatedRepository(
            session, Question, ViewerRole.VISITOR, visibility, page_size=page_size
        )

    def save(self, question: Question) -> None:
        self._session.add(question)
        self._session.flush()

    def get_by_id(self, question_id: int) -> Question | None:
        query = self._session.query(Question).filter(Question.id == question_id)
        return with_list_loads(query).first()

    def load(self, question: Question) -> Question | None:
        return self.get_by_id(question.id)

    # ── Paginated feeds ─────────────────────────────────────────────────

    def all_visible(self, page: int) -> list[Question]:
        return self._list(feeds.all_visible(page, self._page_size))

    def unsolved_visible(self, page: int) -> list[Question]:
        return self._list(feeds.unsolved_visible(page, self._page_size))

    def unanswered(self, page: int) -> list[Question]:
        return self._list(feeds.unanswered(page, self._page_size))

    def with_tag_visible(
        self, tag: Tag, page: int, exclude_answered: bool = False
    ) -> list[Question]:
        return self._list(
            feeds.with_tag_visible(
                tag.id, page, exclude_answered, self._tag_page_size, self._page_size
            )
        )

    def posts_to_paginate_by(
        self, user: User, sort_key: SortKey | str, page: int
    ) -> list[Question]:
        return self._with_author.list_for(user, sort_key, page)

    # ── Fixed-size lists ────────────────────────────────────────────────

    def ordered_by_creation_date(
        self, max_results: int, tag: Tag | None = None
    ) -> list[QuestionFeedItem]:
        feed = feeds.ordered_by_creation_date(
            max_results, tag.id if tag is not None else None
        )
        rows = self._list(feed, loads=with_feed_item_loads)
        return [self._to_feed_item(q) for q in rows]

    def get_related_to(self, question: Question) -> list[Question]:
        tag = question.most_important_tag
        if tag is None:
            return []
        return self._list(feeds.related_to(tag.id, self._related_count))

    def hot(self, since: datetime, count: int) -> list[Question]:
        return self._list(feeds.hot(since, count))

    def top(self, section: str, count: int) -> list[Question]:
        return self._list(feeds.top(section, count))

    def random_unanswered(
        self, after: datetime, before: datetime, count: int
    ) -> list[Question]:
        return self._list(feeds.random_unanswered(after, before, count))

    # ── Counts ──────────────────────────────────────────────────────────

    def count_with_author(self, user: User) -> int:
        return self._with_author.count_for(user)

    def number_of_pages_to(self, user: User) -> int:
        return self._with_author.page_count_for(user)

    def number_of_pages(
        self, tag: Tag | None = None, exclude_answered: bool = False
    ) -> int:
        if tag is None:
            return self._count_pages(feeds.all_visible(1))
        return self._count_pages(feeds.with_tag_visible(tag.id, 1, exclude_answered))

    def total_pages_unsolved_visible(self) -> int:
        return self._count_pages(feeds.unsolved_visible(1))

    def total_pages_without_answers(self) -> int:
        return self._count_pages(feeds.unanswered(1))

    # ── Private helpers ─────────────────────────────────────────────────

    def _scoped_filters(self, feed: FeedQuery) -> FilterSpec:
        """Apply the visibility check the feed asks for."""
        if feed.visibility == VisibilityScope.POLICY:
            return self._visibility.apply_filter(feed.spec.filters)
        if feed.visibility == VisibilityScope.FLAG_ONLY:
            return feed.spec.filters.copy().add_boolean("invisible", False)
        return feed.spec.filters

    def _list(
        self,
        feed: FeedQuery,
        *,
        loads: Callable[[Query], Query] = with_list_loads,
    ) -> list[Question]:
        spec = feed.spec
        query = apply_filters(self._session.query(Question), self._scoped_filters(feed))
        query = apply_sort(query, spec.sort)
        query = apply_page(query, spec.page)
        logger.debug(
            "Question feed: sort=%s page=%d per_page=%d visibility=%s",
            spec.sort.field, spec.page.page, spec.page.per_page, feed.visibility.value,
        )
        return loads(query).all()

    def _count_pages(self, feed: FeedQuery) -> int:
        query = apply_filters(self._session.query(Question), self._scoped_filters(feed))
        return page_count_for(count_rows(query), self._page_size)

    @staticmethod
    def _to_feed_item(question: Question) -> QuestionFeedItem:
        info = question.information
        return QuestionFeedItem(
            id=question.id,
            title=info.title if info is not None else "",
            body=(info.description or "") if info is not None else "",
            author_name=question.author.name if question.author is not None else "",
            created_at=question.created_at,
        )
