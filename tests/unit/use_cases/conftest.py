"""Shared test fakes and fixtures for question feed use case tests.

Consolidates all in-memory fake implementations of domain ports.
Each fake stores real data and evaluates the same feed definitions the
SQL adapter translates, so use case tests verify actual behaviour
rather than "was method X called?".

Other test files outside this directory can import these fakes directly::

    from tests.unit.use_cases.conftest import FakeQuestionRepository, FakeUnitOfWork
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta

import pytest

from forum.domain.common.query import FilterMode, FilterSpec, QuerySpec, SortOrder, SortSpec
from forum.domain.common.query import page_count_for
from forum.domain.common.uow import UnitOfWork
from forum.domain.questions import feeds
from forum.domain.questions.feeds import FeedQuery, VisibilityScope
from forum.domain.questions.models import (
    PAGE_SIZE,
    RELATED_COUNT,
    TAG_PAGE_SIZE,
    Actor,
    QuestionFeedItem,
    SortKey,
    ViewerRole,
)
from forum.domain.questions.ports import (
    AuthorPaginatedRepository,
    QuestionRepository,
    TagRepository,
    UserRepository,
    VisibilityPolicy,
)
from forum.domain.questions.visibility import InvisibleForUsersRule, PassThroughVisibility

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


# ---------------------------------------------------------------------------
# Mutable ORM-like test records
# ---------------------------------------------------------------------------


@dataclass
class FakeUser:
    id: int
    name: str = "member"
    is_moderator: bool = False


@dataclass
class FakeTag:
    id: int
    name: str
    usage_count: int = 0


@dataclass
class FakeQuestion:
    """Mutable in-memory question record (mimics the SQLAlchemy model)."""

    id: int
    author_id: int = 1
    title: str = ""
    body: str = ""
    author_name: str = "member"
    created_at: datetime = BASE_TIME
    last_updated_at: datetime | None = None
    views: int = 0
    vote_count: int = 0
    answer_count: int = 0
    solution_id: int | None = None
    invisible: bool = False
    tag_ids: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.last_updated_at is None:
            self.last_updated_at = self.created_at


# ---------------------------------------------------------------------------
# In-memory spec evaluation
# ---------------------------------------------------------------------------


def matches(item, filters: FilterSpec) -> bool:
    """Evaluate *filters* against one record."""
    for rf in filters.range_filters:
        value = getattr(item, rf.field)
        if rf.min_value is not None:
            if value < rf.min_value or (not rf.min_inclusive and value == rf.min_value):
                return False
        if rf.max_value is not None:
            if value > rf.max_value or (not rf.max_inclusive and value == rf.max_value):
                return False
    for cf in filters.categorical_filters:
        if (getattr(item, cf.field) in cf.values) != (cf.mode == FilterMode.INCLUDE):
            return False
    for bf in filters.boolean_filters:
        if getattr(item, bf.field) != bf.value:
            return False
    for nf in filters.null_filters:
        if (getattr(item, nf.field) is None) != nf.is_null:
            return False
    for tf in filters.tag_filters:
        if tf.tag_id not in item.tag_ids:
            return False
    return True


def ordered(items: list, sort: SortSpec) -> list:
    if sort.is_random:
        shuffled = list(items)
        random.shuffle(shuffled)
        return shuffled
    reverse = sort.order == SortOrder.DESC
    return sorted(items, key=lambda i: (getattr(i, sort.field), i.id), reverse=reverse)


def run(items: list, spec: QuerySpec, filters: FilterSpec) -> list:
    hits = ordered([i for i in items if matches(i, filters)], spec.sort)
    start = spec.page.offset
    return hits[start:start + spec.page.limit]


# ---------------------------------------------------------------------------
# Fake repositories
# ---------------------------------------------------------------------------


class FakeUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, FakeUser] = {}

    def add(self, user: FakeUser) -> FakeUser:
        self._users[user.id] = user
        return user

    def get_by_id(self, user_id: int) -> FakeUser | None:
        return self._users.get(user_id)


class FakeTagRepository(TagRepository):
    def __init__(self) -> None:
        self._tags: dict[int, FakeTag] = {}

    def add(self, tag: FakeTag) -> FakeTag:
        self._tags[tag.id] = tag
        return tag

    def get_by_id(self, tag_id: int) -> FakeTag | None:
        return self._tags.get(tag_id)

    def find_by_name(self, name: str) -> FakeTag | None:
        return next((t for t in self._tags.values() if t.name == name), None)


class FakeAuthorView(AuthorPaginatedRepository):
    def __init__(
        self,
        store: FakeQuestionRepository,
        role: ViewerRole,
        visibility: VisibilityPolicy,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._store = store
        self.role = role
        self._visibility = (
            PassThroughVisibility() if role == ViewerRole.OWNER else visibility
        )
        self._page_size = page_size

    def list_for(self, user, sort_key: SortKey | str, page: int) -> list:
        spec = feeds.by_author(user.id, sort_key, page, self._page_size).spec
        return run(self._store.rows, spec, self._visibility.apply_filter(spec.filters))

    def count_for(self, user) -> int:
        filters = self._visibility.apply_filter(
            FilterSpec().add_categorical("author_id", (user.id,))
        )
        return sum(1 for q in self._store.rows if matches(q, filters))

    def page_count_for(self, user) -> int:
        return page_count_for(self.count_for(user), self._page_size)


class FakeQuestionRepository(QuestionRepository):
    """In-memory question store driven by the feed definitions."""

    def __init__(
        self,
        visibility: VisibilityPolicy | None = None,
        *,
        page_size: int = PAGE_SIZE,
        tag_page_size: int = TAG_PAGE_SIZE,
        related_count: int = RELATED_COUNT,
    ) -> None:
        self.rows: list[FakeQuestion] = []
        self._visibility = visibility or InvisibleForUsersRule(Actor.anonymous())
        self._page_size = page_size
        self._tag_page_size = tag_page_size
        self._related_count = related_count
        self.tags: FakeTagRepository | None = None

    def save(self, question: FakeQuestion) -> None:
        if question not in self.rows:
            self.rows.append(question)

    def get_by_id(self, question_id: int) -> FakeQuestion | None:
        return next((q for q in self.rows if q.id == question_id), None)

    def load(self, question: FakeQuestion) -> FakeQuestion | None:
        return self.get_by_id(question.id)

    def all_visible(self, page: int) -> list:
        return self._list(feeds.all_visible(page, self._page_size))

    def unsolved_visible(self, page: int) -> list:
        return self._list(feeds.unsolved_visible(page, self._page_size))

    def unanswered(self, page: int) -> list:
        return self._list(feeds.unanswered(page, self._page_size))

    def with_tag_visible(self, tag, page: int, exclude_answered: bool = False) -> list:
        return self._list(
            feeds.with_tag_visible(
                tag.id, page, exclude_answered, self._tag_page_size, self._page_size
            )
        )

    def posts_to_paginate_by(self, user, sort_key, page: int) -> list:
        return FakeAuthorView(self, ViewerRole.VISITOR, self._visibility).list_for(
            user, sort_key, page
        )

    def ordered_by_creation_date(self, max_results: int, tag=None) -> list[QuestionFeedItem]:
        feed = feeds.ordered_by_creation_date(max_results, tag.id if tag else None)
        return [
            QuestionFeedItem(
                id=q.id,
                title=q.title,
                body=q.body,
                author_name=q.author_name,
                created_at=q.created_at,
            )
            for q in self._list(feed)
        ]

    def get_related_to(self, question: FakeQuestion) -> list:
        tag_id = self._most_important_tag_id(question)
        if tag_id is None:
            return []
        return self._list(feeds.related_to(tag_id, self._related_count))

    def hot(self, since: datetime, count: int) -> list:
        return self._list(feeds.hot(since, count))

    def top(self, section: str, count: int) -> list:
        return self._list(feeds.top(section, count))

    def random_unanswered(self, after: datetime, before: datetime, count: int) -> list:
        return self._list(feeds.random_unanswered(after, before, count))

    def count_with_author(self, user) -> int:
        return FakeAuthorView(self, ViewerRole.VISITOR, self._visibility).count_for(user)

    def number_of_pages_to(self, user) -> int:
        return FakeAuthorView(self, ViewerRole.VISITOR, self._visibility).page_count_for(user)

    def number_of_pages(self, tag=None, exclude_answered: bool = False) -> int:
        if tag is None:
            return self._pages(feeds.all_visible(1))
        return self._pages(feeds.with_tag_visible(tag.id, 1, exclude_answered))

    def total_pages_unsolved_visible(self) -> int:
        return self._pages(feeds.unsolved_visible(1))

    def total_pages_without_answers(self) -> int:
        return self._pages(feeds.unanswered(1))

    def _scoped(self, feed: FeedQuery) -> FilterSpec:
        if feed.visibility == VisibilityScope.POLICY:
            return self._visibility.apply_filter(feed.spec.filters)
        if feed.visibility == VisibilityScope.FLAG_ONLY:
            return feed.spec.filters.copy().add_boolean("invisible", False)
        return feed.spec.filters

    def _list(self, feed: FeedQuery) -> list:
        return run(self.rows, feed.spec, self._scoped(feed))

    def _pages(self, feed: FeedQuery) -> int:
        filters = self._scoped(feed)
        return page_count_for(sum(1 for q in self.rows if matches(q, filters)), self._page_size)

    def _most_important_tag_id(self, question: FakeQuestion) -> int | None:
        """Highest usage count wins, lowest id on ties; unknown tags count 0."""
        if not question.tag_ids:
            return None

        def usage(tag_id: int) -> int:
            tag = self.tags.get_by_id(tag_id) if self.tags is not None else None
            return tag.usage_count if tag is not None else 0

        return min(question.tag_ids, key=lambda t: (-usage(t), t))


# ---------------------------------------------------------------------------
# Fake Unit of Work
# ---------------------------------------------------------------------------


@dataclass
class FakeUnitOfWork(UnitOfWork):
    questions: FakeQuestionRepository = field(default_factory=FakeQuestionRepository)
    users: FakeUserRepository = field(default_factory=FakeUserRepository)
    tags: FakeTagRepository = field(default_factory=FakeTagRepository)
    committed: bool = False
    rolled_back: bool = False
    entered: int = 0

    def __post_init__(self) -> None:
        self.questions.tags = self.tags

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.rollback()

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def authored_questions(self, role: ViewerRole) -> FakeAuthorView:
        return FakeAuthorView(self.questions, role, self.questions._visibility)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


def add_questions(uow: FakeUnitOfWork, count: int, **fields) -> list[FakeQuestion]:
    """Append *count* questions with increasing ids and timestamps."""
    start = len(uow.questions.rows) + 1
    created = []
    for offset in range(count):
        qid = start + offset
        q = FakeQuestion(
            id=qid,
            title=f"Question {qid}",
            created_at=BASE_TIME + timedelta(minutes=qid),
            **fields,
        )
        uow.questions.save(q)
        created.append(q)
    return created
