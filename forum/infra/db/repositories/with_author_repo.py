"""SQLAlchemy per-author paginated view.

Generic over the listed model: anything with ``author_id``,
``created_at``, ``vote_count`` and ``invisible`` columns and an
``author`` relationship works, so the same view lists a member's
questions or their answers.

Sort keys on a model without the matching column: ``RECENCY`` orders by
``created_at`` when there is no ``last_updated_at``; ``VIEWS`` and
``ANSWERED`` fall back to vote order.  For ``Solution`` that leaves
``CREATION``, ``VOTED`` and ``RECENCY`` (same as ``CREATION``) as the
orderings that mean what they say.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Query, Session, joinedload

from forum.domain.common.query import FilterSpec, SortSpec
from forum.domain.common.query import page_count_for as pages_for
from forum.domain.questions import feeds
from forum.domain.questions.models import PAGE_SIZE, SortKey, ViewerRole
from forum.domain.questions.ports import AuthorPaginatedRepository, VisibilityPolicy
from forum.domain.questions.visibility import PassThroughVisibility
from forum.infra.query.question_query import (
    apply_filters,
    apply_page,
    apply_sort,
    count_rows,
    resolve_column,
    with_list_loads,
)
from forum.models.question import Question

logger = logging.getLogger(__name__)


class SqlAuthorPaginatedRepository(AuthorPaginatedRepository):
    """List one member's items, hiding moderated ones from visitors."""

    def __init__(
        self,
        session: Session,
        model: type,
        role: ViewerRole,
        visibility: VisibilityPolicy,
        *,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self._session = session
        self._model = model
        self._role = role
        # Owners see their own hidden items.
        self._visibility = (
            PassThroughVisibility() if role == ViewerRole.OWNER else visibility
        )
        self._page_size = page_size

    def list_for(self, user, sort_key: SortKey | str, page: int) -> list:
        spec = feeds.by_author(user.id, sort_key, page, self._page_size).spec
        sort = self._sort_on_model(spec.sort)
        query = apply_filters(
            self._session.query(self._model),
            self._visible(spec.filters),
            self._model,
        )
        query = apply_sort(query, sort, self._model)
        logger.debug(
            "Listing %s by author %s (role=%s, sort=%s, page=%d)",
            self._model.__name__, user.id, self._role.value, sort.field, page,
        )
        return self._loads(apply_page(query, spec.page)).all()

    def count_for(self, user) -> int:
        filters = FilterSpec().add_categorical("author_id", (user.id,))
        query = apply_filters(
            self._session.query(self._model),
            self._visible(filters),
            self._model,
        )
        return count_rows(query, self._model)

    def page_count_for(self, user) -> int:
        return pages_for(self.count_for(user), self._page_size)

    def _visible(self, filters: FilterSpec) -> FilterSpec:
        return self._visibility.apply_filter(filters)

    def _sort_on_model(self, sort: SortSpec) -> SortSpec:
        if sort.field == "last_updated_at" and resolve_column(self._model, sort.field) is None:
            return SortSpec(field="created_at", order=sort.order)
        return sort

    def _loads(self, query: Query) -> Query:
        if self._model is Question:
            return with_list_loads(query)
        return query.options(joinedload(self._model.author))
