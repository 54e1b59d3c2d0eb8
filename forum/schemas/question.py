"""Pydantic schemas for question feed output.

Contains response models for feed pages and syndication items,
each with a ``from_domain`` mapper so renderers stay thin.
"""

from datetime import datetime
from typing import List, Optional, Self

from pydantic import BaseModel, Field

from ..domain.questions.models import QuestionFeedItem, QuestionPage


class SyndicationItem(BaseModel):
    """One entry of an RSS feed."""

    id: int
    title: str
    body: str = Field(default="", description="Question body (markdown)")
    author_name: str
    created_at: datetime

    @classmethod
    def from_domain(cls, item: QuestionFeedItem) -> Self:
        return cls(
            id=item.id,
            title=item.title,
            body=item.body,
            author_name=item.author_name,
            created_at=item.created_at,
        )


class QuestionListItem(BaseModel):
    """A question row as shown in listings."""

    id: int
    title: Optional[str] = None
    author_name: Optional[str] = None
    created_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None
    views: int = 0
    vote_count: int = 0
    answer_count: int = 0
    solved: bool = False
    tags: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, question) -> Self:
        """Map an ORM question (or any object with the same attributes)."""
        author = getattr(question, "author", None)
        return cls(
            id=question.id,
            title=question.title,
            author_name=author.name if author is not None else None,
            created_at=question.created_at,
            last_updated_at=question.last_updated_at,
            views=question.views or 0,
            vote_count=question.vote_count or 0,
            answer_count=question.answer_count or 0,
            solved=question.solution_id is not None,
            tags=[t.name for t in question.tags],
        )


class QuestionPageResponse(BaseModel):
    """One page of a question feed."""

    items: List[QuestionListItem]
    page: int
    total_pages: int
    has_next: bool

    @classmethod
    def from_domain(cls, page: QuestionPage) -> Self:
        return cls(
            items=[QuestionListItem.from_domain(q) for q in page.items],
            page=page.page,
            total_pages=page.total_pages,
            has_next=page.has_next,
        )
