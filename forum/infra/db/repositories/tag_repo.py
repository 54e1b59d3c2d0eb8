"""SQLAlchemy implementation of TagRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from forum.domain.questions.ports import TagRepository
from forum.models.question import Tag


class SqlTagRepository(TagRepository):
    """Retrieve Tag rows via SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, tag_id: int) -> Tag | None:
        return (
            self._session.query(Tag)
            .filter(Tag.id == tag_id)
            .first()
        )

    def find_by_name(self, name: str) -> Tag | None:
        return (
            self._session.query(Tag)
            .filter(Tag.name == name)
            .first()
        )
