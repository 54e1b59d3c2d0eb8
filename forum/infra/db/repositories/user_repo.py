"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from forum.domain.questions.ports import UserRepository
from forum.models.question import User


class SqlUserRepository(UserRepository):
    """Retrieve User rows via SQLAlchemy."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: int) -> User | None:
        return (
            self._session.query(User)
            .filter(User.id == user_id)
            .first()
        )
