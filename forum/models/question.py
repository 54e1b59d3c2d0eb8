"""Question, answer and tag models for the forum"""
import logging

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

logger = logging.getLogger(__name__)


question_information_tags = Table(
    "question_information_tags",
    Base.metadata,
    Column("information_id", Integer, ForeignKey("question_informations.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class User(Base):
    """Forum member (question author, editor or reader)"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    is_moderator = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Tag(Base):
    """Topic label attached to questions through their information record"""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text)
    usage_count = Column(Integer, nullable=False, default=0)  # questions using the tag


class QuestionInformation(Base):
    """Title, body and tag set of a question"""

    __tablename__ = "question_informations"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)  # question body
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tags = relationship("Tag", secondary=question_information_tags, lazy="select")


class Question(Base):
    """A forum question with its counters and moderation state"""

    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)

    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    last_touched_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    information_id = Column(Integer, ForeignKey("question_informations.id"), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    last_updated_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Counters (maintained by the write path)
    views = Column(Integer, nullable=False, default=0)
    vote_count = Column(Integer, nullable=False, default=0)  # also the moderation score
    answer_count = Column(Integer, nullable=False, default=0)

    # Accepted solution (nullable; unsolved questions have none)
    solution_id = Column(
        Integer,
        ForeignKey("solutions.id", use_alter=True, name="fk_questions_solution_id"),
        nullable=True,
    )

    # Moderation options
    invisible = Column(Boolean, nullable=False, default=False)

    author = relationship("User", foreign_keys=[author_id], lazy="select")
    last_touched_by = relationship("User", foreign_keys=[last_touched_by_id], lazy="select")
    information = relationship("QuestionInformation", lazy="select")
    solution = relationship("Solution", foreign_keys=[solution_id], post_update=True, lazy="select")

    __table_args__ = (
        Index("idx_questions_invisible_updated", "invisible", "last_updated_at"),
    )

    @property
    def title(self) -> str | None:
        return self.information.title if self.information is not None else None

    @property
    def tags(self) -> list:
        return list(self.information.tags) if self.information is not None else []

    @property
    def most_important_tag(self):
        """The tag with the highest usage count (lowest id on ties), or None."""
        tags = self.tags
        if not tags:
            return None
        return min(tags, key=lambda t: (-(t.usage_count or 0), t.id))

    def __repr__(self) -> str:
        return f"<Question id={self.id} votes={self.vote_count} invisible={self.invisible}>"


class Solution(Base):
    """An answer to a question; one of them may be accepted as the solution"""

    __tablename__ = "solutions"

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    vote_count = Column(Integer, nullable=False, default=0)
    invisible = Column(Boolean, nullable=False, default=False)

    question = relationship("Question", foreign_keys=[question_id], lazy="select")
    author = relationship("User", foreign_keys=[author_id], lazy="select")
