"""Database models for the forum"""
from .question import (
    Question,
    QuestionInformation,
    Solution,
    Tag,
    User,
    question_information_tags,
)

__all__ = [
    "Question",
    "QuestionInformation",
    "Solution",
    "Tag",
    "User",
    "question_information_tags",
]
