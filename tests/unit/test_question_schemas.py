"""Tests for the pydantic response schemas."""

from datetime import datetime

from forum.domain.questions.models import QuestionFeedItem, QuestionPage
from forum.models.question import Question, QuestionInformation, Tag, User
from forum.schemas.question import QuestionListItem, QuestionPageResponse, SyndicationItem

CREATED = datetime(2026, 2, 1, 8, 0)


def _question(qid: int = 1, solution_id: int | None = None) -> Question:
    return Question(
        id=qid,
        author=User(name="grace"),
        information=QuestionInformation(
            title=f"How do I {qid}?",
            tags=[Tag(name="python"), Tag(name="sqlalchemy")],
        ),
        created_at=CREATED,
        last_updated_at=CREATED,
        views=12,
        vote_count=3,
        answer_count=1,
        solution_id=solution_id,
    )


class TestQuestionListItem:
    def test_from_orm_question(self):
        item = QuestionListItem.from_domain(_question())

        assert item.id == 1
        assert item.title == "How do I 1?"
        assert item.author_name == "grace"
        assert item.tags == ["python", "sqlalchemy"]
        assert item.views == 12
        assert not item.solved

    def test_solved_flag(self):
        assert QuestionListItem.from_domain(_question(solution_id=4)).solved

    def test_missing_counters_default_to_zero(self):
        question = Question(id=2, information=QuestionInformation(title="Bare"))

        item = QuestionListItem.from_domain(question)

        assert item.views == 0
        assert item.author_name is None
        assert item.tags == []


class TestQuestionPageResponse:
    def test_from_domain_page(self):
        page = QuestionPage(items=(_question(1), _question(2)), page=1, total_pages=3)

        response = QuestionPageResponse.from_domain(page)

        assert [i.id for i in response.items] == [1, 2]
        assert response.total_pages == 3
        assert response.has_next
        assert response.model_dump()["page"] == 1


class TestSyndicationItem:
    def test_from_feed_item(self):
        feed_item = QuestionFeedItem(
            id=9, title="Title", body="Body", author_name="heidi", created_at=CREATED
        )

        item = SyndicationItem.from_domain(feed_item)

        assert item.model_dump() == {
            "id": 9,
            "title": "Title",
            "body": "Body",
            "author_name": "heidi",
            "created_at": CREATED,
        }
