"""
Tests for question and answer entities.

Covers the deletion state machine, ownership checks and the cascade from
a question to its answers.
"""

from datetime import datetime, timezone

import pytest

from qna_toolkit.qna import (
    Answer,
    ContentType,
    DeleteHistory,
    DeleteHistoryBatch,
    ForeignAnswerException,
    Question,
    User,
)
from qna_toolkit.soft_delete import AlreadyDeletedException, NotOwnerException

NOW = datetime(2021, 6, 1, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def login_user():
    return User(id=1, user_id="javajigi", name="name1", email="javajigi@example.com")


@pytest.fixture
def other_user():
    return User(id=2, user_id="sanjigi", name="name2", email="sanjigi@example.com")


@pytest.fixture
def question(login_user):
    return Question(id=1, title="title1", contents="contents1", writer=login_user)


@pytest.fixture
def answer(login_user, question):
    answer = Answer(id=1, writer=login_user, contents="Answers Contents1")
    question.add_answer(answer)
    return answer


def assert_deletion_invariant(*entities):
    for entity in entities:
        assert entity.is_deleted == (entity.deleted_at is not None)


class TestQuestion:
    """Test Question state transitions."""

    def test_new_question_is_active(self, question):
        assert question.is_deleted is False
        assert question.deleted_at is None
        assert question.answers == []

    def test_add_answer(self, question, answer):
        """Adding an answer appends it and points it at the question."""
        assert question.answers == [answer]
        assert answer.question_id == question.id

    def test_add_answer_keeps_order(self, login_user, question):
        first = Answer(id=10, writer=login_user, contents="first")
        second = Answer(id=5, writer=login_user, contents="second")

        question.add_answer(first)
        question.add_answer(second)

        assert question.answers == [first, second]

    def test_delete_without_answers(self, login_user, question):
        histories = question.delete(login_user, NOW)

        assert question.is_deleted is True
        assert question.deleted_at == NOW
        assert histories == [
            DeleteHistory(
                content_type=ContentType.QUESTION,
                content_id=1,
                deleted_by=login_user,
                create_date=NOW,
            )
        ]

    def test_delete_cascades_to_answers(self, login_user, question, answer):
        """Scenario: Question(1, U1) with Answer(1, U1), deleted by U1."""
        histories = question.delete(login_user, NOW)

        assert isinstance(histories, DeleteHistoryBatch)
        assert question.is_deleted is True
        assert answer.is_deleted is True
        assert answer.deleted_at == NOW
        assert list(histories) == [
            DeleteHistory(
                content_type=ContentType.QUESTION,
                content_id=1,
                deleted_by=login_user,
                create_date=NOW,
            ),
            DeleteHistory(
                content_type=ContentType.ANSWER,
                content_id=1,
                deleted_by=login_user,
                create_date=NOW,
            ),
        ]
        assert_deletion_invariant(question, answer)

    def test_delete_with_two_own_answers(self, login_user, question, answer):
        """Scenario: a second answer by the same user gives three records."""
        answer2 = Answer(id=2, writer=login_user, contents="Answers Contents2")
        question.add_answer(answer2)

        histories = question.delete(login_user, NOW)

        assert len(histories) == 3
        assert histories[0].content_type == ContentType.QUESTION
        assert [h.content_id for h in histories[1:]] == [1, 2]
        assert answer.is_deleted is True
        assert answer2.is_deleted is True
        assert_deletion_invariant(question, answer, answer2)

    def test_delete_with_foreign_answer(self, login_user, other_user, question, answer):
        """Scenario: an answer by another user blocks the deletion."""
        answer2 = Answer(id=2, writer=other_user, contents="Answers Contents2")
        question.add_answer(answer2)

        with pytest.raises(ForeignAnswerException) as exc:
            question.delete(login_user, NOW)

        assert exc.value.entity_id == 1
        assert exc.value.answer_id == 2
        assert question.is_deleted is False
        assert answer.is_deleted is False
        assert answer2.is_deleted is False
        assert_deletion_invariant(question, answer, answer2)

    def test_deleted_foreign_answer_still_blocks(
        self, login_user, other_user, question, answer
    ):
        """An answer its writer already deleted still belongs to that writer."""
        answer2 = Answer(id=2, writer=other_user, contents="Answers Contents2")
        question.add_answer(answer2)
        answer2.delete(other_user, NOW)

        with pytest.raises(ForeignAnswerException) as exc:
            question.delete(login_user, NOW)

        assert exc.value.answer_id == 2
        assert question.is_deleted is False
        assert answer.is_deleted is False
        assert_deletion_invariant(question, answer, answer2)

    def test_delete_by_other_user(self, other_user, question, answer):
        with pytest.raises(NotOwnerException) as exc:
            question.delete(other_user, NOW)

        assert exc.value.requester_id == 2
        assert question.is_deleted is False
        assert answer.is_deleted is False

    def test_owner_is_compared_by_id(self, question):
        same_id = User(id=1, user_id="renamed", name="other name")

        histories = question.delete(same_id, NOW)

        assert question.is_deleted is True
        assert len(histories) == 1

    def test_delete_twice(self, login_user, question, answer):
        """A second delete fails instead of being a no-op."""
        question.delete(login_user, NOW)

        with pytest.raises(AlreadyDeletedException) as exc:
            question.delete(login_user, NOW)

        assert "Question 1" in str(exc.value)

    def test_already_deleted_checked_before_owner(
        self, login_user, other_user, question
    ):
        question.delete(login_user, NOW)

        with pytest.raises(AlreadyDeletedException):
            question.delete(other_user, NOW)

    def test_owner_checked_before_foreign_answers(
        self, other_user, login_user, question
    ):
        question.add_answer(Answer(id=2, writer=other_user, contents="foreign"))

        with pytest.raises(NotOwnerException):
            question.delete(other_user, NOW)

    def test_duplicate_answer_is_deleted_once(self, login_user, question, answer):
        question.add_answer(answer)

        histories = question.delete(login_user, NOW)

        assert len(question.answers) == 2
        assert len(histories) == 2
        assert answer.is_deleted is True

    def test_previously_deleted_answer_is_skipped(self, login_user, question, answer):
        answer2 = Answer(id=2, writer=login_user, contents="Answers Contents2")
        question.add_answer(answer2)
        answer.delete(login_user, NOW)

        histories = question.delete(login_user, NOW)

        assert [h.content_id for h in histories] == [1, 2]
        assert [h.content_type for h in histories] == [
            ContentType.QUESTION,
            ContentType.ANSWER,
        ]
        assert answer2.is_deleted is True


class TestAnswer:
    """Test Answer state transitions."""

    def test_delete(self, login_user, answer):
        history = answer.delete(login_user, NOW)

        assert answer.is_deleted is True
        assert answer.deleted_at == NOW
        assert history == DeleteHistory(
            content_type=ContentType.ANSWER,
            content_id=1,
            deleted_by=login_user,
            create_date=NOW,
        )

    def test_delete_by_other_user(self, other_user, answer):
        with pytest.raises(NotOwnerException):
            answer.delete(other_user, NOW)

        assert answer.is_deleted is False
        assert answer.deleted_at is None

    def test_delete_twice(self, login_user, answer):
        answer.delete(login_user, NOW)

        with pytest.raises(AlreadyDeletedException) as exc:
            answer.delete(login_user, NOW)

        assert exc.value.entity_id == 1
        assert exc.value.entity_type == "Answer"
