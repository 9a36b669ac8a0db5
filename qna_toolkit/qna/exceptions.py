"""Exceptions raised by the question/answer deletion workflow."""

from typing import Any

from ..soft_delete.exceptions import SoftDeleteError


class QnAError(Exception):
    """Base exception for QnA lookups."""


class NotFoundException(QnAError, LookupError):
    """Raised when a repository has no entity for the requested id."""

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found")


class QuestionNotFoundException(NotFoundException):
    """Raised when no question exists for the given id."""

    def __init__(self, question_id: Any):
        super().__init__("Question", question_id)


class AnswerNotFoundException(NotFoundException):
    """Raised when no answer exists for the given id."""

    def __init__(self, answer_id: Any):
        super().__init__("Answer", answer_id)


class UserNotFoundException(NotFoundException):
    """Raised when no user exists for the acting login id."""

    def __init__(self, user_id: Any):
        super().__init__("User", user_id)


class ForeignAnswerException(SoftDeleteError):
    """Raised when a question has answers written by someone else."""

    def __init__(self, question_id: Any, answer_id: Any):
        self.answer_id = answer_id
        super().__init__(
            f"Question {question_id} cannot be deleted: answer {answer_id} "
            "was written by another user",
            entity_id=question_id,
        )
