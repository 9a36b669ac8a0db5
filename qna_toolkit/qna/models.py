"""
Question and answer entities.

A Question owns its answers. Deleting a question is the aggregate-level
operation: it checks ownership, soft deletes itself and every active answer,
and returns the DeleteHistoryBatch describing everything it removed.
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import Base
from ..soft_delete import AlreadyDeletedException, NotOwnerException, SoftDeleteMixin
from .exceptions import ForeignAnswerException
from .history import DeleteHistory, DeleteHistoryBatch
from .users import User


class Answer(Base, SoftDeleteMixin):  # type: ignore[valid-type,misc]
    """An answer posted to exactly one question."""

    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    contents: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    writer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    writer: Mapped[User] = relationship(User, lazy="joined")
    # Lookup reference to the parent; the question owns the relationship
    question_id: Mapped[int] = mapped_column(
        ForeignKey("questions.id"), nullable=False, index=True
    )

    def __init__(
        self,
        writer: User,
        contents: Optional[str] = None,
        id: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(id=id, writer=writer, contents=contents, **kwargs)
        self._init_soft_delete_state()

    def is_owner(self, user: Optional[User]) -> bool:
        return self.writer.matches(user)

    def delete(self, requester: User, timestamp: datetime) -> DeleteHistory:
        """
        Soft delete this answer.

        Args:
            requester: User asking for the deletion
            timestamp: Deletion time, also recorded in the history

        Returns:
            History record for this answer

        Raises:
            AlreadyDeletedException: If the answer is already deleted
            NotOwnerException: If the requester did not write the answer
        """
        if self.is_deleted:
            raise AlreadyDeletedException("Answer", self.id)

        if not self.is_owner(requester):
            raise NotOwnerException("Answer", self.id, requester.id)

        self.mark_deleted(timestamp)
        return DeleteHistory.of_answer(self, timestamp)

    def __repr__(self) -> str:
        return (
            f"Answer(id={self.id!r}, question_id={self.question_id!r}, "
            f"writer_id={self.writer.id!r}, is_deleted={self.is_deleted!r})"
        )


class Question(Base, SoftDeleteMixin):  # type: ignore[valid-type,misc]
    """A question and the answers posted to it."""

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    contents: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    writer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    writer: Mapped[User] = relationship(User, lazy="joined")
    answers: Mapped[List[Answer]] = relationship(
        Answer, order_by=Answer.id, cascade="save-update, merge"
    )

    def __init__(
        self,
        title: str,
        writer: User,
        contents: Optional[str] = None,
        id: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(id=id, title=title, writer=writer, contents=contents, **kwargs)
        self._init_soft_delete_state()

    def add_answer(self, answer: Answer) -> None:
        """Attach ``answer`` to this question. Duplicates are not filtered."""
        self.answers.append(answer)
        answer.question_id = self.id

    def is_owner(self, user: Optional[User]) -> bool:
        return self.writer.matches(user)

    def active_answers(self) -> List[Answer]:
        return [answer for answer in self.answers if not answer.is_deleted]

    def delete(self, requester: User, timestamp: datetime) -> DeleteHistoryBatch:
        """
        Soft delete this question and cascade to its answers.

        All checks run before anything is modified, so a refused deletion
        leaves the question and every answer untouched.

        Args:
            requester: User asking for the deletion
            timestamp: Deletion time for the question and its answers

        Returns:
            Batch with the question's record first, then one record per
            answer in answer order

        Raises:
            AlreadyDeletedException: If the question is already deleted
            NotOwnerException: If the requester did not write the question
            ForeignAnswerException: If another user answered the question,
                even if that answer was deleted since
        """
        if self.is_deleted:
            raise AlreadyDeletedException("Question", self.id)

        if not self.is_owner(requester):
            raise NotOwnerException("Question", self.id, requester.id)

        # deleted answers still count as answers by their writer
        for answer in self.answers:
            if not answer.is_owner(self.writer):
                raise ForeignAnswerException(self.id, answer.id)

        self.mark_deleted(timestamp)
        histories = DeleteHistoryBatch.of(DeleteHistory.of_question(self, timestamp))

        for answer in self.active_answers():
            # the same answer may have been added twice
            if answer.is_deleted:
                continue
            histories = histories.append(answer.delete(self.writer, timestamp))

        return histories

    def __repr__(self) -> str:
        return (
            f"Question(id={self.id!r}, title={self.title!r}, "
            f"writer_id={self.writer.id!r}, is_deleted={self.is_deleted!r})"
        )
