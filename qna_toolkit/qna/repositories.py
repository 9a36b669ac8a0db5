"""
Storage contracts consumed by the deletion service.

Lookups return ``None`` when nothing matches; the service turns that into a
NotFoundException. Implementations backed by SQLAlchemy live in
``qna_toolkit.qna.storage``.
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from .history import DeleteHistoryBatch
from .models import Answer, Question
from .users import User


class QuestionRepository(ABC):
    """Lookup and persistence of questions."""

    @abstractmethod
    async def find_by_id(self, question_id: int) -> Optional[Question]:
        """
        Get a question by ID, deleted or not.

        Args:
            question_id: ID of the question

        Returns:
            The question or None if not found
        """
        pass

    @abstractmethod
    async def save(self, question: Question) -> None:
        """Persist the state of a question and its answers."""
        pass


class AnswerRepository(ABC):
    """Lookup and persistence of answers."""

    @abstractmethod
    async def find_by_id(self, answer_id: int) -> Optional[Answer]:
        """Get an answer by ID, or None if not found."""
        pass

    @abstractmethod
    async def save(self, answer: Answer) -> None:
        """Persist the state of an answer."""
        pass


class UserRepository(ABC):
    """Lookup of already authenticated users."""

    @abstractmethod
    async def find_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID, or None if not found."""
        pass


class DeleteHistoryRepository(ABC):
    """Destination of deletion audit records."""

    @abstractmethod
    async def save_all(self, histories: DeleteHistoryBatch) -> None:
        """
        Store a batch of history records as one unit.

        Args:
            histories: Records produced by a single deletion
        """
        pass


class UnitOfWork(ABC):
    """
    Transaction boundary around one service operation.

    Used as an async context manager: commits when the block completes and
    rolls back when it raises.
    """

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass


class NullUnitOfWork(UnitOfWork):
    """Unit of work for repositories that need no transaction."""

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass
