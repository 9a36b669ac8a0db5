"""
Audit records for deleted forum content.

A DeleteHistory describes one removed question or answer. A deletion that
cascades produces a DeleteHistoryBatch which is stored as a single unit.
"""

from datetime import datetime
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Iterable,
    Iterator,
    Sequence,
    Tuple,
    Union,
    overload,
)

from pydantic import BaseModel, ConfigDict, Field

from .users import User

if TYPE_CHECKING:
    from .models import Answer, Question


class ContentType(str, Enum):
    """Kind of content a history record describes."""

    QUESTION = "QUESTION"
    ANSWER = "ANSWER"


class DeleteHistory(BaseModel):
    """
    Immutable record of one deleted content item.

    Two records are equal when they describe the same content deleted by the
    same user. ``create_date`` is informational and ignored by equality.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    content_type: ContentType = Field(..., description="Kind of deleted content")
    content_id: int = Field(..., description="ID of the deleted question or answer")
    deleted_by: User = Field(..., description="User recorded as deleting the content")
    create_date: datetime = Field(..., description="When the content was deleted")

    @classmethod
    def of_question(
        cls, question: "Question", create_date: datetime
    ) -> "DeleteHistory":
        """Build the record for a deleted question."""
        return cls(
            content_type=ContentType.QUESTION,
            content_id=question.id,
            deleted_by=question.writer,
            create_date=create_date,
        )

    @classmethod
    def of_answer(cls, answer: "Answer", create_date: datetime) -> "DeleteHistory":
        """Build the record for a deleted answer."""
        return cls(
            content_type=ContentType.ANSWER,
            content_id=answer.id,
            deleted_by=answer.writer,
            create_date=create_date,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DeleteHistory):
            return NotImplemented
        return (
            self.content_type == other.content_type
            and self.content_id == other.content_id
            and self.deleted_by.matches(other.deleted_by)
        )

    def __hash__(self) -> int:
        return hash((self.content_type, self.content_id, self.deleted_by.id))

    def __repr__(self) -> str:
        return (
            f"DeleteHistory(content_type={self.content_type.value}, "
            f"content_id={self.content_id!r}, deleted_by={self.deleted_by.id!r}, "
            f"create_date={self.create_date.isoformat()})"
        )


class DeleteHistoryBatch(Sequence[DeleteHistory]):
    """Ordered, immutable collection of DeleteHistory records."""

    def __init__(self, histories: Iterable[DeleteHistory] = ()):
        self._histories: Tuple[DeleteHistory, ...] = tuple(histories)

    @classmethod
    def of(cls, *histories: DeleteHistory) -> "DeleteHistoryBatch":
        return cls(histories)

    def append(self, history: DeleteHistory) -> "DeleteHistoryBatch":
        """Return a new batch with ``history`` added at the end."""
        return DeleteHistoryBatch(self._histories + (history,))

    def extend(self, histories: Iterable[DeleteHistory]) -> "DeleteHistoryBatch":
        """Return a new batch with ``histories`` added at the end, in order."""
        return DeleteHistoryBatch(self._histories + tuple(histories))

    @overload
    def __getitem__(self, index: int) -> DeleteHistory:
        ...

    @overload
    def __getitem__(self, index: slice) -> "DeleteHistoryBatch":
        ...

    def __getitem__(
        self, index: Union[int, slice]
    ) -> Union[DeleteHistory, "DeleteHistoryBatch"]:
        if isinstance(index, slice):
            return DeleteHistoryBatch(self._histories[index])
        return self._histories[index]

    def __len__(self) -> int:
        return len(self._histories)

    def __iter__(self) -> Iterator[DeleteHistory]:
        return iter(self._histories)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, DeleteHistoryBatch):
            return self._histories == other._histories
        if isinstance(other, (list, tuple)):
            return self._histories == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._histories)

    def __repr__(self) -> str:
        return f"DeleteHistoryBatch({list(self._histories)!r})"
