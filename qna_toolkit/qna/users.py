"""Forum user entity."""

from typing import Any, Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class User(Base):  # type: ignore[valid-type,misc]
    """An already authenticated forum member."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    def __init__(
        self,
        user_id: str,
        name: str,
        email: Optional[str] = None,
        id: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(id=id, user_id=user_id, name=name, email=email, **kwargs)

    def matches(self, other: Optional["User"]) -> bool:
        """Return True if ``other`` is the same user, compared by id."""
        if other is None:
            return False
        return self is other or (self.id is not None and self.id == other.id)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, user_id={self.user_id!r})"
