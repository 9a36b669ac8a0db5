"""
SQLAlchemy mixins for soft delete functionality.

Forum content is never physically removed. These mixins keep the deleted
flag and the deletion timestamp consistent and reject hard deletes.
"""

from datetime import datetime
from typing import Any, Optional, Type

from sqlalchemy import Boolean, CheckConstraint, DateTime, event
from sqlalchemy.orm import Mapped, Query, Session, declared_attr, mapped_column

from .exceptions import AlreadyDeletedException


class SoftDeleteMixin:
    """
    Mixin to add soft delete state to SQLAlchemy models.

    Provides:
    - Soft delete fields (is_deleted, deleted_at)
    - A check constraint tying the flag to the timestamp
    - Query helpers for active and deleted records

    Usage:
        class Post(Base, SoftDeleteMixin):
            __tablename__ = 'posts'
            id = mapped_column(Integer, primary_key=True)
    """

    is_deleted: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False, index=True
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @declared_attr
    def __table_args__(cls: Any) -> Any:
        """Add the deletion consistency constraint."""
        table_name = getattr(cls, "__tablename__", cls.__name__.lower())

        return (
            CheckConstraint(
                "(is_deleted = false AND deleted_at IS NULL) OR "
                "(is_deleted = true AND deleted_at IS NOT NULL)",
                name=f"ck_{table_name}_deletion_consistency",
            ),
        )

    def _init_soft_delete_state(self) -> None:
        # Column defaults only apply on INSERT; transient objects need them too
        self.is_deleted = False
        self.deleted_at = None

    def mark_deleted(self, timestamp: datetime) -> None:
        """
        Move this record to the deleted state.

        Args:
            timestamp: When the deletion happened

        Raises:
            AlreadyDeletedException: If record is already deleted
        """
        if self.is_deleted:
            raise AlreadyDeletedException(
                self.__class__.__name__, getattr(self, "id", "unknown")
            )

        self.is_deleted = True
        self.deleted_at = timestamp

    @classmethod
    def query_active(cls, session: Session) -> Query[Any]:
        """
        Return query for active (non-deleted) records only.

        Args:
            session: SQLAlchemy session

        Returns:
            Query filtered to exclude deleted records
        """
        return session.query(cls).filter(cls.is_deleted.is_(False))

    @classmethod
    def query_deleted(cls, session: Session) -> Query[Any]:
        """Return query for deleted records only."""
        return session.query(cls).filter(cls.is_deleted.is_(True))


def prevent_hard_delete(mapper: Any, connection: Any, target: Any) -> None:
    """
    Prevent hard deletes on models with SoftDeleteMixin.

    This function should be connected to SQLAlchemy's before_delete event.
    """
    if isinstance(target, SoftDeleteMixin):
        raise RuntimeError(
            f"Hard delete attempted on {target.__class__.__name__}. "
            "Use delete() on the entity instead."
        )


def register_soft_delete_listeners(base_class: Type[Any]) -> None:
    """
    Register SQLAlchemy event listeners for soft delete functionality.

    Args:
        base_class: The declarative base class
    """
    for mapper in base_class.registry.mappers:
        if issubclass(mapper.class_, SoftDeleteMixin):
            if not event.contains(mapper.class_, "before_delete", prevent_hard_delete):
                event.listen(mapper.class_, "before_delete", prevent_hard_delete)
