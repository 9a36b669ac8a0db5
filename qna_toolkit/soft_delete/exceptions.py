"""Exceptions for soft delete operations."""

from typing import Any, Optional


class SoftDeleteError(Exception):
    """Base exception for refused soft delete operations."""

    def __init__(self, message: str, entity_id: Optional[Any] = None):
        self.entity_id = entity_id
        super().__init__(message)


class AlreadyDeletedException(SoftDeleteError):
    """Raised when attempting to delete an already deleted entity."""

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        super().__init__(
            f"{entity_type} {entity_id} is already deleted and cannot be deleted again",
            entity_id=entity_id,
        )


class NotOwnerException(SoftDeleteError):
    """Raised when the requester did not write the content being deleted."""

    def __init__(self, entity_type: str, entity_id: Any, requester_id: Any):
        self.entity_type = entity_type
        self.requester_id = requester_id
        super().__init__(
            f"User {requester_id} does not have permission to delete "
            f"{entity_type} {entity_id}",
            entity_id=entity_id,
        )
