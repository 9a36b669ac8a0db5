"""
Soft Delete Module - recoverable, auditable deletions.

Provides the mixin and exceptions shared by every forum entity that is
deleted by flag rather than physically removed.
"""

from .exceptions import AlreadyDeletedException, NotOwnerException, SoftDeleteError
from .mixins import (
    SoftDeleteMixin,
    prevent_hard_delete,
    register_soft_delete_listeners,
)

__all__ = [
    # Mixins
    "SoftDeleteMixin",
    "prevent_hard_delete",
    "register_soft_delete_listeners",
    # Exceptions
    "SoftDeleteError",
    "AlreadyDeletedException",
    "NotOwnerException",
]
