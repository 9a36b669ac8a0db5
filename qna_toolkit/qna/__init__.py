"""
QnA Module - question and answer deletion workflow.

Entities, audit records, repository contracts, the deletion service and its
SQLAlchemy storage backend.
"""

from .exceptions import (
    AnswerNotFoundException,
    ForeignAnswerException,
    NotFoundException,
    QnAError,
    QuestionNotFoundException,
    UserNotFoundException,
)
from .history import ContentType, DeleteHistory, DeleteHistoryBatch
from .models import Answer, Question
from .repositories import (
    AnswerRepository,
    DeleteHistoryRepository,
    NullUnitOfWork,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
)
from .services import QnAService
from .storage import (
    DeleteHistoryDB,
    QnAStorage,
    SQLAnswerRepository,
    SQLDeleteHistoryRepository,
    SQLQuestionRepository,
    SQLUnitOfWork,
    SQLUserRepository,
)
from .users import User

__all__ = [
    # Entities
    "User",
    "Question",
    "Answer",
    # History
    "ContentType",
    "DeleteHistory",
    "DeleteHistoryBatch",
    # Service
    "QnAService",
    # Repository contracts
    "QuestionRepository",
    "AnswerRepository",
    "UserRepository",
    "DeleteHistoryRepository",
    "UnitOfWork",
    "NullUnitOfWork",
    # Storage
    "QnAStorage",
    "DeleteHistoryDB",
    "SQLQuestionRepository",
    "SQLAnswerRepository",
    "SQLUserRepository",
    "SQLDeleteHistoryRepository",
    "SQLUnitOfWork",
    # Exceptions
    "QnAError",
    "NotFoundException",
    "QuestionNotFoundException",
    "AnswerNotFoundException",
    "UserNotFoundException",
    "ForeignAnswerException",
]
