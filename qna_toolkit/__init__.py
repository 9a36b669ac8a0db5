"""
QnA Toolkit - deletion workflow for question/answer forums.

A user may delete a question only if they wrote it and nobody else has
answered it. Deleting a question soft deletes all of its answers and records
an immutable DeleteHistory for every item removed.

Key Features
------------
* **Soft Delete**: Content is flagged and timestamped, never physically removed
* **Cascading Delete**: A question takes its answers with it, all or nothing
* **Delete History**: One audit record per removed item, stored as one batch
* **SQL Storage**: SQLAlchemy repositories sharing a single transaction

Quick Start
-----------
>>> from qna_toolkit import QnAStorage
>>>
>>> storage = QnAStorage("sqlite:///./forum.db")
>>> await storage.initialize()
>>>
>>> with storage.session() as session:
...     service = storage.create_service(session)
...     await service.delete_question(login_user_id=1, question_id=42)

Errors
------
* ``QuestionNotFoundException`` / ``UserNotFoundException``: unknown ids
* ``AlreadyDeletedException``: the question was deleted before
* ``NotOwnerException``: the user did not write the question
* ``ForeignAnswerException``: another user answered the question
"""

__version__ = "1.0.0"

from .clock import Clock, FixedClock, SystemClock
from .config import QnAConfig
from .qna import (
    Answer,
    ContentType,
    DeleteHistory,
    DeleteHistoryBatch,
    ForeignAnswerException,
    NotFoundException,
    QnAService,
    QnAStorage,
    Question,
    QuestionNotFoundException,
    User,
    UserNotFoundException,
)
from .soft_delete import AlreadyDeletedException, NotOwnerException, SoftDeleteError

__all__ = [
    # Entities
    "User",
    "Question",
    "Answer",
    # History
    "ContentType",
    "DeleteHistory",
    "DeleteHistoryBatch",
    # Service and storage
    "QnAService",
    "QnAStorage",
    # Clock
    "Clock",
    "SystemClock",
    "FixedClock",
    # Configuration
    "QnAConfig",
    # Exceptions
    "SoftDeleteError",
    "AlreadyDeletedException",
    "NotOwnerException",
    "ForeignAnswerException",
    "NotFoundException",
    "QuestionNotFoundException",
    "UserNotFoundException",
]
