"""
SQLAlchemy storage backend for the deletion workflow.

Repositories here share one Session per service call; SQLUnitOfWork commits
or rolls back that session so the question, its answers and the history
batch are written in one transaction.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship, sessionmaker

from ..clock import Clock
from ..config import get_config
from ..database import Base
from ..soft_delete import register_soft_delete_listeners
from .history import ContentType, DeleteHistory, DeleteHistoryBatch
from .models import Answer, Question
from .repositories import (
    AnswerRepository,
    DeleteHistoryRepository,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
)
from .services import QnAService
from .users import User

logger = logging.getLogger(__name__)


class DeleteHistoryDB(Base):  # type: ignore[valid-type,misc]
    """SQLAlchemy model for delete history records."""

    __tablename__ = "delete_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content_type: Mapped[str] = mapped_column(String(20), nullable=False)
    content_id: Mapped[int] = mapped_column(Integer, nullable=False)
    deleted_by_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    deleted_by: Mapped[User] = relationship(User, lazy="joined")
    create_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    __table_args__ = (
        Index("idx_delete_history_content", "content_type", "content_id"),
    )


class SQLQuestionRepository(QuestionRepository):
    def __init__(self, session: Session):
        self.session = session

    async def find_by_id(self, question_id: int) -> Optional[Question]:
        return self.session.get(Question, question_id)

    async def save(self, question: Question) -> None:
        self.session.add(question)
        self.session.flush()


class SQLAnswerRepository(AnswerRepository):
    def __init__(self, session: Session):
        self.session = session

    async def find_by_id(self, answer_id: int) -> Optional[Answer]:
        return self.session.get(Answer, answer_id)

    async def save(self, answer: Answer) -> None:
        self.session.add(answer)
        self.session.flush()


class SQLUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)


class SQLDeleteHistoryRepository(DeleteHistoryRepository):
    """Delete history stored in the ``delete_history`` table."""

    def __init__(self, session: Session):
        self.session = session

    def _history_to_db(self, history: DeleteHistory) -> DeleteHistoryDB:
        """Convert DeleteHistory to database model."""
        return DeleteHistoryDB(
            content_type=history.content_type.value,
            content_id=history.content_id,
            deleted_by=history.deleted_by,
            create_date=history.create_date,
        )

    def _db_to_history(self, db_history: DeleteHistoryDB) -> DeleteHistory:
        """Convert database model to DeleteHistory."""
        return DeleteHistory(
            content_type=ContentType(db_history.content_type),
            content_id=db_history.content_id,
            deleted_by=db_history.deleted_by,
            create_date=db_history.create_date,
        )

    async def save_all(self, histories: DeleteHistoryBatch) -> None:
        """Store the whole batch in the current transaction."""
        self.session.add_all([self._history_to_db(h) for h in histories])
        self.session.flush()

    async def find_by_content(
        self, content_type: ContentType, content_id: int
    ) -> List[DeleteHistory]:
        """
        Get the history recorded for one question or answer.

        Args:
            content_type: Kind of content
            content_id: ID of the question or answer

        Returns:
            Matching records, oldest first
        """
        rows = (
            self.session.query(DeleteHistoryDB)
            .filter(
                DeleteHistoryDB.content_type == content_type.value,
                DeleteHistoryDB.content_id == content_id,
            )
            .order_by(DeleteHistoryDB.create_date, DeleteHistoryDB.id)
            .all()
        )
        return [self._db_to_history(row) for row in rows]


class SQLUnitOfWork(UnitOfWork):
    """Commits or rolls back a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    async def commit(self) -> None:
        self.session.commit()

    async def rollback(self) -> None:
        self.session.rollback()


class QnAStorage:
    """SQL database holding users, questions, answers and delete history."""

    def __init__(self, connection_string: Optional[str] = None):
        """
        Initialize SQL storage.

        Args:
            connection_string: Database connection string, defaults to the
                configured ``database_url``
        """
        self.config = get_config()
        self.connection_string = connection_string or self.config.database_url
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None  # type: ignore[type-arg]

    async def initialize(self) -> None:
        """Create the engine and tables."""
        options = self.config.get_engine_options(self.connection_string)

        self.engine = create_engine(self.connection_string, **options)
        Base.metadata.create_all(bind=self.engine)
        register_soft_delete_listeners(Base)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine
        )
        logger.debug(f"QnA storage initialized at {self.engine.url!r}")

    def session(self) -> Session:
        """Open a new session."""
        if self.SessionLocal is None:  # nosec B101
            raise RuntimeError("Storage not initialized. Call initialize() first.")
        return self.SessionLocal()

    def create_service(
        self, session: Session, clock: Optional[Clock] = None
    ) -> QnAService:
        """
        Build a QnAService whose repositories share ``session``.

        Args:
            session: Session the whole service call runs in
            clock: Optional clock for deletion timestamps

        Returns:
            Service wired to SQL repositories and a SQL unit of work
        """
        return QnAService(
            question_repository=SQLQuestionRepository(session),
            answer_repository=SQLAnswerRepository(session),
            user_repository=SQLUserRepository(session),
            delete_history_repository=SQLDeleteHistoryRepository(session),
            clock=clock,
            unit_of_work=SQLUnitOfWork(session),
        )

    def dispose(self) -> None:
        """Release pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
