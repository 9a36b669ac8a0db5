"""
Service layer for question and answer deletion.

Looks up the acting user and the content, lets the entities decide whether
the deletion is allowed, and records the resulting history batch, all in
one unit of work.
"""

import logging
from typing import Optional

from ..clock import Clock, SystemClock
from ..soft_delete import SoftDeleteError
from .exceptions import (
    AnswerNotFoundException,
    QuestionNotFoundException,
    UserNotFoundException,
)
from .history import DeleteHistoryBatch
from .repositories import (
    AnswerRepository,
    DeleteHistoryRepository,
    NullUnitOfWork,
    QuestionRepository,
    UnitOfWork,
    UserRepository,
)
from .users import User

logger = logging.getLogger(__name__)


class QnAService:
    """
    Deletion workflow for forum questions and answers.

    A question may be deleted only by its writer and only while every
    answer on it was written by that same user. The question and its
    answers are soft deleted together and one DeleteHistory per item is
    handed to the history repository in a single ``save_all`` call.
    """

    def __init__(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
        delete_history_repository: DeleteHistoryRepository,
        clock: Optional[Clock] = None,
        unit_of_work: Optional[UnitOfWork] = None,
    ):
        """
        Initialize the QnA service.

        Args:
            question_repository: Question lookup and persistence
            answer_repository: Answer lookup and persistence
            user_repository: Lookup of the acting user
            delete_history_repository: Destination of history batches
            clock: Source of deletion timestamps, defaults to SystemClock
            unit_of_work: Transaction boundary, defaults to NullUnitOfWork
        """
        self.question_repository = question_repository
        self.answer_repository = answer_repository
        self.user_repository = user_repository
        self.delete_history_repository = delete_history_repository
        self.clock = clock or SystemClock()
        self.unit_of_work = unit_of_work or NullUnitOfWork()

    async def delete_question(self, login_user_id: int, question_id: int) -> None:
        """
        Delete a question and all of its answers.

        Args:
            login_user_id: ID of the authenticated user asking for deletion
            question_id: ID of the question to delete

        Raises:
            QuestionNotFoundException: No question with this ID
            UserNotFoundException: No user with this ID
            AlreadyDeletedException: The question is already deleted
            NotOwnerException: The user did not write the question
            ForeignAnswerException: Another user answered the question
        """
        async with self.unit_of_work:
            question = await self.question_repository.find_by_id(question_id)
            if question is None:
                raise QuestionNotFoundException(question_id)

            login_user = await self._get_user(login_user_id)

            try:
                histories = question.delete(login_user, self.clock.now())
            except SoftDeleteError as e:
                logger.warning(
                    f"User {login_user_id} could not delete question {question_id}: {e}"
                )
                raise

            await self.question_repository.save(question)
            await self.delete_history_repository.save_all(histories)

        logger.info(
            f"Question {question_id} deleted by user {login_user_id} "
            f"({len(histories) - 1} answers cascaded)"
        )

    async def delete_answer(self, login_user_id: int, answer_id: int) -> None:
        """
        Delete a single answer written by the acting user.

        Args:
            login_user_id: ID of the authenticated user asking for deletion
            answer_id: ID of the answer to delete

        Raises:
            AnswerNotFoundException: No answer with this ID
            UserNotFoundException: No user with this ID
            AlreadyDeletedException: The answer is already deleted
            NotOwnerException: The user did not write the answer
        """
        async with self.unit_of_work:
            answer = await self.answer_repository.find_by_id(answer_id)
            if answer is None:
                raise AnswerNotFoundException(answer_id)

            login_user = await self._get_user(login_user_id)

            try:
                history = answer.delete(login_user, self.clock.now())
            except SoftDeleteError as e:
                logger.warning(
                    f"User {login_user_id} could not delete answer {answer_id}: {e}"
                )
                raise

            await self.answer_repository.save(answer)
            await self.delete_history_repository.save_all(
                DeleteHistoryBatch.of(history)
            )

        logger.info(f"Answer {answer_id} deleted by user {login_user_id}")

    async def _get_user(self, user_id: int) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user
