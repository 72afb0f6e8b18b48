"""
In-memory question repository.
Dict-backed implementation of the QuestionRepository port.
"""

import logging
from typing import Optional

from quizgrader.domain.models import Question, QuestionId
from quizgrader.domain.ports import QuestionRepository

logger = logging.getLogger(__name__)


class InMemoryQuestionRepository(QuestionRepository):
    """Repository keeping questions in a process-local dict."""

    def __init__(self, questions: Optional[list[Question]] = None):
        self._questions: dict[QuestionId, Question] = {}
        for question in questions or []:
            self._questions[question.id] = question

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """
        Get question by ID.

        Args:
            question_id: Question identifier

        Returns:
            Question or None if not found
        """
        question = self._questions.get(question_id)
        if question:
            logger.debug(f"Retrieved question {question_id}")
        else:
            logger.debug(f"Question {question_id} not found")
        return question

    async def bulk_add_questions(self, questions: list[Question]) -> int:
        """
        Add multiple questions in bulk. Existing ids are replaced.

        Returns:
            Number of questions stored
        """
        for question in questions:
            self._questions[question.id] = question

        logger.info(f"Stored {len(questions)} questions")
        return len(questions)

    async def get_question_count(self) -> int:
        """Get total number of questions."""
        return len(self._questions)

    async def health_check(self) -> bool:
        return True
