import logging
from typing import Optional

from quizgrader.domain.models import Question, QuestionId
from quizgrader.domain.ports import QuestionRepository

logger = logging.getLogger(__name__)


class GetQuestionUseCase:
    """Fetches a question through the repository port. Returns the full record."""

    def __init__(self, question_repo: QuestionRepository):
        self.question_repo = question_repo

    async def execute(self, question_id: QuestionId) -> Optional[Question]:
        question = await self.question_repo.find_by_id(question_id)
        if question is None:
            logger.info(f"Question {question_id} not found")
        return question
