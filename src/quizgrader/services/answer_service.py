import logging
from typing import Optional

from quizgrader.core.observability import get_observability_service
from quizgrader.domain.models import AnswerResult, QuestionId
from quizgrader.domain.ports import QuestionRepository

logger = logging.getLogger(__name__)


class SubmitAnswerUseCase:
    """Stateless grading of a submitted label against the stored correct choice."""

    def __init__(self, question_repo: QuestionRepository):
        self.question_repo = question_repo
        self.observability = get_observability_service()

    async def execute(self, question_id: QuestionId, submitted_label: str) -> Optional[AnswerResult]:
        """
        Grade a submission.

        Returns None when the question does not exist. An unknown label is
        simply wrong. Nothing is recorded between calls.
        """
        question = await self.question_repo.find_by_id(question_id)
        if question is None:
            logger.info(f"Question {question_id} not found")
            return None

        correct = question.correct_choice()
        if correct is None:
            # Authoring invariant broken: every question has exactly one correct choice
            logger.error(f"Question {question_id} has no correct choice")
            raise RuntimeError(f"Question {question_id} has no correct choice")

        submitted = question.find_choice(submitted_label)
        was_correct = submitted is not None and submitted.label == correct.label

        self.observability.record_answer_graded(was_correct)
        logger.info(
            f"Answer graded for question {question_id}: correct={was_correct}, "
            f"correct_label={correct.label}"
        )
        return AnswerResult(was_correct=was_correct, correct_answer_label=correct.label)
