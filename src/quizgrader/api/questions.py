"""
Question API handlers.
Translate HTTP requests into use case calls and use case results into JSON responses.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from quizgrader.core.routing import Router
from quizgrader.domain.errors import MalformedRequestBody
from quizgrader.domain.models import QuestionId
from quizgrader.domain.schemas import AnswerResponse, PublicQuestion
from quizgrader.services.answer_service import SubmitAnswerUseCase
from quizgrader.services.question_service import GetQuestionUseCase

from .parsing import parse_answer_body

logger = logging.getLogger(__name__)

QUESTION_NOT_FOUND = "Question not found"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


class QuestionHandlers:
    """Handlers for the question routes, bound to their use cases."""

    def __init__(self, get_question: GetQuestionUseCase, submit_answer: SubmitAnswerUseCase):
        self.get_question_use_case = get_question
        self.submit_answer_use_case = submit_answer

    async def get_question(self, request: Request, params: dict[str, str]) -> JSONResponse:
        """
        GET /questions/:id

        Returns the question with every correctness flag removed.
        """
        question_id = QuestionId.create(params["id"])
        question = await self.get_question_use_case.execute(question_id)
        if question is None:
            return error_response(QUESTION_NOT_FOUND, 404)

        public = PublicQuestion.from_question(question)
        return JSONResponse(content=public.model_dump())

    async def submit_answer(self, request: Request, params: dict[str, str]) -> JSONResponse:
        """
        POST /questions/:id/answer

        Body: {"submittedLabel": "<label>"}. Unknown labels are graded as wrong.
        """
        question_id = QuestionId.create(params["id"])

        parsed = parse_answer_body(await request.body())
        if isinstance(parsed, MalformedRequestBody):
            logger.info(f"Rejected answer body for question {question_id}: {parsed.message}")
            return error_response(parsed.message, 400)

        result = await self.submit_answer_use_case.execute(question_id, parsed.submitted_label)
        if result is None:
            return error_response(QUESTION_NOT_FOUND, 404)

        return JSONResponse(content=AnswerResponse.from_result(result).model_dump())


def build_question_router(handlers: QuestionHandlers) -> Router:
    """Register the question routes on a fresh Router."""
    router = Router()
    router.get("/questions/:id", handlers.get_question)
    router.post("/questions/:id/answer", handlers.submit_answer)
    return router
