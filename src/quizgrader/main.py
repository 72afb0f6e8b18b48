"""
Main application entry point for the quiz grader.
Builds the FastAPI application and wires repository, use cases and routes explicitly.
"""

import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from quizgrader.api import QuestionHandlers, build_question_router
from quizgrader.api import dispatch_router
from quizgrader.api import router as api_router
from quizgrader.core.config import Settings, get_settings, validate_settings
from quizgrader.core.middleware import setup_middleware
from quizgrader.core.observability import get_structured_logger
from quizgrader.domain.errors import InvalidIdentifier, StorageUnavailable
from quizgrader.domain.models import Question
from quizgrader.domain.ports import QuestionRepository
from quizgrader.repositories.question_loader import load_questions_file, sample_questions
from quizgrader.repositories.question_repository import InMemoryQuestionRepository
from quizgrader.services.answer_service import SubmitAnswerUseCase
from quizgrader.services.question_service import GetQuestionUseCase

logger = get_structured_logger()


def initial_questions(settings: Settings) -> list[Question]:
    """Questions to load into a freshly built store."""
    questions = sample_questions() if settings.seed_sample_questions else []
    if settings.questions_file:
        if os.path.exists(settings.questions_file):
            questions.extend(load_questions_file(settings.questions_file))
        else:
            logger.warning(f"Questions file not found, skipping: {settings.questions_file}")
    return questions


def build_repository(settings: Settings) -> tuple[QuestionRepository, list[Question]]:
    """
    Build the configured question store.

    Returns the repository and any questions still to be written at startup.
    """
    questions = initial_questions(settings)
    if settings.storage_backend == "chroma":
        from quizgrader.repositories.chroma_question_repository import ChromaQuestionRepository

        return ChromaQuestionRepository(settings), questions

    return InMemoryQuestionRepository(questions), []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.app_name}...")

    issues = validate_settings(settings)
    if issues:
        logger.warning(f"Configuration issues: {issues}")

    pending = app.state.pending_questions
    if pending:
        stored = await app.state.question_repository.bulk_add_questions(pending)
        logger.info(f"Seeded {stored} questions into {settings.storage_backend} store")
        app.state.pending_questions = []

    logger.info("Application startup complete")

    yield

    logger.info(f"Shutting down {settings.app_name}...")


def create_app(
    settings: Optional[Settings] = None, repository: Optional[QuestionRepository] = None
) -> FastAPI:
    """
    Compose the application.

    An injected repository is used as-is and never seeded.
    """
    settings = settings or get_settings()
    get_structured_logger(settings.log_level)

    pending: list[Question] = []
    if repository is None:
        repository, pending = build_repository(settings)

    get_question = GetQuestionUseCase(repository)
    submit_answer = SubmitAnswerUseCase(repository)
    handlers = QuestionHandlers(get_question, submit_answer)

    app = FastAPI(
        title=settings.app_name,
        description="Serves multiple-choice questions and grades submitted answers.",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_docs else None,
        redoc_url="/redoc" if settings.enable_docs else None,
    )
    app.state.settings = settings
    app.state.question_repository = repository
    app.state.pending_questions = pending
    app.state.question_router = build_question_router(handlers)

    setup_middleware(app, settings)

    @app.get("/", response_model=dict, tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "monitoring": {"health": "/healthz", "readiness": "/readyz", "metrics": "/metrics"},
            "api_endpoints": {
                "question": "GET /questions/{id}",
                "answer": "POST /questions/{id}/answer",
            },
        }

    app.include_router(api_router)
    app.include_router(dispatch_router)

    @app.exception_handler(InvalidIdentifier)
    async def invalid_identifier_handler(request: Request, exc: InvalidIdentifier):
        logger.info(f"Rejected question id {exc.raw!r}")
        return JSONResponse(status_code=400, content={"error": "Invalid question id"})

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
        logger.error(f"Storage unavailable during {exc.operation}: {exc}")
        return JSONResponse(status_code=503, content={"error": "Storage unavailable"})

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        return JSONResponse(
            status_code=404, content={"error": "Endpoint not found", "path": request.url.path}
        )

    @app.exception_handler(405)
    async def method_not_allowed_handler(request: Request, exc):
        return JSONResponse(
            status_code=405, content={"error": "Method not allowed", "path": request.url.path}
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc):
        logger.error(f"Internal server error: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "quizgrader.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
