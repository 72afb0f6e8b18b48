"""
Domain layer for the quiz grader.
Contains ports (interfaces), models (entities), errors and schemas (DTOs).
"""

from .errors import InvalidIdentifier, MalformedRequestBody, QuizError, StorageUnavailable
from .models import AnswerResult, Choice, Question, QuestionId
from .ports import QuestionRepository
from .schemas import (
    AnswerResponse,
    ErrorResponse,
    HealthResponse,
    PublicChoice,
    PublicQuestion,
    QuestionRecord,
    ReadinessResponse,
)

__all__ = [
    # Models (domain entities)
    "QuestionId",
    "Choice",
    "Question",
    "AnswerResult",
    # Errors
    "QuizError",
    "InvalidIdentifier",
    "StorageUnavailable",
    "MalformedRequestBody",
    # Ports (interfaces)
    "QuestionRepository",
    # Schemas (DTOs)
    "PublicChoice",
    "PublicQuestion",
    "AnswerResponse",
    "ErrorResponse",
    "QuestionRecord",
    "HealthResponse",
    "ReadinessResponse",
]
