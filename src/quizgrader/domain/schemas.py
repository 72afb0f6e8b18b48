"""
Request/response schemas (DTOs) for the quiz grader.
Transport layer schemas separate from domain models.
"""

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .models import AnswerResult, Choice, Question, QuestionId


class PublicChoice(BaseModel):
    """Choice as shown to clients (no correctness flag)."""

    label: str
    text: str


class PublicQuestion(BaseModel):
    """Redacted question returned by GET /questions/{id}."""

    id: str = Field(..., description="Question identifier")
    sentence: str = Field(..., description="Question text")
    choices: list[PublicChoice] = Field(..., description="Choices without the answer key")

    @classmethod
    def from_question(cls, question: Question) -> "PublicQuestion":
        return cls(
            id=str(question.id),
            sentence=question.sentence,
            choices=[PublicChoice(label=c.label, text=c.text) for c in question.choices],
        )


class AnswerResponse(BaseModel):
    """Response schema for POST /questions/{id}/answer."""

    wasCorrect: bool = Field(..., description="Whether the submitted label is correct")
    correctAnswerLabel: str = Field(..., description="Label of the correct choice")

    @classmethod
    def from_result(cls, result: AnswerResult) -> "AnswerResponse":
        return cls(wasCorrect=result.was_correct, correctAnswerLabel=result.correct_answer_label)


class ErrorResponse(BaseModel):
    error: str


class ChoiceRecord(BaseModel):
    """Stored choice shape used by question files and the Chroma adapter."""

    model_config = ConfigDict(populate_by_name=True)

    label: str = Field(..., min_length=1)
    text: str
    is_correct: bool = Field(False, alias="isCorrect")


class QuestionRecord(BaseModel):
    """Stored question shape: `{id, sentence, choices: [{label, text, isCorrect}]}`."""

    id: str
    sentence: str
    choices: list[ChoiceRecord] = Field(..., min_length=1)

    def to_domain(self) -> Question:
        return Question(
            id=QuestionId.create(self.id),
            sentence=self.sentence,
            choices=[
                Choice(label=c.label, text=c.text, is_correct=c.is_correct) for c in self.choices
            ],
        )

    @classmethod
    def from_domain(cls, question: Question) -> "QuestionRecord":
        return cls(
            id=str(question.id),
            sentence=question.sentence,
            choices=[
                ChoiceRecord(label=c.label, text=c.text, is_correct=c.is_correct)
                for c in question.choices
            ],
        )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Service health status"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Health check timestamp"
    )
    services: dict[str, bool] = Field(..., description="Individual service health status")
    version: str = Field(..., description="Application version")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional health details")


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    ready: bool = Field(..., description="Whether service is ready")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Readiness check timestamp"
    )
    dependencies: dict[str, dict[str, Any]] = Field(..., description="Dependency status details")
    version: str = Field(..., description="Application version")
