"""
Domain models for the quiz grader.
Core business entities separate from transport DTOs.
"""

import re
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidIdentifier

QUESTION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@dataclass(frozen=True)
class QuestionId:
    """Validated question identifier."""

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not QUESTION_ID_PATTERN.fullmatch(self.value):
            raise InvalidIdentifier(str(self.value))

    @classmethod
    def create(cls, raw: str) -> "QuestionId":
        return cls(raw)

    def __str__(self) -> str:
        return self.value


class Choice(BaseModel):
    """One labelled option of a question."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, description="Choice label, unique within a question")
    text: str = Field(..., description="Display text")
    is_correct: bool = Field(False, description="Whether this is the correct choice")


class Question(BaseModel):
    """Core question domain model."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: QuestionId = Field(..., description="Question identifier")
    sentence: str = Field(..., description="Prompt text")
    choices: tuple[Choice, ...] = Field(..., description="Ordered choices")

    def find_choice(self, label: str) -> Optional[Choice]:
        """Return the choice with exactly this label, if any."""
        for choice in self.choices:
            if choice.label == label:
                return choice
        return None

    def correct_choice(self) -> Optional[Choice]:
        """Return the choice flagged correct."""
        for choice in self.choices:
            if choice.is_correct:
                return choice
        return None


@dataclass(frozen=True)
class AnswerResult:
    """Verdict for one submitted label."""

    was_correct: bool
    correct_answer_label: str
