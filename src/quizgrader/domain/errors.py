"""
Domain error kinds for the quiz grader.
Exceptions for faults, plus a plain value for rejected request bodies.
"""

from dataclasses import dataclass


class QuizError(Exception):
    """Base class for quiz grader errors."""


class InvalidIdentifier(QuizError, ValueError):
    """Raised when a raw value cannot become a QuestionId."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid question identifier: {raw!r}")


class StorageUnavailable(QuizError):
    """Raised by repositories when the backing store cannot be reached."""

    def __init__(self, operation: str, message: str = "Storage unavailable"):
        self.operation = operation
        super().__init__(f"{message} ({operation})")


@dataclass(frozen=True)
class MalformedRequestBody:
    """Outcome of body parsing when the payload is unusable."""

    message: str
