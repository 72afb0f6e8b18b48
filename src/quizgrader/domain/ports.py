"""
Domain ports (interfaces) for the quiz grader.
Storage adapters implement these; services depend only on them.
"""

from abc import abstractmethod
from typing import Optional, Protocol

from .models import Question, QuestionId


class QuestionRepository(Protocol):
    """Port for question data access."""

    @abstractmethod
    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """
        Get question by ID.

        Returns None for an unknown id. Raises StorageUnavailable when the
        backing store cannot be reached.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backing store is reachable."""
        pass
