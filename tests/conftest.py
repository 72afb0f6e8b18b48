from typing import Optional

import pytest
from fastapi.testclient import TestClient

from quizgrader.core.config import Settings
from quizgrader.domain.errors import StorageUnavailable
from quizgrader.domain.models import Choice, Question, QuestionId
from quizgrader.main import create_app
from quizgrader.repositories.question_repository import InMemoryQuestionRepository


class FailingQuestionRepository:
    """Repository whose store is always down."""

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        raise StorageUnavailable("find_by_id")

    async def health_check(self) -> bool:
        return False


class CountingQuestionRepository(InMemoryQuestionRepository):
    def __init__(self, questions):
        super().__init__(questions)
        self.calls = 0

    async def find_by_id(self, question_id):
        self.calls += 1
        return await super().find_by_id(question_id)


def make_question(question_id: str = "q1") -> Question:
    return Question(
        id=QuestionId.create(question_id),
        sentence="Pick y",
        choices=[
            Choice(label="A", text="x", is_correct=False),
            Choice(label="B", text="y", is_correct=True),
        ],
    )


@pytest.fixture
def question() -> Question:
    return make_question()


@pytest.fixture
def repository(question) -> CountingQuestionRepository:
    return CountingQuestionRepository([question])


@pytest.fixture
def settings() -> Settings:
    return Settings(rate_limit_per_minute=10_000, seed_sample_questions=False)


@pytest.fixture
def client(settings, repository) -> TestClient:
    return TestClient(create_app(settings, repository=repository))


@pytest.fixture
def failing_client(settings) -> TestClient:
    return TestClient(create_app(settings, repository=FailingQuestionRepository()))
