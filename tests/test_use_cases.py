import pytest

from quizgrader.domain.errors import StorageUnavailable
from quizgrader.domain.models import AnswerResult, Choice, Question, QuestionId
from quizgrader.services.answer_service import SubmitAnswerUseCase
from quizgrader.services.question_service import GetQuestionUseCase

from .conftest import FailingQuestionRepository


async def test_get_question_returns_full_record(repository, question):
    result = await GetQuestionUseCase(repository).execute(QuestionId.create("q1"))

    assert result == question
    assert result.correct_choice().label == "B"
    assert repository.calls == 1


async def test_get_question_unknown_id(repository):
    assert await GetQuestionUseCase(repository).execute(QuestionId.create("nope")) is None


async def test_correct_label(repository):
    result = await SubmitAnswerUseCase(repository).execute(QuestionId.create("q1"), "B")
    assert result == AnswerResult(was_correct=True, correct_answer_label="B")


@pytest.mark.parametrize("label", ["A", "Z", "", "b", " B", "B "])
async def test_any_other_label_is_wrong(repository, label):
    result = await SubmitAnswerUseCase(repository).execute(QuestionId.create("q1"), label)
    assert result == AnswerResult(was_correct=False, correct_answer_label="B")


async def test_unknown_question(repository):
    assert await SubmitAnswerUseCase(repository).execute(QuestionId.create("q9"), "B") is None


async def test_grading_is_idempotent(repository):
    use_case = SubmitAnswerUseCase(repository)
    first = await use_case.execute(QuestionId.create("q1"), "A")
    second = await use_case.execute(QuestionId.create("q1"), "A")

    assert first == second
    assert await repository.get_question_count() == 1


async def test_correct_label_follows_storage():
    question = Question(
        id=QuestionId.create("q5"),
        sentence="?",
        choices=[
            Choice(label="A", text="1", is_correct=True),
            Choice(label="B", text="2"),
            Choice(label="C", text="3"),
        ],
    )
    from quizgrader.repositories.question_repository import InMemoryQuestionRepository

    use_case = SubmitAnswerUseCase(InMemoryQuestionRepository([question]))
    for label in ["A", "B", "C", "D"]:
        result = await use_case.execute(QuestionId.create("q5"), label)
        assert result.correct_answer_label == "A"
        assert result.was_correct is (label == "A")


async def test_storage_fault_propagates():
    with pytest.raises(StorageUnavailable):
        await GetQuestionUseCase(FailingQuestionRepository()).execute(QuestionId.create("q1"))
    with pytest.raises(StorageUnavailable):
        await SubmitAnswerUseCase(FailingQuestionRepository()).execute(
            QuestionId.create("q1"), "A"
        )
