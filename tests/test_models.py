import pytest

from quizgrader.domain.errors import InvalidIdentifier
from quizgrader.domain.models import QuestionId
from quizgrader.domain.schemas import PublicQuestion


@pytest.mark.parametrize("raw", ["q1", "does-not-exist", "Q_42", "a" * 64])
def test_question_id_accepts_tokens(raw):
    assert str(QuestionId.create(raw)) == raw


@pytest.mark.parametrize("raw", ["", "with space", "a/b", "a" * 65, "é"])
def test_question_id_rejects_invalid(raw):
    with pytest.raises(InvalidIdentifier):
        QuestionId.create(raw)


def test_question_id_equality_by_value():
    assert QuestionId.create("q1") == QuestionId.create("q1")
    assert QuestionId.create("q1") != QuestionId.create("q2")
    assert len({QuestionId.create("q1"), QuestionId.create("q1")}) == 1


def test_invalid_identifier_is_value_error():
    with pytest.raises(ValueError):
        QuestionId.create("")


def test_public_question_has_no_answer_key(question):
    public = PublicQuestion.from_question(question).model_dump()

    assert public == {
        "id": "q1",
        "sentence": "Pick y",
        "choices": [{"label": "A", "text": "x"}, {"label": "B", "text": "y"}],
    }
    assert "is_correct" not in str(public)
    assert all(set(choice) == {"label", "text"} for choice in public["choices"])


def test_question_lookup_helpers(question):
    assert question.find_choice("A").text == "x"
    assert question.find_choice("a") is None
    assert question.correct_choice().label == "B"
