"""
Question set loading for seeding a repository at startup.
"""

import json
import logging
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter

from quizgrader.domain.models import Question
from quizgrader.domain.schemas import QuestionRecord

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[QuestionRecord])

SAMPLE_QUESTIONS: list[dict] = [
    {
        "id": "q1",
        "sentence": "Which keyword defines a function in Python?",
        "choices": [
            {"label": "A", "text": "func", "isCorrect": False},
            {"label": "B", "text": "def", "isCorrect": True},
            {"label": "C", "text": "lambda", "isCorrect": False},
            {"label": "D", "text": "define", "isCorrect": False},
        ],
    },
    {
        "id": "q2",
        "sentence": "Which HTTP method is conventionally used to submit data?",
        "choices": [
            {"label": "A", "text": "GET", "isCorrect": False},
            {"label": "B", "text": "HEAD", "isCorrect": False},
            {"label": "C", "text": "POST", "isCorrect": True},
            {"label": "D", "text": "OPTIONS", "isCorrect": False},
        ],
    },
    {
        "id": "q3",
        "sentence": "What does JSON stand for?",
        "choices": [
            {"label": "A", "text": "JavaScript Object Notation", "isCorrect": True},
            {"label": "B", "text": "Java Standard Output Network", "isCorrect": False},
            {"label": "C", "text": "JSON Serialized Object Nodes", "isCorrect": False},
            {"label": "D", "text": "Joint Schema Object Naming", "isCorrect": False},
        ],
    },
]


def parse_questions(data: list[dict]) -> list[Question]:
    """Validate raw question records and convert them to domain questions."""
    return [record.to_domain() for record in _RECORDS.validate_python(data)]


def load_questions_file(path: Union[str, Path]) -> list[Question]:
    """
    Load a JSON array of `{id, sentence, choices: [{label, text, isCorrect}]}`.

    Raises ValueError (including pydantic ValidationError) for malformed content.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of questions")

    questions = parse_questions(data)
    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions


def sample_questions() -> list[Question]:
    """Built-in sample question set."""
    return parse_questions(SAMPLE_QUESTIONS)
