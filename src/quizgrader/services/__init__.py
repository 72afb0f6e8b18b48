"""
Services package for the quiz grader.
Use cases that orchestrate question retrieval and answer grading.
"""

from .answer_service import SubmitAnswerUseCase
from .question_service import GetQuestionUseCase

__all__ = [
    "GetQuestionUseCase",
    "SubmitAnswerUseCase",
]
