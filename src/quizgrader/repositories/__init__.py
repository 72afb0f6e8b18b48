"""
Repositories package for the quiz grader.
Contains storage adapters implementing the QuestionRepository port.
"""

# ChromaQuestionRepository is imported where needed so chromadb loads only for that backend
from .question_loader import load_questions_file, sample_questions
from .question_repository import InMemoryQuestionRepository

__all__ = ["InMemoryQuestionRepository", "load_questions_file", "sample_questions"]
