"""
ChromaDB implementation of QuestionRepository.
One record per question: id is the question id, document is the sentence, and the
choices (with the answer key) live in metadata as a JSON string.
"""

import json
import logging
from typing import Any, Optional

import chromadb
from chromadb.api import ClientAPI
from pydantic import ValidationError

from quizgrader.core.config import Settings
from quizgrader.core.observability import get_observability_service
from quizgrader.domain.errors import StorageUnavailable
from quizgrader.domain.models import Question, QuestionId
from quizgrader.domain.ports import QuestionRepository
from quizgrader.domain.schemas import ChoiceRecord, QuestionRecord

logger = logging.getLogger(__name__)


class ChromaQuestionRepository(QuestionRepository):
    """ChromaDB backed question store."""

    def __init__(self, settings: Settings, client: Optional[ClientAPI] = None):
        self.settings = settings
        self.persist_dir = settings.chroma_persist_dir or "./chroma_db"
        self.questions_collection_name = settings.chroma_collection_questions or "questions"
        self.observability = get_observability_service()

        # ChromaDB client (lazy initialization)
        self._client: Optional[ClientAPI] = client
        self._questions_collection = None

    def _ensure_client(self) -> ClientAPI:
        """Ensure ChromaDB client is initialized."""
        if self._client is None:
            try:
                self._client = chromadb.PersistentClient(path=self.persist_dir)
                logger.info(f"ChromaDB client initialized with persist_dir: {self.persist_dir}")
            except Exception as e:
                logger.error(f"Failed to initialize ChromaDB client: {e}")
                self.observability.record_storage_error("connect")
                raise StorageUnavailable("connect") from e
        return self._client

    def _ensure_questions_collection(self):
        """Ensure questions collection is available."""
        if self._questions_collection is None:
            client = self._ensure_client()
            try:
                self._questions_collection = client.get_or_create_collection(
                    self.questions_collection_name
                )
                logger.info(f"Connected to ChromaDB collection: {self.questions_collection_name}")
            except Exception as e:
                logger.error(f"Collection {self.questions_collection_name} unavailable: {e}")
                self.observability.record_storage_error("collection")
                raise StorageUnavailable("collection") from e
        return self._questions_collection

    def _parse_chroma_record(
        self, question_id: str, document: str, metadata: dict[str, Any]
    ) -> Question:
        """
        Parse a ChromaDB record into a Question.

        Expected format:
        Document: "<sentence>"
        Metadata: {"choices": "[{\"label\": \"A\", \"text\": \"...\", \"isCorrect\": false}, ...]"}
        """
        choices = [ChoiceRecord.model_validate(c) for c in json.loads(metadata["choices"])]
        record = QuestionRecord(id=question_id, sentence=document or "", choices=choices)
        return record.to_domain()

    async def find_by_id(self, question_id: QuestionId) -> Optional[Question]:
        """Get question by ID from ChromaDB."""
        collection = self._ensure_questions_collection()
        try:
            result = collection.get(ids=[str(question_id)], include=["documents", "metadatas"])
        except Exception as e:
            logger.error(f"Error retrieving question {question_id}: {e}")
            self.observability.record_storage_error("find_by_id")
            raise StorageUnavailable("find_by_id") from e

        if not result or not result.get("ids"):
            logger.debug(f"Question {question_id} not found")
            return None

        document = result["documents"][0] if result.get("documents") else ""
        metadata = result["metadatas"][0] if result.get("metadatas") else {}
        try:
            return self._parse_chroma_record(str(question_id), document, metadata or {})
        except (KeyError, ValueError, ValidationError) as e:
            logger.error(f"Stored question {question_id} is corrupt: {e}")
            self.observability.record_storage_error("decode")
            raise StorageUnavailable("decode", "Stored question is unreadable") from e

    async def bulk_add_questions(self, questions: list[Question]) -> int:
        """Upsert questions; returns the number written."""
        if not questions:
            return 0

        collection = self._ensure_questions_collection()
        records = [QuestionRecord.from_domain(q) for q in questions]
        try:
            # Lookups are by id only; a constant vector keeps the embedding model out of the path
            collection.upsert(
                ids=[r.id for r in records],
                embeddings=[[0.0] for _ in records],
                documents=[r.sentence for r in records],
                metadatas=[
                    {"choices": json.dumps([c.model_dump(by_alias=True) for c in r.choices])}
                    for r in records
                ],
            )
        except Exception as e:
            logger.error(f"Failed to upsert {len(records)} questions: {e}")
            self.observability.record_storage_error("upsert")
            raise StorageUnavailable("upsert") from e

        logger.info(f"Upserted {len(records)} questions into {self.questions_collection_name}")
        return len(records)

    async def get_question_count(self) -> int:
        """Get total number of questions."""
        collection = self._ensure_questions_collection()
        try:
            return collection.count()
        except Exception as e:
            self.observability.record_storage_error("count")
            raise StorageUnavailable("count") from e

    async def health_check(self) -> bool:
        """Check if ChromaDB is accessible."""
        try:
            count = await self.get_question_count()
            logger.debug(f"ChromaDB health check: {count} questions available")
            return True
        except StorageUnavailable as e:
            logger.error(f"ChromaDB health check failed: {e}")
            return False
