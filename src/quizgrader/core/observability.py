"""
Observability module for the quiz grader.
Implements health checks, readiness checks, metrics and structured logging.
"""

import json
import logging
from datetime import datetime, UTC

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

from quizgrader.domain.ports import QuestionRepository
from quizgrader.domain.schemas import HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

# Prometheus metrics
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_DURATION = Histogram(
    "http_request_duration_seconds", "HTTP request duration", ["method", "endpoint"]
)
ANSWERS_GRADED = Counter("answers_graded_total", "Graded answer submissions", ["result"])
STORAGE_ERRORS = Counter("storage_errors_total", "Question storage faults", ["operation"])


class ObservabilityService:
    """Service for managing observability features."""

    def __init__(self):
        self.startup_time = datetime.now(UTC)

    async def health_check(self, version: str) -> HealthResponse:
        """
        Basic health check - returns app status without external dependencies.
        Fast check for load balancers.
        """
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(UTC),
            services={"app": True},
            version=version,
            details={
                "uptime_seconds": int((datetime.now(UTC) - self.startup_time).total_seconds())
            },
        )

    async def readiness_check(
        self, version: str, repository: QuestionRepository
    ) -> ReadinessResponse:
        """Readiness check - verifies the question store answers."""
        try:
            healthy = await repository.health_check()
            storage = {"healthy": healthy, "backend": type(repository).__name__}
        except Exception as e:
            logger.error(f"Storage readiness check failed: {e}")
            storage = {"healthy": False, "backend": type(repository).__name__, "error": str(e)}

        return ReadinessResponse(
            ready=storage["healthy"],
            timestamp=datetime.now(UTC),
            dependencies={"storage": storage},
            version=version,
        )

    async def get_metrics(self) -> Response:
        """Get Prometheus metrics."""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    def record_request(self, method: str, endpoint: str, status_code: int, duration: float):
        """Record request metrics."""
        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=str(status_code)).inc()
        REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)

    def record_answer_graded(self, was_correct: bool):
        ANSWERS_GRADED.labels(result="correct" if was_correct else "incorrect").inc()

    def record_storage_error(self, operation: str):
        STORAGE_ERRORS.labels(operation=operation).inc()


# Prometheus collectors are process-wide, so the service wrapping them is too
observability_service = ObservabilityService()


def get_observability_service() -> ObservabilityService:
    """Get observability service instance."""
    return observability_service


class JsonLogFormatter(logging.Formatter):
    """Renders each record as one JSON object; the message is escaped as a string field."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def get_structured_logger(level: str = "INFO") -> logging.Logger:
    """Get structured logger for JSON logging."""
    logger = logging.getLogger("quizgrader")

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JsonLogFormatter())
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    return logger
