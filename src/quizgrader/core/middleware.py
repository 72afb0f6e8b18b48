"""
Middleware for the quiz grader.
Request ids, JSON access logs with metrics, per-client throttling and response hardening.
"""

import json
import logging
import time
import uuid
from collections import deque
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from .config import Settings
from .observability import get_observability_service

logger = logging.getLogger(__name__)

WINDOW_SECONDS = 60.0


class SlidingWindowLimiter:
    """Allows at most `limit` hits per key within the trailing window."""

    def __init__(self, limit: int, window: float = WINDOW_SECONDS):
        self.limit = limit
        self.window = window
        self._hits: dict[str, deque[float]] = {}
        self._last_sweep = 0.0

    def allow(self, key: str, now: float) -> bool:
        if now - self._last_sweep >= self.window:
            self._sweep(now)

        hits = self._hits.get(key)
        if hits is None:
            hits = self._hits[key] = deque()
        while hits and now - hits[0] >= self.window:
            hits.popleft()
        if len(hits) >= self.limit:
            return False
        hits.append(now)
        return True

    def _sweep(self, now: float) -> None:
        """Drop clients with no hit inside the window."""
        idle = [key for key, hits in self._hits.items() if not hits or now - hits[-1] >= self.window]
        for key in idle:
            del self._hits[key]
        self._last_sweep = now

    def tracked_clients(self) -> int:
        return len(self._hits)


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(settings.rate_limit_per_minute)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client_ip = request.client.host if request.client else "unknown"
        if not self.limiter.allow(client_ip, time.monotonic()):
            logger.warning(f"Throttled {request.method} {request.url.path} from {client_ip}")
            return JSONResponse(status_code=429, content={"error": "Rate limit exceeded"})
        return await call_next(request)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags each request with a correlation id and writes JSON access log lines.

    The question dispatcher stores the matched route pattern and question id on
    `request.state`; both end up in the completion log and the pattern is used
    as the metrics endpoint label.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.record_metrics = settings.enable_metrics
        self.observability = get_observability_service()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        correlation_id = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        entry = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.debug(json.dumps({"event": "request_started", **entry}))

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.error(json.dumps({"event": "request_failed", "error": str(e), **entry}))
            raise
        finally:
            elapsed = time.perf_counter() - started
            route = getattr(request.state, "route_pattern", request.url.path)
            if self.record_metrics:
                self.observability.record_request(request.method, route, status_code, elapsed)
            logger.info(
                json.dumps(
                    {
                        "event": "request_completed",
                        "route": route,
                        "question_id": getattr(request.state, "question_id", None),
                        "status_code": status_code,
                        "latency_ms": round(elapsed * 1000, 2),
                        **entry,
                    }
                )
            )

        response.headers["x-correlation-id"] = correlation_id
        return response


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}
STRICT_CSP = "default-src 'self'; connect-src 'self'; frame-ancestors 'none'"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.headers = dict(SECURITY_HEADERS)
        if settings.csp_strict:
            self.headers["Content-Security-Policy"] = STRICT_CSP

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        return response


def setup_middleware(app, settings: Settings):
    """Install middleware. Starlette runs the last added one first."""
    app.add_middleware(SecurityHeadersMiddleware, settings=settings)
    app.add_middleware(RequestContextMiddleware, settings=settings)
    app.add_middleware(RateLimitMiddleware, settings=settings)
    # Browser client calls both question endpoints cross-origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "x-correlation-id"],
    )
