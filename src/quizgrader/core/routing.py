"""
Path-pattern router for the question endpoints.
Patterns like `/questions/:id/answer` compile once into literal and parameter segments.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, Literal, Optional

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Segment:
    kind: Literal["literal", "parameter"]
    value: str


@dataclass(frozen=True)
class Route:
    method: str
    pattern: str
    segments: tuple[Segment, ...]
    handler: Handler

    def match(self, method: str, parts: list[str]) -> Optional[dict[str, str]]:
        """Return bound parameters when method and path match, else None."""
        if method.upper() != self.method or len(parts) != len(self.segments):
            return None

        params: dict[str, str] = {}
        for segment, part in zip(self.segments, parts):
            if segment.kind == "literal":
                if segment.value != part:
                    return None
            elif not part:
                return None
            else:
                params[segment.value] = part
        return params


@dataclass(frozen=True)
class RouteMatch:
    route: Route
    params: dict[str, str] = field(default_factory=dict)

    @property
    def handler(self) -> Handler:
        return self.route.handler


def split_path(path: str) -> list[str]:
    """Split a path into segments, ignoring the leading slash."""
    if path.startswith("/"):
        path = path[1:]
    return path.split("/")


def compile_pattern(pattern: str) -> tuple[Segment, ...]:
    """Compile `/a/:name/b` into segments. A `:name` segment binds one path segment."""
    segments = []
    for part in split_path(pattern):
        if part.startswith(":"):
            name = part[1:]
            if not name:
                raise ValueError(f"Empty parameter name in pattern {pattern!r}")
            segments.append(Segment("parameter", name))
        else:
            segments.append(Segment("literal", part))
    return tuple(segments)


class Router:
    """Maps (method, path pattern) to handlers. First registered match wins."""

    def __init__(self):
        self.routes: list[Route] = []

    def register(self, method: str, pattern: str, handler: Handler) -> Route:
        route = Route(
            method=method.upper(),
            pattern=pattern,
            segments=compile_pattern(pattern),
            handler=handler,
        )
        self.routes.append(route)
        logger.debug(f"Registered route {route.method} {pattern}")
        return route

    def get(self, pattern: str, handler: Handler) -> Route:
        return self.register("GET", pattern, handler)

    def post(self, pattern: str, handler: Handler) -> Route:
        return self.register("POST", pattern, handler)

    def match(self, method: str, path: str) -> Optional[RouteMatch]:
        """Find the first route matching method and path; None means no route."""
        parts = split_path(path)
        for route in self.routes:
            params = route.match(method, parts)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    async def dispatch(
        self,
        method: str,
        path: str,
        *args: Any,
        on_match: Optional[Callable[[RouteMatch], None]] = None,
    ) -> Optional[Any]:
        """
        Call the matching handler as `handler(*args, params)`.

        `on_match` sees the match before the handler runs. Returns None when no
        route matches so the caller can answer 404.
        """
        found = self.match(method, path)
        if found is None:
            return None
        if on_match is not None:
            on_match(found)
        return await found.handler(*args, found.params)
