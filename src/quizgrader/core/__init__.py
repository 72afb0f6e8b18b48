"""
Core package for the quiz grader.
Contains configuration, routing, middleware, and observability.
"""

from .config import Settings, get_settings, validate_settings
from .routing import Router, RouteMatch

__all__ = [
    "Settings",
    "get_settings",
    "validate_settings",
    "Router",
    "RouteMatch",
]
