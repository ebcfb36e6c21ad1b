"""Logging module with structured logging and request tracking."""

from prompt_universe.core.logging.middleware import (
    RequestIdMiddleware,
    RequestLoggingMiddleware,
)
from prompt_universe.core.logging.setup import configure_logging


__all__ = [
    "RequestIdMiddleware",
    "RequestLoggingMiddleware",
    "configure_logging",
]
