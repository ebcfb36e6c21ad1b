"""Database layer - engine, session factory and base models."""

from prompt_universe.core.database.base import Base, TimestampMixin
from prompt_universe.core.database.session import (
    create_engine,
    create_session_factory,
)


__all__ = [
    "Base",
    "TimestampMixin",
    "create_engine",
    "create_session_factory",
]
