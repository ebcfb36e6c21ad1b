"""Shared utilities for job infrastructure."""

from arq.connections import RedisSettings

from prompt_universe.config import settings


def get_redis_settings() -> RedisSettings:
    """Get Redis settings for ARQ from app configuration.

    Used by both the worker and the enqueueing pool.
    """
    return RedisSettings.from_dsn(str(settings.redis_url))
