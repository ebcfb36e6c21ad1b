"""Background job queue.

The ARQ Redis pool is opened once at application startup. Until then, or
when Redis was unreachable, the queue reports itself unavailable and
callers decide how to surface that.
"""

from collections.abc import Callable
from datetime import timedelta
from typing import Any

import structlog
from arq import ArqRedis, create_pool
from arq.connections import RedisSettings
from arq.constants import result_key_prefix
from arq.jobs import Job, JobStatus

from prompt_universe.core.errors import ServiceUnavailableError
from prompt_universe.core.jobs.utils import get_redis_settings


logger = structlog.get_logger()


class JobQueue:
    """Holds the ARQ pool and enqueues jobs by function name."""

    def __init__(
        self, redis_settings: Callable[[], RedisSettings] = get_redis_settings
    ) -> None:
        self._redis_settings = redis_settings
        self._pool: ArqRedis | None = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> ArqRedis:
        """The open pool.

        Raises:
            ServiceUnavailableError: If the queue was never opened
        """
        if self._pool is None:
            raise ServiceUnavailableError("后台任务队列不可用。")
        return self._pool

    async def open(self) -> ArqRedis:
        """Connect to Redis; a second call reuses the existing pool."""
        if self._pool is None:
            self._pool = await create_pool(self._redis_settings())
        return self._pool

    async def close(self) -> None:
        if self._pool is None:
            return
        await self._pool.close()
        self._pool = None

    async def status(self, job_id: str) -> JobStatus:
        """Return the state of the job stored under ``job_id``."""
        return await Job(job_id, self.pool).status()

    async def enqueue(
        self,
        job_name: str,
        *args: Any,
        defer_by: timedelta | None = None,
        job_id: str | None = None,
        **kwargs: Any,
    ) -> Job | None:
        """Queue ``job_name`` with the given arguments.

        With ``job_id`` at most one such job is queued or running at a
        time; a duplicate returns None. The kept result of a finished job
        with that id is discarded so the id can be reused.

        Raises:
            ServiceUnavailableError: If the queue is not open
        """
        if job_id is not None and await self.status(job_id) == JobStatus.complete:
            # arq refuses ids whose result is still stored
            await self.pool.delete(result_key_prefix + job_id)
            logger.debug("job_result_cleared", job_id=job_id)
        job = await self.pool.enqueue_job(
            job_name, *args, _defer_by=defer_by, _job_id=job_id, **kwargs
        )
        if job is None:
            logger.info("job_already_queued", job_name=job_name, job_id=job_id)
        else:
            logger.info("job_enqueued", job_name=job_name, job_id=job.job_id)
        return job


# Shared by the API process; the worker has its own pool
job_queue = JobQueue()
