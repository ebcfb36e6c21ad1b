"""ARQ worker for background maintenance.

Run with:
    arq prompt_universe.core.jobs.worker.WorkerSettings
"""

from typing import Any, ClassVar

import structlog
from arq import cron

from prompt_universe.core.documents.factory import create_document_store
from prompt_universe.core.jobs.tasks.maintenance import scan_database_health
from prompt_universe.core.jobs.utils import get_redis_settings
from prompt_universe.core.logging import configure_logging


logger = structlog.get_logger()


async def startup(ctx: dict[str, Any]) -> None:
    """Open the document store shared by every job of this worker."""
    configure_logging()
    ctx["store"] = create_document_store()
    logger.info("worker_startup", document_backend=ctx["store"].backend)


async def shutdown(ctx: dict[str, Any]) -> None:
    store = ctx.get("store")
    if store is not None:
        await store.close()
    logger.info("worker_shutdown")


class WorkerSettings:
    """ARQ worker settings."""

    functions: ClassVar[list[Any]] = [scan_database_health]

    # Nightly scan at 03:00; results are only logged, cleanup stays manual
    cron_jobs: ClassVar[list[Any]] = [
        cron(scan_database_health, hour=3, minute=0, unique=True),
    ]

    on_startup = startup
    on_shutdown = shutdown
    redis_settings = get_redis_settings()

    max_jobs = 4
    job_timeout = 600
    keep_result = 3600
    max_tries = 2
