"""Background job processing with ARQ.

The worker module is not imported here: it pulls in the feature modules,
which themselves enqueue jobs through this package.
"""

from prompt_universe.core.jobs.registry import JobQueue, job_queue


__all__ = [
    "JobQueue",
    "job_queue",
]
