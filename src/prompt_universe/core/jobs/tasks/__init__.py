"""Background job tasks."""

from prompt_universe.core.jobs.tasks.maintenance import scan_database_health


__all__ = [
    "scan_database_health",
]
