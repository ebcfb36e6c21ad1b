"""Database health jobs.

Scans for records whose references are broken (users of deleted tenants,
orders without a tenant or items) and logs what it finds. Nothing is
deleted automatically; cleanup stays an explicit admin action.
"""

from typing import Any

import structlog

from prompt_universe.modules.maintenance.services import MaintenanceService


log = structlog.get_logger()


async def scan_database_health(ctx: dict[str, Any]) -> dict[str, int]:
    """Run the maintenance scan and report issue counts by type.

    Args:
        ctx: Worker context holding the document store

    Returns:
        Dict with the number of issues found per issue type
    """
    service = MaintenanceService(ctx["store"])
    issues = await service.scan()

    counts: dict[str, int] = {}
    for issue in issues:
        counts[issue.type] = counts.get(issue.type, 0) + 1

    log.info(
        "database_health_scan_complete",
        total_issues=len(issues),
        **counts,
    )
    return counts
