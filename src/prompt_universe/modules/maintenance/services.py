"""Maintenance service: finds and removes records with broken references.

Scans read raw documents rather than typed models, since the records they
look for are exactly the ones that may no longer validate.
"""

import asyncio
from typing import Annotated, Any

import structlog
from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import COLLECTION_ORDERS, COLLECTION_TENANTS, COLLECTION_USERS
from prompt_universe.core.documents import DocumentSnapshot, OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.core.jobs import job_queue
from prompt_universe.modules.maintenance.schemas import CleanRequest, HealthIssue, IssueType


logger = structlog.get_logger()

SCAN_JOB_NAME = "scan_database_health"
SCAN_JOB_ID = "maintenance-scan"

_ISSUE_COLLECTIONS = {
    IssueType.ORPHANED_USER: COLLECTION_USERS,
    IssueType.INCOMPLETE_ORDER: COLLECTION_ORDERS,
}


def is_incomplete_order(data: dict[str, Any]) -> bool:
    """An order lacking its tenant, its items, its status or its total."""
    return (
        not data.get("tenantId")
        or not data.get("items")
        or not data.get("status")
        or data.get("totalAmount") is None
    )


class MaintenanceService:
    """Service for database consistency checks."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def find_orphaned_users(self) -> list[DocumentSnapshot]:
        """Users whose ``tenantId`` names a tenant that no longer exists."""
        users, tenants = await asyncio.gather(
            self.store.query(COLLECTION_USERS),
            self.store.query(COLLECTION_TENANTS),
        )
        tenant_ids = {tenant.id for tenant in tenants}
        return [
            user
            for user in users
            if user.get("tenantId") and user.get("tenantId") not in tenant_ids
        ]

    async def find_incomplete_orders(self) -> list[DocumentSnapshot]:
        orders = await self.store.query(COLLECTION_ORDERS)
        return [order for order in orders if is_incomplete_order(order.data)]

    async def scan(self) -> list[HealthIssue]:
        orphaned_users, incomplete_orders = await asyncio.gather(
            self.find_orphaned_users(),
            self.find_incomplete_orders(),
        )
        issues = [
            HealthIssue(
                id=user.id,
                type=IssueType.ORPHANED_USER,
                description=(
                    f"用户 {user.get('email')} (租户ID: {user.get('tenantId')}) "
                    "是一个孤儿记录。"
                ),
            )
            for user in orphaned_users
        ]
        issues.extend(
            HealthIssue(
                id=order.id,
                type=IssueType.INCOMPLETE_ORDER,
                description=f"订单 {order.id} 是一个不完整的记录。",
            )
            for order in incomplete_orders
        )
        logger.info(
            "maintenance_scan_completed",
            orphaned_users=len(orphaned_users),
            incomplete_orders=len(incomplete_orders),
        )
        return issues

    async def clean(self, data: CleanRequest) -> OperationResult:
        """Delete the given records in one atomic batch."""
        issue_type = IssueType(data.type)
        collection = _ISSUE_COLLECTIONS[issue_type]
        batch = self.store.batch()
        for doc_id in data.ids:
            batch.delete(collection, doc_id)
        try:
            await batch.commit()
        except AppException as e:
            logger.error(
                "maintenance_clean_failed",
                issue_type=issue_type.value,
                count=len(data.ids),
                error=e.message,
            )
            return OperationResult.fail(e.message)
        logger.info("maintenance_clean_completed", issue_type=issue_type.value, count=len(data.ids))
        return OperationResult.ok(f"已清理 {len(data.ids)} 条记录。")

    async def enqueue_scan(self) -> OperationResult:
        """Queue a background scan; a scan already queued or running is not duplicated."""
        try:
            job = await job_queue.enqueue(SCAN_JOB_NAME, job_id=SCAN_JOB_ID)
        except AppException as e:
            logger.warning("maintenance_scan_enqueue_failed", error=e.message)
            return OperationResult.fail(e.message)
        if job is None:
            return OperationResult.ok("数据库扫描已在队列中。", id=SCAN_JOB_ID)
        logger.info("maintenance_scan_enqueued", job_id=job.job_id)
        return OperationResult.ok("数据库扫描已加入后台队列。", id=job.job_id)


# Type alias for dependency injection
MaintenanceSvc = Annotated[MaintenanceService, Depends(MaintenanceService)]
