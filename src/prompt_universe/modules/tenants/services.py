"""Tenant service: platform-level tenant management and dashboards."""

import asyncio
from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.documents import OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.modules.organization.repos import (
    DepartmentRepo,
    PositionRepo,
    RoleRepo,
)
from prompt_universe.modules.procurement.repos import OrderRepo
from prompt_universe.modules.tenants.repos import TenantRepo
from prompt_universe.modules.tenants.schemas import (
    Tenant,
    TenantDashboard,
    TenantSave,
    TenantsAndUsers,
)
from prompt_universe.modules.users.repos import UserRepo


logger = structlog.get_logger()


class TenantService:
    """Service for tenant operations."""

    def __init__(
        self,
        tenants: TenantRepo,
        users: UserRepo,
        orders: OrderRepo,
        roles: RoleRepo,
        departments: DepartmentRepo,
        positions: PositionRepo,
    ) -> None:
        self.tenants = tenants
        self.users = users
        self.orders = orders
        self.roles = roles
        self.departments = departments
        self.positions = positions

    async def list_tenants(self) -> list[Tenant]:
        return await self.tenants.list()

    async def get_tenant(self, tenant_id: str) -> Tenant:
        """Get a tenant by id.

        Raises:
            NotFoundError: If the tenant does not exist
        """
        return await self.tenants.get_or_404(tenant_id)

    async def save_tenant(self, data: TenantSave) -> OperationResult:
        try:
            tenant_id, created = await self.tenants.save(data)
        except AppException as e:
            logger.error("tenant_save_failed", tenant_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("tenant_saved", tenant_id=tenant_id, created=created)
        return OperationResult.ok("租户已创建。" if created else "租户已更新。", id=tenant_id)

    async def delete_tenant(self, tenant_id: str) -> OperationResult:
        """Delete the tenant document.

        Members and orders keep their ``tenantId``; the maintenance scan
        reports them as orphaned afterwards.
        """
        try:
            await self.tenants.delete(tenant_id)
        except AppException as e:
            logger.error("tenant_delete_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("tenant_deleted", tenant_id=tenant_id)
        return OperationResult.ok("租户已删除。", id=tenant_id)

    async def get_tenants_and_users(self) -> TenantsAndUsers:
        tenants, users = await asyncio.gather(self.tenants.list(), self.users.list())
        return TenantsAndUsers(tenants=tenants, users=users)

    async def get_tenant_dashboard(self, tenant_id: str) -> TenantDashboard:
        """Load a tenant together with its members, orders and org structure."""
        tenant = await self.tenants.get_or_404(tenant_id)
        users, orders, roles, departments, positions = await asyncio.gather(
            self.users.list_by_tenant(tenant_id),
            self.orders.list_newest_first(tenant_id),
            self.roles.for_tenant(tenant_id).list(),
            self.departments.for_tenant(tenant_id).list(),
            self.positions.for_tenant(tenant_id).list(),
        )
        logger.debug(
            "tenant_dashboard_loaded",
            tenant_id=tenant_id,
            users=len(users),
            orders=len(orders),
        )
        return TenantDashboard(
            tenant=tenant,
            users=users,
            orders=orders,
            roles=roles,
            departments=departments,
            positions=positions,
        )


# Type alias for dependency injection
TenantSvc = Annotated[TenantService, Depends(TenantService)]
