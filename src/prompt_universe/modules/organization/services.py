"""Organization service: tenant roles, departments and positions."""

import asyncio
from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.documents import FieldFilter, OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.modules.organization.repos import (
    DepartmentRepo,
    PositionRepo,
    RoleRepo,
)
from prompt_universe.modules.organization.schemas import (
    DepartmentSave,
    OrganizationStructure,
    PositionSave,
    Role,
    RoleSave,
)


logger = structlog.get_logger()


class OrganizationService:
    """Service for a tenant's org structure."""

    def __init__(
        self,
        roles: RoleRepo,
        departments: DepartmentRepo,
        positions: PositionRepo,
    ) -> None:
        self.roles = roles
        self.departments = departments
        self.positions = positions

    # ============================================================
    # Roles
    # ============================================================

    async def list_roles(self, tenant_id: str) -> list[Role]:
        return await self.roles.for_tenant(tenant_id).list()

    async def save_role(self, tenant_id: str, data: RoleSave) -> OperationResult:
        try:
            role_id, created = await self.roles.for_tenant(tenant_id).save(data)
        except AppException as e:
            logger.error("role_save_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("role_saved", tenant_id=tenant_id, role_id=role_id, created=created)
        return OperationResult.ok("角色已创建。" if created else "角色已更新。", id=role_id)

    async def delete_role(self, tenant_id: str, role_id: str) -> OperationResult:
        try:
            await self.roles.for_tenant(tenant_id).delete(role_id)
        except AppException as e:
            logger.error("role_delete_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("role_deleted", tenant_id=tenant_id, role_id=role_id)
        return OperationResult.ok("角色已删除。", id=role_id)

    # ============================================================
    # Departments and positions
    # ============================================================

    async def get_organization_structure(self, tenant_id: str) -> OrganizationStructure:
        departments, positions = await asyncio.gather(
            self.departments.for_tenant(tenant_id).list(),
            self.positions.for_tenant(tenant_id).list(),
        )
        return OrganizationStructure(departments=departments, positions=positions)

    async def save_department(
        self, tenant_id: str, data: DepartmentSave
    ) -> OperationResult:
        if data.id and data.parent_id == data.id:
            return OperationResult.fail("部门不能以自身为上级部门。")
        try:
            department_id, created = await self.departments.for_tenant(tenant_id).save(data)
        except AppException as e:
            logger.error("department_save_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info(
            "department_saved",
            tenant_id=tenant_id,
            department_id=department_id,
            created=created,
        )
        return OperationResult.ok(
            "部门已创建。" if created else "部门已更新。", id=department_id
        )

    async def delete_department(
        self, tenant_id: str, department_id: str
    ) -> OperationResult:
        """Delete a department that has no positions and no sub-departments."""
        departments = self.departments.for_tenant(tenant_id)
        try:
            positions, children = await asyncio.gather(
                self.positions.for_tenant(tenant_id).list_by_department(department_id),
                departments.list(filters=[FieldFilter("parentId", "==", department_id)]),
            )
            if positions or children:
                return OperationResult.fail("该部门下仍有职位或子部门，无法删除。")
            await departments.delete(department_id)
        except AppException as e:
            logger.error("department_delete_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("department_deleted", tenant_id=tenant_id, department_id=department_id)
        return OperationResult.ok("部门已删除。", id=department_id)

    async def save_position(self, tenant_id: str, data: PositionSave) -> OperationResult:
        try:
            department = await self.departments.for_tenant(tenant_id).get(
                data.department_id
            )
            if department is None:
                return OperationResult.fail("所属部门不存在。")
            position_id, created = await self.positions.for_tenant(tenant_id).save(data)
        except AppException as e:
            logger.error("position_save_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info(
            "position_saved", tenant_id=tenant_id, position_id=position_id, created=created
        )
        return OperationResult.ok("职位已创建。" if created else "职位已更新。", id=position_id)

    async def delete_position(self, tenant_id: str, position_id: str) -> OperationResult:
        try:
            await self.positions.for_tenant(tenant_id).delete(position_id)
        except AppException as e:
            logger.error("position_delete_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("position_deleted", tenant_id=tenant_id, position_id=position_id)
        return OperationResult.ok("职位已删除。", id=position_id)


# Type alias for dependency injection
OrganizationSvc = Annotated[OrganizationService, Depends(OrganizationService)]
