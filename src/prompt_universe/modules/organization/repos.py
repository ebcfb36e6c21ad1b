"""Repositories for the tenant-scoped org collections."""

from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import (
    SUBCOLLECTION_DEPARTMENTS,
    SUBCOLLECTION_POSITIONS,
    SUBCOLLECTION_ROLES,
)
from prompt_universe.core.documents import FieldFilter, TenantCollectionRepository
from prompt_universe.modules.organization.schemas import Department, Position, Role


class RoleRepository(TenantCollectionRepository[Role]):
    model = Role
    subcollection = SUBCOLLECTION_ROLES
    not_found_message = "角色不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)


class DepartmentRepository(TenantCollectionRepository[Department]):
    model = Department
    subcollection = SUBCOLLECTION_DEPARTMENTS
    not_found_message = "部门不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)


class PositionRepository(TenantCollectionRepository[Position]):
    model = Position
    subcollection = SUBCOLLECTION_POSITIONS
    not_found_message = "职位不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_by_department(self, department_id: str) -> list[Position]:
        return await self.list(filters=[FieldFilter("departmentId", "==", department_id)])


# Type aliases for dependency injection
RoleRepo = Annotated[RoleRepository, Depends(RoleRepository)]
DepartmentRepo = Annotated[DepartmentRepository, Depends(DepartmentRepository)]
PositionRepo = Annotated[PositionRepository, Depends(PositionRepository)]
