"""Organization API routes."""

from fastapi import APIRouter

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.organization.schemas import (
    DepartmentSave,
    OrganizationStructure,
    PositionSave,
    Role,
    RoleSave,
)
from prompt_universe.modules.organization.services import OrganizationSvc


router = APIRouter(prefix="/tenants/{tenant_id}", tags=["organization"])


# ============================================================
# Roles
# ============================================================


@router.get("/roles", response_model=list[Role], summary="List tenant roles")
async def list_roles(tenant_id: str, service: OrganizationSvc) -> list[Role]:
    return await service.list_roles(tenant_id)


@router.post("/roles", response_model=OperationResult, summary="Save tenant role")
async def save_role(
    tenant_id: str, data: RoleSave, service: OrganizationSvc
) -> OperationResult:
    return await service.save_role(tenant_id, data)


@router.delete(
    "/roles/{role_id}", response_model=OperationResult, summary="Delete tenant role"
)
async def delete_role(
    tenant_id: str, role_id: str, service: OrganizationSvc
) -> OperationResult:
    return await service.delete_role(tenant_id, role_id)


# ============================================================
# Departments and positions
# ============================================================


@router.get(
    "/organization",
    response_model=OrganizationStructure,
    summary="Get organization structure",
    description="Departments and positions of a tenant.",
)
async def get_organization_structure(
    tenant_id: str, service: OrganizationSvc
) -> OrganizationStructure:
    return await service.get_organization_structure(tenant_id)


@router.post("/departments", response_model=OperationResult, summary="Save department")
async def save_department(
    tenant_id: str, data: DepartmentSave, service: OrganizationSvc
) -> OperationResult:
    return await service.save_department(tenant_id, data)


@router.delete(
    "/departments/{department_id}",
    response_model=OperationResult,
    summary="Delete department",
)
async def delete_department(
    tenant_id: str, department_id: str, service: OrganizationSvc
) -> OperationResult:
    return await service.delete_department(tenant_id, department_id)


@router.post("/positions", response_model=OperationResult, summary="Save position")
async def save_position(
    tenant_id: str, data: PositionSave, service: OrganizationSvc
) -> OperationResult:
    return await service.save_position(tenant_id, data)


@router.delete(
    "/positions/{position_id}",
    response_model=OperationResult,
    summary="Delete position",
)
async def delete_position(
    tenant_id: str, position_id: str, service: OrganizationSvc
) -> OperationResult:
    return await service.delete_position(tenant_id, position_id)
