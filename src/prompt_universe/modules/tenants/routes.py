"""Tenant API routes."""

from fastapi import APIRouter

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.tenants.schemas import (
    Tenant,
    TenantDashboard,
    TenantSave,
    TenantsAndUsers,
)
from prompt_universe.modules.tenants.services import TenantSvc


router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=list[Tenant], summary="List tenants")
async def list_tenants(service: TenantSvc) -> list[Tenant]:
    return await service.list_tenants()


@router.post("", response_model=OperationResult, summary="Save tenant")
async def save_tenant(data: TenantSave, service: TenantSvc) -> OperationResult:
    return await service.save_tenant(data)


@router.get(
    "/with-users",
    response_model=TenantsAndUsers,
    summary="List tenants and users",
    description="Both collections in one call, for the platform admin overview.",
)
async def get_tenants_and_users(service: TenantSvc) -> TenantsAndUsers:
    return await service.get_tenants_and_users()


@router.get("/{tenant_id}", response_model=Tenant, summary="Get tenant")
async def get_tenant(tenant_id: str, service: TenantSvc) -> Tenant:
    return await service.get_tenant(tenant_id)


@router.delete("/{tenant_id}", response_model=OperationResult, summary="Delete tenant")
async def delete_tenant(tenant_id: str, service: TenantSvc) -> OperationResult:
    return await service.delete_tenant(tenant_id)


@router.get(
    "/{tenant_id}/dashboard",
    response_model=TenantDashboard,
    summary="Tenant dashboard",
    description="Members, orders (newest first), roles, departments and positions.",
)
async def get_tenant_dashboard(tenant_id: str, service: TenantSvc) -> TenantDashboard:
    return await service.get_tenant_dashboard(tenant_id)
