"""User API routes."""

from fastapi import APIRouter, Query, status

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.users.schemas import (
    InviteUsersRequest,
    TenantUserUpdate,
    User,
    UserRegistration,
    UserSave,
)
from prompt_universe.modules.users.services import UserSvc


router = APIRouter(tags=["users"])


# ============================================================
# Platform administration
# ============================================================


@router.get(
    "/users",
    response_model=list[User],
    summary="List users",
    description="List every user, or the members of one tenant.",
)
async def list_users(
    service: UserSvc,
    tenant_id: str | None = Query(None, alias="tenantId"),
) -> list[User]:
    return await service.list_users(tenant_id)


@router.post("/users", response_model=OperationResult, summary="Save user")
async def save_user(data: UserSave, service: UserSvc) -> OperationResult:
    return await service.save_user(data)


@router.delete("/users/{user_id}", response_model=OperationResult, summary="Delete user")
async def delete_user(user_id: str, service: UserSvc) -> OperationResult:
    return await service.delete_user(user_id)


@router.post(
    "/users/register",
    response_model=OperationResult,
    status_code=status.HTTP_201_CREATED,
    summary="Register user",
    description="Create the pending-review record of a newly signed-up user.",
)
async def register_user(data: UserRegistration, service: UserSvc) -> OperationResult:
    return await service.register_user(data)


# ============================================================
# Tenant members
# ============================================================


@router.post(
    "/tenants/{tenant_id}/members/invite",
    response_model=OperationResult,
    summary="Invite members",
)
async def invite_users(
    tenant_id: str, data: InviteUsersRequest, service: UserSvc
) -> OperationResult:
    return await service.invite_users(tenant_id, data)


@router.patch(
    "/tenants/{tenant_id}/members/{user_id}",
    response_model=OperationResult,
    summary="Update member",
)
async def update_tenant_user(
    tenant_id: str, user_id: str, data: TenantUserUpdate, service: UserSvc
) -> OperationResult:
    return await service.update_tenant_user(tenant_id, user_id, data)
