"""API key routes."""

from fastapi import APIRouter, status

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.api_keys.schemas import ApiKey, ApiKeyCreate, ApiKeyCreated
from prompt_universe.modules.api_keys.services import ApiKeySvc


router = APIRouter(prefix="/tenants/{tenant_id}/api-keys", tags=["api-keys"])


@router.get(
    "",
    response_model=list[ApiKey],
    summary="List API keys",
    description="Keys of a tenant, newest first. Secrets are masked.",
)
async def list_api_keys(tenant_id: str, service: ApiKeySvc) -> list[ApiKey]:
    return await service.list_api_keys(tenant_id)


@router.post(
    "",
    response_model=ApiKeyCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create API key",
)
async def create_api_key(
    tenant_id: str, data: ApiKeyCreate, service: ApiKeySvc
) -> ApiKeyCreated:
    return await service.create_api_key(tenant_id, data)


@router.post(
    "/{key_id}/revoke",
    response_model=OperationResult,
    summary="Revoke API key",
)
async def revoke_api_key(tenant_id: str, key_id: str, service: ApiKeySvc) -> OperationResult:
    return await service.revoke_api_key(tenant_id, key_id)
