"""Platform asset API routes."""

from fastapi import APIRouter

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.assets.schemas import (
    LlmConnectionPublic,
    LlmConnectionSave,
    PlatformAssets,
    SoftwareAssetSave,
    TokenAllocationSave,
)
from prompt_universe.modules.assets.services import AssetSvc


router = APIRouter(prefix="/assets", tags=["assets"])


@router.get(
    "",
    response_model=PlatformAssets,
    summary="Platform assets",
    description="Model connections (without API keys), token allocations and software assets.",
)
async def get_platform_assets(service: AssetSvc) -> PlatformAssets:
    return await service.get_platform_assets()


# ============================================================
# Model connections
# ============================================================


@router.get(
    "/connections",
    response_model=list[LlmConnectionPublic],
    summary="List model connections",
)
async def list_connections(service: AssetSvc) -> list[LlmConnectionPublic]:
    return await service.list_connections()


@router.post("/connections", response_model=OperationResult, summary="Save model connection")
async def save_connection(data: LlmConnectionSave, service: AssetSvc) -> OperationResult:
    return await service.save_connection(data)


@router.delete(
    "/connections/{connection_id}",
    response_model=OperationResult,
    summary="Delete model connection",
)
async def delete_connection(connection_id: str, service: AssetSvc) -> OperationResult:
    return await service.delete_connection(connection_id)


# ============================================================
# Token allocations
# ============================================================


@router.post("/tokens", response_model=OperationResult, summary="Save token allocation")
async def save_token_allocation(
    data: TokenAllocationSave, service: AssetSvc
) -> OperationResult:
    return await service.save_token_allocation(data)


@router.delete(
    "/tokens/{allocation_id}",
    response_model=OperationResult,
    summary="Delete token allocation",
)
async def delete_token_allocation(allocation_id: str, service: AssetSvc) -> OperationResult:
    return await service.delete_token_allocation(allocation_id)


# ============================================================
# Software assets
# ============================================================


@router.post("/software", response_model=OperationResult, summary="Save software asset")
async def save_software_asset(data: SoftwareAssetSave, service: AssetSvc) -> OperationResult:
    return await service.save_software_asset(data)


@router.delete(
    "/software/{asset_id}",
    response_model=OperationResult,
    summary="Delete software asset",
)
async def delete_software_asset(asset_id: str, service: AssetSvc) -> OperationResult:
    return await service.delete_software_asset(asset_id)
