"""Asset service: model connections, token allocations and software assets."""

import asyncio
from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.documents import OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.modules.assets.repos import (
    LlmConnectionRepo,
    SoftwareAssetRepo,
    TokenAllocationRepo,
)
from prompt_universe.modules.assets.schemas import (
    LlmConnectionPublic,
    LlmConnectionSave,
    PlatformAssets,
    SoftwareAssetSave,
    TokenAllocationSave,
)


logger = structlog.get_logger()


class AssetService:
    """Service for the platform asset registry."""

    def __init__(
        self,
        connections: LlmConnectionRepo,
        token_allocations: TokenAllocationRepo,
        software_assets: SoftwareAssetRepo,
    ) -> None:
        self.connections = connections
        self.token_allocations = token_allocations
        self.software_assets = software_assets

    async def get_platform_assets(self) -> PlatformAssets:
        connections, token_allocations, software_assets = await asyncio.gather(
            self.connections.list_by_priority(),
            self.token_allocations.list(),
            self.software_assets.list(),
        )
        return PlatformAssets(
            connections=[LlmConnectionPublic.from_connection(c) for c in connections],
            token_allocations=token_allocations,
            software_assets=software_assets,
        )

    # ============================================================
    # Model connections
    # ============================================================

    async def list_connections(self) -> list[LlmConnectionPublic]:
        connections = await self.connections.list_by_priority()
        return [LlmConnectionPublic.from_connection(c) for c in connections]

    async def save_connection(self, data: LlmConnectionSave) -> OperationResult:
        try:
            connection_id, created = await self.connections.save(data)
        except AppException as e:
            logger.error("connection_save_failed", connection_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info(
            "connection_saved",
            connection_id=connection_id,
            provider=data.provider,
            created=created,
        )
        return OperationResult.ok(
            "模型连接已创建。" if created else "模型连接已更新。", id=connection_id
        )

    async def delete_connection(self, connection_id: str) -> OperationResult:
        try:
            await self.connections.delete(connection_id)
        except AppException as e:
            logger.error("connection_delete_failed", connection_id=connection_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("connection_deleted", connection_id=connection_id)
        return OperationResult.ok("模型连接已删除。", id=connection_id)

    # ============================================================
    # Token allocations
    # ============================================================

    async def save_token_allocation(self, data: TokenAllocationSave) -> OperationResult:
        try:
            allocation_id, created = await self.token_allocations.save(data)
        except AppException as e:
            logger.error("token_allocation_save_failed", allocation_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("token_allocation_saved", allocation_id=allocation_id, created=created)
        return OperationResult.ok(
            "令牌分配已创建。" if created else "令牌分配已更新。", id=allocation_id
        )

    async def delete_token_allocation(self, allocation_id: str) -> OperationResult:
        try:
            await self.token_allocations.delete(allocation_id)
        except AppException as e:
            logger.error(
                "token_allocation_delete_failed", allocation_id=allocation_id, error=e.message
            )
            return OperationResult.fail(e.message)
        logger.info("token_allocation_deleted", allocation_id=allocation_id)
        return OperationResult.ok("令牌分配已删除。", id=allocation_id)

    # ============================================================
    # Software assets
    # ============================================================

    async def save_software_asset(self, data: SoftwareAssetSave) -> OperationResult:
        try:
            asset_id, created = await self.software_assets.save(data)
        except AppException as e:
            logger.error("software_asset_save_failed", asset_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("software_asset_saved", asset_id=asset_id, created=created)
        return OperationResult.ok(
            "软件资产已创建。" if created else "软件资产已更新。", id=asset_id
        )

    async def delete_software_asset(self, asset_id: str) -> OperationResult:
        try:
            await self.software_assets.delete(asset_id)
        except AppException as e:
            logger.error("software_asset_delete_failed", asset_id=asset_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("software_asset_deleted", asset_id=asset_id)
        return OperationResult.ok("软件资产已删除。", id=asset_id)


# Type alias for dependency injection
AssetSvc = Annotated[AssetService, Depends(AssetService)]
