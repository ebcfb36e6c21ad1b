"""Demand pool service."""

from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.documents import OperationResult
from prompt_universe.core.errors import AppException
from prompt_universe.modules.demands.repos import DemandRepo
from prompt_universe.modules.demands.schemas import Demand, DemandSave, DemandStatus


logger = structlog.get_logger()


class DemandService:
    def __init__(self, demands: DemandRepo) -> None:
        self.demands = demands

    async def list_demands(self, status: DemandStatus | None = None) -> list[Demand]:
        """Demands newest first, optionally only those with ``status``."""
        return await self.demands.list_newest_first(status)

    async def save_demand(self, data: DemandSave) -> OperationResult:
        try:
            demand_id, created = await self.demands.save(data)
        except AppException as e:
            logger.error("demand_save_failed", demand_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("demand_saved", demand_id=demand_id, created=created)
        return OperationResult.ok("需求已发布。" if created else "需求已更新。", id=demand_id)

    async def close_demand(self, demand_id: str) -> OperationResult:
        """Stop collecting responses for a demand."""
        try:
            await self.demands.update(demand_id, {"status": DemandStatus.CLOSED.value})
        except AppException as e:
            logger.error("demand_close_failed", demand_id=demand_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("demand_closed", demand_id=demand_id)
        return OperationResult.ok("需求已关闭。", id=demand_id)

    async def delete_demand(self, demand_id: str) -> OperationResult:
        try:
            await self.demands.delete(demand_id)
        except AppException as e:
            logger.error("demand_delete_failed", demand_id=demand_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("demand_deleted", demand_id=demand_id)
        return OperationResult.ok("需求已删除。", id=demand_id)


# Type alias for dependency injection
DemandSvc = Annotated[DemandService, Depends(DemandService)]
