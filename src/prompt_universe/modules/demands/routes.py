"""Demand pool API routes."""

from fastapi import APIRouter

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.demands.schemas import Demand, DemandSave, DemandStatus
from prompt_universe.modules.demands.services import DemandSvc


router = APIRouter(prefix="/demands", tags=["demands"])


@router.get("", response_model=list[Demand], summary="List demands")
async def list_demands(
    service: DemandSvc, status: DemandStatus | None = None
) -> list[Demand]:
    return await service.list_demands(status)


@router.post("", response_model=OperationResult, summary="Save demand")
async def save_demand(data: DemandSave, service: DemandSvc) -> OperationResult:
    return await service.save_demand(data)


@router.post("/{demand_id}/close", response_model=OperationResult, summary="Close demand")
async def close_demand(demand_id: str, service: DemandSvc) -> OperationResult:
    return await service.close_demand(demand_id)


@router.delete("/{demand_id}", response_model=OperationResult, summary="Delete demand")
async def delete_demand(demand_id: str, service: DemandSvc) -> OperationResult:
    return await service.delete_demand(demand_id)
