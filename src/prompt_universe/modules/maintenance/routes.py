"""Database maintenance API routes."""

from fastapi import APIRouter, status

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.maintenance.schemas import CleanRequest, HealthIssue
from prompt_universe.modules.maintenance.services import MaintenanceSvc


router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get(
    "/scan",
    response_model=list[HealthIssue],
    summary="Scan database",
    description="Find orphaned users and incomplete orders.",
)
async def scan(service: MaintenanceSvc) -> list[HealthIssue]:
    return await service.scan()


@router.post("/clean", response_model=OperationResult, summary="Delete scanned records")
async def clean(data: CleanRequest, service: MaintenanceSvc) -> OperationResult:
    return await service.clean(data)


@router.post(
    "/scan-jobs",
    response_model=OperationResult,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Queue background scan",
)
async def enqueue_scan(service: MaintenanceSvc) -> OperationResult:
    return await service.enqueue_scan()
