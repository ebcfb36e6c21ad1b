"""Procurement API routes."""

from fastapi import APIRouter, Query, status

from prompt_universe.core.documents import OperationResult
from prompt_universe.modules.procurement.schemas import (
    Order,
    OrderStatusUpdate,
    PreOrderCreate,
    ProcurementItem,
    ProcurementItemSave,
)
from prompt_universe.modules.procurement.services import ProcurementSvc


router = APIRouter(tags=["procurement"])


# ============================================================
# Catalog
# ============================================================


@router.get(
    "/procurement/items",
    response_model=list[ProcurementItem],
    summary="List catalog items",
)
async def list_procurement_items(service: ProcurementSvc) -> list[ProcurementItem]:
    return await service.list_procurement_items()


@router.post(
    "/procurement/items",
    response_model=OperationResult,
    summary="Save catalog item",
)
async def save_procurement_item(
    data: ProcurementItemSave, service: ProcurementSvc
) -> OperationResult:
    return await service.save_procurement_item(data)


@router.delete(
    "/procurement/items/{item_id}",
    response_model=OperationResult,
    summary="Delete catalog item",
)
async def delete_procurement_item(item_id: str, service: ProcurementSvc) -> OperationResult:
    return await service.delete_procurement_item(item_id)


# ============================================================
# Orders
# ============================================================


@router.post(
    "/tenants/{tenant_id}/orders",
    response_model=OperationResult,
    status_code=status.HTTP_201_CREATED,
    summary="Create pre-order",
)
async def create_pre_order(
    tenant_id: str, data: PreOrderCreate, service: ProcurementSvc
) -> OperationResult:
    return await service.create_pre_order(tenant_id, data)


@router.get(
    "/orders",
    response_model=list[Order],
    summary="List orders",
    description="All orders newest first, or the orders of one tenant.",
)
async def list_orders(
    service: ProcurementSvc,
    tenant_id: str | None = Query(None, alias="tenantId"),
) -> list[Order]:
    return await service.list_orders(tenant_id)


@router.patch(
    "/orders/{order_id}/status",
    response_model=OperationResult,
    summary="Update order status",
)
async def update_order_status(
    order_id: str, data: OrderStatusUpdate, service: ProcurementSvc
) -> OperationResult:
    return await service.update_order_status(order_id, data.status)
