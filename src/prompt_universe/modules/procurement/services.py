"""Procurement service: the service catalog and tenant pre-orders."""

from typing import Annotated

import structlog
from fastapi import Depends

from prompt_universe.core.documents import SERVER_TIMESTAMP, OperationResult
from prompt_universe.core.errors import AppException, ConflictError
from prompt_universe.modules.procurement.repos import OrderRepo, ProcurementItemRepo
from prompt_universe.modules.procurement.schemas import (
    Order,
    OrderItem,
    OrderStatus,
    PreOrderCreate,
    ProcurementItem,
    ProcurementItemSave,
    can_transition,
)
from prompt_universe.modules.tenants.repos import TenantRepo


logger = structlog.get_logger()


class ProcurementService:
    """Service for catalog management and the order lifecycle."""

    def __init__(
        self,
        items: ProcurementItemRepo,
        orders: OrderRepo,
        tenants: TenantRepo,
    ) -> None:
        self.items = items
        self.orders = orders
        self.tenants = tenants

    # ============================================================
    # Catalog
    # ============================================================

    async def list_procurement_items(self) -> list[ProcurementItem]:
        return await self.items.list()

    async def save_procurement_item(self, data: ProcurementItemSave) -> OperationResult:
        try:
            item_id, created = await self.items.save(data)
        except AppException as e:
            logger.error("procurement_item_save_failed", item_id=data.id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("procurement_item_saved", item_id=item_id, created=created)
        return OperationResult.ok("采购项目已创建。" if created else "采购项目已更新。", id=item_id)

    async def delete_procurement_item(self, item_id: str) -> OperationResult:
        try:
            await self.items.delete(item_id)
        except AppException as e:
            logger.error("procurement_item_delete_failed", item_id=item_id, error=e.message)
            return OperationResult.fail(e.message)
        logger.info("procurement_item_deleted", item_id=item_id)
        return OperationResult.ok("采购项目已删除。", id=item_id)

    # ============================================================
    # Orders
    # ============================================================

    async def create_pre_order(self, tenant_id: str, data: PreOrderCreate) -> OperationResult:
        """Place an order for one catalog item, awaiting platform confirmation.

        The order stores a snapshot of the item so later catalog edits do
        not change existing orders.
        """
        if not tenant_id:
            return OperationResult.fail("无法创建订单，因为租户ID丢失。请重新登录后重试。")

        try:
            if not await self.tenants.exists(tenant_id):
                return OperationResult.fail("租户不存在。")
            item = await self.items.get(data.item_id)
            if item is None:
                return OperationResult.fail("采购项目不存在。")

            line = OrderItem(**item.model_dump(), quantity=data.quantity)
            order_id = await self.orders.create(
                {
                    "tenantId": tenant_id,
                    "items": [line.model_dump(by_alias=True)],
                    "totalAmount": item.price * data.quantity,
                    "status": OrderStatus.PENDING_CONFIRMATION.value,
                    "notes": data.notes,
                    "updatedAt": SERVER_TIMESTAMP,
                }
            )
        except AppException as e:
            logger.error("pre_order_failed", tenant_id=tenant_id, error=e.message)
            return OperationResult.fail(e.message)

        logger.info(
            "pre_order_created",
            tenant_id=tenant_id,
            order_id=order_id,
            item_id=data.item_id,
            quantity=data.quantity,
        )
        return OperationResult.ok("预订单已提交，等待平台确认。", id=order_id)

    async def list_orders(self, tenant_id: str | None = None) -> list[Order]:
        """Orders newest first, optionally for one tenant."""
        return await self.orders.list_newest_first(tenant_id)

    async def update_order_status(self, order_id: str, status: OrderStatus) -> OperationResult:
        """Move an order along its lifecycle.

        Allowed: 待平台确认 → 待支付 → 配置中 → 已完成, and any open
        order → 已取消.
        """
        try:
            order = await self.orders.get_or_404(order_id)
            current = OrderStatus(order.status)
            target = OrderStatus(status)
            if not can_transition(current, target):
                raise ConflictError(
                    f"订单状态不能从“{current.value}”变更为“{target.value}”。",
                    details={"from": current.value, "to": target.value},
                )
            await self.orders.update(
                order_id, {"status": target.value, "updatedAt": SERVER_TIMESTAMP}
            )
        except AppException as e:
            logger.warning("order_status_update_failed", order_id=order_id, error=e.message)
            return OperationResult.fail(e.message)

        logger.info(
            "order_status_updated",
            order_id=order_id,
            from_status=current.value,
            to_status=target.value,
        )
        return OperationResult.ok("订单状态已更新。", id=order_id)


# Type alias for dependency injection
ProcurementSvc = Annotated[ProcurementService, Depends(ProcurementService)]
