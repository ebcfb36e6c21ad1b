"""Repositories for catalog items and orders."""

from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import COLLECTION_ORDERS, COLLECTION_PROCUREMENT_ITEMS
from prompt_universe.core.documents import CollectionRepository, FieldFilter, OrderBy
from prompt_universe.modules.procurement.schemas import Order, ProcurementItem


class ProcurementItemRepository(CollectionRepository[ProcurementItem]):
    model = ProcurementItem
    collection = COLLECTION_PROCUREMENT_ITEMS
    not_found_message = "采购项目不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)


class OrderRepository(CollectionRepository[Order]):
    model = Order
    collection = COLLECTION_ORDERS
    not_found_message = "订单不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_newest_first(self, tenant_id: str | None = None) -> list[Order]:
        filters = [FieldFilter("tenantId", "==", tenant_id)] if tenant_id else []
        return await self.list(
            filters=filters,
            order_by=[OrderBy("createdAt", descending=True)],
        )


# Type aliases for dependency injection
ProcurementItemRepo = Annotated[
    ProcurementItemRepository, Depends(ProcurementItemRepository)
]
OrderRepo = Annotated[OrderRepository, Depends(OrderRepository)]
