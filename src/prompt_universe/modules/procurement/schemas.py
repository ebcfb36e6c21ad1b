"""Pydantic schemas for the procurement catalog and orders."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from prompt_universe.core.constants import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from prompt_universe.core.documents import CamelModel, DocumentModel, SaveRequest


# ============================================================
# Catalog
# ============================================================


class ProcurementItem(DocumentModel):
    """A purchasable service or product in the platform catalog."""

    title: str
    description: str = ""
    icon: str = ""
    tag: str = ""
    price: float = Field(ge=0)
    unit: str = ""
    category: str = ""


class ProcurementItemSave(SaveRequest):
    title: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = Field(default="", max_length=MAX_DESCRIPTION_LENGTH)
    icon: str = ""
    tag: str = ""
    price: float = Field(ge=0)
    unit: str = ""
    category: str = ""


# ============================================================
# Orders
# ============================================================


class OrderStatus(str, Enum):
    PENDING_CONFIRMATION = "待平台确认"
    PENDING_PAYMENT = "待支付"
    CONFIGURING = "配置中"
    COMPLETED = "已完成"
    CANCELLED = "已取消"


# Allowed next states; completed and cancelled orders are final
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING_CONFIRMATION: frozenset(
        {OrderStatus.PENDING_PAYMENT, OrderStatus.CANCELLED}
    ),
    OrderStatus.PENDING_PAYMENT: frozenset({OrderStatus.CONFIGURING, OrderStatus.CANCELLED}),
    OrderStatus.CONFIGURING: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS[current]


class OrderItem(ProcurementItem):
    """A catalog item as ordered: a snapshot of the item plus quantity."""

    quantity: int = Field(ge=1)


class Order(DocumentModel):
    tenant_id: str
    items: list[OrderItem]
    total_amount: float
    status: OrderStatus
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PreOrderCreate(CamelModel):
    """A tenant's request to buy one catalog item."""

    item_id: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    notes: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus
