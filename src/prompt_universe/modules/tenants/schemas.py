"""Pydantic schemas for tenant operations."""

from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field, computed_field

from prompt_universe.core.constants import MAX_NAME_LENGTH
from prompt_universe.core.documents import CamelModel, DocumentModel, SaveRequest
from prompt_universe.modules.organization.schemas import Department, Position, Role
from prompt_universe.modules.procurement.schemas import Order
from prompt_universe.modules.users.schemas import User


class TenantStatus(str, Enum):
    ACTIVE = "活跃"
    PENDING = "待审核"
    DISABLED = "已禁用"


class Tenant(DocumentModel):
    """A stored tenant (company account)."""

    company_name: str
    admin_email: EmailStr
    status: TenantStatus
    created_at: datetime | None = None

    @computed_field(alias="registeredDate")  # type: ignore[prop-decorator]
    @property
    def registered_date(self) -> datetime | None:
        """Registration time, the server-assigned creation timestamp."""
        return self.created_at


class TenantSave(SaveRequest):
    """Create or update a tenant."""

    company_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    admin_email: EmailStr
    status: TenantStatus = TenantStatus.PENDING


class TenantsAndUsers(CamelModel):
    tenants: list[Tenant]
    users: list[User]


class TenantDashboard(CamelModel):
    """Everything a tenant admin's dashboard shows."""

    tenant: Tenant
    users: list[User]
    orders: list[Order]
    roles: list[Role]
    departments: list[Department]
    positions: list[Position]
