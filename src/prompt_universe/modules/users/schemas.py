"""Pydantic schemas for user operations."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import BeforeValidator, EmailStr, Field, field_validator

from prompt_universe.core.constants import MAX_NAME_LENGTH
from prompt_universe.core.documents import CamelModel, DocumentModel, SaveRequest


# ============================================================
# Roles and Statuses
# ============================================================


class UserRole(str, Enum):
    """The fixed set of platform roles."""

    PLATFORM_ADMIN = "平台管理员"
    TENANT_ADMIN = "租户管理员"
    ENGINEER = "技术工程师"
    INDIVIDUAL = "个人用户"

    @classmethod
    def parse(cls, value: "str | UserRole") -> "UserRole":
        """Map a stored role label to a role.

        Accepts the current labels and the English labels written by older
        clients. Any other value raises ``ValueError``.
        """
        if isinstance(value, UserRole):
            return value
        label = value.strip()
        try:
            return ROLE_LABELS[label]
        except KeyError:
            raise ValueError(f"unknown role: {value!r}") from None


ROLE_LABELS: dict[str, UserRole] = {
    **{role.value: role for role in UserRole},
    "Platform Admin": UserRole.PLATFORM_ADMIN,
    "Tenant Admin": UserRole.TENANT_ADMIN,
    "Prompt Engineer/Developer": UserRole.ENGINEER,
    "Individual User": UserRole.INDIVIDUAL,
}


class UserStatus(str, Enum):
    ACTIVE = "活跃"
    PENDING = "待审核"
    DISABLED = "已禁用"
    INVITED = "邀请中"


def _parse_role(v: Any) -> Any:
    return UserRole.parse(v) if isinstance(v, str) else v


RoleLabel = Annotated[UserRole, BeforeValidator(_parse_role)]


# ============================================================
# User Schemas
# ============================================================


class User(DocumentModel):
    """A stored user record."""

    name: str = ""
    email: EmailStr
    role: RoleLabel
    status: UserStatus = UserStatus.ACTIVE
    tenant_id: str | None = None
    department_id: str | None = None
    position_id: str | None = None
    created_at: datetime | None = None

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        """Records written without a status are active."""
        return UserStatus.ACTIVE if v in (None, "") else v


class UserSave(SaveRequest):
    """Admin create/update of a user."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    role: RoleLabel
    status: UserStatus = UserStatus.ACTIVE
    tenant_id: str | None = None


class UserRegistration(CamelModel):
    """Self-registration record created after sign-up."""

    uid: str | None = None
    email: EmailStr
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    role: RoleLabel


class InvitedUser(CamelModel):
    """One member of an invitation batch."""

    email: EmailStr
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    role: RoleLabel
    status: UserStatus = UserStatus.INVITED


class InviteUsersRequest(CamelModel):
    users: list[InvitedUser] = Field(min_length=1)


class TenantUserUpdate(CamelModel):
    """Role and org placement of a tenant member."""

    role: RoleLabel
    department_id: str | None = None
    position_id: str | None = None
