"""Pydantic schemas for platform assets: model connections, token
allocations and software licenses."""

from datetime import datetime
from typing import Self

from pydantic import Field, field_validator, model_validator

from prompt_universe.core.constants import (
    DEFAULT_CONNECTION_PRIORITY,
    MAX_CONNECTION_PRIORITY,
    MAX_NAME_LENGTH,
    MIN_CONNECTION_PRIORITY,
)
from prompt_universe.core.documents import CamelModel, DocumentModel, SaveRequest
from prompt_universe.core.llm import (
    ConnectionScope,
    ConnectionStatus,
    LlmConnection,
    get_available_providers,
)


# ============================================================
# Model connections
# ============================================================


class LlmConnectionPublic(DocumentModel):
    """A connection as listed to administrators; the API key is withheld."""

    model_name: str
    provider: str
    scope: ConnectionScope
    tenant_id: str | None = None
    category: str | None = None
    status: ConnectionStatus
    priority: int
    has_api_key: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_connection(cls, connection: LlmConnection) -> Self:
        return cls.model_validate(
            {
                **connection.model_dump(exclude={"api_key"}),
                "has_api_key": bool(connection.api_key),
            }
        )


class LlmConnectionSave(SaveRequest):
    """Create or update a connection.

    ``apiKey`` is required when creating; leaving it out of an update keeps
    the stored key.
    """

    model_name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    provider: str
    api_key: str | None = Field(default=None, min_length=1)
    scope: ConnectionScope = ConnectionScope.UNIVERSAL
    tenant_id: str | None = None
    category: str | None = None
    status: ConnectionStatus = ConnectionStatus.ACTIVE
    priority: int = Field(
        default=DEFAULT_CONNECTION_PRIORITY,
        ge=MIN_CONNECTION_PRIORITY,
        le=MAX_CONNECTION_PRIORITY,
    )

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        provider = v.strip().lower()
        available = get_available_providers()
        if provider not in available:
            raise ValueError(f"provider must be one of: {', '.join(available)}")
        return provider

    @model_validator(mode="after")
    def check_scope(self) -> Self:
        if self.scope == ConnectionScope.EXCLUSIVE and not self.tenant_id:
            raise ValueError("exclusive connections require tenantId")
        if not self.id and not self.api_key:
            raise ValueError("apiKey is required for a new connection")
        return self


# ============================================================
# Token allocations
# ============================================================


class TokenAllocation(DocumentModel):
    key: str
    assigned_to: str
    usage_limit: int = Field(ge=0)
    used: int = Field(default=0, ge=0)
    created_at: datetime | None = None


class TokenAllocationSave(SaveRequest):
    key: str = Field(min_length=1)
    assigned_to: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    usage_limit: int = Field(ge=0)
    used: int = Field(default=0, ge=0)


# ============================================================
# Software assets
# ============================================================


class SoftwareAsset(DocumentModel):
    name: str
    license_key: str | None = None
    type: str
    created_at: datetime | None = None


class SoftwareAssetSave(SaveRequest):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    license_key: str | None = None
    type: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)


class PlatformAssets(CamelModel):
    connections: list[LlmConnectionPublic]
    token_allocations: list[TokenAllocation]
    software_assets: list[SoftwareAsset]
