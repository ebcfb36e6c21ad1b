"""Models shared by the execution pipeline and the asset management flows."""

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, Field, field_validator

from prompt_universe.core.constants import (
    DEFAULT_CONNECTION_PRIORITY,
    MAX_CONNECTION_PRIORITY,
    MIN_CONNECTION_PRIORITY,
)
from prompt_universe.core.documents import CamelModel, DocumentModel


class ConnectionScope(str, Enum):
    UNIVERSAL = "通用"
    EXCLUSIVE = "专属"


class ConnectionStatus(str, Enum):
    ACTIVE = "活跃"
    DISABLED = "已禁用"


class LlmConnection(DocumentModel):
    """A configured binding to one provider model, including its credential."""

    model_name: str = Field(min_length=1)
    provider: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
    scope: ConnectionScope = ConnectionScope.UNIVERSAL
    tenant_id: str | None = None
    category: str | None = None
    status: ConnectionStatus = ConnectionStatus.ACTIVE
    priority: int = Field(
        default=DEFAULT_CONNECTION_PRIORITY,
        ge=MIN_CONNECTION_PRIORITY,
        le=MAX_CONNECTION_PRIORITY,
    )
    created_at: datetime | None = None

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: object) -> object:
        """Provider names are matched case-insensitively."""
        return v.strip().lower() if isinstance(v, str) else v


class PromptMetadata(CamelModel):
    """Structured description of a prompt produced by the metadata analyzer."""

    scope: str = Field(min_length=1)
    recommended_model: str = Field(
        min_length=1,
        validation_alias=AliasChoices("recommendedModel", "recommended_model", "model"),
    )
    constraints: str = Field(min_length=1)
    scenario: str = Field(
        min_length=1,
        validation_alias=AliasChoices("scenario", "useCase", "use_case"),
    )

    @field_validator("scope", "recommended_model", "constraints", "scenario", mode="before")
    @classmethod
    def join_lists(cls, v: object) -> object:
        """Accept a list of strings as one value, one item per line."""
        if isinstance(v, list) and all(isinstance(item, str) for item in v):
            return "\n".join(v)
        return v

    @field_validator("scope", "recommended_model", "constraints", "scenario")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()
