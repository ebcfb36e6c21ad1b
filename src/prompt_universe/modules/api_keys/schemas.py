"""Pydantic schemas for tenant API keys."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from prompt_universe.core.constants import MAX_NAME_LENGTH
from prompt_universe.core.documents import CamelModel, DocumentModel


class ApiKeyStatus(str, Enum):
    ACTIVE = "活跃"
    REVOKED = "已撤销"


class ApiKey(DocumentModel):
    name: str
    key: str
    tenant_id: str
    status: ApiKeyStatus = ApiKeyStatus.ACTIVE
    created_at: datetime | None = None

    def masked(self) -> "ApiKey":
        """Copy with the secret reduced to its prefix and last four characters."""
        visible = self.key[-4:] if len(self.key) > 8 else ""
        prefix = self.key.split("-", 1)[0]
        return self.model_copy(update={"key": f"{prefix}-****{visible}"})


class ApiKeyCreate(CamelModel):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)


class ApiKeyCreated(CamelModel):
    """Result of key creation; the only response that carries the full key."""

    success: bool
    message: str
    key: ApiKey | None = None
