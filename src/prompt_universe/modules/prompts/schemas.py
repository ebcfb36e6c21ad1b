"""Pydantic schemas for the prompt library and prompt execution."""

from datetime import datetime
from enum import Enum
from typing import Self

from pydantic import AliasChoices, Field, model_validator

from prompt_universe.core.constants import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from prompt_universe.core.documents import CamelModel, DocumentModel, SaveRequest
from prompt_universe.core.llm import PromptMetadata


class PromptScope(str, Enum):
    UNIVERSAL = "通用"
    EXCLUSIVE = "专属"


# ============================================================
# Expert domains
# ============================================================


class ExpertDomain(DocumentModel):
    name: str


class ExpertDomainSave(SaveRequest):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)


# ============================================================
# Prompts
# ============================================================


class Prompt(DocumentModel):
    """A stored prompt template."""

    name: str
    description: str | None = None
    expert_id: str
    tenant_id: str | None = None
    scope: PromptScope = PromptScope.UNIVERSAL
    system_prompt: str = ""
    user_prompt: str = ""
    context: str = ""
    negative_prompt: str = ""
    industry: str | None = None
    task: str | None = None
    metadata: PromptMetadata | None = None
    archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PromptSave(SaveRequest):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    expert_id: str = Field(min_length=1)
    tenant_id: str | None = None
    scope: PromptScope = PromptScope.UNIVERSAL
    system_prompt: str = ""
    user_prompt: str = ""
    context: str = ""
    negative_prompt: str = ""
    industry: str | None = None
    task: str | None = None
    metadata: PromptMetadata | None = None

    @model_validator(mode="after")
    def check_scope(self) -> Self:
        if self.scope == PromptScope.EXCLUSIVE and not self.tenant_id:
            raise ValueError("exclusive prompts require tenantId")
        return self


# ============================================================
# Execution
# ============================================================


class PromptExecutionRequest(CamelModel):
    """Prompt fields plus the values to fill into ``userPrompt``.

    Without ``connectionId`` the platform's general connection is used.
    """

    user_prompt: str = ""
    system_prompt: str | None = None
    context: str | None = None
    negative_prompt: str | None = None
    variables: dict[str, str] = Field(default_factory=dict)
    temperature: float | None = Field(default=None, ge=0, le=2)
    connection_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("connectionId", "connection_id", "modelId"),
    )


class StoredPromptExecutionRequest(CamelModel):
    """Run a library prompt by id, or ``promptContent`` on its own when given."""

    variables: dict[str, str] = Field(default_factory=dict)
    temperature: float | None = Field(default=None, ge=0, le=2)
    connection_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("connectionId", "connection_id", "modelId"),
    )
    prompt_content: str | None = None


class PromptExecutionResult(CamelModel):
    response: str
    connection_id: str


class MetadataAnalysisRequest(CamelModel):
    """Prompt fields to classify; an empty ``userPrompt`` is valid."""

    user_prompt: str = ""
    system_prompt: str | None = None
    context: str | None = None
    negative_prompt: str | None = None
