"""Pydantic schemas for the demand pool."""

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BeforeValidator, Field

from prompt_universe.core.constants import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from prompt_universe.core.documents import DocumentModel, SaveRequest


class DemandStatus(str, Enum):
    OPEN = "征集中"
    CLOSED = "已关闭"


def _split_tags(value: object) -> object:
    """Accept tags as a comma-separated string as well as a list."""
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return value


Tags = Annotated[list[str], BeforeValidator(_split_tags)]


class Demand(DocumentModel):
    """A request for work posted to the demand pool."""

    title: str
    category: str
    description: str
    budget: str | None = None
    tags: Tags = Field(default_factory=list)
    tenant_id: str | None = None
    status: DemandStatus = DemandStatus.OPEN
    created_at: datetime | None = None


class DemandSave(SaveRequest):
    title: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    category: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    budget: str | None = None
    tags: Tags = Field(default_factory=list)
    tenant_id: str | None = None
    status: DemandStatus = DemandStatus.OPEN
