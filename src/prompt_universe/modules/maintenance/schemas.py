"""Pydantic schemas for database maintenance."""

from enum import Enum

from pydantic import Field

from prompt_universe.core.documents import CamelModel


class IssueType(str, Enum):
    ORPHANED_USER = "Orphaned User"
    INCOMPLETE_ORDER = "Incomplete Order"


class HealthIssue(CamelModel):
    """One suspicious record found by a scan."""

    id: str
    type: IssueType
    description: str


class CleanRequest(CamelModel):
    ids: list[str] = Field(min_length=1)
    type: IssueType
