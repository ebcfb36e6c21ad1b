"""Pydantic schemas for tenant org structure: roles, departments, positions."""

from pydantic import Field

from prompt_universe.core.constants import MAX_DESCRIPTION_LENGTH, MAX_NAME_LENGTH
from prompt_universe.core.documents import CamelModel, DocumentModel, SaveRequest


class Role(DocumentModel):
    name: str
    description: str = ""
    permissions: list[str] = []


class RoleSave(SaveRequest):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str = Field(default="", max_length=MAX_DESCRIPTION_LENGTH)
    permissions: list[str] = []


class Department(DocumentModel):
    name: str
    parent_id: str | None = None


class DepartmentSave(SaveRequest):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    parent_id: str | None = None


class Position(DocumentModel):
    name: str
    department_id: str


class PositionSave(SaveRequest):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    department_id: str = Field(min_length=1)


class OrganizationStructure(CamelModel):
    departments: list[Department]
    positions: list[Position]
