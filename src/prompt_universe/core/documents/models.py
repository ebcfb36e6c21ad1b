"""Base pydantic models for stored documents."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from prompt_universe.core.documents.base import DocumentSnapshot


class CamelModel(BaseModel):
    """Model whose fields are exchanged in camelCase.

    Attributes stay snake_case in Python; both spellings are accepted on
    input and ``by_alias`` dumps produce the stored/wire field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


class DocumentModel(CamelModel):
    """A document of a collection; ``id`` is the document key, not a field."""

    id: str

    @classmethod
    def from_snapshot(cls, snapshot: DocumentSnapshot) -> Self:
        return cls.model_validate({**snapshot.data, "id": snapshot.id})

    def to_document(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Dump the stored fields (camelCase, ``id`` removed)."""
        return self.model_dump(
            by_alias=True,
            exclude={"id", *(exclude or set())},
            mode="python",
        )


class OperationResult(BaseModel):
    """Outcome of a mutating flow."""

    success: bool
    message: str
    id: str | None = None

    @classmethod
    def ok(cls, message: str, id: str | None = None) -> Self:
        return cls(success=True, message=message, id=id)

    @classmethod
    def fail(cls, message: str) -> Self:
        return cls(success=False, message=message)


class SaveRequest(CamelModel):
    """Input of a save flow: with ``id`` it updates, without it creates."""

    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        """Fields to write.

        Updates carry only the fields the caller actually sent, so a merge
        leaves every other stored field untouched. Creates carry every
        field that has a value, defaults included.
        """
        if self.id:
            return self.model_dump(by_alias=True, exclude={"id"}, exclude_unset=True)
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
