"""Generic collection repository used by the feature modules."""

import copy
from collections.abc import Sequence
from typing import Any, Generic, Self, TypeVar

import structlog
from pydantic import ValidationError as PydanticValidationError

from prompt_universe.core.constants import tenant_collection
from prompt_universe.core.documents.base import (
    SERVER_TIMESTAMP,
    DocumentStore,
    FieldFilter,
    OrderBy,
)
from prompt_universe.core.documents.models import DocumentModel, SaveRequest
from prompt_universe.core.errors import (
    BadRequestError,
    InvalidDocumentError,
    NotFoundError,
)


logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=DocumentModel)


class CollectionRepository(Generic[ModelT]):
    """Typed access to one collection of a ``DocumentStore``.

    Subclasses set ``model`` and either ``collection`` or override
    ``collection_path`` for collections nested under a parent document.
    Documents that fail validation are skipped (and logged) when listing,
    so one malformed record cannot break a whole page.
    """

    model: type[ModelT]
    collection: str
    not_found_message = "找不到该记录。"

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def collection_path(self) -> str:
        return self.collection

    async def list(
        self,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[ModelT]:
        path = self.collection_path()
        snapshots = await self.store.query(path, filters, order_by, limit)
        items: list[ModelT] = []
        for snapshot in snapshots:
            try:
                items.append(self.model.from_snapshot(snapshot))
            except PydanticValidationError as exc:
                logger.warning(
                    "invalid_document_skipped",
                    collection=path,
                    document_id=snapshot.id,
                    errors=exc.error_count(),
                )
        return items

    async def get(self, doc_id: str) -> ModelT | None:
        """Load one document.

        Raises:
            InvalidDocumentError: If the stored fields fail validation
        """
        path = self.collection_path()
        snapshot = await self.store.get(path, doc_id)
        if snapshot is None:
            return None
        try:
            return self.model.from_snapshot(snapshot)
        except PydanticValidationError as exc:
            logger.warning(
                "invalid_document_loaded",
                collection=path,
                document_id=doc_id,
                errors=exc.error_count(),
            )
            raise InvalidDocumentError(resource=path, resource_id=doc_id) from exc

    async def get_or_404(self, doc_id: str) -> ModelT:
        item = await self.get(doc_id)
        if item is None:
            raise NotFoundError(
                self.not_found_message,
                resource=self.collection_path(),
                resource_id=doc_id,
            )
        return item

    async def create(self, data: dict[str, Any], doc_id: str | None = None) -> str:
        """Create a document stamped with a server ``createdAt``."""
        doc_id = doc_id or self.store.new_id()
        await self.store.set(
            self.collection_path(), doc_id, {**data, "createdAt": SERVER_TIMESTAMP}
        )
        return doc_id

    async def save(self, data: SaveRequest) -> tuple[str, bool]:
        """Merge into the document named by ``data.id``, or create one.

        Returns the document id and whether a new document was created.
        """
        if data.id:
            await self.merge(data.id, data.to_document())
            return data.id, False
        return await self.create(data.to_document()), True

    async def merge(self, doc_id: str, data: dict[str, Any]) -> None:
        await self.store.set(self.collection_path(), doc_id, data, merge=True)

    async def update(self, doc_id: str, data: dict[str, Any]) -> None:
        await self.store.update(self.collection_path(), doc_id, data)

    async def delete(self, doc_id: str) -> None:
        await self.store.delete(self.collection_path(), doc_id)


class TenantCollectionRepository(CollectionRepository[ModelT]):
    """Repository for a collection nested under a tenant document.

    Bind it to a tenant with ``for_tenant`` before use.
    """

    subcollection: str
    tenant_id: str | None = None

    def for_tenant(self, tenant_id: str) -> Self:
        bound = copy.copy(self)
        bound.tenant_id = tenant_id
        return bound

    def collection_path(self) -> str:
        if not self.tenant_id:
            raise BadRequestError("缺少租户ID。")
        return tenant_collection(self.tenant_id, self.subcollection)
