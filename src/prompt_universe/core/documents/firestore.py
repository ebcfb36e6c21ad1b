"""Document store backed by Cloud Firestore."""

from collections.abc import Sequence
from typing import Any

import structlog
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter as FirestoreFieldFilter

from prompt_universe.core.constants import COLLECTION_TENANTS
from prompt_universe.core.documents.base import (
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
    OrderBy,
    WriteBatch,
    resolve_server_timestamps,
)
from prompt_universe.core.errors import DocumentStoreError, NotFoundError


logger = structlog.get_logger()


def _to_firestore(data: dict[str, Any]) -> dict[str, Any]:
    return resolve_server_timestamps(data, firestore.SERVER_TIMESTAMP)


def _store_error(
    exc: google_exceptions.GoogleAPICallError, operation: str, collection: str
) -> DocumentStoreError:
    logger.error(
        "document_store_error",
        backend="firestore",
        operation=operation,
        collection=collection,
        error=str(exc),
    )
    return DocumentStoreError(details={"operation": operation, "collection": collection})


class FirestoreWriteBatch(WriteBatch):
    """Thin wrapper over a Firestore async write batch."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client
        self._batch = client.batch()
        self._collections: set[str] = set()

    def _ref(self, collection: str, doc_id: str) -> Any:
        self._collections.add(collection)
        return self._client.collection(collection).document(doc_id)

    def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        self._batch.set(self._ref(collection, doc_id), _to_firestore(data), merge=merge)

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._batch.update(self._ref(collection, doc_id), _to_firestore(data))

    def delete(self, collection: str, doc_id: str) -> None:
        self._batch.delete(self._ref(collection, doc_id))

    async def commit(self) -> None:
        collections = ",".join(sorted(self._collections))
        try:
            await self._batch.commit()
        except google_exceptions.NotFound as exc:
            raise NotFoundError("要更新的文档不存在。", resource=collections) from exc
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "batch", collections) from exc


class FirestoreDocumentStore(DocumentStore):
    """``DocumentStore`` over ``google.cloud.firestore.AsyncClient``."""

    backend = "firestore"

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_settings(
        cls, project_id: str | None, database: str | None
    ) -> "FirestoreDocumentStore":
        """Build a store from application credentials (ADC)."""
        return cls(firestore.AsyncClient(project=project_id, database=database))

    def _document(self, collection: str, doc_id: str) -> Any:
        return self._client.collection(collection).document(doc_id)

    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        try:
            snapshot = await self._document(collection, doc_id).get()
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "get", collection) from exc
        if not snapshot.exists:
            return None
        return DocumentSnapshot(id=snapshot.id, data=snapshot.to_dict() or {})

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        try:
            await self._document(collection, doc_id).set(_to_firestore(data), merge=merge)
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "set", collection) from exc

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        try:
            await self._document(collection, doc_id).update(_to_firestore(data))
        except google_exceptions.NotFound as exc:
            raise NotFoundError(
                "要更新的文档不存在。", resource=collection, resource_id=doc_id
            ) from exc
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "update", collection) from exc

    async def delete(self, collection: str, doc_id: str) -> None:
        try:
            await self._document(collection, doc_id).delete()
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "delete", collection) from exc

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        query: Any = self._client.collection(collection)
        for condition in filters:
            query = query.where(
                filter=FirestoreFieldFilter(condition.field, condition.op, condition.value)
            )
        for order in order_by:
            direction = (
                firestore.Query.DESCENDING if order.descending else firestore.Query.ASCENDING
            )
            query = query.order_by(order.field, direction=direction)
        if limit is not None:
            query = query.limit(limit)

        try:
            return [
                DocumentSnapshot(id=snapshot.id, data=snapshot.to_dict() or {})
                async for snapshot in query.stream()
            ]
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "query", collection) from exc

    def batch(self) -> FirestoreWriteBatch:
        return FirestoreWriteBatch(self._client)

    async def ping(self) -> None:
        try:
            await self._client.collection(COLLECTION_TENANTS).limit(1).get()
        except google_exceptions.GoogleAPICallError as exc:
            raise _store_error(exc, "ping", COLLECTION_TENANTS) from exc
