"""Document store backed by a single SQL table.

Each document is one row of ``documents`` keyed by ``(collection, id)``
with its fields in a JSON column (JSONB on PostgreSQL). Every call runs in
its own short-lived session, so independent calls can be awaited
concurrently; a write batch is a single transaction.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

import structlog
from sqlalchemy import JSON, String, delete, select, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import Mapped, mapped_column

from prompt_universe.core.constants import (
    MAX_COLLECTION_PATH_LENGTH,
    MAX_DOCUMENT_ID_LENGTH,
)
from prompt_universe.core.database import Base, TimestampMixin
from prompt_universe.core.documents.base import (
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
    OrderBy,
    WriteBatch,
    apply_query,
    deep_merge,
    resolve_server_timestamps,
    utcnow,
)
from prompt_universe.core.errors import DocumentStoreError, NotFoundError


logger = structlog.get_logger()


class DocumentRecord(Base, TimestampMixin):
    """Row holding one document."""

    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(
        String(MAX_COLLECTION_PATH_LENGTH), primary_key=True
    )
    id: Mapped[str] = mapped_column(String(MAX_DOCUMENT_ID_LENGTH), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=dict,
    )


def _to_json(value: Any) -> Any:
    """Convert datetimes to fixed-width ISO strings, which sort chronologically."""
    if isinstance(value, datetime):
        return value.isoformat(timespec="microseconds")
    if isinstance(value, dict):
        return {key: _to_json(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_to_json(item) for item in value]
    return value


def _prepare(data: dict[str, Any]) -> dict[str, Any]:
    return _to_json(resolve_server_timestamps(data, utcnow()))


@dataclass(frozen=True)
class _Write:
    kind: Literal["set", "update", "delete"]
    collection: str
    doc_id: str
    data: dict[str, Any] | None = None
    merge: bool = False


async def _apply(session: AsyncSession, write: _Write) -> None:
    if write.kind == "delete":
        await session.execute(
            delete(DocumentRecord).where(
                DocumentRecord.collection == write.collection,
                DocumentRecord.id == write.doc_id,
            )
        )
        return

    data = _prepare(write.data or {})
    record = await session.get(DocumentRecord, (write.collection, write.doc_id))

    if write.kind == "update":
        if record is None:
            raise NotFoundError(
                "要更新的文档不存在。",
                resource=write.collection,
                resource_id=write.doc_id,
            )
        record.data = {**record.data, **data}
    elif record is None:
        session.add(
            DocumentRecord(collection=write.collection, id=write.doc_id, data=data)
        )
    elif write.merge:
        record.data = deep_merge(record.data, data)
    else:
        record.data = data


class SqlWriteBatch(WriteBatch):
    """Queues writes and applies them in one transaction."""

    def __init__(self, store: "SqlDocumentStore") -> None:
        self._store = store
        self._writes: list[_Write] = []

    def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        self._writes.append(_Write("set", collection, doc_id, data, merge))

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        self._writes.append(_Write("update", collection, doc_id, data))

    def delete(self, collection: str, doc_id: str) -> None:
        self._writes.append(_Write("delete", collection, doc_id))

    async def commit(self) -> None:
        if not self._writes:
            return
        collections = sorted({write.collection for write in self._writes})
        async with self._store.transaction("batch", ",".join(collections)) as session:
            for write in self._writes:
                await _apply(session, write)
        logger.debug("document_batch_committed", writes=len(self._writes))
        self._writes.clear()


class SqlDocumentStore(DocumentStore):
    """``DocumentStore`` over SQLAlchemy async sessions."""

    backend = "sql"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    @asynccontextmanager
    async def transaction(
        self, operation: str, collection: str
    ) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction, wrapping database errors."""
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            logger.error(
                "document_store_error",
                backend=self.backend,
                operation=operation,
                collection=collection,
                error=str(exc),
            )
            raise DocumentStoreError(
                details={"operation": operation, "collection": collection}
            ) from exc

    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None:
        async with self.transaction("get", collection) as session:
            record = await session.get(DocumentRecord, (collection, doc_id))
            if record is None:
                return None
            return DocumentSnapshot(id=record.id, data=dict(record.data))

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        async with self.transaction("set", collection) as session:
            await _apply(session, _Write("set", collection, doc_id, data, merge))

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        async with self.transaction("update", collection) as session:
            await _apply(session, _Write("update", collection, doc_id, data))

    async def delete(self, collection: str, doc_id: str) -> None:
        async with self.transaction("delete", collection) as session:
            await _apply(session, _Write("delete", collection, doc_id))

    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        """Run a query.

        String equality filters are evaluated by the database; the remaining
        conditions, ordering and the limit are applied to the fetched rows.
        """
        stmt = select(DocumentRecord).where(DocumentRecord.collection == collection)
        remaining: list[FieldFilter] = []
        for condition in filters:
            if condition.op == "==" and isinstance(condition.value, str):
                stmt = stmt.where(
                    DocumentRecord.data[condition.field].as_string() == condition.value
                )
            else:
                remaining.append(condition)

        async with self.transaction("query", collection) as session:
            result = await session.execute(stmt)
            snapshots = [
                DocumentSnapshot(id=record.id, data=dict(record.data))
                for record in result.scalars()
            ]

        return apply_query(snapshots, remaining, order_by, limit)

    def batch(self) -> SqlWriteBatch:
        return SqlWriteBatch(self)

    async def ping(self) -> None:
        async with self.transaction("ping", "-") as session:
            await session.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        """Create the ``documents`` table if missing (tests and local runs)."""
        if self._engine is None:
            return
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
