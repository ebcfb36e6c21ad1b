"""Document store contract.

Business logic talks to a document database through ``DocumentStore``:
collections of JSON-like documents addressed by ``(collection path, id)``.
Collection paths may be nested under a parent document, e.g.
``tenants/{tenant_id}/roles``.
"""

import secrets
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

from prompt_universe.core.constants import DOCUMENT_ID_BYTES


FilterOp = Literal["==", "!=", "<", "<=", ">", ">=", "in"]


class _ServerTimestamp:
    """Placeholder resolved to the backend's clock when a write is applied."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class FieldFilter:
    """A single ``field op value`` condition of a query."""

    field: str
    op: FilterOp
    value: Any

    def matches(self, data: dict[str, Any]) -> bool:
        """Evaluate the condition against a document's data.

        A document without the field never matches, as in Firestore.
        """
        if self.field not in data:
            return False
        actual = data[self.field]
        if self.op == "==":
            return actual == self.value
        if self.op == "!=":
            return actual != self.value
        if self.op == "in":
            return actual in self.value
        if actual is None or self.value is None:
            return False
        try:
            if self.op == "<":
                return actual < self.value
            if self.op == "<=":
                return actual <= self.value
            if self.op == ">":
                return actual > self.value
            return actual >= self.value
        except TypeError:
            return False


@dataclass(frozen=True)
class OrderBy:
    """Sort instruction for a query."""

    field: str
    descending: bool = False


@dataclass
class DocumentSnapshot:
    """A document read from the store."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)


class WriteBatch(ABC):
    """Group of writes applied atomically on ``commit``."""

    @abstractmethod
    def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> None: ...

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None: ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None: ...

    @abstractmethod
    async def commit(self) -> None:
        """Apply every queued write, or none of them."""


class DocumentStore(ABC):
    """Async access to a document database.

    Semantics shared by all backends:

    * ``set`` without ``merge`` replaces the document; with ``merge`` the
      given fields are deep-merged into the existing document (created if
      missing).
    * ``update`` changes top-level fields of an existing document and raises
      ``NotFoundError`` when it does not exist.
    * ``delete`` of a missing document is a no-op.
    * ``SERVER_TIMESTAMP`` values anywhere in written data are replaced with
      the write time.
    * Backend failures are raised as ``DocumentStoreError``.
    """

    backend: str = "abstract"

    def new_id(self) -> str:
        """Generate a fresh, URL-safe document id."""
        return secrets.token_urlsafe(DOCUMENT_ID_BYTES)

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> DocumentSnapshot | None: ...

    async def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""
        doc_id = self.new_id()
        await self.set(collection, doc_id, data)
        return doc_id

    @abstractmethod
    async def set(
        self,
        collection: str,
        doc_id: str,
        data: dict[str, Any],
        *,
        merge: bool = False,
    ) -> None: ...

    @abstractmethod
    async def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None: ...

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None: ...

    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[DocumentSnapshot]: ...

    @abstractmethod
    def batch(self) -> WriteBatch: ...

    @abstractmethod
    async def ping(self) -> None:
        """Raise ``DocumentStoreError`` if the backend is unreachable."""

    async def close(self) -> None:
        """Release backend resources."""


def utcnow() -> datetime:
    return datetime.now(UTC)


def resolve_server_timestamps(value: Any, now: Any) -> Any:
    """Return ``value`` with every ``SERVER_TIMESTAMP`` replaced by ``now``."""
    if value is SERVER_TIMESTAMP:
        return now
    if isinstance(value, dict):
        return {key: resolve_server_timestamps(item, now) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [resolve_server_timestamps(item, now) for item in value]
    return value


def deep_merge(existing: dict[str, Any], changes: dict[str, Any]) -> dict[str, Any]:
    """Merge ``changes`` into a copy of ``existing``; nested maps merge too."""
    merged = dict(existing)
    for key, value in changes.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def apply_query(
    snapshots: Iterable[DocumentSnapshot],
    filters: Sequence[FieldFilter] = (),
    order_by: Sequence[OrderBy] = (),
    limit: int | None = None,
) -> list[DocumentSnapshot]:
    """Filter, sort and truncate snapshots in memory.

    Documents missing an ordering field are dropped, matching Firestore.
    """
    result = [snap for snap in snapshots if all(f.matches(snap.data) for f in filters)]

    for order in reversed(order_by):
        result = [snap for snap in result if snap.data.get(order.field) is not None]
        result.sort(key=lambda snap: snap.data[order.field], reverse=order.descending)

    if limit is not None:
        result = result[:limit]
    return result
