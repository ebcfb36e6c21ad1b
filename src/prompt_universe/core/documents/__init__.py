"""Document database access: store contract, backends and base models."""

from prompt_universe.core.documents.base import (
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    FieldFilter,
    OrderBy,
    WriteBatch,
)
from prompt_universe.core.documents.models import (
    CamelModel,
    DocumentModel,
    OperationResult,
    SaveRequest,
)
from prompt_universe.core.documents.repository import (
    CollectionRepository,
    TenantCollectionRepository,
)


__all__ = [
    "SERVER_TIMESTAMP",
    "CamelModel",
    "CollectionRepository",
    "DocumentModel",
    "DocumentSnapshot",
    "DocumentStore",
    "FieldFilter",
    "OperationResult",
    "OrderBy",
    "SaveRequest",
    "TenantCollectionRepository",
    "WriteBatch",
]
