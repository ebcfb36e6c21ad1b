"""User repository for document operations."""

from typing import Annotated, Any

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import COLLECTION_USERS
from prompt_universe.core.documents import (
    SERVER_TIMESTAMP,
    CollectionRepository,
    FieldFilter,
)
from prompt_universe.modules.users.schemas import User


class UserRepository(CollectionRepository[User]):
    """Repository for the top-level ``users`` collection."""

    model = User
    collection = COLLECTION_USERS
    not_found_message = "用户不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_by_tenant(self, tenant_id: str) -> list[User]:
        return await self.list(filters=[FieldFilter("tenantId", "==", tenant_id)])

    async def create_many(self, documents: list[dict[str, Any]]) -> list[str]:
        """Create several users in one atomic batch."""
        batch = self.store.batch()
        ids: list[str] = []
        for document in documents:
            doc_id = self.store.new_id()
            batch.set(self.collection, doc_id, {**document, "createdAt": SERVER_TIMESTAMP})
            ids.append(doc_id)
        await batch.commit()
        return ids


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
