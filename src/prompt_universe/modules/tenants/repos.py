"""Tenant repository."""

from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import COLLECTION_TENANTS
from prompt_universe.core.documents import CollectionRepository
from prompt_universe.modules.tenants.schemas import Tenant


class TenantRepository(CollectionRepository[Tenant]):
    """Repository for the ``tenants`` collection."""

    model = Tenant
    collection = COLLECTION_TENANTS
    not_found_message = "租户不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def exists(self, tenant_id: str) -> bool:
        return await self.store.get(self.collection, tenant_id) is not None


# Type alias for dependency injection
TenantRepo = Annotated[TenantRepository, Depends(TenantRepository)]
