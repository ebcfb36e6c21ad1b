"""API key repository."""

from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import SUBCOLLECTION_API_KEYS
from prompt_universe.core.documents import OrderBy, TenantCollectionRepository
from prompt_universe.modules.api_keys.schemas import ApiKey


class ApiKeyRepository(TenantCollectionRepository[ApiKey]):
    model = ApiKey
    subcollection = SUBCOLLECTION_API_KEYS
    not_found_message = "API密钥不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_newest_first(self) -> list[ApiKey]:
        return await self.list(order_by=[OrderBy("createdAt", descending=True)])


# Type alias for dependency injection
ApiKeyRepo = Annotated[ApiKeyRepository, Depends(ApiKeyRepository)]
