"""Asset repositories."""

from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import (
    COLLECTION_LLM_CONNECTIONS,
    COLLECTION_SOFTWARE_ASSETS,
    COLLECTION_TOKEN_ALLOCATIONS,
)
from prompt_universe.core.documents import CollectionRepository, OrderBy
from prompt_universe.core.llm import LlmConnection
from prompt_universe.modules.assets.schemas import SoftwareAsset, TokenAllocation


class LlmConnectionRepository(CollectionRepository[LlmConnection]):
    model = LlmConnection
    collection = COLLECTION_LLM_CONNECTIONS
    not_found_message = "模型连接不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_by_priority(self) -> list[LlmConnection]:
        return await self.list(order_by=[OrderBy("priority")])


class TokenAllocationRepository(CollectionRepository[TokenAllocation]):
    model = TokenAllocation
    collection = COLLECTION_TOKEN_ALLOCATIONS
    not_found_message = "令牌分配不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)


class SoftwareAssetRepository(CollectionRepository[SoftwareAsset]):
    model = SoftwareAsset
    collection = COLLECTION_SOFTWARE_ASSETS
    not_found_message = "软件资产不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)


# Type aliases for dependency injection
LlmConnectionRepo = Annotated[LlmConnectionRepository, Depends(LlmConnectionRepository)]
TokenAllocationRepo = Annotated[
    TokenAllocationRepository, Depends(TokenAllocationRepository)
]
SoftwareAssetRepo = Annotated[SoftwareAssetRepository, Depends(SoftwareAssetRepository)]
