"""Demand pool repository."""

from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import COLLECTION_DEMANDS
from prompt_universe.core.documents import CollectionRepository, FieldFilter, OrderBy
from prompt_universe.modules.demands.schemas import Demand, DemandStatus


class DemandRepository(CollectionRepository[Demand]):
    model = Demand
    collection = COLLECTION_DEMANDS
    not_found_message = "需求不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_newest_first(self, status: DemandStatus | None = None) -> list[Demand]:
        filters = [FieldFilter("status", "==", DemandStatus(status).value)] if status else []
        return await self.list(
            filters=filters, order_by=[OrderBy("createdAt", descending=True)]
        )


# Type alias for dependency injection
DemandRepo = Annotated[DemandRepository, Depends(DemandRepository)]
