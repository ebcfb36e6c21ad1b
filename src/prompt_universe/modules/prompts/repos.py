"""Prompt library repositories."""

import asyncio
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends

from prompt_universe.api.dependencies import Store
from prompt_universe.core.constants import COLLECTION_EXPERT_DOMAINS, COLLECTION_PROMPTS
from prompt_universe.core.documents import CollectionRepository, FieldFilter, OrderBy
from prompt_universe.modules.prompts.schemas import ExpertDomain, Prompt, PromptScope


_NEWEST_UPDATE_FIRST = [OrderBy("updatedAt", descending=True)]
_EPOCH = datetime.min.replace(tzinfo=UTC)


class PromptRepository(CollectionRepository[Prompt]):
    model = Prompt
    collection = COLLECTION_PROMPTS
    not_found_message = "找不到该提示词。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)

    async def list_active(self, tenant_id: str | None = None) -> list[Prompt]:
        """Non-archived prompts, most recently updated first.

        With ``tenant_id``: the universal prompts plus that tenant's
        exclusive ones.
        """
        active = FieldFilter("archived", "==", False)
        if tenant_id is None:
            return await self.list(filters=[active], order_by=_NEWEST_UPDATE_FIRST)

        universal, exclusive = await asyncio.gather(
            self.list(
                filters=[active, FieldFilter("scope", "==", PromptScope.UNIVERSAL.value)],
                order_by=_NEWEST_UPDATE_FIRST,
            ),
            self.list(
                filters=[
                    active,
                    FieldFilter("scope", "==", PromptScope.EXCLUSIVE.value),
                    FieldFilter("tenantId", "==", tenant_id),
                ],
                order_by=_NEWEST_UPDATE_FIRST,
            ),
        )
        return sorted(
            [*universal, *exclusive],
            key=lambda prompt: prompt.updated_at or _EPOCH,
            reverse=True,
        )


class ExpertDomainRepository(CollectionRepository[ExpertDomain]):
    model = ExpertDomain
    collection = COLLECTION_EXPERT_DOMAINS
    not_found_message = "专家领域不存在。"

    def __init__(self, store: Store) -> None:
        super().__init__(store)


# Type aliases for dependency injection
PromptRepo = Annotated[PromptRepository, Depends(PromptRepository)]
ExpertDomainRepo = Annotated[ExpertDomainRepository, Depends(ExpertDomainRepository)]
