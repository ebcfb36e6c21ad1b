"""Connection resolution and generation calls."""

from collections.abc import Sequence

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from prompt_universe.config import settings
from prompt_universe.core.constants import COLLECTION_LLM_CONNECTIONS
from prompt_universe.core.documents import DocumentStore, FieldFilter, OrderBy
from prompt_universe.core.errors import AppException, ExecutionError, NotFoundError
from prompt_universe.core.llm.messages import ChatMessage
from prompt_universe.core.llm.models import (
    ConnectionScope,
    ConnectionStatus,
    LlmConnection,
)
from prompt_universe.core.llm.providers import ProviderError, get_provider


logger = structlog.get_logger()


class ModelGateway:
    """Resolves LLM connections and issues generation calls.

    The store and HTTP client are injected; the gateway keeps no other
    state and may be shared between requests.
    """

    def __init__(
        self,
        store: DocumentStore,
        http_client: httpx.AsyncClient,
        default_temperature: float | None = None,
    ) -> None:
        self.store = store
        self.http_client = http_client
        self.default_temperature = (
            settings.llm_default_temperature
            if default_temperature is None
            else default_temperature
        )

    async def resolve_connection(self, connection_id: str) -> LlmConnection:
        """Load a connection by id.

        Raises:
            NotFoundError: If no connection has that id
        """
        snapshot = await self.store.get(COLLECTION_LLM_CONNECTIONS, connection_id)
        if snapshot is None:
            raise NotFoundError(
                f"无法找到ID为'{connection_id}'的模型配置。请检查后台配置或联系管理员。",
                resource=COLLECTION_LLM_CONNECTIONS,
                resource_id=connection_id,
            )
        return LlmConnection.from_snapshot(snapshot)

    async def find_general_connection(self, category: str | None = None) -> LlmConnection | None:
        """Return the best active universal connection, if any.

        Lower ``priority`` numbers win. With ``category`` only connections
        of that category are considered.
        """
        filters = [
            FieldFilter("scope", "==", ConnectionScope.UNIVERSAL.value),
            FieldFilter("status", "==", ConnectionStatus.ACTIVE.value),
        ]
        if category:
            filters.append(FieldFilter("category", "==", category))

        snapshots = await self.store.query(
            COLLECTION_LLM_CONNECTIONS,
            filters=filters,
            order_by=[OrderBy("priority")],
            limit=1,
        )
        if not snapshots:
            return None
        return LlmConnection.from_snapshot(snapshots[0])

    async def generate(
        self,
        connection_id: str,
        messages: Sequence[ChatMessage],
        temperature: float | None = None,
        response_format: str | None = None,
    ) -> str:
        """Generate text with the model behind ``connection_id``.

        Raises:
            ExecutionError: For any failure: an unknown or invalid connection,
                an unsupported provider, a failed call or a malformed response
        """
        try:
            connection = await self.resolve_connection(connection_id)
        except AppException as e:
            logger.warning(
                "llm_connection_unavailable",
                connection_id=connection_id,
                error_code=e.error_code,
            )
            raise ExecutionError(e.message, details={"connection_id": connection_id}) from e
        except PydanticValidationError as e:
            logger.error(
                "llm_connection_invalid",
                connection_id=connection_id,
                errors=e.error_count(),
            )
            raise ExecutionError(
                f"ID为'{connection_id}'的模型配置无效。请检查后台配置或联系管理员。",
                details={"connection_id": connection_id},
            ) from e

        provider = get_provider(connection.provider, self.http_client)
        if provider is None:
            raise ExecutionError(
                f"不支持的模型提供商: {connection.provider}",
                details={"connection_id": connection_id},
            )

        effective_temperature = (
            self.default_temperature if temperature is None else temperature
        )
        log = logger.bind(
            connection_id=connection_id,
            provider=provider.name,
            model=connection.model_name,
        )
        log.info("llm_generation_started", temperature=effective_temperature)

        try:
            text = await provider.generate(
                model=connection.model_name,
                api_key=connection.api_key,
                messages=list(messages),
                temperature=effective_temperature,
                response_format=response_format,
            )
        except ProviderError as e:
            log.error("llm_generation_failed", error=str(e))
            raise ExecutionError(
                f"调用模型'{connection.model_name}'时发生错误，请稍后重试或联系管理员。错误详情: {e}",
                details={"connection_id": connection_id, "provider": provider.name},
            ) from e

        log.info("llm_generation_completed", response_chars=len(text))
        return text
