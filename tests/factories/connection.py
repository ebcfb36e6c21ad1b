"""Factory for LLM connections."""

from polyfactory.factories.pydantic_factory import ModelFactory

from prompt_universe.core.llm import ConnectionScope, ConnectionStatus, LlmConnection


class LlmConnectionFactory(ModelFactory[LlmConnection]):
    """Factory for active universal connections."""

    __model__ = LlmConnection

    provider = "google"
    scope = ConnectionScope.UNIVERSAL
    status = ConnectionStatus.ACTIVE
    category = None
    tenant_id = None

    @classmethod
    def model_name(cls) -> str:
        return "gemini-1.5-flash"

    @classmethod
    def api_key(cls) -> str:
        return f"test-key-{cls.__faker__.pystr(min_chars=8, max_chars=8)}"
