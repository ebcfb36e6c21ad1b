"""Prompt execution pipeline: templating, messages, providers and analysis."""

from prompt_universe.core.llm.analyzer import PromptMetadataAnalyzer
from prompt_universe.core.llm.gateway import ModelGateway
from prompt_universe.core.llm.messages import ChatMessage, assemble_messages
from prompt_universe.core.llm.models import (
    ConnectionScope,
    ConnectionStatus,
    LlmConnection,
    PromptMetadata,
)
from prompt_universe.core.llm.providers import (
    JSON_RESPONSE_FORMAT,
    LLMProvider,
    ProviderError,
    get_available_providers,
    get_provider,
)
from prompt_universe.core.llm.templating import PromptTemplateEngine, template_engine


__all__ = [
    "JSON_RESPONSE_FORMAT",
    "ChatMessage",
    "ConnectionScope",
    "ConnectionStatus",
    "LLMProvider",
    "LlmConnection",
    "ModelGateway",
    "PromptMetadata",
    "PromptMetadataAnalyzer",
    "PromptTemplateEngine",
    "ProviderError",
    "assemble_messages",
    "get_available_providers",
    "get_provider",
    "template_engine",
]
