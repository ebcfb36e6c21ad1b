"""Generation API adapters.

Each provider turns a list of chat messages into one HTTP call and returns
the generated text:
- Google AI (Gemini ``generateContent``)
- DeepSeek (OpenAI-compatible chat completions)
- OpenAI (chat completions)
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx
import structlog

from prompt_universe.config import settings
from prompt_universe.core.llm.messages import ChatMessage


logger = structlog.get_logger()

JSON_RESPONSE_FORMAT = "json_object"


class ProviderError(Exception):
    """A provider call failed or returned an unusable body."""


class LLMProvider(ABC):
    """Base class for generation providers."""

    name: str
    base_url: str

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None) -> None:
        self.http_client = http_client
        if base_url:
            self.base_url = base_url.rstrip("/")

    @abstractmethod
    async def generate(
        self,
        *,
        model: str,
        api_key: str,
        messages: list[ChatMessage],
        temperature: float,
        response_format: str | None = None,
    ) -> str:
        """Run one generation call.

        Raises:
            ProviderError: On HTTP failure or a malformed response body
        """

    async def _post(
        self,
        url: str,
        payload: dict[str, Any],
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self.http_client.post(
                url, json=payload, headers=headers, params=params
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"{self.name} API request failed with status "
                f"{e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} API request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"{self.name} API returned invalid JSON") from e


class GoogleAIProvider(LLMProvider):
    """Google AI Studio ``generateContent`` endpoint."""

    name = "google"
    _roles: ClassVar[dict[str, str]] = {"user": "user", "assistant": "model"}

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None) -> None:
        self.base_url = settings.google_ai_base_url.rstrip("/")
        super().__init__(http_client, base_url)

    async def generate(
        self,
        *,
        model: str,
        api_key: str,
        messages: list[ChatMessage],
        temperature: float,
        response_format: str | None = None,
    ) -> str:
        model_path = model if model.startswith("models/") else f"models/{model}"

        system_text = "\n\n".join(m.content for m in messages if m.role == "system")
        payload: dict[str, Any] = {
            "contents": [
                {"role": self._roles[m.role], "parts": [{"text": m.content}]}
                for m in messages
                if m.role != "system"
            ],
            "generationConfig": {"temperature": temperature},
        }
        if system_text:
            payload["systemInstruction"] = {"parts": [{"text": system_text}]}
        if response_format == JSON_RESPONSE_FORMAT:
            payload["generationConfig"]["responseMimeType"] = "application/json"

        data = await self._post(
            f"{self.base_url}/{model_path}:generateContent",
            payload,
            params={"key": api_key},
        )

        try:
            parts = data["candidates"][0]["content"].get("parts", [])
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError("google API response contained no candidates") from e
        return "".join(part.get("text", "") for part in parts)


class ChatCompletionsProvider(LLMProvider):
    """OpenAI-compatible ``/chat/completions`` endpoint."""

    async def generate(
        self,
        *,
        model: str,
        api_key: str,
        messages: list[ChatMessage],
        temperature: float,
        response_format: str | None = None,
    ) -> str:
        payload: dict[str, Any] = {
            "model": model,
            "messages": [m.model_dump() for m in messages],
            "temperature": temperature,
        }
        if response_format == JSON_RESPONSE_FORMAT:
            payload["response_format"] = {"type": JSON_RESPONSE_FORMAT}

        data = await self._post(
            f"{self.base_url}/chat/completions",
            payload,
            headers={"Authorization": f"Bearer {api_key}"},
        )

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"{self.name} API response contained no choices") from e
        return content or ""


class DeepSeekProvider(ChatCompletionsProvider):
    name = "deepseek"

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None) -> None:
        self.base_url = settings.deepseek_base_url.rstrip("/")
        super().__init__(http_client, base_url)


class OpenAIProvider(ChatCompletionsProvider):
    name = "openai"

    def __init__(self, http_client: httpx.AsyncClient, base_url: str | None = None) -> None:
        self.base_url = settings.openai_base_url.rstrip("/")
        super().__init__(http_client, base_url)


# Provider registry
_providers: dict[str, type[LLMProvider]] = {
    "google": GoogleAIProvider,
    "deepseek": DeepSeekProvider,
    "openai": OpenAIProvider,
}


def get_provider(name: str, http_client: httpx.AsyncClient) -> LLMProvider | None:
    """Get a provider adapter by name.

    Args:
        name: The provider name (google, deepseek, openai)
        http_client: Shared HTTP client used for the call

    Returns:
        The provider instance, or None for unsupported providers
    """
    provider_cls = _providers.get(name.lower())
    if provider_cls is None:
        return None
    return provider_cls(http_client)


def get_available_providers() -> list[str]:
    """Get the names of all supported providers."""
    return list(_providers)
