"""Chat completions through the openai SDK (Azure OpenAI or OpenAI-compatible)."""

from __future__ import annotations

from typing import Any

from openai import AsyncAzureOpenAI, AsyncOpenAI

from diary.core.config import Settings
from diary.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class OpenAIChatClient:
    """ILlmClient over an openai async client."""

    def __init__(
        self,
        client: Any,
        model: str,
        *,
        temperature: float = 0.7,
        top_p: float = 1.0,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._top_p = top_p

    async def complete(self, messages: list[dict[str, str]]) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            temperature=self._temperature,
            top_p=self._top_p,
            frequency_penalty=0.0,
            presence_penalty=0.0,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


class UnconfiguredLlmClient:
    """ILlmClient used when no LLM credentials are set; every call fails."""

    async def complete(self, messages: list[dict[str, str]]) -> str:
        raise RuntimeError("LLM is not configured (set LLM_API_KEY and LLM_ENDPOINT)")

    async def aclose(self) -> None:
        return None


def build_llm_client(settings: Settings) -> OpenAIChatClient | UnconfiguredLlmClient:
    """Azure: `llm_deployment` is the deployment name. OpenAI: it is the model id."""
    api_key = settings.llm_api_key.get_secret_value()
    if not api_key or (settings.llm_provider == "azure" and not settings.llm_endpoint):
        logger.warning("LLM credentials not set; recommendations will fail until configured")
        return UnconfiguredLlmClient()
    if settings.llm_provider == "azure":
        client = AsyncAzureOpenAI(
            azure_endpoint=settings.llm_endpoint,
            api_key=api_key,
            api_version=settings.llm_api_version,
            timeout=settings.llm_timeout_seconds,
        )
    else:
        client = AsyncOpenAI(
            api_key=api_key,
            base_url=settings.llm_endpoint or None,
            timeout=settings.llm_timeout_seconds,
        )
    return OpenAIChatClient(
        client, settings.llm_deployment, temperature=settings.llm_temperature
    )
