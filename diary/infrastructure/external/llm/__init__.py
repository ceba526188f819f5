"""LLM chat-completion client."""

from diary.infrastructure.external.llm.openai_client import (
    OpenAIChatClient,
    UnconfiguredLlmClient,
    build_llm_client,
)

__all__ = ["OpenAIChatClient", "UnconfiguredLlmClient", "build_llm_client"]
