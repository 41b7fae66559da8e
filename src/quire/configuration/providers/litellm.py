# src/quire/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quire.pacing import PacingGate
    from quire.providers import EmbeddingClient, LLMClient
    from quire.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for chat and embedding calls.

    LiteLLM provides a unified interface to 100+ LLM providers including
    OpenAI, Anthropic, Azure, Bedrock, Gemini and local Ollama models.

    Args:
        llm: LiteLLM model identifier for answering questions.
             Examples: "openai/gpt-4o-mini", "anthropic/claude-haiku-4-5-20251001"
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "openai/text-embedding-3-small", "ollama/nomic-embed-text"
        llm_api_key: Optional API key for the chat model.
        embedding_api_key: Optional API key for the embedding model.
        api_base: Optional API root override for both models.

    Example:
        provider = LiteLLMProvider(
            llm="openai/gpt-4o-mini",
            embedding="openai/text-embedding-3-small",
        )
    """

    llm: str
    embedding: str
    llm_api_key: str | None = field(default=None, repr=False)
    embedding_api_key: str | None = field(default=None, repr=False)
    api_base: str | None = None

    def build_embedding_client(self, settings: Settings, gate: PacingGate) -> EmbeddingClient:
        """Build a LiteLLMEmbeddingClient sharing the given gate."""
        from quire.providers.litellm import LiteLLMEmbeddingClient
        from quire.providers.retry import RetryPolicy

        return LiteLLMEmbeddingClient(
            model=self.embedding,
            api_key=self.embedding_api_key,
            api_base=self.api_base,
            gate=gate,
            retry_policy=RetryPolicy.from_settings(settings),
            timeout=settings.request_timeout,
        )

    def build_llm_client(self, settings: Settings, gate: PacingGate) -> LLMClient:
        """Build a LiteLLMClient sharing the given gate."""
        from quire.providers.litellm import LiteLLMClient
        from quire.providers.retry import RetryPolicy

        return LiteLLMClient(
            model=self.llm,
            temperature=settings.chat_temperature,
            api_key=self.llm_api_key,
            api_base=self.api_base,
            gate=gate,
            retry_policy=RetryPolicy.from_settings(settings),
            timeout=settings.request_timeout,
        )
