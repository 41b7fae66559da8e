# src/quire/configuration/providers/openai.py
"""OpenAI-compatible REST provider configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from quire.providers.openai.models import DEFAULT_BASE_URL, ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from quire.pacing import PacingGate
    from quire.providers import EmbeddingClient, LLMClient
    from quire.settings import Settings


@dataclass(frozen=True)
class OpenAIProvider:
    """Provider configuration for any OpenAI-compatible HTTP API.

    Calls POST {base_url}/embeddings and POST {base_url}/chat/completions
    with bearer authentication.

    Args:
        chat: Chat model name. Example: "gpt-4o-mini"
        embedding: Embedding model name. Example: "text-embedding-3-small"
        api_key: Bearer credential.
        base_url: API root. Point at a compatible server to use it instead
                  of api.openai.com.

    Example:
        provider = OpenAIProvider(api_key=os.environ["OPENAI_API_KEY"])
    """

    chat: str = ChatModels.GPT_4O_MINI
    embedding: str = EmbeddingModels.TEXT_3_SMALL
    api_key: str | None = field(default=None, repr=False)
    base_url: str = DEFAULT_BASE_URL

    def build_embedding_client(self, settings: Settings, gate: PacingGate) -> EmbeddingClient:
        """Build an OpenAIEmbeddingClient sharing the given gate."""
        from quire.providers.openai import OpenAIEmbeddingClient
        from quire.providers.retry import RetryPolicy

        return OpenAIEmbeddingClient(
            model=self.embedding,
            api_key=self.api_key,
            base_url=self.base_url,
            gate=gate,
            retry_policy=RetryPolicy.from_settings(settings),
            timeout=settings.request_timeout,
        )

    def build_llm_client(self, settings: Settings, gate: PacingGate) -> LLMClient:
        """Build an OpenAIChatClient sharing the given gate."""
        from quire.providers.openai import OpenAIChatClient
        from quire.providers.retry import RetryPolicy

        return OpenAIChatClient(
            model=self.chat,
            temperature=settings.chat_temperature,
            api_key=self.api_key,
            base_url=self.base_url,
            gate=gate,
            retry_policy=RetryPolicy.from_settings(settings),
            timeout=settings.request_timeout,
        )
