"""Provider implementations for Quire.

This module contains chat and embedding provider abstractions:
- LLMClient: Abstract base class for chat completion providers
- EmbeddingClient: Abstract base class for embedding providers
- RetryPolicy / backoff_delay / call_with_retry: shared retry discipline
- OpenAI-compatible REST clients (quire.providers.openai)
- LiteLLM clients (quire.providers.litellm)

Usage:
    from quire.providers import LLMClient, EmbeddingClient
    from quire.providers.openai import OpenAIEmbeddingClient
    from quire.providers.litellm import LiteLLMClient, ChatModels
"""

from quire.providers.base import EmbeddingClient, LLMClient
from quire.providers.retry import RetryPolicy, backoff_delay, call_with_retry

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Retry discipline
    "RetryPolicy",
    "backoff_delay",
    "call_with_retry",
]
