"""LiteLLM provider clients for Quire.

This module contains LiteLLM-based client implementations:
- LiteLLMClient: Chat completion using LiteLLM
- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- ChatModels: Curated chat model constants
- EmbeddingModels: Curated embedding model constants

Usage:
    from quire.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GPT_4O_MINI)
"""

from quire.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from quire.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
