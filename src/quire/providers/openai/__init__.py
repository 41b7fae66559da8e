"""OpenAI-compatible REST clients for Quire.

This module contains requests-based client implementations:
- OpenAIEmbeddingClient: POST /embeddings
- OpenAIChatClient: POST /chat/completions
- ChatModels / EmbeddingModels: model constants

Usage:
    from quire.pacing import PacingGate
    from quire.providers.openai import OpenAIChatClient, OpenAIEmbeddingClient

    gate = PacingGate(0.8)
    embeddings = OpenAIEmbeddingClient(api_key="sk-...", gate=gate)
    chat = OpenAIChatClient(api_key="sk-...", gate=gate)
"""

from quire.providers.openai.client import (
    OpenAIChatClient,
    OpenAIEmbeddingClient,
    OpenAIHTTPClient,
    parse_chat_response,
    parse_embedding_response,
)
from quire.providers.openai.models import DEFAULT_BASE_URL, ChatModels, EmbeddingModels

__all__ = [
    "DEFAULT_BASE_URL",
    "ChatModels",
    "EmbeddingModels",
    "OpenAIHTTPClient",
    "OpenAIEmbeddingClient",
    "OpenAIChatClient",
    "parse_chat_response",
    "parse_embedding_response",
]
