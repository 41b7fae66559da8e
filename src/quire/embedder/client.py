# src/quire/embedder/client.py
"""Client-based embedder implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from quire.embedder.base import Embedder, check_vector_count
from quire.providers.base import EmbeddingClient

logger = logging.getLogger(__name__)


def batched(items: list[str], size: int) -> Iterator[list[str]]:
    """Yield consecutive slices of at most size items."""
    for start in range(0, len(items), size):
        yield items[start : start + size]


class ClientEmbedder(Embedder):
    """Embedder that sends texts to an EmbeddingClient in fixed-size batches.

    Batches are sent one after another; the client paces and retries each
    call. The first batch that fails stops the whole call, so callers that
    need partial results (like the ingestion pipeline) should drive
    embed_batch() themselves.

    Example:
        from quire.providers.openai import OpenAIEmbeddingClient
        from quire.embedder import ClientEmbedder

        client = OpenAIEmbeddingClient(api_key="sk-...")
        embedder = ClientEmbedder(embedding_client=client, batch_size=5)
    """

    def __init__(self, embedding_client: EmbeddingClient, batch_size: int = 5) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            batch_size: Maximum texts per provider call
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._client = embedding_client
        self.batch_size = batch_size

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in one provider call, ignoring batch_size."""
        if not texts:
            return []
        vectors = self._client.embed(texts)
        check_vector_count(texts, vectors)
        return vectors

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        vectors: list[list[float]] = []
        for batch in batched(texts, self.batch_size):
            vectors.extend(self.embed_batch(batch))
        logger.debug("Embedded %d texts in batches of %d", len(texts), self.batch_size)
        return vectors
