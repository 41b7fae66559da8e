# src/quire/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod

from quire.errors import FatalProviderError


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_texts; embed_text defaults to a batch of one.
    Callers that drive batching themselves use embed_batch, which sends its
    texts as a single request where the embedder supports it.
    """

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts, preserving order."""
        ...

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self.embed_texts([text])[0]

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed one caller-sized batch and check that every text got a vector."""
        if not texts:
            return []
        vectors = self.embed_texts(texts)
        check_vector_count(texts, vectors)
        return vectors


def check_vector_count(texts: list[str], vectors: list[list[float]]) -> None:
    """Raise FatalProviderError unless there is exactly one vector per text."""
    if len(vectors) != len(texts):
        raise FatalProviderError(
            f"Embedding count mismatch: {len(texts)} texts, {len(vectors)} embeddings"
        )
