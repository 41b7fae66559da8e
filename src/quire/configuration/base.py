# src/quire/configuration/base.py
"""Protocol definitions for configuration objects.

These protocols define the interfaces for provider and storage configurations.
Implementations use @dataclass(frozen=True) for immutability.

Protocols here vs ABCs in stores/ and providers/: configuration objects are
small factories that vary by vendor, so any frozen dataclass with the right
methods satisfies the interface without inheritance. The components they
build (stores, clients) are ABCs with explicit inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from quire.pacing import PacingGate
    from quire.providers import EmbeddingClient, LLMClient
    from quire.settings import Settings
    from quire.stores import DocumentStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the two remote clients. Both receive the
    same pacing gate so their calls are paced together.

    Example implementation:
        @dataclass(frozen=True)
        class MyProvider:
            chat: str
            embedding: str

            def build_embedding_client(self, settings, gate) -> EmbeddingClient: ...
            def build_llm_client(self, settings, gate) -> LLMClient: ...
    """

    def build_embedding_client(self, settings: Settings, gate: PacingGate) -> EmbeddingClient:
        """Build a client for the embeddings endpoint."""
        ...

    def build_llm_client(self, settings: Settings, gate: PacingGate) -> LLMClient:
        """Build a client for chat completions."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_store(self) -> DocumentStore: ...
    """

    def build_store(self) -> DocumentStore:
        """Build the document store."""
        ...
