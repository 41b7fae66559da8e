# src/quire/stores/base.py
"""Abstract base class for document storage."""

from abc import ABC, abstractmethod

from quire.models import CandidateChunk, Chunk, CorpusStats, Document


class DocumentStore(ABC):
    """Abstract base class for document and chunk storage.

    A document owns its chunks: they are written together and deleted
    together, and readers never observe a document with part of its chunks.
    """

    @abstractmethod
    def add_document(self, document: Document, chunks: list[Chunk]) -> None:
        """Store a document and all of its chunks in one transaction."""
        ...

    @abstractmethod
    def get_document(self, document_id: str) -> Document | None:
        """Retrieve a document by ID. Returns None if not found."""
        ...

    @abstractmethod
    def list_documents(self) -> list[Document]:
        """List all documents, newest first."""
        ...

    @abstractmethod
    def get_chunks(self, document_id: str) -> list[Chunk]:
        """Get a document's chunks ordered by index."""
        ...

    @abstractmethod
    def embedded_chunks(self) -> list[CandidateChunk]:
        """Get every chunk carrying a non-empty embedding, read as one snapshot."""
        ...

    @abstractmethod
    def chunks_missing_embeddings(self) -> list[Chunk]:
        """Get every chunk stored with the empty embedding sentinel."""
        ...

    @abstractmethod
    def update_embeddings(self, embeddings: dict[str, list[float]]) -> None:
        """Set embeddings for existing chunks, keyed by chunk ID."""
        ...

    @abstractmethod
    def delete_document(self, document_id: str) -> int:
        """Delete a document and its chunks atomically. Returns chunks deleted.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """
        ...

    @abstractmethod
    def stats(self) -> CorpusStats:
        """Count documents, chunks and embedded chunks."""
        ...
