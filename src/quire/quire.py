# src/quire/quire.py
"""Central entry point for Quire."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from quire.errors import DocumentNotFoundError
from quire.pacing import PacingGate
from quire.settings import Settings

if TYPE_CHECKING:
    from quire.chunker import Chunker
    from quire.configuration import ProviderConfig, StorageConfig
    from quire.embedder import Embedder
    from quire.ingestor import Ingestor, ProgressCallback
    from quire.loaders import TextExtractor
    from quire.models import Answer, CorpusStats, Document, DocumentDetail, IngestResult, Source
    from quire.providers import EmbeddingClient, LLMClient
    from quire.retrieval import Ranker
    from quire.retriever import QueryPipeline
    from quire.stores import DocumentStore


class Quire:
    """Question answering over uploaded documents.

    Quire bundles the store, the provider clients and the pipeline
    components, and exposes the document and question operations.

    There are two ways to create a Quire instance:

    1. With configuration objects (developer-friendly):

        from quire import Quire, OpenAIProvider, LocalStorage

        quire = Quire(
            provider=OpenAIProvider(api_key="sk-..."),
            storage=LocalStorage("./data"),
        )

    2. With explicit components (tests, custom backends):

        quire = Quire(
            store=SQLiteDocumentStore("./data/quire.db"),
            embedding_client=my_embedding_client,
            llm_client=my_llm_client,
        )

    One PacingGate is created per instance and handed to both clients built
    from the provider, so all their calls share a single minimum interval.
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig | None = None,
        storage: StorageConfig | None = None,
        store: DocumentStore | None = None,
        embedding_client: EmbeddingClient | None = None,
        llm_client: LLMClient | None = None,
        settings: Settings | None = None,
        gate: PacingGate | None = None,
        extractor: TextExtractor | None = None,
        chunker: Chunker | None = None,
        ranker: Ranker | None = None,
    ) -> None:
        """Create a Quire instance.

        Args:
            provider: Provider configuration (builds both remote clients).
                      Example: OpenAIProvider(api_key="sk-...")
            storage: Storage configuration. Mutually exclusive with store.
                     Example: LocalStorage("./data")
            store: Explicit document store.
            embedding_client: Explicit embedding client (overrides provider).
            llm_client: Explicit chat client (overrides provider).
            settings: Behavioral settings (chunk size, pacing, retries, k, ...)
            gate: Pacing gate to share. If None, one is created from settings.
            extractor: Text extractor. Defaults to PyPDFExtractor.
            chunker: Chunker. Defaults to SentenceWindowChunker from settings.
            ranker: Top-K ranker. Defaults to BruteForceRanker.

        Raises:
            ValueError: If storage and store are both given or both missing,
                        or if a client can be neither taken nor built.
        """
        self._settings = settings if settings is not None else Settings()
        self.gate = gate or PacingGate(self._settings.min_interval_seconds)

        if storage is not None and store is not None:
            raise ValueError("Cannot mix 'storage' configuration with an explicit 'store'")
        if storage is not None:
            self.store = storage.build_store()
        elif store is not None:
            self.store = store
        else:
            raise ValueError("Must provide either 'storage' configuration or an explicit 'store'")

        if embedding_client is None or llm_client is None:
            if provider is None:
                raise ValueError(
                    "Must provide a 'provider' or both 'embedding_client' and 'llm_client'"
                )
            if embedding_client is None:
                embedding_client = provider.build_embedding_client(self._settings, self.gate)
            if llm_client is None:
                llm_client = provider.build_llm_client(self._settings, self.gate)

        from quire.chunker import SentenceWindowChunker
        from quire.embedder import ClientEmbedder
        from quire.loaders import PyPDFExtractor
        from quire.retrieval import BruteForceRanker

        self.llm_client = llm_client
        self.embedder: Embedder = ClientEmbedder(
            embedding_client, batch_size=self._settings.embed_batch_size
        )
        self.extractor = extractor or PyPDFExtractor()
        self.chunker = chunker or SentenceWindowChunker(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
        )
        self.ranker = ranker or BruteForceRanker()

    @property
    def settings(self) -> Settings:
        return self._settings

    def ingestor(self) -> Ingestor:
        """Create an Ingestor using this instance's components."""
        from quire.ingestor import Ingestor

        return Ingestor(
            store=self.store,
            extractor=self.extractor,
            chunker=self.chunker,
            embedder=self.embedder,
            batch_size=self._settings.embed_batch_size,
        )

    def query_pipeline(self, *, default_k: int | None = None) -> QueryPipeline:
        """Create a QueryPipeline using this instance's components.

        Args:
            default_k: Number of chunks to retrieve. If None, uses settings default.
        """
        from quire.retriever import QueryPipeline

        return QueryPipeline(
            store=self.store,
            embedder=self.embedder,
            llm_client=self.llm_client,
            ranker=self.ranker,
            default_k=default_k if default_k is not None else self._settings.default_k,
            system_prompt=self._settings.effective_system_prompt,
            temperature=self._settings.chat_temperature,
        )

    def ingest(
        self,
        data: bytes,
        filename: str,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest a document from its bytes.

        Raises:
            ValidationError: If the upload is empty or not a PDF
            ExtractionError: If the PDF cannot be read
        """
        return self.ingestor().ingest(data, filename, on_progress=on_progress)

    def ingest_file(
        self,
        filepath: str | Path,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest a document from disk.

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the file is empty or not a PDF
            ExtractionError: If the PDF cannot be read
        """
        file_path = Path(filepath)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        return self.ingest(file_path.read_bytes(), file_path.name, on_progress=on_progress)

    def list_documents(self) -> list[Document]:
        """List documents, newest first."""
        return self.store.list_documents()

    def get_document(self, document_id: str) -> DocumentDetail:
        """Get a document with its ordered chunks.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        from quire.models import DocumentDetail

        document = self.store.get_document(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return DocumentDetail(document=document, chunks=self.store.get_chunks(document_id))

    def delete_document(self, document_id: str) -> int:
        """Delete a document and all its chunks. Returns the number of chunks removed.

        Raises:
            DocumentNotFoundError: If no document has this id
        """
        return self.store.delete_document(document_id)

    def answer_question(self, question: str, top_k: int | None = None) -> Answer:
        """Answer a question from the stored documents.

        Raises:
            ValidationError: If the question is blank or top_k is below 1
            AnswerGenerationError: If the providers fail
        """
        return self.query_pipeline().answer(question, top_k)

    def search(self, question: str, top_k: int | None = None) -> list[Source]:
        """Retrieve the most relevant chunks without generating an answer."""
        return self.query_pipeline().search(question, top_k)

    def stats(self) -> CorpusStats:
        """Count documents and chunks."""
        return self.store.stats()

    def backfill_embeddings(self, *, on_progress: ProgressCallback | None = None) -> int:
        """Embed chunks stored without an embedding. Returns the number repaired."""
        return self.ingestor().backfill(on_progress=on_progress)

