"""Ingestion pipeline for Quire."""

from __future__ import annotations

import logging
from collections.abc import Callable

from quire.chunker import Chunker, TextSpan
from quire.embedder import Embedder, batched
from quire.errors import FatalProviderError, ProviderError, ProviderRetriesExhaustedError
from quire.loaders import TextExtractor, validate_upload
from quire.models import Chunk, Document, IngestResult
from quire.stores import DocumentStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int, str], None]
"""Callback for ingestion progress updates.

Args:
    event: Event type: "extracting", "chunking", "embedding" or "storing"
    current: Current progress count (0 to total)
    total: Total items to process
    message: Human-readable status message

Example:
    def on_progress(event: str, current: int, total: int, message: str) -> None:
        print(f"[{event}] {current}/{total}: {message}")
"""


def _no_progress(event: str, current: int, total: int, message: str) -> None:
    pass


class Ingestor:
    """Orchestrates the ingestion pipeline.

    Pipeline:
    1. Validate the upload (no side effects on failure)
    2. Extract normalized text from the document bytes
    3. Chunk the text
    4. Embed chunks batch by batch
    5. Store the document and all chunks in one transaction

    Embedding failures do not fail the ingestion. When a batch exhausts its
    retries or hits a fatal provider error, that batch and every later chunk
    are stored with an empty embedding, so the stored chunk count always
    matches the chunker output. Those chunks are skipped by retrieval until
    backfill() repairs them.
    """

    def __init__(
        self,
        store: DocumentStore,
        extractor: TextExtractor,
        chunker: Chunker,
        embedder: Embedder,
        batch_size: int = 5,
    ) -> None:
        """Initialize the ingestor with all required components.

        Args:
            store: Store for documents and chunks
            extractor: Turns document bytes into normalized text
            chunker: Splits text into chunks
            embedder: Embeds chunk texts
            batch_size: Chunks per embedding request
        """
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.store = store
        self.extractor = extractor
        self.chunker = chunker
        self.embedder = embedder
        self.batch_size = batch_size

    def ingest(
        self,
        data: bytes,
        filename: str,
        on_progress: ProgressCallback | None = None,
    ) -> IngestResult:
        """Ingest one document.

        Args:
            data: Raw document bytes
            filename: Original file name (used for validation and display)
            on_progress: Optional callback for progress updates

        Returns:
            IngestResult with the new document id and chunk counts

        Raises:
            ValidationError: If the upload is empty or not a PDF
            ExtractionError: If the document cannot be read
        """
        progress = on_progress or _no_progress

        validate_upload(data, filename)

        progress("extracting", 0, 1, f"Extracting text from {filename}...")
        extracted = self.extractor.extract(data)
        progress("extracting", 1, 1, f"Extracted {extracted.page_count} pages")

        progress("chunking", 0, 1, "Chunking text...")
        spans = self.chunker.chunk(extracted.text)
        progress("chunking", 1, 1, f"Created {len(spans)} chunks")

        document = Document(
            filename=filename,
            size_bytes=len(data),
            page_count=extracted.page_count,
            chunk_count=len(spans),
        )
        vectors = self._embed_spans(spans, filename, progress)
        chunks = [
            Chunk(
                document_id=document.id,
                index=span.index,
                content=span.content,
                start_offset=span.start,
                end_offset=span.end,
                embedding=vector,
            )
            for span, vector in zip(spans, vectors, strict=True)
        ]

        progress("storing", 0, 1, f"Storing {len(chunks)} chunks...")
        self.store.add_document(document, chunks)
        progress("storing", 1, 1, "Storing complete")

        embedded = sum(1 for c in chunks if c.has_embedding)
        logger.info(
            "Ingested %s as %s: %d chunks, %d embedded",
            filename,
            document.id,
            len(chunks),
            embedded,
        )
        return IngestResult(
            document_id=document.id,
            filename=filename,
            chunk_count=len(chunks),
            embedded_count=embedded,
            failed_count=len(chunks) - embedded,
            page_count=extracted.page_count,
        )

    def _embed_spans(
        self,
        spans: list[TextSpan],
        filename: str,
        progress: ProgressCallback,
    ) -> list[list[float]]:
        """Embed span texts batch by batch, padding with empty vectors on failure."""
        texts = [span.content for span in spans]
        vectors: list[list[float]] = []

        progress("embedding", 0, len(texts), "Embedding chunks...")
        for batch in batched(texts, self.batch_size):
            try:
                batch_vectors = self.embedder.embed_batch(batch)
            except (ProviderRetriesExhaustedError, FatalProviderError) as e:
                remaining = len(texts) - len(vectors)
                logger.warning(
                    "Embedding stopped for %s at chunk %d; storing %d chunks without "
                    "embeddings (%s)",
                    filename,
                    len(vectors),
                    remaining,
                    e,
                )
                vectors.extend([] for _ in range(remaining))
                break
            vectors.extend(batch_vectors)
            progress("embedding", len(vectors), len(texts), f"Embedded {len(vectors)} chunks")

        return vectors

    def backfill(self, on_progress: ProgressCallback | None = None) -> int:
        """Embed chunks that were stored without an embedding.

        Stops at the first batch that fails; chunks embedded before the failure
        are kept.

        Returns:
            Number of chunks that received an embedding
        """
        progress = on_progress or _no_progress
        pending = self.store.chunks_missing_embeddings()
        if not pending:
            return 0

        repaired = 0
        progress("embedding", 0, len(pending), f"Backfilling {len(pending)} chunks...")
        for start in range(0, len(pending), self.batch_size):
            batch = pending[start : start + self.batch_size]
            try:
                vectors = self.embedder.embed_batch([c.content for c in batch])
            except ProviderError as e:
                logger.warning("Backfill stopped after %d chunks: %s", repaired, e)
                break
            self.store.update_embeddings(
                {chunk.id: vector for chunk, vector in zip(batch, vectors, strict=True)}
            )
            repaired += len(batch)
            progress("embedding", repaired, len(pending), f"Backfilled {repaired} chunks")

        logger.info("Backfilled %d of %d chunks", repaired, len(pending))
        return repaired
