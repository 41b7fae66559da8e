# src/quire/stores/sqlite.py
"""SQLite document store implementation."""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from quire.errors import DocumentNotFoundError
from quire.models import CandidateChunk, Chunk, CorpusStats, Document
from quire.stores.base import DocumentStore

logger = logging.getLogger(__name__)

EMPTY_EMBEDDING = "[]"

_CHUNK_COLUMNS = "id, document_id, chunk_index, content, start_offset, end_offset, embedding"
_DOCUMENT_COLUMNS = "id, filename, size_bytes, page_count, chunk_count, uploaded_at"


def _row_to_document(row: tuple) -> Document:
    return Document(
        id=row[0],
        filename=row[1],
        size_bytes=row[2],
        page_count=row[3],
        chunk_count=row[4],
        uploaded_at=datetime.fromisoformat(row[5]),
    )


def _row_to_chunk(row: tuple) -> Chunk:
    return Chunk(
        id=row[0],
        document_id=row[1],
        index=row[2],
        content=row[3],
        start_offset=row[4],
        end_offset=row[5],
        embedding=json.loads(row[6]),
    )


class SQLiteDocumentStore(DocumentStore):
    """SQLite-based document store.

    Connections are opened per operation in autocommit mode; writes that
    touch several rows run inside an explicit BEGIN IMMEDIATE transaction.
    Embeddings are stored as JSON arrays, with "[]" for chunks that have
    not been embedded.
    """

    def __init__(self, db_path: str, timeout: float = 30.0) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        self.timeout = timeout
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout, isolation_level=None)
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
        finally:
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with self._connect() as conn:
            conn.execute("PRAGMA journal_mode = WAL")
            conn.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    id TEXT PRIMARY KEY,
                    filename TEXT NOT NULL,
                    size_bytes INTEGER NOT NULL,
                    page_count INTEGER NOT NULL,
                    chunk_count INTEGER NOT NULL,
                    uploaded_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS chunks (
                    id TEXT PRIMARY KEY,
                    document_id TEXT NOT NULL REFERENCES documents(id),
                    chunk_index INTEGER NOT NULL,
                    content TEXT NOT NULL,
                    start_offset INTEGER NOT NULL,
                    end_offset INTEGER NOT NULL,
                    embedding TEXT NOT NULL DEFAULT '[]',
                    UNIQUE (document_id, chunk_index)
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_chunks_document ON chunks(document_id, chunk_index)"
            )

    def add_document(self, document: Document, chunks: list[Chunk]) -> None:
        """Store a document and its chunks in one transaction."""
        with self._transaction() as conn:
            conn.execute(
                f"INSERT INTO documents ({_DOCUMENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                (
                    document.id,
                    document.filename,
                    document.size_bytes,
                    document.page_count,
                    document.chunk_count,
                    document.uploaded_at.isoformat(),
                ),
            )
            conn.executemany(
                f"INSERT INTO chunks ({_CHUNK_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                [
                    (
                        c.id,
                        c.document_id,
                        c.index,
                        c.content,
                        c.start_offset,
                        c.end_offset,
                        json.dumps(c.embedding),
                    )
                    for c in chunks
                ],
            )
        logger.debug("Stored document %s with %d chunks", document.id, len(chunks))

    def get_document(self, document_id: str) -> Document | None:
        """Retrieve a document by ID."""
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents WHERE id = ?",
                (document_id,),
            ).fetchone()
        return _row_to_document(row) if row is not None else None

    def list_documents(self) -> list[Document]:
        """List all documents, newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_DOCUMENT_COLUMNS} FROM documents "
                "ORDER BY uploaded_at DESC, rowid DESC"
            ).fetchall()
        return [_row_to_document(row) for row in rows]

    def get_chunks(self, document_id: str) -> list[Chunk]:
        """Get a document's chunks ordered by index."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_CHUNK_COLUMNS} FROM chunks WHERE document_id = ? ORDER BY chunk_index",
                (document_id,),
            ).fetchall()
        return [_row_to_chunk(row) for row in rows]

    def embedded_chunks(self) -> list[CandidateChunk]:
        """Get every embedded chunk with its document name.

        A single SELECT, so a concurrent delete is seen entirely or not at all.
        """
        columns = ", ".join(f"c.{col.strip()}" for col in _CHUNK_COLUMNS.split(","))
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {columns}, d.filename FROM chunks c "
                "JOIN documents d ON d.id = c.document_id "
                "WHERE c.embedding != ? "
                "ORDER BY d.uploaded_at, d.rowid, c.chunk_index",
                (EMPTY_EMBEDDING,),
            ).fetchall()
        return [CandidateChunk(chunk=_row_to_chunk(row[:7]), document_name=row[7]) for row in rows]

    def chunks_missing_embeddings(self) -> list[Chunk]:
        """Get every chunk stored with the empty embedding sentinel."""
        with self._connect() as conn:
            rows = conn.execute(
                f"SELECT {_CHUNK_COLUMNS} FROM chunks WHERE embedding = ? "
                "ORDER BY document_id, chunk_index",
                (EMPTY_EMBEDDING,),
            ).fetchall()
        return [_row_to_chunk(row) for row in rows]

    def update_embeddings(self, embeddings: dict[str, list[float]]) -> None:
        """Set embeddings for existing chunks."""
        if not embeddings:
            return
        with self._transaction() as conn:
            conn.executemany(
                "UPDATE chunks SET embedding = ? WHERE id = ?",
                [(json.dumps(vector), chunk_id) for chunk_id, vector in embeddings.items()],
            )

    def delete_document(self, document_id: str) -> int:
        """Delete a document and its chunks: chunks first, then the document."""
        with self._transaction() as conn:
            exists = conn.execute(
                "SELECT 1 FROM documents WHERE id = ?", (document_id,)
            ).fetchone()
            if exists is None:
                raise DocumentNotFoundError(document_id)
            deleted = conn.execute(
                "DELETE FROM chunks WHERE document_id = ?", (document_id,)
            ).rowcount
            conn.execute("DELETE FROM documents WHERE id = ?", (document_id,))
        logger.info("Deleted document %s (%d chunks)", document_id, deleted)
        return deleted

    def stats(self) -> CorpusStats:
        """Count documents, chunks and embedded chunks."""
        with self._connect() as conn:
            total_documents = conn.execute("SELECT COUNT(id) FROM documents").fetchone()[0]
            total_chunks, embedded = conn.execute(
                "SELECT COUNT(id), COALESCE(SUM(embedding != ?), 0) FROM chunks",
                (EMPTY_EMBEDDING,),
            ).fetchone()
        return CorpusStats(
            total_documents=total_documents,
            total_chunks=total_chunks,
            embedded_chunks=embedded,
        )
