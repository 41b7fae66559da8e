# tests/models/test_chunk.py
"""Tests for the Chunk and Document models."""

from datetime import timezone

from quire.models import Chunk, Document


class TestChunk:
    def test_generates_id(self):
        a = Chunk(document_id="d", index=0, content="x", start_offset=0, end_offset=1)
        b = Chunk(document_id="d", index=0, content="x", start_offset=0, end_offset=1)
        assert a.id != b.id

    def test_empty_embedding_is_pending(self):
        chunk = Chunk(document_id="d", index=0, content="x", start_offset=0, end_offset=1)
        assert chunk.embedding == []
        assert chunk.has_embedding is False

    def test_has_embedding(self):
        chunk = Chunk(
            document_id="d",
            index=0,
            content="x",
            start_offset=0,
            end_offset=1,
            embedding=[0.5, 0.5],
        )
        assert chunk.has_embedding is True


class TestDocument:
    def test_defaults(self):
        document = Document(filename="a.pdf")
        assert document.id
        assert document.chunk_count == 0
        assert document.uploaded_at.tzinfo == timezone.utc
