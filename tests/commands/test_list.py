# tests/commands/test_list.py
"""Tests for the list and show commands."""

import os

from quire.commands import list as list_cmd
from quire.commands import show
from quire.models import Chunk, Document


def add_document(store, filename="cells.pdf"):
    document = Document(filename=filename, size_bytes=2048, page_count=2, chunk_count=2)
    chunks = [
        Chunk(
            document_id=document.id,
            index=0,
            content="Cells divide.",
            start_offset=0,
            end_offset=13,
            embedding=[0.1, 0.2],
        ),
        Chunk(
            document_id=document.id,
            index=1,
            content="Then they grow.",
            start_offset=14,
            end_offset=29,
        ),
    ]
    store.add_document(document, chunks)
    return document


class TestListCommand:
    def test_missing_data_dir(self, temp_dir):
        result = list_cmd.list_documents(data_dir=os.path.join(temp_dir, "nope"))

        assert result.success is True
        assert result.documents == []

    def test_lists_documents(self, temp_dir, store):
        document = add_document(store)

        result = list_cmd.list_documents(data_dir=temp_dir)

        assert result.success is True
        assert len(result.documents) == 1
        info = result.documents[0]
        assert info.document_id == document.id
        assert info.filename == "cells.pdf"
        assert info.size_bytes == 2048
        assert info.page_count == 2
        assert info.chunk_count == 2
        assert info.uploaded_at == document.uploaded_at.isoformat(timespec="seconds")


class TestShowCommand:
    def test_missing_data_dir(self, temp_dir):
        result = show.show("abc", data_dir=os.path.join(temp_dir, "nope"))

        assert result.success is False
        assert result.error == "No database found."

    def test_unknown_document(self, temp_dir, store):
        result = show.show("abc", data_dir=temp_dir)

        assert result.success is False
        assert result.error == "Document not found: abc"

    def test_shows_chunks_in_order(self, temp_dir, store):
        document = add_document(store)

        result = show.show(document.id, data_dir=temp_dir)

        assert result.success is True
        assert result.document.filename == "cells.pdf"
        assert [c.index for c in result.chunks] == [0, 1]
        assert [c.embedded for c in result.chunks] == [True, False]
        assert (result.chunks[1].start_offset, result.chunks[1].end_offset) == (14, 29)
