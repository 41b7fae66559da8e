# tests/commands/test_status.py
"""Tests for the status and backfill commands."""

import os

from quire.commands import backfill, status
from quire.errors import FatalProviderError

TEXT = "Enzymes speed up reactions. They are proteins. Heat can denature them."


class TestStatusCommand:
    def test_missing_data_dir(self, temp_dir):
        missing = os.path.join(temp_dir, "nope")
        result = status.status(data_dir=missing)

        assert result.success is True
        assert result.data_dir == missing
        assert result.total_documents == 0
        assert result.pending_chunks == 0

    def test_counts(self, temp_dir, make_quire, make_embedding_client):
        failing = make_embedding_client(fail_on_call=1, error=FatalProviderError("down"))
        make_quire(text=TEXT, chunk_size=30, chunk_overlap=5).ingest(b"%PDF-1.4", "a.pdf")
        ingested = make_quire(
            text=TEXT, chunk_size=30, chunk_overlap=5, embedding_client=failing
        ).ingest(b"%PDF-1.4", "b.pdf")

        result = status.status(data_dir=temp_dir)

        assert result.success is True
        assert result.total_documents == 2
        assert result.total_chunks == 2 * ingested.chunk_count
        assert result.pending_chunks == ingested.chunk_count


class TestBackfillCommand:
    def test_missing_data_dir(self, temp_dir):
        result = backfill.backfill(data_dir=os.path.join(temp_dir, "nope"))

        assert result.success is True
        assert result.pending == 0
        assert result.remaining == 0

    def test_missing_api_key(self, temp_dir):
        result = backfill.backfill(
            data_dir=temp_dir, config_path=os.path.join(temp_dir, "none.yaml")
        )

        assert result.success is False
        assert "API key" in result.error

    def test_repairs_pending_chunks(
        self, temp_dir, make_quire, make_embedding_client, monkeypatch
    ):
        failing = make_embedding_client(fail_on_call=1, error=FatalProviderError("down"))
        ingested = make_quire(text=TEXT, embedding_client=failing).ingest(b"%PDF-1.4", "a.pdf")
        healthy = make_quire()
        monkeypatch.setenv("QUIRE_API_KEY", "sk-test")
        monkeypatch.setattr(backfill, "create_quire", lambda config: healthy)
        updates = []

        result = backfill.backfill(
            data_dir=temp_dir,
            config_path=os.path.join(temp_dir, "none.yaml"),
            on_progress=updates.append,
        )

        assert result.success is True
        assert result.pending == ingested.chunk_count
        assert result.repaired == ingested.chunk_count
        assert result.remaining == 0
        assert updates
