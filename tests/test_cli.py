# tests/test_cli.py
"""Tests for the CLI."""

import os

import pytest
from typer.testing import CliRunner

from quire.cli import app
from quire.models import Chunk, Document


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def stored_document(store):
    document = Document(filename="notes.pdf", size_bytes=64, page_count=1, chunk_count=2)
    store.add_document(
        document,
        [
            Chunk(
                document_id=document.id,
                index=i,
                content=f"Sentence number {i}.",
                start_offset=i * 20,
                end_offset=i * 20 + 19,
                embedding=[1.0, 0.0] if i == 0 else [],
            )
            for i in range(2)
        ],
    )
    return document


class TestCliBasics:
    def test_help(self, runner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "quire" in result.output.lower()

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("quire ")


class TestConfigCommand:
    def test_config_shows_settings(self, runner, temp_dir):
        result = runner.invoke(app, ["config", "-c", os.path.join(temp_dir, "none.yaml")])
        assert result.exit_code == 0
        assert "chunk_size" in result.output
        assert "min_interval_seconds" in result.output


class TestIngestCommand:
    def test_ingest_help(self, runner):
        result = runner.invoke(app, ["ingest", "--help"])
        assert result.exit_code == 0
        assert "path" in result.output.lower()

    def test_ingest_nonexistent_file(self, runner, temp_dir):
        result = runner.invoke(
            app, ["ingest", os.path.join(temp_dir, "missing.pdf"), "-d", temp_dir, "--plain"]
        )
        assert result.exit_code == 1
        assert "Error: Path not found" in result.output


class TestQueryCommand:
    def test_query_help(self, runner):
        result = runner.invoke(app, ["query", "--help"])
        assert result.exit_code == 0
        assert "question" in result.output.lower()

    def test_query_no_database(self, runner, temp_dir):
        result = runner.invoke(
            app, ["query", "What?", "-d", os.path.join(temp_dir, "nope"), "--plain"]
        )
        assert result.exit_code == 1
        assert "Error: Data directory not found" in result.output


class TestListCommand:
    def test_list_empty(self, runner, temp_dir):
        result = runner.invoke(app, ["list", "-d", os.path.join(temp_dir, "nope"), "--plain"])
        assert result.exit_code == 0
        assert "No documents stored." in result.output

    def test_list_documents(self, runner, temp_dir, stored_document):
        result = runner.invoke(app, ["list", "-d", temp_dir, "--plain"])
        assert result.exit_code == 0
        assert "Documents (1):" in result.output
        assert stored_document.id in result.output
        assert "notes.pdf" in result.output


class TestShowCommand:
    def test_show_document(self, runner, temp_dir, stored_document):
        result = runner.invoke(app, ["show", stored_document.id, "-d", temp_dir, "--plain"])
        assert result.exit_code == 0
        assert "notes.pdf" in result.output
        assert "#1 [20:39] (no embedding)" in result.output

    def test_show_missing(self, runner, temp_dir, store):
        result = runner.invoke(app, ["show", "abc", "-d", temp_dir, "--plain"])
        assert result.exit_code == 1
        assert "Error: Document not found: abc" in result.output


class TestDeleteCommand:
    def test_delete_force(self, runner, temp_dir, stored_document, store):
        result = runner.invoke(
            app, ["delete", stored_document.id, "-d", temp_dir, "--force", "--plain"]
        )
        assert result.exit_code == 0
        assert "Deleted notes.pdf (2 chunks)" in result.output
        assert store.get_document(stored_document.id) is None

    def test_delete_declined(self, runner, temp_dir, stored_document, store):
        result = runner.invoke(
            app, ["delete", stored_document.id, "-d", temp_dir, "--plain"], input="n\n"
        )
        assert result.exit_code == 0
        assert "Delete notes.pdf?" in result.output
        assert "Cancelled." in result.output
        assert store.get_document(stored_document.id) is not None

    def test_delete_missing(self, runner, temp_dir, store):
        result = runner.invoke(app, ["delete", "abc", "-d", temp_dir, "--force", "--plain"])
        assert result.exit_code == 1
        assert "Document not found" in result.output


class TestStatusCommand:
    def test_status_empty(self, runner, temp_dir):
        result = runner.invoke(app, ["status", "-d", os.path.join(temp_dir, "nope"), "--plain"])
        assert result.exit_code == 0
        assert "No documents stored." in result.output

    def test_status_counts(self, runner, temp_dir, stored_document):
        result = runner.invoke(app, ["status", "-d", temp_dir, "--plain"])
        assert result.exit_code == 0
        assert "Documents: 1" in result.output
        assert "Chunks: 2" in result.output
        assert "Pending chunks: 1" in result.output


class TestBackfillCommand:
    def test_nothing_to_backfill(self, runner, temp_dir):
        result = runner.invoke(app, ["backfill", "-d", os.path.join(temp_dir, "nope"), "--plain"])
        assert result.exit_code == 0
        assert "Nothing to backfill." in result.output
