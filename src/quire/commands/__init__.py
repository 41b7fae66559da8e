# src/quire/commands/__init__.py
"""UI-agnostic command layer for Quire.

This module provides command functions that the CLI calls.
Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from quire.commands import ingest, query, status

    # Ingest files
    result = ingest.ingest("./papers", on_progress=my_callback)

    # Ask a question
    result = query.query("What is photosynthesis?")

    # Get database status
    result = status.status()
"""

from quire.commands import backfill, config_cmd, delete, ingest, query, show, status
from quire.commands import list as list_cmd
from quire.commands.base import (
    BackfillResult,
    ChunkInfo,
    CommandResult,
    CommandStage,
    ConfigResult,
    ConfirmCallback,
    ConfirmRequest,
    DeleteResult,
    DocumentInfo,
    FileIngestResult,
    IngestResult,
    ListResult,
    ProgressCallback,
    ProgressUpdate,
    QueryResult,
    SearchResult,
    SettingInfo,
    ShowResult,
    StatusResult,
)

__all__ = [
    # Base types
    "CommandStage",
    "ProgressUpdate",
    "ProgressCallback",
    "ConfirmRequest",
    "ConfirmCallback",
    "CommandResult",
    # Result types
    "IngestResult",
    "FileIngestResult",
    "QueryResult",
    "SearchResult",
    "ListResult",
    "DocumentInfo",
    "ShowResult",
    "ChunkInfo",
    "DeleteResult",
    "StatusResult",
    "BackfillResult",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "ingest",
    "query",
    "list_cmd",
    "show",
    "delete",
    "status",
    "backfill",
    "config_cmd",
]
