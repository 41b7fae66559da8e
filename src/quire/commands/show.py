# src/quire/commands/show.py
"""Show command - display one document and its chunks."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from quire.commands.base import ChunkInfo, ShowResult
from quire.commands.list import document_info
from quire.config import get_store, load_config, resolve_data_dir


def show(
    document_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ShowResult:
    """Get a document with its chunks in order.

    Args:
        document_id: Id of the document to show
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ShowResult with the document and its chunks
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return ShowResult(success=False, error="No database found.")

    try:
        store = get_store(effective_data_dir)
        document = store.get_document(document_id)
        chunks = store.get_chunks(document_id) if document is not None else []
    except (OSError, sqlite3.Error) as e:
        return ShowResult(success=False, error=f"Failed to access database: {e}")

    if document is None:
        return ShowResult(success=False, error=f"Document not found: {document_id}")

    return ShowResult(
        success=True,
        document=document_info(document),
        chunks=[
            ChunkInfo(
                index=c.index,
                content=c.content,
                start_offset=c.start_offset,
                end_offset=c.end_offset,
                embedded=c.has_embedding,
            )
            for c in chunks
        ],
    )
