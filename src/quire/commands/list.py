# src/quire/commands/list.py
"""List command - list stored documents.

This module provides the list logic that the CLI uses.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from quire.commands.base import DocumentInfo, ListResult
from quire.config import get_store, load_config, resolve_data_dir

if TYPE_CHECKING:
    from quire.models import Document


def document_info(document: Document) -> DocumentInfo:
    """Convert a stored Document into its display form."""
    return DocumentInfo(
        document_id=document.id,
        filename=document.filename,
        size_bytes=document.size_bytes,
        page_count=document.page_count,
        chunk_count=document.chunk_count,
        uploaded_at=document.uploaded_at.isoformat(timespec="seconds"),
    )


def list_documents(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> ListResult:
    """List all stored documents, newest first.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        ListResult with document information
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return ListResult(success=True, documents=[])

    try:
        store = get_store(effective_data_dir)
        documents = store.list_documents()
    except (OSError, sqlite3.Error) as e:
        return ListResult(success=False, error=f"Failed to access database: {e}")

    return ListResult(success=True, documents=[document_info(d) for d in documents])
