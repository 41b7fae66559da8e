# src/quire/commands/delete.py
"""Delete command - remove a document and its chunks.

This module provides the delete logic that the CLI uses. It takes a
callback for interactive confirmation, so each UI can confirm its own way.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from quire.commands.base import ConfirmCallback, ConfirmRequest, DeleteResult
from quire.config import get_store, load_config, resolve_data_dir
from quire.errors import DocumentNotFoundError


def delete(
    document_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_confirm: ConfirmCallback | None = None,
) -> DeleteResult:
    """Delete a document and all its chunks.

    Args:
        document_id: Id of the document to delete
        data_dir: Override data directory
        config_path: Override config file path
        on_confirm: Optional callback for confirmation. If provided, it will be
            called with details about what will be deleted. Return True to
            proceed, False to cancel. If None, deletion proceeds without
            confirmation (equivalent to --force).

    Returns:
        DeleteResult with deletion statistics, or cancelled result
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return DeleteResult(success=False, document_id=document_id, error="No database found.")

    try:
        store = get_store(effective_data_dir)
        document = store.get_document(document_id)
    except (OSError, sqlite3.Error) as e:
        return DeleteResult(
            success=False,
            document_id=document_id,
            error=f"Failed to access database: {e}",
        )

    if document is None:
        return DeleteResult(
            success=False,
            document_id=document_id,
            error=f"Document not found: {document_id}",
        )

    if on_confirm is not None:
        confirm_request = ConfirmRequest(
            message=f"Delete {document.filename}?",
            details=f"This will remove {document.chunk_count} chunks from the database.",
        )
        if not on_confirm(confirm_request):
            return DeleteResult(
                success=False,
                document_id=document_id,
                filename=document.filename,
                cancelled=True,
                error="Cancelled.",
            )

    try:
        chunks_deleted = store.delete_document(document_id)
    except DocumentNotFoundError as e:
        # Removed by someone else between the lookup and the delete
        return DeleteResult(success=False, document_id=document_id, error=str(e))
    except sqlite3.Error as e:
        return DeleteResult(success=False, document_id=document_id, error=f"Delete failed: {e}")

    return DeleteResult(
        success=True,
        document_id=document_id,
        filename=document.filename,
        chunks_deleted=chunks_deleted,
    )
