# src/quire/commands/status.py
"""Status command - show database statistics."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

from quire.commands.base import StatusResult
from quire.config import get_store, load_config, resolve_data_dir


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> StatusResult:
    """Get database statistics.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        StatusResult with document and chunk counts
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return StatusResult(success=True, data_dir=effective_data_dir)

    try:
        stats = get_store(effective_data_dir).stats()
    except (OSError, sqlite3.Error) as e:
        return StatusResult(
            success=False,
            data_dir=effective_data_dir,
            error=f"Failed to access database: {e}",
        )

    return StatusResult(
        success=True,
        data_dir=effective_data_dir,
        total_documents=stats.total_documents,
        total_chunks=stats.total_chunks,
        embedded_chunks=stats.embedded_chunks,
    )
