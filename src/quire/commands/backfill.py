# src/quire/commands/backfill.py
"""Backfill command - embed chunks that were stored without an embedding."""

from __future__ import annotations

import os
from pathlib import Path

from quire.commands.base import BackfillResult, CommandStage, ProgressCallback, ProgressUpdate
from quire.config import ConfigError, create_quire, get_quire_config, load_config, resolve_data_dir
from quire.errors import QuireError


def backfill(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
) -> BackfillResult:
    """Embed every chunk that has no embedding yet.

    The run stops at the first batch the provider rejects; chunks embedded
    before that point are kept, and remaining reports what is still pending.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        on_progress: Callback for progress updates

    Returns:
        BackfillResult with pending and repaired counts
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return BackfillResult(success=True)

    quire_config = get_quire_config(data_dir, config_path)
    if isinstance(quire_config, ConfigError):
        return BackfillResult(success=False, error=quire_config.message)

    try:
        quire = create_quire(quire_config)
    except (OSError, ValueError) as e:
        return BackfillResult(success=False, error=f"Failed to create Quire: {e}")

    def progress_adapter(event: str, current: int, total: int, message: str) -> None:
        if on_progress:
            on_progress(
                ProgressUpdate(
                    stage=CommandStage.EMBEDDING,
                    current=current,
                    total=total,
                    message=message,
                )
            )

    try:
        pending = quire.stats().pending_chunks
        repaired = quire.backfill_embeddings(on_progress=progress_adapter)
    except QuireError as e:
        return BackfillResult(success=False, error=f"Backfill failed: {e}")

    return BackfillResult(success=True, pending=pending, repaired=repaired)
