# src/quire/commands/ingest.py
"""Ingest command - add PDF files to the document store.

This module provides the core ingest logic that the CLI uses.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from quire.commands.base import (
    CommandStage,
    FileIngestResult,
    IngestResult,
    ProgressCallback,
    ProgressUpdate,
)
from quire.config import ConfigError, create_quire, get_quire_config
from quire.errors import QuireError

if TYPE_CHECKING:
    from quire.quire import Quire


# Map pipeline stage names to CommandStage
STAGE_MAP = {
    "extracting": CommandStage.EXTRACTING,
    "chunking": CommandStage.CHUNKING,
    "embedding": CommandStage.EMBEDDING,
    "storing": CommandStage.STORING,
}

PDF_SUFFIX = ".pdf"


def find_pdf_files(path: Path) -> list[str]:
    """List the PDF files under a directory, in a stable order."""
    files = []
    for root, _, filenames in os.walk(path):
        for filename in filenames:
            if filename.lower().endswith(PDF_SUFFIX):
                files.append(os.path.join(root, filename))
    return sorted(files)


def ingest(
    path: str | Path,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    on_progress: ProgressCallback | None = None,
    on_file_start: Callable[[str, int, int], None] | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestResult:
    """Ingest a PDF file, or every PDF under a directory.

    Args:
        path: File or directory to ingest
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        on_progress: Callback for progress updates during ingestion
        on_file_start: Callback when starting a file (receives filepath, file_index, total_files)
        on_file_complete: Callback when a file is done (receives FileIngestResult)

    Returns:
        IngestResult with aggregated statistics and per-file results
    """
    path = Path(path)

    if not path.exists():
        return IngestResult(success=False, error=f"Path not found: {path}")

    config = get_quire_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return IngestResult(success=False, error=config.message)

    try:
        quire = create_quire(config)
    except (OSError, ValueError) as e:
        return IngestResult(success=False, error=f"Failed to create Quire: {e}")

    return ingest_with_quire(
        quire,
        path,
        on_progress=on_progress,
        on_file_start=on_file_start,
        on_file_complete=on_file_complete,
    )


def ingest_with_quire(
    quire: Quire,
    path: str | Path,
    on_progress: ProgressCallback | None = None,
    on_file_start: Callable[[str, int, int], None] | None = None,
    on_file_complete: Callable[[FileIngestResult], None] | None = None,
) -> IngestResult:
    """Ingest files using an existing Quire instance.

    A single file is ingested whatever its name, so that non-PDF uploads are
    reported as validation errors. Directories contribute only *.pdf files.

    Args:
        quire: Existing Quire instance
        path: File or directory to ingest
        on_progress: Callback for progress updates
        on_file_start: Callback when starting a file
        on_file_complete: Callback when a file is done

    Returns:
        IngestResult with aggregated statistics
    """
    path = Path(path)

    if not path.exists():
        return IngestResult(success=False, error=f"Path not found: {path}")

    files = [str(path)] if path.is_file() else find_pdf_files(path)
    if not files:
        return IngestResult(success=True, error="No PDF files found")

    result = IngestResult(success=True)

    for i, filepath in enumerate(files):
        if on_file_start:
            on_file_start(filepath, i, len(files))

        file_result = _ingest_file(quire, filepath, on_progress)
        result.file_results.append(file_result)

        if file_result.failed:
            result.errors.append((filepath, file_result.reason or "unknown error"))
        else:
            result.files_processed += 1
            result.total_chunks += file_result.chunks
            result.total_embedded += file_result.embedded

        if on_file_complete:
            on_file_complete(file_result)

    if result.errors:
        result.files_failed = len(result.errors)
        if result.files_processed == 0:
            result.success = False
            if len(result.errors) == 1:
                result.error = result.errors[0][1]
            else:
                result.error = f"All {len(result.errors)} files failed"

    return result


def _ingest_file(
    quire: Quire,
    filepath: str,
    on_progress: ProgressCallback | None = None,
) -> FileIngestResult:
    """Ingest a single file.

    Args:
        quire: Quire instance to use
        filepath: Path to the file
        on_progress: Optional progress callback

    Returns:
        FileIngestResult with stats for this file
    """

    def progress_adapter(event: str, current: int, total: int, message: str) -> None:
        """Adapt the pipeline's progress callback to our ProgressUpdate format."""
        if on_progress:
            stage = STAGE_MAP.get(event, CommandStage.PROCESSING)
            on_progress(ProgressUpdate(stage=stage, current=current, total=total, message=message))

    try:
        result = quire.ingest_file(
            filepath,
            on_progress=progress_adapter if on_progress else None,
        )
    except (QuireError, OSError) as e:
        return FileIngestResult(filepath=filepath, failed=True, reason=str(e))

    return FileIngestResult(
        filepath=filepath,
        document_id=result.document_id,
        pages=result.page_count,
        chunks=result.chunk_count,
        embedded=result.embedded_count,
    )
