# src/quire/commands/base.py
"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Progress callbacks for long-running operations
- Confirm callbacks for destructive commands (like delete)
- Result types for each command
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class CommandStage(Enum):
    """Stages of command execution for progress reporting."""

    # Ingest stages
    EXTRACTING = "Extracting"
    CHUNKING = "Chunking"
    EMBEDDING = "Embedding"
    STORING = "Storing"

    # General stages
    LOADING = "Loading"
    PROCESSING = "Processing"
    COMPLETE = "Complete"


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        stage: Current stage of the operation
        current: Current item number
        total: Total number of items (0 for indeterminate)
        message: Optional status message
    """

    stage: CommandStage
    current: int
    total: int
    message: str | None = None

    @property
    def is_indeterminate(self) -> bool:
        """True if progress is indeterminate (total unknown)."""
        return self.total == 0

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 if indeterminate."""
        if self.total == 0:
            return 0
        return int(100 * self.current / self.total)


# Callback type for progress updates
ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class ConfirmRequest:
    """Request for a yes/no confirmation before a destructive action.

    Attributes:
        message: The question to display to the user
        details: Extra context about what will happen
    """

    message: str
    details: str | None = None


# Callback type for confirmations - returns True to proceed
ConfirmCallback = Callable[[ConfirmRequest], bool]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class FileIngestResult:
    """Result for a single file ingestion."""

    filepath: str
    failed: bool = False
    reason: str | None = None  # Error message if failed
    document_id: str | None = None
    pages: int = 0
    chunks: int = 0
    embedded: int = 0

    @property
    def degraded(self) -> bool:
        """True if some chunks were stored without an embedding."""
        return not self.failed and self.embedded < self.chunks


@dataclass
class IngestResult(CommandResult):
    """Result of the ingest command.

    Attributes:
        files_processed: Number of files successfully stored
        files_failed: Number of files that failed
        total_chunks: Total chunks stored
        total_embedded: Chunks stored with an embedding
        file_results: Per-file results
        errors: List of (filepath, error_message) for failed files
    """

    files_processed: int = 0
    files_failed: int = 0
    total_chunks: int = 0
    total_embedded: int = 0
    file_results: list[FileIngestResult] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total_pending(self) -> int:
        return self.total_chunks - self.total_embedded


@dataclass
class SearchResult:
    """A single retrieved chunk."""

    source: str
    content: str
    score: float
    chunk_index: int = 0
    chunk_id: str | None = None


@dataclass
class QueryResult(CommandResult):
    """Result of the query command.

    Attributes:
        query: The original question
        answer: Generated answer (None in raw mode)
        results: Retrieved chunks with their documents
        insufficient_context: True if no stored chunk could be scored
    """

    query: str = ""
    answer: str | None = None
    results: list[SearchResult] = field(default_factory=list)
    insufficient_context: bool = False


@dataclass
class DocumentInfo:
    """Summary of a stored document."""

    document_id: str
    filename: str
    size_bytes: int
    page_count: int
    chunk_count: int
    uploaded_at: str


@dataclass
class ListResult(CommandResult):
    """Result of the list command.

    Attributes:
        documents: Stored documents, newest first
    """

    documents: list[DocumentInfo] = field(default_factory=list)


@dataclass
class ChunkInfo:
    """A stored chunk as shown by the show command."""

    index: int
    content: str
    start_offset: int
    end_offset: int
    embedded: bool


@dataclass
class ShowResult(CommandResult):
    """Result of the show command."""

    document: DocumentInfo | None = None
    chunks: list[ChunkInfo] = field(default_factory=list)


@dataclass
class DeleteResult(CommandResult):
    """Result of the delete command.

    Attributes:
        document_id: The document that was deleted
        filename: Its file name, if it was found
        chunks_deleted: Number of chunks deleted
        cancelled: True if the user declined the confirmation
    """

    document_id: str = ""
    filename: str | None = None
    chunks_deleted: int = 0
    cancelled: bool = False


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        data_dir: Data directory that was inspected
        total_documents: Number of stored documents
        total_chunks: Total chunks in the database
        embedded_chunks: Chunks that have an embedding
    """

    data_dir: str = ""
    total_documents: int = 0
    total_chunks: int = 0
    embedded_chunks: int = 0

    @property
    def pending_chunks(self) -> int:
        return self.total_chunks - self.embedded_chunks


@dataclass
class BackfillResult(CommandResult):
    """Result of the backfill command.

    Attributes:
        pending: Chunks that lacked an embedding before the run
        repaired: Chunks that received an embedding
    """

    pending: int = 0
    repaired: int = 0

    @property
    def remaining(self) -> int:
        return self.pending - self.repaired


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        provider: Provider type (openai, litellm)
        chat_model: Chat model name
        embedding_model: Embedding model name
        base_url: API root override, if any
        api_key_set: Whether an API key was found in the environment
        data_dir: Data directory path
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
    """

    provider: str = "openai"
    chat_model: str | None = None
    embedding_model: str | None = None
    base_url: str | None = None
    api_key_set: bool = False
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
