# src/quire/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quire.stores import DocumentStore

DATABASE_FILENAME = "quire.db"


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    Documents and chunks are persisted to quire.db in the given directory.

    Args:
        data_dir: Base directory for the database file.
                  Created if it doesn't exist.

    Example:
        storage = LocalStorage("./my_data")
    """

    data_dir: str

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_dir, DATABASE_FILENAME)

    def build_store(self) -> DocumentStore:
        """Build the SQLite document store, creating the directory if needed."""
        from quire.stores import SQLiteDocumentStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)
        return SQLiteDocumentStore(self.db_path)
