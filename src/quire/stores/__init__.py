"""Storage abstractions for Quire."""

from quire.stores.base import DocumentStore
from quire.stores.sqlite import SQLiteDocumentStore

__all__ = ["DocumentStore", "SQLiteDocumentStore"]
