"""Storage configurations for Quire."""

from quire.configuration.storage.local import DATABASE_FILENAME, LocalStorage

__all__ = ["DATABASE_FILENAME", "LocalStorage"]
