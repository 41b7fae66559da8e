"""Embedding functionality for Quire."""

from quire.embedder.base import Embedder
from quire.embedder.client import ClientEmbedder, batched

__all__ = ["Embedder", "ClientEmbedder", "batched"]
