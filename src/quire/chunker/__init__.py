"""Text chunking for Quire.

This module exports:
- Chunker: Abstract base class for chunkers
- TextSpan: A chunk of text with exact offsets
- SentenceWindowChunker: Sliding window that snaps to sentence ends
"""

from quire.chunker.base import Chunker, TextSpan
from quire.chunker.window import SentenceWindowChunker

__all__ = ["Chunker", "TextSpan", "SentenceWindowChunker"]
