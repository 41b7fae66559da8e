# src/quire/chunker/base.py
"""Chunker abstract base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TextSpan:
    """A chunk of text with its exact position in the source text.

    text[start:end] == content always holds.
    """

    index: int
    content: str
    start: int
    end: int


class Chunker(ABC):
    """Abstract base class for text chunking."""

    @abstractmethod
    def chunk(self, text: str) -> list[TextSpan]:
        """Split normalized text into ordered chunks."""
        ...
