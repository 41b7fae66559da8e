# src/quire/loaders/base.py
"""Text extractor abstract base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractedText:
    """Normalized document text and the number of pages it came from."""

    text: str
    page_count: int


class TextExtractor(ABC):
    """Abstract base class for turning document bytes into text."""

    @abstractmethod
    def extract(self, data: bytes) -> ExtractedText:
        """Extract normalized text from raw document bytes.

        Raises:
            ExtractionError: If the document cannot be read.
        """
        ...

    @abstractmethod
    def supports(self, filename: str) -> bool:
        """Check if this extractor handles the given file name."""
        ...
