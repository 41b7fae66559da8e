# src/quire/loaders/pypdf_loader.py
"""PDF text extraction using pypdf - lightweight, pure Python."""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from quire.errors import ExtractionError
from quire.loaders.base import ExtractedText, TextExtractor

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse every whitespace run to a single space and trim."""
    return _WHITESPACE.sub(" ", text).strip()


class PyPDFExtractor(TextExtractor):
    """Extract text from PDF bytes with pypdf.

    Pages are joined with a space and the result is whitespace-normalized,
    so chunk offsets refer to a single-line text.
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def supports(self, filename: str) -> bool:
        """Check if this extractor supports the given file."""
        return Path(filename).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def extract(self, data: bytes) -> ExtractedText:
        """Extract normalized text and the page count from a PDF.

        Args:
            data: Raw PDF bytes

        Returns:
            ExtractedText with normalized text and page count

        Raises:
            ExtractionError: If pypdf cannot parse the document
        """
        try:
            reader = PdfReader(io.BytesIO(data))
            pages = [page.extract_text() or "" for page in reader.pages]
        except (PyPdfError, ValueError, KeyError, TypeError, OSError) as e:
            raise ExtractionError(f"Unreadable PDF: {e}") from e

        text = normalize_text(" ".join(pages))
        logger.debug("Extracted %d characters from %d pages", len(text), len(pages))
        return ExtractedText(text=text, page_count=len(pages))
