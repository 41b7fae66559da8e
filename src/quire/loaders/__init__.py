"""Document loading for Quire.

This module exports:
- TextExtractor: Abstract base class for extractors
- ExtractedText: Normalized text plus page count
- PyPDFExtractor: pypdf-based PDF extractor
- validate_upload: Upload checks (empty file, non-PDF name)
"""

from quire.loaders.base import ExtractedText, TextExtractor
from quire.loaders.pypdf_loader import PyPDFExtractor, normalize_text
from quire.loaders.validation import validate_upload

__all__ = [
    "TextExtractor",
    "ExtractedText",
    "PyPDFExtractor",
    "normalize_text",
    "validate_upload",
]
