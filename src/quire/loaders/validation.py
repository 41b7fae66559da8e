# src/quire/loaders/validation.py
"""Upload checks applied before any processing."""

from pathlib import Path

from quire.errors import ValidationError

SUPPORTED_UPLOAD_EXTENSIONS = {".pdf"}


def validate_upload(data: bytes | None, filename: str | None) -> None:
    """Reject uploads that cannot be ingested.

    Raises:
        ValidationError: If the file is missing, empty, or not a PDF.
    """
    if not filename:
        raise ValidationError("File name is required")
    if not data:
        raise ValidationError("File is empty")
    if Path(filename).suffix.lower() not in SUPPORTED_UPLOAD_EXTENSIONS:
        raise ValidationError("Only PDF files are supported")
