# src/quire/models/document.py
"""Document data model."""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(BaseModel):
    """An uploaded document. Owns its chunks."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    filename: str
    size_bytes: int = 0
    page_count: int = 0
    chunk_count: int = 0
    uploaded_at: datetime = Field(default_factory=_utcnow)
