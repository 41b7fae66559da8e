# src/quire/models/chunk.py
"""Chunk data model."""

from uuid import uuid4

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """A contiguous slice of a document's extracted text.

    An empty embedding is the sentinel for "not embedded yet"; such chunks
    are kept in the store but never ranked.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    document_id: str
    index: int
    content: str
    start_offset: int
    end_offset: int
    embedding: list[float] = Field(default_factory=list)

    @property
    def has_embedding(self) -> bool:
        return len(self.embedding) > 0
