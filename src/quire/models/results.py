# src/quire/models/results.py
"""Result data models for Quire operations."""

from pydantic import BaseModel, Field

from quire.models.chunk import Chunk
from quire.models.document import Document


class CandidateChunk(BaseModel):
    """A stored chunk offered to the ranker, with its document's file name."""

    chunk: Chunk
    document_name: str


class ScoredChunk(BaseModel):
    """A chunk with its similarity to the query."""

    chunk: Chunk
    score: float
    document_name: str = ""


class NoAnswerableContext(BaseModel):
    """Retrieval outcome when no stored chunk can be compared to the query."""

    candidates_seen: int = 0


class Source(BaseModel):
    """A citation returned alongside an answer."""

    chunk_id: str
    content: str
    document_name: str
    chunk_index: int
    score: float

    @classmethod
    def from_scored(cls, scored: ScoredChunk) -> "Source":
        return cls(
            chunk_id=scored.chunk.id,
            content=scored.chunk.content,
            document_name=scored.document_name,
            chunk_index=scored.chunk.index,
            score=scored.score,
        )


class Answer(BaseModel):
    """Full response to a user question."""

    question: str
    answer: str
    sources: list[Source] = Field(default_factory=list)
    insufficient_context: bool = False


class IngestResult(BaseModel):
    """Outcome of ingesting one document.

    failed_count counts chunks stored with the empty embedding sentinel.
    """

    document_id: str
    filename: str
    chunk_count: int
    embedded_count: int
    failed_count: int = 0
    page_count: int = 0

    @property
    def degraded(self) -> bool:
        return self.failed_count > 0


class DocumentDetail(BaseModel):
    """A document together with its ordered chunks."""

    document: Document
    chunks: list[Chunk] = Field(default_factory=list)


class CorpusStats(BaseModel):
    """Counts across the whole store."""

    total_documents: int = 0
    total_chunks: int = 0
    embedded_chunks: int = 0

    @property
    def pending_chunks(self) -> int:
        return self.total_chunks - self.embedded_chunks
