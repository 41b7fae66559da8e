"""Data models for Quire."""

from quire.models.chunk import Chunk
from quire.models.document import Document
from quire.models.results import (
    Answer,
    CandidateChunk,
    CorpusStats,
    DocumentDetail,
    IngestResult,
    NoAnswerableContext,
    ScoredChunk,
    Source,
)

__all__ = [
    "Document",
    "Chunk",
    "CandidateChunk",
    "ScoredChunk",
    "NoAnswerableContext",
    "Source",
    "Answer",
    "IngestResult",
    "DocumentDetail",
    "CorpusStats",
]
