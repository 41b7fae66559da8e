# src/quire/retrieval/ranker.py
"""Top-K ranking over stored chunks."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from quire.models import CandidateChunk, NoAnswerableContext, ScoredChunk
from quire.retrieval.similarity import is_scorable, rank

logger = logging.getLogger(__name__)


class Ranker(ABC):
    """Abstract base class for top-K retrieval.

    Implementations receive the query vector and every candidate, and return
    either the best K candidates or NoAnswerableContext when none of them can
    be compared to the query.
    """

    @abstractmethod
    def top_k(
        self,
        query_vector: Sequence[float],
        candidates: Sequence[CandidateChunk],
        k: int,
    ) -> list[ScoredChunk] | NoAnswerableContext:
        """Return the k most similar candidates, best first."""
        ...


class BruteForceRanker(Ranker):
    """Linear scan: scores every candidate, O(N·D) per query."""

    def top_k(
        self,
        query_vector: Sequence[float],
        candidates: Sequence[CandidateChunk],
        k: int,
    ) -> list[ScoredChunk] | NoAnswerableContext:
        """Rank candidates by cosine similarity.

        Candidates without an embedding, or with one whose dimension differs
        from the query's, are skipped. Ties keep candidate order.
        """
        if not any(is_scorable(query_vector, c.chunk.embedding) for c in candidates):
            logger.info("No scorable chunks among %d candidates", len(candidates))
            return NoAnswerableContext(candidates_seen=len(candidates))

        ranked = rank(query_vector, [c.chunk.embedding for c in candidates], k)
        return [
            ScoredChunk(
                chunk=candidates[position].chunk,
                score=score,
                document_name=candidates[position].document_name,
            )
            for position, score in ranked
        ]
