"""Similarity search for Quire.

This module exports:
- cosine_similarity / rank: pure scoring and ranking over plain vectors
- Ranker: Abstract base class for top-K retrieval
- BruteForceRanker: Linear-scan ranker
"""

from quire.retrieval.ranker import BruteForceRanker, Ranker
from quire.retrieval.similarity import cosine_similarity, is_scorable, rank

__all__ = ["Ranker", "BruteForceRanker", "cosine_similarity", "is_scorable", "rank"]
