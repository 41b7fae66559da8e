# src/quire/retrieval/similarity.py
"""Pure similarity scoring and ranking.

Nothing here touches storage: rank() takes plain vectors and returns
positions into the list it was given, so an indexed search structure can
replace it without changing what callers pass in or get back.
"""

from collections.abc import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Cosine similarity measures the angle between two vectors:
    - 1.0 = identical direction (parallel)
    - 0.0 = perpendicular (orthogonal)
    - -1.0 = opposite direction (anti-parallel)

    Formula: cos(θ) = (a · b) / sqrt((a · a) * (b · b))

    Each vector is first divided by its largest absolute component, which
    leaves the angle unchanged and keeps the squared norms between 1 and the
    dimension, so very small or very large components neither underflow nor
    overflow. Taking a single square root of the product of squared norms
    keeps cosine_similarity(v, v) at exactly 1.0 and cosine_similarity(v, -v)
    at exactly -1.0. Zero vectors and vectors with non-finite components have
    no usable direction, so their similarity to anything is 0.0. Vectors of
    different lengths raise ValueError.
    """
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.shape != b_arr.shape:
        raise ValueError(f"Dimension mismatch: {a_arr.shape} vs {b_arr.shape}")
    if a_arr.size == 0 or not (np.all(np.isfinite(a_arr)) and np.all(np.isfinite(b_arr))):
        return 0.0

    scale_a = float(np.max(np.abs(a_arr)))
    scale_b = float(np.max(np.abs(b_arr)))
    if scale_a == 0.0 or scale_b == 0.0:
        return 0.0
    a_arr = a_arr / scale_a
    b_arr = b_arr / scale_b

    squared_a = float(np.dot(a_arr, a_arr))
    squared_b = float(np.dot(b_arr, b_arr))
    score = float(np.dot(a_arr, b_arr)) / float(np.sqrt(squared_a * squared_b))
    return float(np.clip(score, -1.0, 1.0))


def is_scorable(query: Sequence[float], vector: Sequence[float]) -> bool:
    """True if vector is non-empty and has the query's dimension."""
    return len(vector) > 0 and len(vector) == len(query)


def rank(
    query: Sequence[float],
    vectors: Sequence[Sequence[float]],
    k: int,
) -> list[tuple[int, float]]:
    """Rank vectors by cosine similarity to the query.

    Vectors that are empty or whose dimension differs from the query are
    skipped: they are not scored and do not count toward k.

    Args:
        query: Query vector.
        vectors: Candidate vectors, in candidate order.
        k: Maximum number of results. Clamped to the number of scorable
           vectors; k <= 0 returns [].

    Returns:
        (position, score) pairs sorted by score descending. Equal scores keep
        their candidate order.
    """
    if k <= 0 or len(query) == 0:
        return []

    scored = [
        (position, cosine_similarity(query, vector))
        for position, vector in enumerate(vectors)
        if is_scorable(query, vector)
    ]
    # sorted() is stable, so ties keep candidate order
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return scored[:k]
