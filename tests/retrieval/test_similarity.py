# tests/retrieval/test_similarity.py
"""Tests for cosine similarity and pure ranking."""

import math

import pytest

from quire.retrieval import cosine_similarity, is_scorable, rank


class TestCosineSimilarity:
    def test_identical_vectors(self):
        v = [0.3, -1.7, 2.9, 0.01]
        assert cosine_similarity(v, v) == 1.0

    def test_opposite_vectors(self):
        v = [0.3, -1.7, 2.9, 0.01]
        assert cosine_similarity(v, [-x for x in v]) == -1.0

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0

    def test_scale_invariant(self):
        a = [1.0, 2.0, 3.0]
        b = [2.0, -1.0, 0.5]
        scaled = [x * 7.5 for x in b]
        assert math.isclose(cosine_similarity(a, b), cosine_similarity(a, scaled))

    def test_symmetric(self):
        a = [1.0, 2.0, 3.0]
        b = [0.5, -4.0, 2.0]
        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_zero_vector_scores_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 2.0]) == 0.0
        assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0

    def test_known_value(self):
        assert math.isclose(cosine_similarity([1.0, 1.0], [1.0, 0.0]), 1 / math.sqrt(2))

    @pytest.mark.parametrize("magnitude", [1e-160, 5e-324, 1e200, 1e308])
    def test_extreme_magnitudes(self, magnitude):
        v = [magnitude, 0.0]
        assert cosine_similarity(v, v) == 1.0
        assert cosine_similarity(v, [-magnitude, 0.0]) == -1.0
        assert cosine_similarity(v, [0.0, magnitude]) == 0.0

    def test_mixed_magnitudes(self):
        score = cosine_similarity([1e-200, 1e-200], [1e200, 0.0])
        assert math.isclose(score, 1 / math.sqrt(2))

    def test_non_finite_components_score_zero(self):
        assert cosine_similarity([math.inf, 1.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity([1.0, 1.0], [math.nan, 1.0]) == 0.0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError, match="Dimension mismatch"):
            cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0])


class TestIsScorable:
    def test_empty_vector_is_not_scorable(self):
        assert not is_scorable([1.0, 0.0], [])

    def test_mismatched_dimension_is_not_scorable(self):
        assert not is_scorable([1.0, 0.0], [1.0, 0.0, 0.0])

    def test_matching_dimension_is_scorable(self):
        assert is_scorable([1.0, 0.0], [0.0, 1.0])


class TestRank:
    def test_sorted_by_score_descending(self):
        query = [1.0, 0.0]
        vectors = [[0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]

        ranked = rank(query, vectors, k=3)

        assert [position for position, _ in ranked] == [1, 2, 0]
        scores = [score for _, score in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_k_limits_results(self):
        ranked = rank([1.0, 0.0], [[1.0, 0.0]] * 5, k=2)
        assert len(ranked) == 2

    def test_k_larger_than_candidates(self):
        ranked = rank([1.0, 0.0], [[1.0, 0.0], [0.0, 1.0]], k=10)
        assert len(ranked) == 2

    def test_non_positive_k(self):
        assert rank([1.0, 0.0], [[1.0, 0.0]], k=0) == []
        assert rank([1.0, 0.0], [[1.0, 0.0]], k=-3) == []

    def test_empty_query(self):
        assert rank([], [[1.0, 0.0]], k=3) == []

    def test_ties_keep_candidate_order(self):
        vectors = [[2.0, 0.0], [1.0, 0.0], [3.0, 0.0]]

        ranked = rank([1.0, 0.0], vectors, k=3)

        assert [position for position, _ in ranked] == [0, 1, 2]

    def test_unscorable_vectors_are_skipped(self):
        """Empty and wrong-dimension vectors neither score nor count toward k."""
        vectors = [[], [1.0, 0.0, 0.0], [0.0, 1.0], [1.0, 0.0]]

        ranked = rank([1.0, 0.0], vectors, k=3)

        assert [position for position, _ in ranked] == [3, 2]

    def test_extreme_magnitudes_rank_by_direction(self):
        vectors = [[0.0, 1e200], [1e-160, 1e-160], [1e-160, 0.0]]

        ranked = rank([1.0, 0.0], vectors, k=3)

        assert [position for position, _ in ranked] == [2, 1, 0]
        assert ranked[0][1] == 1.0
