"""Unit tests for cosine similarity scoring."""

import math

import pytest

from src.vectorstore.similarity import cosine_similarity


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == pytest.approx(1.0)
        assert cosine_similarity([0.3, -2.0, 5.5], [0.3, -2.0, 5.5]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0, 0.0], [0.0, 1.0, 0.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)

    def test_is_symmetric(self):
        a = [0.2, 0.7, -0.1, 0.4]
        b = [0.9, -0.3, 0.5, 0.05]
        assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 1.0], [5.0, 5.0]) == pytest.approx(1.0)

    def test_known_value(self):
        expected = 0.9 / math.sqrt(0.82)
        assert cosine_similarity([1.0, 0.0, 0.0], [0.9, 0.1, 0.0]) == pytest.approx(expected)

    def test_dimension_mismatch_returns_zero(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0]) == 0.0

    def test_empty_vectors_return_zero(self):
        assert cosine_similarity([], []) == 0.0

    def test_zero_vector_returns_zero(self):
        assert cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 2.0, 3.0], [0.0, 0.0, 0.0]) == 0.0

    def test_returns_builtin_float(self):
        assert type(cosine_similarity([1.0, 2.0], [2.0, 1.0])) is float
