"""Tests for Tversky index similarity."""

import numpy as np
import pytest

from simprep.analysis import similarity
from simprep.analysis.similarity import (
    dice,
    resolve_coefficients,
    tanimoto,
    tversky,
    tversky_matrix,
)
from simprep.core.exceptions import DimensionMismatchError, ValidationError
from simprep.core.models import LabeledMatrix

X_BITS = [1, 0, 0, 1, 0]
Y_BITS = [1, 0, 1, 1, 0]
TWO_THIRDS = 0.6666666666666666


def _random_bits(seed, n_rows, n_cols, density=0.3):
    rng = np.random.RandomState(seed)
    return rng.random_sample((n_rows, n_cols)) < density


def _as_matrix(bits, prefix="M"):
    return LabeledMatrix(
        values=bits,
        row_labels=[f"{prefix}{i:03d}" for i in range(bits.shape[0])],
        col_labels=[f"F{j:03d}" for j in range(bits.shape[1])],
    )


class TestTversky:

    def test_dice_special_case(self):
        assert tversky(X_BITS, Y_BITS, 0.5, 0.5) == 0.8

    def test_tanimoto_special_case(self):
        assert tversky(X_BITS, Y_BITS, 1.0, 1.0) == TWO_THIRDS

    def test_superstructure_special_case(self):
        assert tversky(X_BITS, Y_BITS, 1.0, 0.0) == 1.0

    def test_substructure_special_case(self):
        assert tversky(X_BITS, Y_BITS, 0.0, 1.0) == TWO_THIRDS

    def test_named_helpers(self):
        assert tanimoto(X_BITS, Y_BITS) == TWO_THIRDS
        assert dice(X_BITS, Y_BITS) == 0.8

    def test_accepts_numpy_bool(self):
        x = np.array(X_BITS, dtype=bool)
        y = np.array(Y_BITS, dtype=bool)
        assert tversky(x, y, 1.0, 1.0) == TWO_THIRDS

    @pytest.mark.parametrize("seed", range(10))
    def test_tanimoto_is_intersection_over_union(self, seed):
        x, y = _random_bits(seed, 2, 64, density=0.4)
        expected = np.sum(x & y) / np.sum(x | y)
        assert tversky(x, y, 1, 1) == pytest.approx(expected)

    @pytest.mark.parametrize("alpha,beta", [(0, 0), (1, 1), (0.5, 0.5), (1, 0), (0, 1), (2.5, 0.3)])
    def test_self_similarity_is_one(self, alpha, beta):
        x = _random_bits(3, 1, 32, density=0.5)[0]
        x[0] = True
        assert tversky(x, x, alpha, beta) == 1.0

    @pytest.mark.parametrize("seed", range(20))
    def test_role_swap_symmetry(self, seed):
        x, y = _random_bits(seed, 2, 166)
        a, b = np.random.RandomState(100 + seed).random_sample(2) * 3
        assert tversky(x, y, a, b) == tversky(y, x, b, a)
        assert tversky(x, y, a, a) == tversky(y, x, a, a)
        assert tversky(x, y, 0.7, 0.2) == tversky(y, x, 0.2, 0.7)
        assert tversky(x, y, 0.4, 0.4) == tversky(y, x, 0.4, 0.4)

    def test_empty_vectors_give_nan(self):
        zeros = [0, 0, 0, 0]
        assert np.isnan(tversky(zeros, zeros, 1.0, 1.0))

    def test_negative_coefficient_checked_before_bit_operations(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            similarity.np, "count_nonzero",
            lambda *a, **k: calls.append(a) or 0,
        )
        with pytest.raises(ValidationError, match="alpha"):
            tversky(X_BITS, Y_BITS, -0.1, 1.0)
        with pytest.raises(ValidationError, match="beta"):
            tversky(X_BITS, Y_BITS, 1.0, -0.1)
        assert calls == []

    def test_length_mismatch(self):
        with pytest.raises(ValidationError, match="same length"):
            tversky([1, 0, 1], [1, 0], 1.0, 1.0)


def test_resolve_coefficients():
    assert resolve_coefficients("tanimoto") == (1.0, 1.0)
    assert resolve_coefficients("Dice") == (0.5, 0.5)
    assert resolve_coefficients("superstructure") == (1.0, 0.0)
    assert resolve_coefficients("substructure") == (0.0, 1.0)
    with pytest.raises(ValidationError, match="Unknown coefficient preset"):
        resolve_coefficients("cosine")


class TestTverskyMatrix:

    def test_reference_dice(self, reference_matrix):
        expected = np.array([
            [1.0, 0.0, 0.5, 0.0, 0.5],
            [0.0, 1.0, 0.5, 2 / 3, 0.0],
            [0.5, 0.5, 1.0, 0.0, 0.5],
            [0.0, 2 / 3, 0.0, 1.0, 0.0],
            [0.5, 0.0, 0.5, 0.0, 1.0],
        ])
        result = tversky_matrix(reference_matrix, reference_matrix, 0.5, 0.5,
                                n_workers=1, progress=False)
        assert np.allclose(result.values, expected)

    def test_reference_superstructure(self, reference_matrix):
        expected = np.array([
            [1.0, 0.0, 0.5, 0.0, 0.5],
            [0.0, 1.0, 0.5, 0.5, 0.0],
            [0.5, 0.5, 1.0, 0.0, 0.5],
            [0.0, 1.0, 0.0, 1.0, 0.0],
            [0.5, 0.0, 0.5, 0.0, 1.0],
        ])
        result = tversky_matrix(reference_matrix, reference_matrix, 1.0, 0.0,
                                n_workers=1, progress=False)
        assert np.allclose(result.values, expected)

    def test_self_similarity_end_to_end(self, abc_matrix):
        result = tversky_matrix(abc_matrix, abc_matrix, 1.0, 1.0,
                                n_workers=1, progress=False)
        assert result.shape == (3, 3)
        assert result.row_labels == ("A", "B", "C")
        assert result.col_labels == ("A", "B", "C")
        assert np.all(np.diag(result.values) == 1.0)
        assert np.array_equal(result.values, result.values.T)

    @pytest.mark.parametrize("workers", [1, 2])
    def test_self_comparison_symmetric_for_fractional_weights(self, workers):
        m = _as_matrix(_random_bits(11, 60, 166))
        result = tversky_matrix(m, m, 0.3, 0.3, n_workers=workers, progress=False)
        assert np.array_equal(result.values, result.values.T)

    def test_role_swap_transposes_matrix(self):
        m = _as_matrix(_random_bits(12, 9, 166), "M")
        n = _as_matrix(_random_bits(13, 7, 166), "N")
        forward = tversky_matrix(m, n, 0.3, 0.8, n_workers=1, progress=False)
        backward = tversky_matrix(n, m, 0.8, 0.3, n_workers=1, progress=False)
        assert np.array_equal(forward.values, backward.values.T)

    def test_matches_scalar_tversky(self):
        m = _as_matrix(_random_bits(1, 6, 40), "M")
        n = _as_matrix(_random_bits(2, 4, 40), "N")
        result = tversky_matrix(m, n, 0.3, 0.9, n_workers=1, progress=False)
        for i in range(m.n_rows):
            for j in range(n.n_rows):
                assert result.values[i, j] == tversky(m.row(i), n.row(j), 0.3, 0.9)

    def test_labels_follow_inputs(self):
        m = _as_matrix(_random_bits(4, 3, 10), "M")
        n = _as_matrix(_random_bits(5, 2, 10), "N")
        result = tversky_matrix(m, n, 1.0, 1.0, n_workers=1, progress=False)
        assert result.shape == (3, 2)
        assert result.row_labels == m.row_labels
        assert result.col_labels == n.row_labels

    def test_identical_across_worker_counts(self):
        m = _as_matrix(_random_bits(7, 25, 166), "M")
        n = _as_matrix(_random_bits(8, 17, 166), "N")
        baseline = tversky_matrix(m, n, 0.5, 0.7, n_workers=1, progress=False)
        for workers in (2, 3):
            other = tversky_matrix(m, n, 0.5, 0.7, n_workers=workers, progress=False)
            assert np.array_equal(baseline.values, other.values, equal_nan=True)
            assert baseline.row_labels == other.row_labels

    def test_column_mismatch_computes_nothing(self, monkeypatch):
        calls = []
        monkeypatch.setattr(
            similarity, "parallel_map", lambda *a, **k: calls.append(a) or [],
        )
        m = _as_matrix(_random_bits(1, 3, 10))
        n = _as_matrix(_random_bits(2, 3, 12))
        with pytest.raises(ValidationError) as exc:
            tversky_matrix(m, n, 1.0, 1.0)
        assert isinstance(exc.value, DimensionMismatchError)
        assert calls == []

    def test_negative_coefficient(self, abc_matrix):
        with pytest.raises(ValidationError, match="beta"):
            tversky_matrix(abc_matrix, abc_matrix, 1.0, -1.0)

    def test_empty_rows_propagate_nan(self):
        bits = np.array([[0, 0, 0], [1, 0, 1]], dtype=bool)
        m = _as_matrix(bits)
        result = tversky_matrix(m, m, 1.0, 1.0, n_workers=1, progress=False)
        assert np.isnan(result.values[0, 0])
        assert result.values[0, 1] == 0.0
        assert result.values[1, 1] == 1.0

    def test_empty_query_matrix(self):
        m = _as_matrix(np.zeros((0, 5), dtype=bool))
        n = _as_matrix(_random_bits(2, 3, 5))
        result = tversky_matrix(m, n, 1.0, 1.0, progress=False)
        assert result.shape == (0, 3)
