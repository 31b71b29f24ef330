"""
Tests for vector operations on row and column matrices.
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import DegenerateVectorError, DimensionError
from pymatrix.matrix.construction import from_array, zeros
from pymatrix.vector.operations import (
    cross,
    dot,
    is_column_vector,
    is_row_vector,
    is_vector,
    normalize,
)

ROW = from_array([[1, 2, 3]])
COLUMN = from_array([[4], [5], [6]])


class TestShapeQueries:

    def test_row(self):
        assert is_vector(ROW)
        assert is_row_vector(ROW)
        assert not is_column_vector(ROW)

    def test_column(self):
        assert is_vector(COLUMN)
        assert is_column_vector(COLUMN)
        assert not is_row_vector(COLUMN)

    def test_1x1_is_both(self):
        single = from_array([[7]])
        assert is_row_vector(single) and is_column_vector(single)

    def test_matrix_is_not_vector(self):
        assert not is_vector(zeros(2, 2))


class TestDot:

    @pytest.mark.parametrize("a, b", [
        (ROW, from_array([[4, 5, 6]])),
        (from_array([[1], [2], [3]]), COLUMN),
        (ROW, COLUMN),
        (from_array([[1], [2], [3]]), from_array([[4, 5, 6]])),
    ])
    def test_all_orientations(self, a, b):
        assert dot(a, b) == 32.0

    def test_method(self):
        assert ROW.dot(COLUMN) == 32.0

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            dot(ROW, from_array([[1, 2]]))

    def test_non_vector(self):
        with pytest.raises(DimensionError):
            dot(zeros(2, 2), ROW)


class TestCross:

    def test_basis(self):
        x = from_array([[1], [0], [0]])
        y = from_array([[0], [1], [0]])
        assert cross(x, y) == from_array([[0], [0], [1]])
        assert cross(y, x) == from_array([[0], [0], [-1]])

    def test_matches_numpy(self, rng):
        u = rng.standard_normal(3)
        v = rng.standard_normal(3)
        result = cross(from_array(u.reshape(3, 1)), from_array(v.reshape(3, 1)))
        np.testing.assert_allclose(result.to_numpy()[:, 0], np.cross(u, v), atol=1e-14)

    def test_orthogonal_to_operands(self):
        w = cross(COLUMN, from_array([[1], [-1], [2]]))
        assert dot(w, COLUMN) == pytest.approx(0.0)

    def test_row_vectors_rejected(self):
        with pytest.raises(DegenerateVectorError):
            cross(ROW, ROW)

    def test_wrong_length(self):
        with pytest.raises(DegenerateVectorError):
            cross(from_array([[1], [2]]), from_array([[3], [4]]))


class TestNormalize:

    def test_unit_length(self):
        result = normalize(from_array([[3, 4]]))
        assert result == from_array([[0.6, 0.8]])

    def test_keeps_orientation(self):
        assert normalize(COLUMN).shape == (3, 1)

    def test_zero_vector(self):
        with pytest.raises(DegenerateVectorError, match="zero vector") as exc_info:
            normalize(zeros(3, 1))
        assert exc_info.value.norm == 0.0

    def test_tiny_vector(self):
        with pytest.raises(DegenerateVectorError):
            normalize(from_array([[1e-7, 0.0]]))

    def test_matrix_rejected(self):
        with pytest.raises(DegenerateVectorError):
            normalize(zeros(2, 2))
