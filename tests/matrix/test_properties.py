"""
Tests for structural queries.

Determinant, rank and norms are cross-checked against numpy/scipy.
"""

import numpy as np
import pytest
from scipy import linalg

from pymatrix.core.exceptions import InvalidDomainError
from pymatrix.matrix.construction import from_array, hilbert, identity, zeros
from pymatrix.matrix.matrix import Matrix
from pymatrix.matrix.properties import (
    determinant,
    is_diagonal,
    is_orthogonal,
    is_positive_definite,
    is_positive_semidefinite,
    is_square,
    is_symmetric,
    is_triangular,
    norm_frobenius,
    norm_inf,
    norm_one,
    rank,
    trace,
)


# ═══════════════════════════════════════════════════════════════════════
# Predicates
# ═══════════════════════════════════════════════════════════════════════


class TestPredicates:

    def test_is_square(self):
        assert is_square(zeros(3, 3))
        assert not is_square(zeros(2, 3))

    def test_is_symmetric(self):
        assert is_symmetric(from_array([[1, 2], [2, 1]]))
        assert not is_symmetric(from_array([[1, 2], [3, 1]]))
        assert not is_symmetric(zeros(2, 3))

    def test_is_symmetric_tolerance_scales(self):
        a = from_array([[1e6, 2.0], [2.0 + 1e-7, 1.0]])
        assert is_symmetric(a)
        assert not is_symmetric(a, tol=0.0)

    def test_is_diagonal(self):
        assert is_diagonal(identity(3))
        assert not is_diagonal(from_array([[1, 0], [1e-300, 1]]))

    def test_is_triangular(self):
        upper = from_array([[1, 2], [0, 3]])
        assert is_triangular(upper)
        assert not is_triangular(upper, upper=False)
        assert is_triangular(upper.T, upper=False)

    def test_is_orthogonal(self):
        c, s = np.cos(0.3), np.sin(0.3)
        assert is_orthogonal(from_array([[c, -s], [s, c]]))
        assert not is_orthogonal(from_array([[1, 1], [0, 1]]))
        assert not is_orthogonal(zeros(2, 3))


class TestDefiniteness:

    def test_positive_definite(self):
        assert is_positive_definite(from_array([[4, 1], [1, 3]]))
        assert is_positive_definite(hilbert(4))

    def test_indefinite(self):
        assert not is_positive_definite(from_array([[1, 2], [2, 1]]))

    def test_negative_diagonal(self):
        assert not is_positive_definite(from_array([[-1, 0], [0, 1]]))

    def test_not_symmetric(self):
        assert not is_positive_definite(from_array([[2, 1], [0, 2]]))

    def test_empty_is_not_positive_definite(self):
        assert not is_positive_definite(zeros(0, 0))

    def test_semidefinite(self):
        singular = from_array([[1, 1], [1, 1]])
        assert is_positive_semidefinite(singular)
        assert not is_positive_definite(singular)

    def test_semidefinite_zero_pivot_with_coupling(self):
        # zero diagonal but non-zero off-diagonal: [[0,1],[1,0]] is indefinite
        assert not is_positive_semidefinite(from_array([[0, 1], [1, 0]]))

    def test_semidefinite_rejects_negative(self, rng):
        x = rng.standard_normal((4, 4))
        a = Matrix.from_numpy(-(x @ x.T))
        assert not is_positive_semidefinite(a)

    def test_gram_matrix_is_semidefinite(self, rng):
        x = rng.standard_normal((5, 2))
        a = Matrix.from_numpy(x @ x.T)
        assert is_positive_semidefinite(a)


# ═══════════════════════════════════════════════════════════════════════
# Determinant and trace
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    def test_2x2(self):
        assert determinant(from_array([[1, 2], [3, 4]])) == -2.0

    def test_1x1(self):
        assert determinant(from_array([[7]])) == 7.0

    def test_empty(self):
        assert determinant(zeros(0, 0)) == 1.0

    def test_identity(self):
        assert determinant(identity(5)) == 1.0

    def test_singular_is_exact_zero(self):
        a = from_array([[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert determinant(a) == 0.0

    @pytest.mark.parametrize("n", [3, 4, 7])
    def test_matches_scipy(self, rng, n):
        x = rng.standard_normal((n, n))
        assert determinant(Matrix.from_numpy(x)) == pytest.approx(linalg.det(x), rel=1e-10)

    def test_row_swap_sign(self):
        a = from_array([[0, 1, 0], [1, 0, 0], [0, 0, 1]])
        assert determinant(a) == -1.0

    def test_non_square(self):
        with pytest.raises(InvalidDomainError):
            determinant(zeros(2, 3))


class TestTrace:

    def test_trace(self):
        assert trace(from_array([[1, 2], [3, 4]])) == 5.0

    def test_non_square(self):
        with pytest.raises(InvalidDomainError):
            trace(zeros(3, 2))


# ═══════════════════════════════════════════════════════════════════════
# Rank and norms
# ═══════════════════════════════════════════════════════════════════════


class TestRank:

    def test_full_rank(self):
        assert rank(identity(4)) == 4

    def test_deficient(self):
        assert rank(from_array([[1, 2, 3], [2, 4, 6], [1, 0, 1]])) == 2

    def test_zero(self):
        assert rank(zeros(3, 3)) == 0

    def test_rectangular(self, rng):
        x = rng.standard_normal((6, 2)) @ rng.standard_normal((2, 4))
        assert rank(Matrix.from_numpy(x)) == np.linalg.matrix_rank(x) == 2


class TestNorms:

    def test_against_numpy(self, rng):
        x = rng.standard_normal((4, 3))
        a = Matrix.from_numpy(x)
        assert norm_one(a) == pytest.approx(np.linalg.norm(x, 1))
        assert norm_inf(a) == pytest.approx(np.linalg.norm(x, np.inf))
        assert norm_frobenius(a) == pytest.approx(np.linalg.norm(x, 'fro'))

    def test_empty(self):
        assert norm_one(zeros(0, 0)) == 0.0
        assert norm_inf(zeros(0, 0)) == 0.0
        assert norm_frobenius(zeros(0, 0)) == 0.0
