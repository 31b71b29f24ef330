"""
Tests for LU decomposition and the triangular solvers.

Validates:
    - P·A = L·U with L unit lower triangular and U upper triangular
    - Multipliers travel with their rows under pivoting
    - Singular input raises with pivot diagnostics
    - forward/back substitution and lu_solve against scipy
"""

import numpy as np
import pytest
from scipy import linalg

from pymatrix.core.exceptions import (
    DimensionError,
    InvalidDomainError,
    SingularMatrixError,
)
from pymatrix.core.tolerances import DIRECT
from pymatrix.decomposition.lu import (
    LUResult,
    back_substitution,
    forward_substitution,
    lu,
    lu_solve,
)
from pymatrix.matrix.construction import from_array, identity, zeros
from pymatrix.matrix.matrix import Matrix


def _assert_factorization(a: Matrix, result: LUResult) -> None:
    P = result.permutation_matrix().to_numpy()
    L = result.L.to_numpy()
    U = result.U.to_numpy()
    np.testing.assert_allclose(P @ a.to_numpy(), L @ U, rtol=DIRECT.rtol, atol=DIRECT.atol)
    np.testing.assert_array_equal(np.diag(L), np.ones(a.rows))
    assert np.all(np.triu(L, 1) == 0.0)
    assert np.all(np.tril(U, -1) == 0.0)


# ═══════════════════════════════════════════════════════════════════════
# Factorization
# ═══════════════════════════════════════════════════════════════════════


class TestLU:

    def test_pivots_on_larger_entry(self):
        a = from_array([[4, 3], [6, 3]])
        result = lu(a)
        _assert_factorization(a, result)
        assert result.permutation == (1, 0)

    def test_identity(self):
        result = lu(identity(3))
        assert result.L == identity(3)
        assert result.U == identity(3)
        assert result.permutation == (0, 1, 2)

    def test_multipliers_follow_row_swaps(self):
        # Pivoting at column 1 swaps rows whose column-0 multipliers differ.
        a = from_array([[2, 1, 1], [1, 0.5, 3], [4, 1, 0]])
        _assert_factorization(a, lu(a))

    @pytest.mark.parametrize("n", [2, 5, 9])
    def test_random(self, rng, n):
        a = Matrix.from_numpy(rng.standard_normal((n, n)))
        _assert_factorization(a, lu(a))

    def test_partial_pivoting_bounds_multipliers(self, rng):
        a = Matrix.from_numpy(rng.standard_normal((6, 6)))
        L = lu(a).L.to_numpy()
        assert np.all(np.abs(L) <= 1.0 + 1e-15)

    def test_matches_scipy_u(self, rng):
        x = rng.standard_normal((5, 5))
        _, _, U_ref = linalg.lu(x)
        np.testing.assert_allclose(lu(Matrix.from_numpy(x)).U.to_numpy(), U_ref, atol=1e-12)

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            lu(from_array([[1, 2], [2, 4]]))
        assert exc_info.value.pivot_index == 1

    def test_singular_first_column(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            lu(from_array([[0, 1], [0, 2]]))
        assert exc_info.value.pivot_index == 0
        assert exc_info.value.pivot_value == 0.0

    def test_non_square(self):
        with pytest.raises(InvalidDomainError):
            lu(zeros(2, 3))

    def test_str(self):
        text = str(lu(identity(2)))
        assert text.startswith("LU Decomposition:\nL =\n")
        assert text.endswith("P = [0, 1]")


# ═══════════════════════════════════════════════════════════════════════
# Solvers
# ═══════════════════════════════════════════════════════════════════════


class TestTriangularSolvers:

    def test_forward(self, rng):
        L = np.tril(rng.standard_normal((4, 4))) + 4 * np.eye(4)
        b = rng.standard_normal((4, 2))
        x = forward_substitution(Matrix.from_numpy(L), Matrix.from_numpy(b))
        np.testing.assert_allclose(x.to_numpy(), linalg.solve_triangular(L, b, lower=True))

    def test_back(self, rng):
        U = np.triu(rng.standard_normal((4, 4))) + 4 * np.eye(4)
        b = rng.standard_normal((4, 1))
        x = back_substitution(Matrix.from_numpy(U), Matrix.from_numpy(b))
        np.testing.assert_allclose(x.to_numpy(), linalg.solve_triangular(U, b))

    def test_zero_diagonal(self):
        with pytest.raises(SingularMatrixError):
            back_substitution(from_array([[1, 1], [0, 0]]), from_array([[1], [1]]))

    def test_rhs_rows_mismatch(self):
        with pytest.raises(DimensionError):
            forward_substitution(identity(3), zeros(2, 1))


class TestLUSolve:

    def test_matches_scipy(self, rng):
        x = rng.standard_normal((5, 5))
        b = rng.standard_normal((5, 3))
        result = lu_solve(lu(Matrix.from_numpy(x)), Matrix.from_numpy(b))
        np.testing.assert_allclose(result.to_numpy(), linalg.solve(x, b), rtol=1e-9, atol=1e-12)

    def test_permuted_system(self):
        a = from_array([[0, 1], [1, 0]])
        b = from_array([[2], [3]])
        assert lu_solve(lu(a), b).allclose(from_array([[3], [2]]))
