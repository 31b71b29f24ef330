"""
Tests for the eigendecomposition.

Validates:
    - Closed forms for 1x1 and 2x2 (including the complex-pair fallback)
    - Shifted QR on symmetric and non-symmetric input against scipy
    - A·v ≈ λ·v for every returned pair
    - Non-convergence is a RuntimeWarning, never an exception
    - Shift retries and debug logging
"""

import logging
import warnings

import numpy as np
import pytest
from scipy import linalg

from pymatrix.core.exceptions import InvalidDomainError
from pymatrix.core.tolerances import ITERATIVE
from pymatrix.decomposition.eigen import EigenResult, eigen
from pymatrix.matrix.construction import diagonal, from_array, identity, zeros
from pymatrix.matrix.matrix import Matrix


def _assert_eigenpairs(a: np.ndarray, result: EigenResult) -> None:
    vectors = result.eigenvectors.to_numpy()
    values = np.array(result.eigenvalues)
    scale = max(1.0, float(np.max(np.abs(a))))
    np.testing.assert_allclose(a @ vectors, vectors * values, atol=ITERATIVE.atol * scale)
    np.testing.assert_allclose(np.linalg.norm(vectors, axis=0), 1.0, atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Closed forms
# ═══════════════════════════════════════════════════════════════════════


class TestSmallMatrices:

    def test_empty(self):
        result = eigen(zeros(0, 0))
        assert result.eigenvalues == ()
        assert result.converged

    def test_1x1(self):
        result = eigen(from_array([[-3.5]]))
        assert result.eigenvalues == (-3.5,)
        assert result.eigenvectors == identity(1)

    def test_2x2_symmetric(self):
        a = from_array([[2, 1], [1, 2]])
        result = eigen(a)
        assert result.eigenvalues == pytest.approx((3.0, 1.0))
        assert result.iterations == 0
        _assert_eigenpairs(a.to_numpy(), result)

    def test_2x2_larger_root_first(self):
        result = eigen(from_array([[1, 0], [0, 5]]))
        assert result.eigenvalues == (5.0, 1.0)

    def test_2x2_non_symmetric(self):
        a = from_array([[4, 1], [2, 3]])
        result = eigen(a)
        assert result.eigenvalues == pytest.approx((5.0, 2.0))
        _assert_eigenpairs(a.to_numpy(), result)

    def test_2x2_upper_triangular_entries_derived(self):
        a = from_array([[1, 3], [0, 4]])
        result = eigen(a)
        assert result.eigenvalues == pytest.approx((4.0, 1.0))
        _assert_eigenpairs(a.to_numpy(), result)

    def test_2x2_repeated_uses_basis_vectors(self):
        result = eigen(from_array([[2, 0], [0, 2]]))
        assert result.eigenvalues == (2.0, 2.0)
        assert result.eigenvectors == identity(2)

    def test_complex_pair_returns_real_part(self):
        """[[3,-2],[1,4]] has eigenvalues 3.5 ± 1.3229i."""
        with pytest.warns(RuntimeWarning, match="Complex eigenvalues"):
            result = eigen(from_array([[3, -2], [1, 4]]))
        assert result.eigenvalues == (3.5, 3.5)
        assert result.approximate
        assert result.eigenvectors == identity(2)
        assert result.has_warning("not supported")

    def test_real_pair_is_not_approximate(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = eigen(from_array([[2, 1], [1, 2]]))
        assert not result.approximate
        assert result.warnings == ()

    def test_non_square(self):
        with pytest.raises(InvalidDomainError):
            eigen(zeros(2, 3))


# ═══════════════════════════════════════════════════════════════════════
# Shifted QR iteration
# ═══════════════════════════════════════════════════════════════════════


class TestShiftedQR:

    @pytest.mark.parametrize("n", [3, 5, 8])
    def test_symmetric_matches_scipy(self, rng, n):
        x = rng.standard_normal((n, n))
        a = (x + x.T) / 2
        result = eigen(Matrix.from_numpy(a))
        assert result.converged
        np.testing.assert_allclose(
            np.sort(result.eigenvalues), linalg.eigvalsh(a), atol=ITERATIVE.atol
        )
        _assert_eigenpairs(a, result)

    def test_symmetric_vectors_orthonormal(self, rng):
        x = rng.standard_normal((6, 6))
        a = x @ x.T
        V = eigen(Matrix.from_numpy(a)).eigenvectors.to_numpy()
        np.testing.assert_allclose(V.T @ V, np.eye(6), atol=ITERATIVE.atol)

    def test_non_symmetric_real_spectrum(self, rng):
        S = np.eye(4) + 0.3 * rng.standard_normal((4, 4))
        D = np.diag([1.0, 2.0, 3.0, 5.0])
        a = S @ D @ np.linalg.inv(S)
        result = eigen(Matrix.from_numpy(a))
        assert result.converged
        np.testing.assert_allclose(np.sort(result.eigenvalues), [1, 2, 3, 5], atol=ITERATIVE.atol)
        _assert_eigenpairs(a, result)

    def test_upper_triangular(self):
        a = from_array([[1, 2, 3], [0, 4, 5], [0, 0, 6]])
        result = eigen(a)
        assert result.iterations == 0
        assert result.eigenvalues == (1.0, 4.0, 6.0)
        _assert_eigenpairs(a.to_numpy(), result)

    def test_diagonal_is_immediate(self):
        result = eigen(diagonal([3, 1, 2]))
        assert result.iterations == 0
        assert result.eigenvalues == (3.0, 1.0, 2.0)
        assert result.eigenvectors == identity(3)

    def test_repeated_eigenvalue_symmetric(self, rng):
        Q, _ = np.linalg.qr(rng.standard_normal((4, 4)))
        a = Q @ np.diag([2.0, 2.0, 5.0, -1.0]) @ Q.T
        a = (a + a.T) / 2
        result = eigen(Matrix.from_numpy(a))
        np.testing.assert_allclose(np.sort(result.eigenvalues), [-1, 2, 2, 5], atol=ITERATIVE.atol)
        _assert_eigenpairs(a, result)

    def test_trace_and_determinant(self, rng):
        x = rng.standard_normal((5, 5))
        a = x @ x.T + np.eye(5)
        values = np.array(eigen(Matrix.from_numpy(a)).eigenvalues)
        assert values.sum() == pytest.approx(np.trace(a), rel=1e-8)
        assert values.prod() == pytest.approx(np.linalg.det(a), rel=1e-6)

    @pytest.mark.parametrize("data", [
        [[2, 0, 1], [0, 3, 0], [1, 0, 4]],
        [[4, 0, 0, 1], [0, 3, 0, 0], [0, 0, 2, 0], [1, 0, 0, 1]],
    ])
    def test_zero_subdiagonal_with_coupling_below(self, data):
        """A zero sub-diagonal does not decouple a non-Hessenberg matrix."""
        a = from_array(data)
        result = eigen(a)
        assert result.converged
        np.testing.assert_allclose(
            np.sort(result.eigenvalues), linalg.eigvalsh(a.to_numpy()), atol=ITERATIVE.atol
        )
        _assert_eigenpairs(a.to_numpy(), result)

    def test_zero_subdiagonal_symmetric_random(self, rng):
        x = rng.standard_normal((6, 6))
        a = (x + x.T) / 2
        for i in range(5):
            a[i + 1, i] = a[i, i + 1] = 0.0
        result = eigen(Matrix.from_numpy(a))
        assert result.converged
        np.testing.assert_allclose(
            np.sort(result.eigenvalues), linalg.eigvalsh(a), atol=ITERATIVE.atol
        )
        _assert_eigenpairs(a, result)

    def test_zero_subdiagonal_non_symmetric(self):
        """Eigenvalues 1, 3 and 6; the diagonal is 2, 3, 5."""
        a = np.array([[2.0, 1.0, 1.0], [0.0, 3.0, 0.0], [4.0, 0.0, 5.0]])
        result = eigen(Matrix.from_numpy(a))
        assert result.converged
        np.testing.assert_allclose(np.sort(result.eigenvalues), [1, 3, 6], atol=ITERATIVE.atol)
        _assert_eigenpairs(a, result)

    def test_real_eigenvalue_found_beside_complex_pair(self):
        """Eigenvalues are 10.06 and a complex pair; the QR loop must iterate."""
        a = np.array([[1.0, 2.0, 3.0], [0.0, 4.0, 5.0], [6.0, 0.0, 7.0]])
        real_root = max(np.real(v) for v in linalg.eigvals(a) if abs(np.imag(v)) < 1e-12)
        with pytest.warns(RuntimeWarning, match="did not converge"):
            result = eigen(Matrix.from_numpy(a))
        assert result.iterations > 0
        assert any(abs(v - real_root) < ITERATIVE.atol for v in result.eigenvalues)

    def test_shift_on_exact_eigenvalue_is_retried(self, caplog):
        """The trailing block's Wilkinson shift is exactly an eigenvalue."""
        a = from_array([[5, 0, 0], [0, 1, 1], [0, 1, 1]])
        caplog.set_level(logging.DEBUG, logger="pymatrix.decomposition.eigen")
        result = eigen(a)
        assert result.converged
        np.testing.assert_allclose(np.sort(result.eigenvalues), [0, 2, 5], atol=ITERATIVE.atol)
        assert "retrying" in caplog.text
        _assert_eigenpairs(a.to_numpy(), result)

    def test_custom_logger(self, rng, caplog):
        logger = logging.getLogger("tests.eigen")
        caplog.set_level(logging.DEBUG, logger="tests.eigen")
        x = rng.standard_normal((4, 4))
        eigen(Matrix.from_numpy(x + x.T), logger=logger)
        assert any(r.name == "tests.eigen" and "QR iterations" in r.getMessage()
                   for r in caplog.records)


# ═══════════════════════════════════════════════════════════════════════
# Non-convergence
# ═══════════════════════════════════════════════════════════════════════


class TestNonConvergence:
    """Failure to converge warns and returns a best-effort result."""

    def test_iteration_cap(self, rng):
        x = rng.standard_normal((6, 6))
        with pytest.warns(RuntimeWarning, match="did not converge"):
            result = eigen(Matrix.from_numpy(x + x.T), max_iterations=1)
        assert not result.converged
        assert result.iterations == 1
        assert result.has_warning("did not converge")
        assert len(result.eigenvalues) == 6

    def test_complex_pair_in_larger_matrix(self):
        a = from_array([[0, -1, 0], [1, 0, 0], [0, 0, 2]])
        with pytest.warns(RuntimeWarning):
            result = eigen(a)
        assert not result.converged
        assert result.eigenvalues[2] == 2.0

    def test_str(self):
        text = str(eigen(from_array([[2, 0], [0, 1]])))
        assert text.startswith("Eigendecomposition:\nEigenvalues = [2, 1]\n")
