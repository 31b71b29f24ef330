"""
Tests for power iteration and shifted inverse iteration.
"""

import numpy as np
import pytest
from scipy import linalg

from pymatrix.core.exceptions import ConvergenceError, InvalidDomainError, SingularMatrixError
from pymatrix.iterative.power_method import Eigenpair, power_method
from pymatrix.matrix.construction import diagonal, from_array, zeros
from pymatrix.matrix.matrix import Matrix

A = from_array([[4, 1], [1, 3]])


class TestPowerMethod:

    def test_dominant_eigenvalue(self):
        pair = power_method(A)
        assert pair.eigenvalue == pytest.approx((7 + np.sqrt(5)) / 2, rel=1e-9)

    def test_eigenvector(self):
        pair = power_method(A)
        v = pair.eigenvector.to_numpy()
        np.testing.assert_allclose(A.to_numpy() @ v, pair.eigenvalue * v, atol=1e-4)
        assert np.linalg.norm(v) == pytest.approx(1.0)

    def test_largest_entry_positive(self):
        pair = power_method(from_array([[-1, 0], [0, -5]]))
        assert pair.eigenvalue == pytest.approx(-5.0)
        assert pair.eigenvector.get(1, 0) == pytest.approx(1.0)

    def test_symmetric_matches_scipy(self, rng):
        x = rng.standard_normal((5, 5))
        a = x @ x.T
        pair = power_method(Matrix.from_numpy(a), max_iterations=1000)
        assert pair.eigenvalue == pytest.approx(linalg.eigvalsh(a)[-1], rel=1e-8)

    def test_shifted_finds_nearest(self):
        pair = power_method(A, shift=2.0)
        assert pair.eigenvalue == pytest.approx((7 - np.sqrt(5)) / 2, rel=1e-9)

    def test_shift_on_eigenvalue(self):
        with pytest.raises(SingularMatrixError):
            power_method(diagonal([2.0, 1.0]), shift=2.0)

    def test_seed_reproducible(self):
        first = power_method(A, seed=3)
        second = power_method(A, seed=3)
        assert first == second

    def test_null_space(self):
        pair = power_method(zeros(2, 2))
        assert pair.eigenvalue == 0.0
        assert pair.iterations == 1

    def test_method_on_matrix(self):
        assert A.power_method(tolerance=1e-12).eigenvalue == pytest.approx(power_method(A).eigenvalue)

    def test_iteration_cap(self):
        close = diagonal([1.0, 0.999, 0.5])
        with pytest.raises(ConvergenceError) as exc_info:
            power_method(close, max_iterations=3)
        assert exc_info.value.iterations == 3

    def test_non_square(self):
        with pytest.raises(InvalidDomainError):
            power_method(zeros(2, 3))

    def test_empty(self):
        with pytest.raises(InvalidDomainError):
            power_method(zeros(0, 0))

    def test_str(self):
        pair = Eigenpair(2.0, from_array([[1.0], [0.0]]), 4)
        assert str(pair) == "Eigenvalue: 2\nEigenvector:\n|1|\n|0|"
