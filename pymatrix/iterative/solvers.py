"""
Iterative solvers for square linear systems A·x = b.

Three stationary or Krylov methods share one driver: each method is a
generator yielding successive iterates, and the driver stops on the
relative residual ‖b - A·x‖₂ ≤ tolerance·‖b‖₂ or raises once
max_iterations iterates have been tried.
"""

from __future__ import annotations

from collections.abc import Iterator
import logging
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import (
    ConvergenceError,
    DimensionError,
    InvalidDomainError,
    NotPositiveDefiniteError,
    ValidationError,
)
from pymatrix.core.tolerances import ITERATIVE_MAX_ITERATIONS, ITERATIVE_TOLERANCE
from pymatrix.core.validation import check_matrix, check_size, check_square
from pymatrix.matrix.matrix import Matrix
from pymatrix.matrix.properties import is_symmetric

_logger = logging.getLogger(__name__)

IterativeMethod = Literal['conjugate_gradient', 'gauss_seidel', 'jacobi']


def _conjugate_gradient(
    A: NDArray[np.float64], b: NDArray[np.float64], x: NDArray[np.float64]
) -> Iterator[NDArray[np.float64]]:
    r = b - A @ x
    p = r.copy()
    rs = float(r @ r)
    while True:
        Ap = A @ p
        curvature = float(p @ Ap)
        if curvature <= 0.0:
            raise NotPositiveDefiniteError(
                f"conjugate gradient: non-positive curvature {curvature:.3e} "
                f"along a search direction",
                matrix_name='A',
                pivot_value=curvature,
            )
        alpha = rs / curvature
        x = x + alpha * p
        r = r - alpha * Ap
        rs_new = float(r @ r)
        p = r + (rs_new / rs) * p
        rs = rs_new
        yield x


def _jacobi(
    A: NDArray[np.float64], b: NDArray[np.float64], x: NDArray[np.float64]
) -> Iterator[NDArray[np.float64]]:
    d = np.diag(A)
    off = A - np.diag(d)
    while True:
        x = (b - off @ x) / d
        yield x


def _gauss_seidel(
    A: NDArray[np.float64], b: NDArray[np.float64], x: NDArray[np.float64]
) -> Iterator[NDArray[np.float64]]:
    n = A.shape[0]
    x = x.copy()
    while True:
        for i in range(n):
            sigma = A[i, :i] @ x[:i] + A[i, i + 1:] @ x[i + 1:]
            x[i] = (b[i] - sigma) / A[i, i]
        yield x.copy()


_METHODS = {
    'conjugate_gradient': _conjugate_gradient,
    'gauss_seidel': _gauss_seidel,
    'jacobi': _jacobi,
}


def solve_iterative(
    a: Matrix,
    b: Matrix,
    method: IterativeMethod = 'conjugate_gradient',
    max_iterations: int = ITERATIVE_MAX_ITERATIONS,
    tolerance: float = ITERATIVE_TOLERANCE,
    x0: Matrix | None = None,
    logger: logging.Logger | None = None,
) -> Matrix:
    """
    Solve A·x = b iteratively.

    Args:
        a: Square coefficient matrix. Conjugate gradient needs it symmetric
            positive definite; Jacobi and Gauss-Seidel need a non-zero
            diagonal and converge for diagonally dominant input.
        b: Right-hand side column vector (a.rows x 1)
        method: 'conjugate_gradient', 'gauss_seidel' or 'jacobi'
        max_iterations: Iterates tried before giving up
        tolerance: Relative residual at which to stop
        x0: Starting guess (a.rows x 1); zero vector when omitted
        logger: Receives debug diagnostics; defaults to the module logger

    Returns:
        Solution column vector. A zero b returns the zero vector.

    Raises:
        ValidationError: Unknown method, non-Matrix arguments or a
            max_iterations below 1
        InvalidDomainError: If a is not square, is not symmetric for
            conjugate gradient, or has a zero diagonal entry for the
            stationary methods
        DimensionError: If b or x0 is not an a.rows x 1 column vector
        NotPositiveDefiniteError: If conjugate gradient meets non-positive
            curvature
        ConvergenceError: If the residual is still above the threshold after
            max_iterations iterates
    """
    log = logger or _logger
    if method not in _METHODS:
        raise ValidationError(
            f"method: expected one of {sorted(_METHODS)}, got {method!r}"
        )
    check_matrix(b, 'b')
    check_square(a.shape, 'iterative solve')
    max_iterations = check_size(max_iterations, 'max_iterations', minimum=1)
    n = a.rows
    if b.shape != (n, 1):
        raise DimensionError(
            f"iterative solve: b must be {n}x1, got {b.rows}x{b.cols}"
        )

    A = a.view()
    rhs = b.view()[:, 0]
    if method == 'conjugate_gradient' and not is_symmetric(a):
        raise InvalidDomainError("conjugate gradient requires a symmetric matrix")
    if method != 'conjugate_gradient' and np.any(np.diag(A) == 0.0):
        index = int(np.flatnonzero(np.diag(A) == 0.0)[0])
        raise InvalidDomainError(
            f"{method}: zero on the diagonal at position {index}"
        )

    b_norm = float(np.linalg.norm(rhs))
    if b_norm == 0.0:
        return Matrix(n, 1)
    threshold = tolerance * b_norm

    if x0 is None:
        x = np.zeros(n, dtype=np.float64)
    else:
        check_matrix(x0, 'x0')
        if x0.shape != (n, 1):
            raise DimensionError(
                f"iterative solve: x0 must be {n}x1, got {x0.rows}x{x0.cols}"
            )
        x = x0.to_numpy()[:, 0]

    residual = float(np.linalg.norm(rhs - A @ x))
    if residual <= threshold:
        return Matrix._adopt(x.reshape(n, 1))

    for iteration, x in enumerate(_METHODS[method](A, rhs, x), start=1):
        residual = float(np.linalg.norm(rhs - A @ x))
        if residual <= threshold:
            log.debug("%s: converged after %d iterations, residual %.3e",
                      method, iteration, residual)
            return Matrix._adopt(x.reshape(n, 1))
        if iteration >= max_iterations:
            break

    raise ConvergenceError(
        f"{method} did not converge after {max_iterations} iterations: "
        f"residual {residual:.3e} above {threshold:.3e}",
        iterations=max_iterations,
        final_change=residual,
        reason='max_iterations',
        threshold=threshold,
    )
