"""
Power iteration for a single eigenpair.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from pymatrix.core.exceptions import ConvergenceError, InvalidDomainError
from pymatrix.core.tolerances import POWER_METHOD_MAX_ITERATIONS, POWER_METHOD_TOLERANCE
from pymatrix.core.validation import check_size, check_square
from pymatrix.decomposition.lu import lu, lu_solve
from pymatrix.matrix.matrix import Matrix, format_value

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Eigenpair:
    """
    One eigenvalue with its unit eigenvector.

    Attributes:
        eigenvalue: Rayleigh-quotient estimate at convergence
        eigenvector: Unit column vector, largest-magnitude entry positive
        iterations: Power iterations performed
    """
    eigenvalue: float
    eigenvector: Matrix
    iterations: int = 0

    def __str__(self) -> str:
        return (
            f"Eigenvalue: {format_value(self.eigenvalue)}\n"
            f"Eigenvector:\n{self.eigenvector}"
        )


def _fix_sign(v: np.ndarray) -> np.ndarray:
    """Flip v so that its largest-magnitude component is positive."""
    return -v if v[int(np.argmax(np.abs(v)))] < 0.0 else v


def power_method(
    a: Matrix,
    max_iterations: int = POWER_METHOD_MAX_ITERATIONS,
    tolerance: float = POWER_METHOD_TOLERANCE,
    shift: float | None = None,
    seed: int = 0,
    logger: logging.Logger | None = None,
) -> Eigenpair:
    """
    Dominant eigenpair by power iteration, or the eigenpair nearest shift.

    Without a shift, repeatedly applies A to a unit vector. With a shift,
    applies (A - shift·I)⁻¹ instead (inverse iteration, through one LU
    factorization), which converges to the eigenvalue closest to shift.
    The eigenvalue estimate is the Rayleigh quotient vᵗ·A·v of the current
    unit vector.

    Args:
        a: Square, non-empty matrix
        max_iterations: Iterations allowed
        tolerance: Converged when successive estimates differ by at most
            tolerance·max(1, |λ|)
        shift: Target for inverse iteration; None for the dominant eigenvalue
        seed: Seed for the random starting vector
        logger: Receives debug diagnostics; defaults to the module logger

    Returns:
        Eigenpair

    Raises:
        InvalidDomainError: If a is not square or is empty
        SingularMatrixError: If shift is (numerically) an eigenvalue
        ConvergenceError: If the estimate has not settled after
            max_iterations iterations
    """
    log = logger or _logger
    check_square(a.shape, 'power method')
    max_iterations = check_size(max_iterations, 'max_iterations', minimum=1)
    n = a.rows
    if n == 0:
        raise InvalidDomainError("power method: matrix is empty")

    A = a.view()
    if shift is None:
        def apply(v):
            return A @ v
    else:
        factorization = lu(Matrix._adopt(A - float(shift) * np.eye(n)))

        def apply(v):
            return lu_solve(factorization, Matrix._adopt(v.reshape(n, 1))).view()[:, 0]

    v = np.random.default_rng(seed).standard_normal(n)
    v /= np.linalg.norm(v)
    estimate = float(v @ A @ v)
    change = float('inf')

    for iteration in range(1, max_iterations + 1):
        w = apply(v)
        norm = float(np.linalg.norm(w))
        if norm == 0.0:
            # A·v = 0 exactly: v spans part of the null space
            log.debug("power method: hit the null space after %d iterations", iteration)
            return Eigenpair(0.0, Matrix._adopt(_fix_sign(v).reshape(n, 1)), iteration)
        v = w / norm
        previous, estimate = estimate, float(v @ A @ v)
        change = abs(estimate - previous)
        if change <= tolerance * max(1.0, abs(estimate)):
            log.debug("power method: eigenvalue %.6g after %d iterations",
                      estimate, iteration)
            return Eigenpair(
                eigenvalue=estimate,
                eigenvector=Matrix._adopt(_fix_sign(v).reshape(n, 1)),
                iterations=iteration,
            )

    raise ConvergenceError(
        f"power method did not converge after {max_iterations} iterations: "
        f"last change {change:.3e}",
        iterations=max_iterations,
        final_change=change,
        reason='max_iterations',
        threshold=tolerance,
    )
