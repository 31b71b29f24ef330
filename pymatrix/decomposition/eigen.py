"""
Eigendecomposition of real square matrices.

1x1 and 2x2 matrices are solved in closed form. Larger matrices are
first reduced to upper Hessenberg form by Householder similarity
transforms, then run through the shifted QR algorithm: each step
factors the active block minus a Wilkinson shift with the package's
Gram-Schmidt QR, recombines R·Q and adds the shift back. QR steps keep
the Hessenberg form, so a sub-diagonal entry under the tolerance
decouples the matrix there and deflates the problem from the bottom up.

Complex eigenvalues are not supported. A 2x2 input with a complex pair
returns the real part twice with approximate=True; larger inputs with a
complex pair fail to converge and are reported through a RuntimeWarning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import warnings

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import RankDeficientError
from pymatrix.core.tolerances import (
    EIGEN_MAX_ITERATIONS,
    EIGEN_TOLERANCE,
    SHIFT_PERTURBATION,
    SHIFT_RETRIES,
)
from pymatrix.core.validation import check_square
from pymatrix.decomposition.qr import gram_schmidt
from pymatrix.matrix.matrix import Matrix, format_matrix, format_value
from pymatrix.matrix.properties import is_symmetric

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EigenResult:
    """
    Result of eigendecomposition.

    Attributes:
        eigenvalues: Eigenvalues in the order their vectors appear as columns
        eigenvectors: Unit eigenvectors as columns (n x n)
        converged: False when the QR iteration hit its cap
        iterations: QR steps taken (0 for the closed forms)
        approximate: True when a complex pair was replaced by its real part
        warnings: Non-fatal issues encountered during computation
    """
    eigenvalues: tuple[float, ...]
    eigenvectors: Matrix
    converged: bool = True
    iterations: int = 0
    approximate: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def __str__(self) -> str:
        values = ', '.join(format_value(v) for v in self.eigenvalues)
        return (
            f"Eigendecomposition:\n"
            f"Eigenvalues = [{values}]\n"
            f"Eigenvectors =\n{format_matrix(self.eigenvectors.view())}"
        )


def eigen(
    a: Matrix,
    tol: float = EIGEN_TOLERANCE,
    max_iterations: int = EIGEN_MAX_ITERATIONS,
    logger: logging.Logger | None = None,
) -> EigenResult:
    """
    Eigenvalues and eigenvectors of a square matrix.

    Args:
        a: Square matrix
        tol: Below-diagonal magnitude under which an entry counts as zero
        max_iterations: Cap on QR steps for n > 2
        logger: Receives debug diagnostics; defaults to the module logger

    Returns:
        EigenResult. Non-convergence is reported through converged=False,
        the warnings tuple and a RuntimeWarning rather than an exception.

    Raises:
        InvalidDomainError: If a is not square
    """
    check_square(a.shape, 'eigendecomposition')
    log = logger or _logger
    n = a.rows
    data = a.view()

    if n == 0:
        return EigenResult(eigenvalues=(), eigenvectors=Matrix(0, 0))
    if n == 1:
        return EigenResult(
            eigenvalues=(float(data[0, 0]),),
            eigenvectors=Matrix._adopt(np.ones((1, 1))),
        )
    if n == 2:
        return _eigen_2x2(data, tol)

    return _shifted_qr(data, is_symmetric(a), tol, max_iterations, log)


def _eigen_2x2(data: NDArray[np.float64], tol: float) -> EigenResult:
    a, b = float(data[0, 0]), float(data[0, 1])
    c, d = float(data[1, 0]), float(data[1, 1])
    trace = a + d
    det = a * d - b * c
    disc = trace * trace - 4.0 * det

    if disc < 0.0:
        real = trace / 2.0
        imag = np.sqrt(-disc) / 2.0
        message = (
            f"Complex eigenvalues {real:.6g} ± {imag:.6g}i are not supported; "
            f"returning the real part for both"
        )
        warnings.warn(message, RuntimeWarning, stacklevel=3)
        return EigenResult(
            eigenvalues=(real, real),
            eigenvectors=Matrix._adopt(np.eye(2)),
            approximate=True,
            warnings=(message,),
        )

    root = np.sqrt(disc)
    values = ((trace + root) / 2.0, (trace - root) / 2.0)
    vectors = np.zeros((2, 2), dtype=np.float64)
    for i, lam in enumerate(values):
        first = np.array([lam - d, c])
        second = np.array([b, lam - a])
        v = first if first @ first >= second @ second else second
        norm = float(np.sqrt(v @ v))
        if norm <= tol:
            vectors[i, i] = 1.0
        else:
            vectors[:, i] = v / norm

    return EigenResult(
        eigenvalues=(float(values[0]), float(values[1])),
        eigenvectors=Matrix._adopt(vectors),
    )


def _wilkinson_shift(block: NDArray[np.float64]) -> float:
    """Eigenvalue of the trailing 2x2 closer to its bottom-right entry."""
    p, q = block[-2, -2], block[-2, -1]
    r, s = block[-1, -2], block[-1, -1]
    trace = p + s
    disc = trace * trace - 4.0 * (p * s - q * r)
    if disc < 0.0:
        return float(s)
    root = np.sqrt(disc)
    high = (trace + root) / 2.0
    low = (trace - root) / 2.0
    return float(high if abs(high - s) <= abs(low - s) else low)


def _factor_shifted(
    block: NDArray[np.float64],
    shift: float,
    log: logging.Logger,
) -> tuple[NDArray[np.float64], NDArray[np.float64], float]:
    """
    QR-factor block - shift·I, nudging the shift when it hits an eigenvalue.

    Raises:
        RankDeficientError: If every perturbed shift still yields dependent
            columns
    """
    size = block.shape[0]
    scale = max(1.0, float(np.max(np.abs(block))))
    nudge = SHIFT_PERTURBATION * scale
    attempt = 0
    while True:
        try:
            Q, R = gram_schmidt(block - shift * np.eye(size), reorthogonalize=True)
            return Q, R, shift
        except RankDeficientError:
            if attempt == SHIFT_RETRIES:
                raise
            log.debug("shift %.6g is an eigenvalue; retrying with %.6g",
                      shift, shift + nudge)
            shift += nudge
            nudge *= 100.0
            attempt += 1


def _hessenberg(work: NDArray[np.float64], V: NDArray[np.float64]) -> None:
    """
    Reduce work to upper Hessenberg form in place, accumulating into V.

    Column k is reflected onto e_(k+1) below the diagonal by a Householder
    transform applied from both sides, so work stays similar to the input
    with work = Vᵗ·A·V. Columns already zero below the sub-diagonal are
    left untouched.
    """
    n = work.shape[0]
    for k in range(n - 2):
        x = work[k + 1:, k].copy()
        if not np.any(x[1:]):
            continue
        alpha = -np.copysign(np.sqrt(x @ x), x[0])
        v = x
        v[0] -= alpha
        v /= np.sqrt(v @ v)
        work[k + 1:, :] -= 2.0 * np.outer(v, v @ work[k + 1:, :])
        work[:, k + 1:] -= 2.0 * np.outer(work[:, k + 1:] @ v, v)
        V[:, k + 1:] -= 2.0 * np.outer(V[:, k + 1:] @ v, v)
        work[k + 2:, k] = 0.0


def _active_block(work: NDArray[np.float64], hi: int, tol: float) -> int:
    """Top row of the unreduced Hessenberg block ending at hi."""
    lo = hi - 1
    while lo > 0 and abs(work[lo, lo - 1]) >= tol:
        lo -= 1
    if lo > 0:
        work[lo, lo - 1] = 0.0
    return lo


def _has_complex_pair(block: NDArray[np.float64]) -> bool:
    trace = block[0, 0] + block[1, 1]
    det = block[0, 0] * block[1, 1] - block[0, 1] * block[1, 0]
    return trace * trace - 4.0 * det < 0.0


def _shifted_qr(
    data: NDArray[np.float64],
    symmetric: bool,
    tol: float,
    max_iterations: int,
    log: logging.Logger,
) -> EigenResult:
    n = data.shape[0]
    work = data.copy()
    V = np.eye(n, dtype=np.float64)
    _hessenberg(work, V)
    iterations = 0
    hi = n - 1

    while hi > 0 and iterations < max_iterations:
        if abs(work[hi, hi - 1]) < tol:
            work[hi, hi - 1] = 0.0
            hi -= 1
            continue
        lo = _active_block(work, hi, tol)
        if lo == hi - 1 and _has_complex_pair(work[lo:hi + 1, lo:hi + 1]):
            # isolated complex pair: no real Schur form progress is possible
            hi -= 2
            continue

        block = work[lo:hi + 1, lo:hi + 1]
        shift = _wilkinson_shift(block)
        Q, R, shift = _factor_shifted(block, shift, log)

        # R·Q of a Hessenberg Q is Hessenberg; drop the rounding below it
        work[lo:hi + 1, lo:hi + 1] = np.triu(R @ Q + shift * np.eye(hi - lo + 1), -1)
        work[lo:hi + 1, :lo] = Q.T @ work[lo:hi + 1, :lo]
        work[lo:hi + 1, hi + 1:] = Q.T @ work[lo:hi + 1, hi + 1:]
        work[:lo, lo:hi + 1] = work[:lo, lo:hi + 1] @ Q
        work[hi + 1:, lo:hi + 1] = work[hi + 1:, lo:hi + 1] @ Q
        V[:, lo:hi + 1] = V[:, lo:hi + 1] @ Q
        iterations += 1

    below = np.abs(np.tril(work, -1))
    converged = bool(np.all(below < tol))
    log.debug("eigen: %d QR iterations, largest below-diagonal entry %.3e",
              iterations, float(np.max(below)))

    eigenvalues = tuple(float(v) for v in np.diag(work))
    vectors = V if symmetric else V @ _triangular_eigenvectors(work)
    norms = np.sqrt(np.sum(vectors * vectors, axis=0))
    vectors = vectors / np.where(norms > 0.0, norms, 1.0)

    warn_list: list[str] = []
    if not converged:
        message = (
            f"QR iteration did not converge after {iterations} iterations "
            f"(largest below-diagonal entry {float(np.max(below)):.3e}, "
            f"tolerance {tol:.0e}); eigenpairs are approximate"
        )
        warnings.warn(message, RuntimeWarning, stacklevel=3)
        warn_list.append(message)

    return EigenResult(
        eigenvalues=eigenvalues,
        eigenvectors=Matrix._adopt(vectors),
        converged=converged,
        iterations=iterations,
        warnings=tuple(warn_list),
    )


def _triangular_eigenvectors(T: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Eigenvectors of the upper triangular part of T, one column per diagonal.

    Column i solves (T - t_ii·I)·y = 0 with y_i = 1 by back-substitution.
    Near-zero denominators (repeated eigenvalues) are clamped to a small
    multiple of the matrix scale.
    """
    n = T.shape[0]
    smallest = np.finfo(np.float64).eps * max(1.0, float(np.max(np.abs(T))))
    Y = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        lam = T[i, i]
        Y[i, i] = 1.0
        for j in range(i - 1, -1, -1):
            denom = T[j, j] - lam
            if abs(denom) < smallest:
                denom = smallest
            Y[j, i] = -(T[j, j + 1:i + 1] @ Y[j + 1:i + 1, i]) / denom
    return Y
