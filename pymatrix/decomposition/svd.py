"""
Singular value decomposition by the Golub-Reinsch algorithm.

Computes the thin factorization A = U·S·Vᵗ with k = min(rows, cols):
U is rows x k with orthonormal columns, S is k x k diagonal with
non-negative entries sorted in descending order, V is cols x k with
orthonormal columns.

Two phases:
    1. Householder reflections reduce A to upper bidiagonal form. The
       left reflections are accumulated in place of the working copy,
       the right ones into V.
    2. Implicitly shifted QR sweeps drive the super-diagonal to zero,
       one singular value at a time from the last index backward, with
       Givens rotations applied to U and V.

Wide input (rows < cols) is decomposed through its transpose.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import ConvergenceError
from pymatrix.core.tolerances import SVD_MAX_ITERATIONS
from pymatrix.matrix.matrix import Matrix

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SVDResult:
    """
    Result of singular value decomposition.

    Attributes:
        U: Left singular vectors as columns (rows x k)
        S: Diagonal matrix of singular values, descending (k x k)
        V: Right singular vectors as columns (cols x k)
    """
    U: Matrix
    S: Matrix
    V: Matrix

    @property
    def singular_values(self) -> tuple[float, ...]:
        """Diagonal of S, largest first."""
        return tuple(float(v) for v in np.diag(self.S.view()))

    def __str__(self) -> str:
        return (
            f"SVD Decomposition:\n"
            f"U =\n{self.U}\n"
            f"S =\n{self.S}\n"
            f"V =\n{self.V}"
        )


def _sign(a: float, b: float) -> float:
    """|a| carrying the sign of b, with b == 0 counting as positive."""
    return abs(a) if b >= 0.0 else -abs(a)


def _bidiagonalize(
    a: NDArray[np.float64],
) -> tuple[NDArray[np.float64], NDArray[np.float64], float]:
    """
    Householder reduction of a (m x n, m >= n) to bidiagonal form.

    Overwrites a with the Householder vectors. Returns the diagonal w,
    the super-diagonal rv1 (rv1[i] couples w[i-1] and w[i], rv1[0] == 0)
    and the norm estimate used by the split tests.
    """
    m, n = a.shape
    w = np.zeros(n, dtype=np.float64)
    rv1 = np.zeros(n, dtype=np.float64)
    g = scale = anorm = 0.0

    for i in range(n):
        l = i + 1
        rv1[i] = scale * g

        g = 0.0
        scale = float(np.sum(np.abs(a[i:, i])))
        if scale != 0.0:
            a[i:, i] /= scale
            s = float(a[i:, i] @ a[i:, i])
            f = a[i, i]
            g = -_sign(math.sqrt(s), f)
            h = f * g - s
            a[i, i] = f - g
            if l < n:
                projections = (a[i:, i] @ a[i:, l:]) / h
                a[i:, l:] += np.outer(a[i:, i], projections)
            a[i:, i] *= scale
        w[i] = scale * g

        g = scale = 0.0
        if i < n - 1:
            scale = float(np.sum(np.abs(a[i, l:])))
            if scale != 0.0:
                a[i, l:] /= scale
                s = float(a[i, l:] @ a[i, l:])
                f = a[i, l]
                g = -_sign(math.sqrt(s), f)
                h = f * g - s
                a[i, l] = f - g
                rv1[l:] = a[i, l:] / h
                if l < m:
                    projections = a[l:, l:] @ a[i, l:]
                    a[l:, l:] += np.outer(projections, rv1[l:])
                a[i, l:] *= scale

        anorm = max(anorm, abs(w[i]) + abs(rv1[i]))

    return w, rv1, anorm


def _accumulate_right(
    a: NDArray[np.float64],
    rv1: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Product of the right Householder reflections stored in a's rows."""
    n = a.shape[1]
    v = np.zeros((n, n), dtype=np.float64)
    g = 0.0
    l = n
    for i in range(n - 1, -1, -1):
        if i < n - 1:
            if g != 0.0:
                # double division avoids underflow
                v[l:, i] = (a[i, l:] / a[i, l]) / g
                projections = a[i, l:] @ v[l:, l:]
                v[l:, l:] += np.outer(v[l:, i], projections)
            v[i, l:] = 0.0
            v[l:, i] = 0.0
        v[i, i] = 1.0
        g = rv1[i]
        l = i
    return v


def _accumulate_left(a: NDArray[np.float64], w: NDArray[np.float64]) -> None:
    """Replace a in place by the product of the left Householder reflections."""
    n = a.shape[1]
    for i in range(n - 1, -1, -1):
        l = i + 1
        g = w[i]
        a[i, l:] = 0.0
        if g != 0.0:
            g = 1.0 / g
            if l < n:
                projections = a[l:, i] @ a[l:, l:]
                factors = (projections / a[i, i]) * g
                a[i:, l:] += np.outer(a[i:, i], factors)
            a[i:, i] *= g
        else:
            a[i:, i] = 0.0
        a[i, i] += 1.0


def _rotate(
    m: NDArray[np.float64], j: int, i: int, c: float, s: float
) -> None:
    """Apply a Givens rotation to columns j and i of m in place."""
    y = m[:, j].copy()
    z = m[:, i].copy()
    m[:, j] = y * c + z * s
    m[:, i] = z * c - y * s


def _diagonalize(
    u: NDArray[np.float64],
    w: NDArray[np.float64],
    rv1: NDArray[np.float64],
    v: NDArray[np.float64],
    anorm: float,
    max_iterations: int,
    log: logging.Logger,
) -> int:
    """
    Implicit-shift QR on the bidiagonal (w, rv1), updating u and v.

    Returns the total number of QR sweeps.

    Raises:
        ConvergenceError: If a singular value needs more than
            max_iterations sweeps
    """
    n = w.shape[0]
    sweeps = 0

    for k in range(n - 1, -1, -1):
        for its in range(1, max_iterations + 1):
            # split test; rv1[0] == 0 so the scan always stops by l == 0
            flag = True
            l = k
            while l >= 0:
                nm = l - 1
                if abs(rv1[l]) + anorm == anorm:
                    flag = False
                    break
                if abs(w[nm]) + anorm == anorm:
                    break
                l -= 1

            if flag:
                # w[nm] is negligible: cancel rv1[l]
                c, s = 0.0, 1.0
                for i in range(l, k + 1):
                    f = s * rv1[i]
                    rv1[i] = c * rv1[i]
                    if abs(f) + anorm == anorm:
                        break
                    g = w[i]
                    h = math.hypot(f, g)
                    w[i] = h
                    h = 1.0 / h
                    c = g * h
                    s = -f * h
                    _rotate(u, nm, i, c, s)

            z = w[k]
            if l == k:
                if z < 0.0:
                    w[k] = -z
                    v[:, k] = -v[:, k]
                break

            if its == max_iterations:
                raise ConvergenceError(
                    f"SVD did not converge: singular value {k} still coupled "
                    f"after {max_iterations} iterations",
                    iterations=its,
                    final_change=float(abs(rv1[k])),
                    reason='max_iterations',
                )
            sweeps += 1

            # shift from the bottom 2x2 minor
            x = w[l]
            nm = k - 1
            y = w[nm]
            g = rv1[nm]
            h = rv1[k]
            f = ((y - z) * (y + z) + (g - h) * (g + h)) / (2.0 * h * y)
            g = math.hypot(f, 1.0)
            f = ((x - z) * (x + z) + h * ((y / (f + _sign(g, f))) - h)) / x

            c = s = 1.0
            for j in range(l, nm + 1):
                i = j + 1
                g = rv1[i]
                y = w[i]
                h = s * g
                g = c * g
                z = math.hypot(f, h)
                rv1[j] = z
                c = f / z
                s = h / z
                f = x * c + g * s
                g = g * c - x * s
                h = y * s
                y *= c
                _rotate(v, j, i, c, s)

                z = math.hypot(f, h)
                w[j] = z
                # the rotation is arbitrary when z == 0
                if z != 0.0:
                    z = 1.0 / z
                    c = f * z
                    s = h * z
                f = c * g + s * y
                x = c * y - s * g
                _rotate(u, j, i, c, s)

            rv1[l] = 0.0
            rv1[k] = f
            w[k] = x

    log.debug("svd: %d QR sweeps for %d singular values", sweeps, n)
    return sweeps


def _golub_reinsch(
    data: NDArray[np.float64],
    max_iterations: int,
    log: logging.Logger,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """Thin SVD of a tall (rows >= cols) array, singular values descending."""
    u = data.copy()
    w, rv1, anorm = _bidiagonalize(u)
    v = _accumulate_right(u, rv1)
    _accumulate_left(u, w)
    _diagonalize(u, w, rv1, v, anorm, max_iterations, log)

    order = np.argsort(-w, kind='stable')
    return u[:, order], w[order], v[:, order]


def svd(
    a: Matrix,
    max_iterations: int = SVD_MAX_ITERATIONS,
    logger: logging.Logger | None = None,
) -> SVDResult:
    """
    Singular value decomposition A = U·S·Vᵗ of any shape.

    Args:
        a: Matrix to decompose
        max_iterations: QR sweeps allowed per singular value
        logger: Receives debug diagnostics; defaults to the module logger

    Returns:
        SVDResult with U (rows x k), S (k x k), V (cols x k),
        k = min(rows, cols)

    Raises:
        ConvergenceError: If the bidiagonal QR iteration fails to converge
    """
    log = logger or _logger
    rows, cols = a.shape
    k = min(rows, cols)

    if k == 0:
        return SVDResult(
            U=Matrix._adopt(np.zeros((rows, 0))),
            S=Matrix._adopt(np.zeros((0, 0))),
            V=Matrix._adopt(np.zeros((cols, 0))),
        )

    if rows >= cols:
        U, w, V = _golub_reinsch(a.to_numpy(), max_iterations, log)
    else:
        V, w, U = _golub_reinsch(a.to_numpy().T.copy(), max_iterations, log)

    return SVDResult(
        U=Matrix._adopt(U),
        S=Matrix._adopt(np.diag(w)),
        V=Matrix._adopt(V),
    )
