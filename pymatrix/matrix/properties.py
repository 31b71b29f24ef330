"""
Structural queries: predicates, determinant, trace, rank and norms.

Predicates never raise on shape; they return False for non-square input
where squareness is implied. Scalar queries that are only defined for
square matrices (determinant, trace) raise InvalidDomainError.
"""

from __future__ import annotations

import numpy as np

from pymatrix.core.tolerances import (
    ORTHOGONALITY_TOLERANCE,
    PIVOT_TOLERANCE,
    RANK_TOLERANCE,
    SYMMETRY_TOLERANCE,
)
from pymatrix.core.validation import check_square
from pymatrix.matrix.arithmetic import multiply, transpose
from pymatrix.matrix.matrix import Matrix


def is_square(a: Matrix) -> bool:
    return a.rows == a.cols


def is_symmetric(a: Matrix, tol: float = SYMMETRY_TOLERANCE) -> bool:
    """
    True when a is square and |a_ij - a_ji| <= tol * max(1, max|a|).

    Pass ``tol=0.0`` for exact symmetry.
    """
    if not is_square(a):
        return False
    data = a.view()
    if data.size == 0:
        return True
    scale = max(1.0, float(np.max(np.abs(data))))
    return bool(np.all(np.abs(data - data.T) <= tol * scale))


def is_diagonal(a: Matrix) -> bool:
    """True when a is square and every off-diagonal entry is exactly zero."""
    if not is_square(a):
        return False
    data = a.view()
    return not np.any(data[~np.eye(a.rows, dtype=bool)])


def is_triangular(a: Matrix, upper: bool = True) -> bool:
    """
    True when a is square and upper (or lower) triangular.

    Entries on the wrong side of the diagonal must be exactly zero.
    """
    if not is_square(a):
        return False
    data = a.view()
    outside = np.tril(data, -1) if upper else np.triu(data, 1)
    return not np.any(outside)


def is_orthogonal(a: Matrix, tol: float = ORTHOGONALITY_TOLERANCE) -> bool:
    """True when a is square and every entry of A·Aᵗ - I is within tol."""
    if not is_square(a):
        return False
    product = multiply(a, transpose(a)).view()
    return bool(np.all(np.abs(product - np.eye(a.rows)) <= tol))


def _symmetric_pivots(data: np.ndarray) -> np.ndarray:
    """
    Pivots of Gaussian elimination without row exchanges.

    Elimination stops at the first pivot that is not strictly positive;
    later pivots are reported as NaN.
    """
    work = data.copy()
    n = work.shape[0]
    pivots = np.full(n, np.nan)
    for k in range(n):
        d = work[k, k]
        pivots[k] = d
        if d <= 0.0:
            break
        work[k + 1:, k + 1:] -= np.outer(work[k + 1:, k], work[k, k + 1:]) / d
    return pivots


def is_positive_definite(a: Matrix, tol: float = PIVOT_TOLERANCE) -> bool:
    """
    True when a is square, symmetric, has a positive diagonal and every
    pivot of symmetric Gaussian elimination exceeds tol.
    """
    if not is_square(a) or a.rows == 0:
        return False
    if not is_symmetric(a):
        return False
    data = a.view()
    if np.any(np.diag(data) <= 0.0):
        return False
    pivots = _symmetric_pivots(data)
    return bool(np.all(pivots > tol))


def is_positive_semidefinite(a: Matrix, tol: float = PIVOT_TOLERANCE) -> bool:
    """
    True when a is square, symmetric and xᵗAx >= 0 for every x.

    Uses symmetric elimination: no pivot may fall below -tol, and a pivot
    within tol of zero is only allowed when the rest of its column is also
    zero (otherwise a 2x2 principal minor is negative).
    """
    if not is_square(a):
        return False
    if not is_symmetric(a):
        return False
    work = a.to_numpy()
    n = a.rows
    if n == 0:
        return True
    threshold = tol * max(1.0, float(np.max(np.abs(work))))
    if np.any(np.diag(work) < -threshold):
        return False
    for k in range(n):
        d = work[k, k]
        if d < -threshold:
            return False
        if d <= threshold:
            if np.any(np.abs(work[k + 1:, k]) > threshold):
                return False
            continue
        work[k + 1:, k + 1:] -= np.outer(work[k + 1:, k], work[k, k + 1:]) / d
    return True


def determinant(a: Matrix) -> float:
    """
    Determinant of a square matrix.

    Closed form for n <= 2; otherwise Gaussian elimination with partial
    pivoting, returning exactly 0.0 as soon as the best available pivot is
    at or below PIVOT_TOLERANCE. The empty matrix has determinant 1.0
    (the empty product).

    Raises:
        InvalidDomainError: If a is not square
    """
    check_square(a.shape, 'determinant')
    data = a.view()
    n = a.rows
    if n == 0:
        return 1.0
    if n == 1:
        return float(data[0, 0])
    if n == 2:
        return float(data[0, 0] * data[1, 1] - data[0, 1] * data[1, 0])

    work = data.copy()
    sign = 1.0
    for k in range(n):
        pivot_row = k + int(np.argmax(np.abs(work[k:, k])))
        if abs(work[pivot_row, k]) <= PIVOT_TOLERANCE:
            return 0.0
        if pivot_row != k:
            work[[k, pivot_row], :] = work[[pivot_row, k], :]
            sign = -sign
        factors = work[k + 1:, k] / work[k, k]
        work[k + 1:, k:] -= np.outer(factors, work[k, k:])
    return float(sign * np.prod(np.diag(work)))


def trace(a: Matrix) -> float:
    """
    Sum of the diagonal.

    Raises:
        InvalidDomainError: If a is not square
    """
    check_square(a.shape, 'trace')
    return float(np.trace(a.view()))


def rank(a: Matrix, tol: float = RANK_TOLERANCE) -> int:
    """
    Numerical rank: number of pivots in row echelon form.

    Gaussian elimination with partial pivoting; a column whose best
    remaining pivot is at or below tol contributes nothing.
    """
    work = a.to_numpy()
    rows, cols = work.shape
    r = 0
    for c in range(cols):
        if r >= rows:
            break
        pivot_row = r + int(np.argmax(np.abs(work[r:, c])))
        if abs(work[pivot_row, c]) <= tol:
            continue
        if pivot_row != r:
            work[[r, pivot_row], :] = work[[pivot_row, r], :]
        factors = work[r + 1:, c] / work[r, c]
        work[r + 1:, c:] -= np.outer(factors, work[r, c:])
        r += 1
    return r


def norm_one(a: Matrix) -> float:
    """Maximum absolute column sum."""
    data = a.view()
    if data.size == 0:
        return 0.0
    return float(np.max(np.sum(np.abs(data), axis=0)))


def norm_inf(a: Matrix) -> float:
    """Maximum absolute row sum."""
    data = a.view()
    if data.size == 0:
        return 0.0
    return float(np.max(np.sum(np.abs(data), axis=1)))


def norm_frobenius(a: Matrix) -> float:
    """Square root of the sum of squared entries."""
    return float(np.sqrt(np.sum(a.view() ** 2)))
