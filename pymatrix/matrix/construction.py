"""
Matrix constructors.

Every constructor returns a freshly allocated Matrix. Constructors taking
data copy it; nothing aliases the caller's buffers.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_finite,
    check_size,
)
from pymatrix.matrix.matrix import Matrix


def _check_nonempty_vector(values: ArrayLike, name: str) -> np.ndarray:
    vector = check_array(values, name)
    check_1d(vector, name)
    check_finite(vector, name)
    if vector.size == 0:
        raise ValidationError(f"{name}: cannot be empty")
    return vector


def from_array(data: ArrayLike) -> Matrix:
    """
    Build a matrix from nested sequences or a 2D array.

    Parameters
    ----------
    data : array-like
        Rows of numbers. All rows must have the same length.

    Returns
    -------
    Matrix
        Copy of the data.

    Raises
    ------
    ValidationError
        Empty, ragged, non-numeric or non-finite input.
    DimensionError
        Input is not 2-dimensional.
    """
    array = check_array(data, 'data')
    if array.size == 0 and array.ndim <= 1:
        raise ValidationError("data: cannot create matrix from empty array")
    check_2d(array, 'data')
    if array.shape[0] == 0:
        raise ValidationError("data: cannot create matrix from empty array")
    check_finite(array, 'data')
    return Matrix._adopt(array)


def zeros(rows: int, cols: int) -> Matrix:
    """rows x cols matrix of zeros."""
    return Matrix(rows, cols)


def ones(rows: int, cols: int) -> Matrix:
    """rows x cols matrix of ones."""
    rows = check_size(rows, 'rows')
    cols = check_size(cols, 'cols')
    return Matrix._adopt(np.ones((rows, cols), dtype=np.float64))


def identity(size: int) -> Matrix:
    """size x size identity matrix."""
    size = check_size(size, 'size')
    return Matrix._adopt(np.eye(size, dtype=np.float64))


def diagonal(values: ArrayLike) -> Matrix:
    """Square matrix with ``values`` on the diagonal and zeros elsewhere."""
    vector = _check_nonempty_vector(values, 'values')
    return Matrix._adopt(np.diag(vector))


def symmetric(data: ArrayLike) -> Matrix:
    """
    Build a symmetric matrix from the lower triangle of ``data``.

    The diagonal and the entries below it are taken from ``data`` and
    mirrored across the diagonal; entries above the diagonal are ignored.
    """
    array = check_array(data, 'data')
    if array.size == 0:
        raise ValidationError("data: cannot create symmetric matrix from empty array")
    check_2d(array, 'data')
    check_finite(array, 'data')
    n, p = array.shape
    if n != p:
        raise ValidationError(
            f"data: must be square for symmetric construction, got {n}x{p}"
        )
    lower = np.tril(array)
    return Matrix._adopt(lower + np.tril(array, -1).T)


def band(size: int, lower: int, upper: int) -> Matrix:
    """
    Band matrix of ones.

    Entry (i, j) is 1 when ``j - i <= upper`` and ``i - j <= lower``,
    0 otherwise.
    """
    size = check_size(size, 'size', minimum=1)
    lower = check_size(lower, 'lower')
    upper = check_size(upper, 'upper')
    i, j = np.indices((size, size))
    inside = (j - i <= upper) & (i - j <= lower)
    return Matrix._adopt(inside.astype(np.float64))


def random(
    rows: int,
    cols: int,
    low: float = 0.0,
    high: float = 1.0,
    seed: int | np.random.Generator | None = None,
) -> Matrix:
    """
    Matrix of independent uniform draws from [low, high).

    Parameters
    ----------
    rows, cols : int
        Positive dimensions.
    low, high : float
        Bounds of the uniform distribution.
    seed : int, Generator or None
        Seed or generator for reproducibility. None draws fresh entropy.
    """
    rows = check_size(rows, 'rows', minimum=1)
    cols = check_size(cols, 'cols', minimum=1)
    if not high >= low:
        raise ValidationError(f"high ({high}) must be >= low ({low})")
    rng = np.random.default_rng(seed)
    return Matrix._adopt(rng.uniform(low, high, size=(rows, cols)))


def hilbert(size: int) -> Matrix:
    """Hilbert matrix, H[i, j] = 1 / (i + j + 1)."""
    size = check_size(size, 'size', minimum=1)
    i, j = np.indices((size, size))
    return Matrix._adopt(1.0 / (i + j + 1.0))


def toeplitz(first_row: ArrayLike, first_col: ArrayLike) -> Matrix:
    """
    Toeplitz matrix with constant diagonals.

    T[i, j] = first_row[j - i] for j >= i, first_col[i - j] otherwise.
    The result has len(first_col) rows and len(first_row) columns.

    Raises
    ------
    ValidationError
        Empty inputs, or first_row[0] != first_col[0].
    """
    row = _check_nonempty_vector(first_row, 'first_row')
    col = _check_nonempty_vector(first_col, 'first_col')
    if row[0] != col[0]:
        raise ValidationError(
            f"first elements of row and column must match, got {row[0]} and {col[0]}"
        )
    i, j = np.indices((col.size, row.size))
    offset = j - i
    result = np.where(offset >= 0, row[np.clip(offset, 0, None)], col[np.clip(-offset, 0, None)])
    return Matrix._adopt(result.astype(np.float64))


def vandermonde(values: ArrayLike) -> Matrix:
    """Square Vandermonde matrix, V[i, j] = values[i] ** j."""
    vector = _check_nonempty_vector(values, 'values')
    n = vector.size
    return Matrix._adopt(vector[:, np.newaxis] ** np.arange(n, dtype=np.float64))
