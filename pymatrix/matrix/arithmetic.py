"""
Basic matrix arithmetic and transformations.

All functions return new matrices and leave their operands untouched,
except set_submatrix() and swap_rows(), which mutate their target.
"""

from __future__ import annotations

import numbers

import numpy as np

from pymatrix.core.exceptions import DimensionError, NumericalError, ValidationError
from pymatrix.core.tolerances import BLOCK_SIZE
from pymatrix.core.validation import check_index, check_same_shape, check_window
from pymatrix.matrix.matrix import Matrix


def _check_scalar(value: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name}: expected a real number, got {value!r}")
    return float(value)


def add(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise sum. Shapes must match."""
    check_same_shape(a.shape, b.shape, 'add')
    return Matrix._adopt(a.view() + b.view())


def subtract(a: Matrix, b: Matrix) -> Matrix:
    """Element-wise difference a - b. Shapes must match."""
    check_same_shape(a.shape, b.shape, 'subtract')
    return Matrix._adopt(a.view() - b.view())


def scalar_multiply(a: Matrix, scalar: float) -> Matrix:
    """Every element multiplied by ``scalar``."""
    scalar = _check_scalar(scalar, 'scalar')
    return Matrix._adopt(a.view() * scalar)


def transpose(a: Matrix) -> Matrix:
    """cols x rows matrix with (i, j) -> (j, i)."""
    return Matrix._adopt(a.view().T.copy())


def elementwise_multiply(a: Matrix, b: Matrix) -> Matrix:
    """Hadamard product. Shapes must match."""
    check_same_shape(a.shape, b.shape, 'elementwise multiply')
    return Matrix._adopt(a.view() * b.view())


def elementwise_divide(a: Matrix, b: Matrix) -> Matrix:
    """
    Element-wise quotient a / b. Shapes must match.

    Raises:
        NumericalError: If any divisor entry is exactly zero
    """
    check_same_shape(a.shape, b.shape, 'elementwise divide')
    divisor = b.view()
    zero = np.argwhere(divisor == 0.0)
    if zero.size:
        i, j = (int(v) for v in zero[0])
        raise NumericalError(
            f"elementwise divide: division by zero at [{i},{j}] "
            f"({len(zero)} zero entries in divisor)"
        )
    return Matrix._adopt(a.view() / divisor)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """
    Matrix product a · b.

    Requires a.cols == b.rows; the result is a.rows x b.cols. When all of
    a.rows, a.cols and b.cols reach BLOCK_SIZE the product is accumulated
    tile by tile: each BLOCK_SIZE x BLOCK_SIZE block of the result sums
    partial products over BLOCK_SIZE-wide strips of the inner dimension.
    Smaller products use the direct formula. Both paths agree up to
    floating-point associativity.

    Raises:
        DimensionError: If the inner dimensions differ
    """
    if a.cols != b.rows:
        raise DimensionError(
            f"multiply: inner dimensions do not match "
            f"({a.rows}x{a.cols} · {b.rows}x{b.cols})"
        )
    left = a.view()
    right = b.view()
    m, n = a.shape
    p = b.cols

    if m >= BLOCK_SIZE and n >= BLOCK_SIZE and p >= BLOCK_SIZE:
        return Matrix._adopt(_block_multiply(left, right, BLOCK_SIZE))

    result = np.zeros((m, p), dtype=np.float64)
    for k in range(n):
        result += np.outer(left[:, k], right[k, :])
    return Matrix._adopt(result)


def _block_multiply(left: np.ndarray, right: np.ndarray, block: int) -> np.ndarray:
    m, n = left.shape
    p = right.shape[1]
    result = np.zeros((m, p), dtype=np.float64)
    for ii in range(0, m, block):
        i_end = min(ii + block, m)
        for jj in range(0, p, block):
            j_end = min(jj + block, p)
            tile = result[ii:i_end, jj:j_end]
            for kk in range(0, n, block):
                k_end = min(kk + block, n)
                tile += left[ii:i_end, kk:k_end] @ right[kk:k_end, jj:j_end]
    return result


def get_submatrix(a: Matrix, row: int, col: int, n_rows: int, n_cols: int) -> Matrix:
    """
    Copy of the n_rows x n_cols window starting at (row, col).

    Raises:
        IndexOutOfBoundsError: If the window does not lie inside ``a``
    """
    check_window(row, col, n_rows, n_cols, a.shape)
    return Matrix._adopt(a.view()[row:row + n_rows, col:col + n_cols].copy())


def set_submatrix(a: Matrix, row: int, col: int, sub: Matrix) -> None:
    """
    Overwrite the window of ``a`` starting at (row, col) with ``sub``, in place.

    Raises:
        IndexOutOfBoundsError: If ``sub`` does not fit inside ``a`` at (row, col)
    """
    check_window(row, col, sub.rows, sub.cols, a.shape)
    a._data[row:row + sub.rows, col:col + sub.cols] = sub.view()


def swap_rows(a: Matrix, row1: int, row2: int) -> None:
    """Exchange two rows of ``a`` in place."""
    check_index(row1, 0, (a.rows, max(a.cols, 1)))
    check_index(row2, 0, (a.rows, max(a.cols, 1)))
    a._data[[row1, row2], :] = a._data[[row2, row1], :]
