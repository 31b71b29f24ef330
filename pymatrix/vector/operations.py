"""
Operations on matrices shaped as row (1 x n) or column (n x 1) vectors.
"""

from __future__ import annotations

import numpy as np

from pymatrix.core.exceptions import DegenerateVectorError, DimensionError
from pymatrix.core.tolerances import NORMALIZE_TOLERANCE
from pymatrix.matrix.matrix import Matrix


def is_vector(a: Matrix) -> bool:
    return a.rows == 1 or a.cols == 1


def is_row_vector(a: Matrix) -> bool:
    return a.rows == 1


def is_column_vector(a: Matrix) -> bool:
    return a.cols == 1


def dot(a: Matrix, b: Matrix) -> float:
    """
    Dot product of two vectors of equal length, in any orientation.

    Row·row, column·column, row·column and column·row are all accepted.

    Raises:
        DimensionError: If either operand is not a vector or the lengths
            differ
    """
    if not (is_vector(a) and is_vector(b)):
        raise DimensionError(
            f"dot product requires two vectors, got {a.rows}x{a.cols} and {b.rows}x{b.cols}"
        )
    if is_row_vector(a) and is_row_vector(b) and a.cols == b.cols:
        return float(a.view()[0, :] @ b.view()[0, :])
    if is_column_vector(a) and is_column_vector(b) and a.rows == b.rows:
        return float(a.view()[:, 0] @ b.view()[:, 0])
    if is_row_vector(a) and is_column_vector(b) and a.cols == b.rows:
        return float(a.view()[0, :] @ b.view()[:, 0])
    if is_column_vector(a) and is_row_vector(b) and a.rows == b.cols:
        return float(a.view()[:, 0] @ b.view()[0, :])
    raise DimensionError(
        f"dot product: vector lengths do not match ({a.rows}x{a.cols} vs {b.rows}x{b.cols})"
    )


def cross(a: Matrix, b: Matrix) -> Matrix:
    """
    Cross product of two 3x1 column vectors.

    Raises:
        DegenerateVectorError: If either operand is not a 3x1 column vector
    """
    if a.shape != (3, 1) or b.shape != (3, 1):
        raise DegenerateVectorError(
            f"cross product requires two 3x1 column vectors, "
            f"got {a.rows}x{a.cols} and {b.rows}x{b.cols}"
        )
    u = a.view()[:, 0]
    v = b.view()[:, 0]
    result = np.array([
        [u[1] * v[2] - u[2] * v[1]],
        [u[2] * v[0] - u[0] * v[2]],
        [u[0] * v[1] - u[1] * v[0]],
    ])
    return Matrix._adopt(result)


def normalize(a: Matrix) -> Matrix:
    """
    Unit vector in the direction of a, keeping its orientation.

    Raises:
        DegenerateVectorError: If a is not a vector or its squared norm is
            below NORMALIZE_TOLERANCE
    """
    if not is_vector(a):
        raise DegenerateVectorError(
            f"normalize requires a vector, got {a.rows}x{a.cols}"
        )
    data = a.view()
    squared = float(np.sum(data * data))
    if squared < NORMALIZE_TOLERANCE:
        raise DegenerateVectorError(
            f"Cannot normalize zero vector: squared norm {squared:.3e} "
            f"is below {NORMALIZE_TOLERANCE:.0e}",
            norm=float(np.sqrt(squared)),
        )
    return Matrix._adopt(data / np.sqrt(squared))
