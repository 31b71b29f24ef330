"""
Input validation utilities for pymatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter or operation names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pymatrix.core.exceptions import (
    DimensionError,
    IndexOutOfBoundsError,
    InvalidDomainError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.float64]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects ragged
    nested sequences and inputs that result in object or non-numeric dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype (always a fresh copy)

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.array(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating ragged rows or non-numeric data"
        )

    if result.dtype == bool:
        result = result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex values are not supported")

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_size(value: Any, name: str, minimum: int = 0) -> int:
    """
    Verify a dimension argument is an integer no smaller than minimum.

    Args:
        value: Requested size
        name: Parameter name for error messages
        minimum: Smallest accepted value

    Returns:
        The size as a plain int

    Raises:
        ValidationError: If value is not an integer or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(f"{name}: expected an integer, got {value!r}")
    if value < minimum:
        raise ValidationError(f"{name}: must be >= {minimum}, got {value}")
    return int(value)


def check_square(shape: tuple[int, int], operation: str) -> None:
    """
    Verify a matrix shape is square.

    Args:
        shape: (rows, cols)
        operation: Operation name for error messages

    Raises:
        InvalidDomainError: If rows != cols
    """
    if shape[0] != shape[1]:
        raise InvalidDomainError(
            f"{operation}: requires a square matrix, got {shape[0]}x{shape[1]}"
        )


def check_same_shape(
    shape_a: tuple[int, int],
    shape_b: tuple[int, int],
    operation: str,
) -> None:
    """
    Verify two matrix shapes are identical.

    Raises:
        DimensionError: If the shapes differ
    """
    if shape_a != shape_b:
        raise DimensionError(
            f"{operation}: dimensions do not match "
            f"({shape_a[0]}x{shape_a[1]} vs {shape_b[0]}x{shape_b[1]})"
        )


def check_index(row: int, col: int, shape: tuple[int, int]) -> None:
    """
    Verify (row, col) addresses an element inside shape.

    Negative indices are rejected rather than wrapped.

    Raises:
        ValidationError: If either index is not an integer
        IndexOutOfBoundsError: If either index lies outside the matrix
    """
    for name, value in (('row', row), ('col', col)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValidationError(f"{name}: expected an integer index, got {value!r}")
    rows, cols = shape
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexOutOfBoundsError(
            f"Matrix index out of bounds: [{row},{col}] for {rows}x{cols} matrix",
            row=row,
            col=col,
            shape=shape,
        )


def check_window(
    row: int,
    col: int,
    n_rows: int,
    n_cols: int,
    shape: tuple[int, int],
) -> None:
    """
    Verify a rectangular window lies entirely inside shape.

    Raises:
        IndexOutOfBoundsError: If the window extends past any edge
    """
    rows, cols = shape
    if (
        row < 0 or col < 0 or n_rows < 0 or n_cols < 0
        or row + n_rows > rows or col + n_cols > cols
    ):
        raise IndexOutOfBoundsError(
            f"Invalid submatrix window: start [{row},{col}], size {n_rows}x{n_cols} "
            f"for {rows}x{cols} matrix",
            row=row,
            col=col,
            shape=shape,
        )


def check_matrix(value: Any, name: str) -> None:
    """
    Verify an argument is a Matrix.

    Raises:
        ValidationError: If value is not a Matrix instance
    """
    from pymatrix.matrix.matrix import Matrix

    if not isinstance(value, Matrix):
        raise ValidationError(
            f"{name}: expected a Matrix, got {type(value).__name__}"
        )
