"""
Matrix: dense float64 matrix value type.

Wraps a private 2D float64 buffer with bounds-checked element access.
Dimensions are fixed at construction and no two Matrix instances ever
share storage: every constructor, accessor returning an array, and
operation deep-copies.

Algorithms live in the capability subpackages as free functions
(arithmetic, properties, decomposition, functions, vector, descriptive,
iterative). The methods at the bottom of this class are thin
conveniences delegating to them, so both ``inverse(A)`` and
``A.inverse()`` work.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.exceptions import IndexOutOfBoundsError
from pymatrix.core.validation import (
    check_2d,
    check_array,
    check_finite,
    check_index,
    check_size,
)

if TYPE_CHECKING:
    import logging
    from pymatrix.decomposition.cholesky import CholeskyResult
    from pymatrix.decomposition.eigen import EigenResult
    from pymatrix.decomposition.lu import LUResult
    from pymatrix.decomposition.qr import QRResult
    from pymatrix.decomposition.svd import SVDResult
    from pymatrix.iterative.power_method import Eigenpair


def format_value(value: float) -> str:
    """Format with 6 decimals, trimming trailing zeros and a dangling point."""
    text = f"{value:.6f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_matrix(data: NDArray[np.floating[Any]]) -> str:
    """
    Render a 2D array as aligned rows.

    Each row is enclosed in pipes, values are right-aligned within the
    widest entry of their column and separated by a single space.

    Example:
        |1 -2.5|
        |3    4|
    """
    rows, cols = data.shape
    cells = [[format_value(float(data[i, j])) for j in range(cols)] for i in range(rows)]
    widths = [max((len(cells[i][j]) for i in range(rows)), default=0) for j in range(cols)]
    lines = []
    for row in cells:
        body = ' '.join(cell.rjust(widths[j]) for j, cell in enumerate(row))
        lines.append(f"|{body}|")
    return '\n'.join(lines)


class Matrix:
    """
    Dense rows x cols matrix of float64 values.

    Construction:
        Matrix(rows, cols)            zero-initialized
        Matrix.from_numpy(array)      copy of a 2D array-like
        pymatrix.from_array(data)     copy of nested sequences

    Element access validates 0 <= row < rows and 0 <= col < cols and
    raises IndexOutOfBoundsError otherwise. ``set``, item assignment,
    ``set_submatrix`` and ``swap_rows`` mutate in place; every other
    operation returns a new matrix.
    """

    __slots__ = ('_data',)

    def __init__(self, rows: int, cols: int):
        rows = check_size(rows, 'rows')
        cols = check_size(cols, 'cols')
        self._data = np.zeros((rows, cols), dtype=np.float64)

    @classmethod
    def from_numpy(cls, array: ArrayLike) -> Matrix:
        """
        Build a Matrix from a 2D array-like (copied).

        Raises:
            ValidationError: Non-numeric, ragged or non-finite input
            DimensionError: Input is not 2-dimensional
        """
        data = check_array(array, 'array')
        check_2d(data, 'array')
        check_finite(data, 'array')
        return cls._adopt(data)

    @classmethod
    def _adopt(cls, data: NDArray[np.float64]) -> Matrix:
        """Wrap a freshly allocated 2D float64 buffer without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    # --- Shape ---

    @property
    def rows(self) -> int:
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        return self._data.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return (self._data.shape[0], self._data.shape[1])

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._data.size

    # --- Element access ---

    def get(self, row: int, col: int) -> float:
        """Element at (row, col)."""
        check_index(row, col, self.shape)
        return float(self._data[row, col])

    def set(self, row: int, col: int, value: float) -> None:
        """Overwrite the element at (row, col) in place."""
        check_index(row, col, self.shape)
        self._data[row, col] = float(value)

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, col = self._unpack_key(key)
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, col = self._unpack_key(key)
        self.set(row, col, value)

    @staticmethod
    def _unpack_key(key: Any) -> tuple[int, int]:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError(f"Matrix indices must be a (row, col) pair, got {key!r}")
        row, col = key
        if isinstance(row, slice) or isinstance(col, slice):
            raise TypeError("Matrix does not support slicing; use get_submatrix()")
        return row, col

    def row(self, index: int) -> Matrix:
        """Row ``index`` as a 1 x cols matrix."""
        if not 0 <= index < self.rows:
            raise IndexOutOfBoundsError(
                f"Row index out of bounds: {index} for {self.rows}x{self.cols} matrix",
                row=index,
                shape=self.shape,
            )
        return Matrix._adopt(self._data[index:index + 1, :].copy())

    def column(self, index: int) -> Matrix:
        """Column ``index`` as a rows x 1 matrix."""
        if not 0 <= index < self.cols:
            raise IndexOutOfBoundsError(
                f"Column index out of bounds: {index} for {self.rows}x{self.cols} matrix",
                col=index,
                shape=self.shape,
            )
        return Matrix._adopt(self._data[:, index:index + 1].copy())

    # --- Conversion ---

    def copy(self) -> Matrix:
        return Matrix._adopt(self._data.copy())

    def to_numpy(self) -> NDArray[np.float64]:
        """Independent copy of the underlying buffer."""
        return self._data.copy()

    def to_list(self) -> list[list[float]]:
        return self._data.tolist()

    def view(self) -> NDArray[np.float64]:
        """Read-only view of the underlying buffer (no copy)."""
        view = self._data.view()
        view.flags.writeable = False
        return view

    def __array__(self, dtype=None, copy=None) -> NDArray:
        data = self._data.copy()
        return data if dtype is None else data.astype(dtype)

    # --- Comparison and display ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None  # mutable via set()

    def allclose(self, other: Matrix, atol: float = 1e-9, rtol: float = 0.0) -> bool:
        """Shapes equal and every element within atol + rtol * |other|."""
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, rtol=rtol, atol=atol))

    def __str__(self) -> str:
        return format_matrix(self._data)

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    # --- Operators ---

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __matmul__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __mul__(self, scalar: float) -> Matrix:
        if isinstance(scalar, Matrix):
            return NotImplemented
        return self.scalar_multiply(scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Matrix:
        return self.scalar_multiply(-1.0)

    # --- Arithmetic (pymatrix.matrix.arithmetic) ---

    def add(self, other: Matrix) -> Matrix:
        from pymatrix.matrix.arithmetic import add
        return add(self, other)

    def subtract(self, other: Matrix) -> Matrix:
        from pymatrix.matrix.arithmetic import subtract
        return subtract(self, other)

    def multiply(self, other: Matrix) -> Matrix:
        from pymatrix.matrix.arithmetic import multiply
        return multiply(self, other)

    def scalar_multiply(self, scalar: float) -> Matrix:
        from pymatrix.matrix.arithmetic import scalar_multiply
        return scalar_multiply(self, scalar)

    def transpose(self) -> Matrix:
        from pymatrix.matrix.arithmetic import transpose
        return transpose(self)

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def elementwise_multiply(self, other: Matrix) -> Matrix:
        from pymatrix.matrix.arithmetic import elementwise_multiply
        return elementwise_multiply(self, other)

    def elementwise_divide(self, other: Matrix) -> Matrix:
        from pymatrix.matrix.arithmetic import elementwise_divide
        return elementwise_divide(self, other)

    def get_submatrix(self, row: int, col: int, n_rows: int, n_cols: int) -> Matrix:
        from pymatrix.matrix.arithmetic import get_submatrix
        return get_submatrix(self, row, col, n_rows, n_cols)

    def set_submatrix(self, row: int, col: int, sub: Matrix) -> None:
        from pymatrix.matrix.arithmetic import set_submatrix
        set_submatrix(self, row, col, sub)

    def swap_rows(self, row1: int, row2: int) -> None:
        from pymatrix.matrix.arithmetic import swap_rows
        swap_rows(self, row1, row2)

    # --- Structural queries (pymatrix.matrix.properties) ---

    def is_square(self) -> bool:
        return self.rows == self.cols

    def is_symmetric(self, tol: float | None = None) -> bool:
        from pymatrix.matrix.properties import is_symmetric
        return is_symmetric(self) if tol is None else is_symmetric(self, tol=tol)

    def is_diagonal(self) -> bool:
        from pymatrix.matrix.properties import is_diagonal
        return is_diagonal(self)

    def is_triangular(self, upper: bool = True) -> bool:
        from pymatrix.matrix.properties import is_triangular
        return is_triangular(self, upper=upper)

    def is_orthogonal(self, tol: float | None = None) -> bool:
        from pymatrix.matrix.properties import is_orthogonal
        return is_orthogonal(self) if tol is None else is_orthogonal(self, tol=tol)

    def is_positive_definite(self) -> bool:
        from pymatrix.matrix.properties import is_positive_definite
        return is_positive_definite(self)

    def is_positive_semidefinite(self) -> bool:
        from pymatrix.matrix.properties import is_positive_semidefinite
        return is_positive_semidefinite(self)

    def determinant(self) -> float:
        from pymatrix.matrix.properties import determinant
        return determinant(self)

    def trace(self) -> float:
        from pymatrix.matrix.properties import trace
        return trace(self)

    def rank(self) -> int:
        from pymatrix.matrix.properties import rank
        return rank(self)

    def norm_one(self) -> float:
        from pymatrix.matrix.properties import norm_one
        return norm_one(self)

    def norm_inf(self) -> float:
        from pymatrix.matrix.properties import norm_inf
        return norm_inf(self)

    def norm_frobenius(self) -> float:
        from pymatrix.matrix.properties import norm_frobenius
        return norm_frobenius(self)

    # --- Decompositions (pymatrix.decomposition) ---

    def lu(self) -> LUResult:
        from pymatrix.decomposition.lu import lu
        return lu(self)

    def qr(self) -> QRResult:
        from pymatrix.decomposition.qr import qr
        return qr(self)

    def cholesky(self) -> CholeskyResult:
        from pymatrix.decomposition.cholesky import cholesky
        return cholesky(self)

    def eigen(self, logger: logging.Logger | None = None) -> EigenResult:
        from pymatrix.decomposition.eigen import eigen
        return eigen(self, logger=logger)

    def svd(self, logger: logging.Logger | None = None) -> SVDResult:
        from pymatrix.decomposition.svd import svd
        return svd(self, logger=logger)

    # --- Derived operations (pymatrix.functions) ---

    def inverse(self) -> Matrix:
        from pymatrix.functions.inverse import inverse
        return inverse(self)

    def pseudo_inverse(self) -> Matrix:
        from pymatrix.functions.inverse import pseudo_inverse
        return pseudo_inverse(self)

    def solve(self, b: Matrix) -> Matrix:
        from pymatrix.functions.inverse import solve
        return solve(self, b)

    def condition(self) -> float:
        from pymatrix.functions.inverse import condition
        return condition(self)

    def exp(self) -> Matrix:
        from pymatrix.functions.power import exp
        return exp(self)

    def power(self, exponent: float) -> Matrix:
        from pymatrix.functions.power import power
        return power(self, exponent)

    # --- Vector operations (pymatrix.vector) ---

    def is_vector(self) -> bool:
        return self.rows == 1 or self.cols == 1

    def is_row_vector(self) -> bool:
        return self.rows == 1

    def is_column_vector(self) -> bool:
        return self.cols == 1

    def dot(self, other: Matrix) -> float:
        from pymatrix.vector.operations import dot
        return dot(self, other)

    def cross(self, other: Matrix) -> Matrix:
        from pymatrix.vector.operations import cross
        return cross(self, other)

    def normalize(self) -> Matrix:
        from pymatrix.vector.operations import normalize
        return normalize(self)

    # --- Statistics (pymatrix.descriptive) ---

    def mean(self, axis: int = -1) -> Matrix:
        from pymatrix.descriptive.moments import mean
        return mean(self, axis=axis)

    def covariance(self) -> Matrix:
        from pymatrix.descriptive.moments import covariance
        return covariance(self)

    def correlation(self) -> Matrix:
        from pymatrix.descriptive.moments import correlation
        return correlation(self)

    # --- Iterative methods (pymatrix.iterative) ---

    def solve_iterative(self, b: Matrix, method: str = 'conjugate_gradient', **kwargs: Any) -> Matrix:
        from pymatrix.iterative.solvers import solve_iterative
        return solve_iterative(self, b, method=method, **kwargs)

    def power_method(self, **kwargs: Any) -> Eigenpair:
        from pymatrix.iterative.power_method import power_method
        return power_method(self, **kwargs)
