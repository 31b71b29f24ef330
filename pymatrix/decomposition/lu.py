"""
LU decomposition with partial pivoting.

Computes P·A = L·U where L is unit lower triangular, U is upper
triangular and P is the row permutation recorded during elimination.
Also provides the triangular solvers used to invert matrices and solve
linear systems from a factorization.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.exceptions import DimensionError, SingularMatrixError
from pymatrix.core.tolerances import PIVOT_TOLERANCE
from pymatrix.core.validation import check_square
from pymatrix.matrix.matrix import Matrix, format_matrix


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition.

    Attributes:
        L: Unit lower triangular factor (n x n)
        U: Upper triangular factor (n x n)
        permutation: permutation[i] is the original row index now in position i
    """
    L: Matrix
    U: Matrix
    permutation: tuple[int, ...]

    def permutation_matrix(self) -> Matrix:
        """Permutation matrix P with P·A = L·U."""
        n = len(self.permutation)
        P = np.zeros((n, n), dtype=np.float64)
        P[np.arange(n), list(self.permutation)] = 1.0
        return Matrix._adopt(P)

    def __str__(self) -> str:
        perm = ', '.join(str(p) for p in self.permutation)
        return (
            f"LU Decomposition:\n"
            f"L =\n{self.L}\n"
            f"U =\n{self.U}\n"
            f"P = [{perm}]"
        )


def lu(a: Matrix, tol: float = PIVOT_TOLERANCE) -> LUResult:
    """
    LU decomposition by Gaussian elimination with partial pivoting.

    At each column the row at or below the diagonal with the largest
    absolute value is swapped into the pivot position. Multipliers already
    stored in L for earlier columns move with their rows, so P·A = L·U
    holds for the recorded permutation.

    Args:
        a: Square matrix to decompose
        tol: Pivots with magnitude at or below this are rejected

    Returns:
        LUResult with L, U and the row permutation

    Raises:
        InvalidDomainError: If a is not square
        SingularMatrixError: If a pivot (or the final diagonal of U) is at
            or below tol
    """
    check_square(a.shape, 'LU decomposition')
    n = a.rows
    U = a.to_numpy()
    L = np.eye(n, dtype=np.float64)
    perm = list(range(n))

    for k in range(n - 1):
        pivot_row = k + int(np.argmax(np.abs(U[k:, k])))
        pivot = abs(U[pivot_row, k])
        if pivot <= tol:
            raise SingularMatrixError(
                f"Matrix is singular: pivot {pivot:.3e} at column {k} is at or below {tol:.0e}",
                pivot_index=k,
                pivot_value=pivot,
            )

        if pivot_row != k:
            U[[k, pivot_row], :] = U[[pivot_row, k], :]
            L[[k, pivot_row], :k] = L[[pivot_row, k], :k]
            perm[k], perm[pivot_row] = perm[pivot_row], perm[k]

        factors = U[k + 1:, k] / U[k, k]
        L[k + 1:, k] = factors
        U[k + 1:, k:] -= np.outer(factors, U[k, k:])
        U[k + 1:, k] = 0.0

    if n > 0 and abs(U[n - 1, n - 1]) <= tol:
        raise SingularMatrixError(
            f"Matrix is singular: final pivot {abs(U[n - 1, n - 1]):.3e} is at or below {tol:.0e}",
            pivot_index=n - 1,
            pivot_value=abs(U[n - 1, n - 1]),
        )

    return LUResult(L=Matrix._adopt(L), U=Matrix._adopt(U), permutation=tuple(perm))


def _as_columns(b: Matrix, n: int, name: str) -> NDArray[np.float64]:
    if b.rows != n:
        raise DimensionError(
            f"{name}: right-hand side has {b.rows} rows, expected {n}"
        )
    return b.to_numpy()


def _forward(lower: NDArray[np.floating[Any]], rhs: NDArray[np.float64]) -> NDArray[np.float64]:
    n = lower.shape[0]
    x = rhs.copy()
    for i in range(n):
        x[i] -= lower[i, :i] @ x[:i]
        x[i] /= lower[i, i]
    return x


def _backward(upper: NDArray[np.floating[Any]], rhs: NDArray[np.float64]) -> NDArray[np.float64]:
    n = upper.shape[0]
    x = rhs.copy()
    for i in range(n - 1, -1, -1):
        x[i] -= upper[i, i + 1:] @ x[i + 1:]
        x[i] /= upper[i, i]
    return x


def _check_diagonal(triangular: NDArray[np.floating[Any]], name: str) -> None:
    diag = np.abs(np.diag(triangular))
    if diag.size and np.min(diag) == 0.0:
        index = int(np.argmin(diag))
        raise SingularMatrixError(
            f"{name}: zero on the diagonal at position {index}",
            pivot_index=index,
            pivot_value=0.0,
        )


def forward_substitution(lower: Matrix, b: Matrix) -> Matrix:
    """
    Solve L·x = b for lower triangular L.

    Args:
        lower: Square lower triangular matrix (entries above the diagonal
            are ignored)
        b: Right-hand side, one column per system

    Raises:
        InvalidDomainError: If lower is not square
        DimensionError: If b has the wrong number of rows
        SingularMatrixError: If the diagonal contains a zero
    """
    check_square(lower.shape, 'forward substitution')
    rhs = _as_columns(b, lower.rows, 'forward substitution')
    _check_diagonal(lower.view(), 'forward substitution')
    return Matrix._adopt(_forward(lower.view(), rhs))


def back_substitution(upper: Matrix, b: Matrix) -> Matrix:
    """
    Solve U·x = b for upper triangular U.

    Args:
        upper: Square upper triangular matrix (entries below the diagonal
            are ignored)
        b: Right-hand side, one column per system

    Raises:
        InvalidDomainError: If upper is not square
        DimensionError: If b has the wrong number of rows
        SingularMatrixError: If the diagonal contains a zero
    """
    check_square(upper.shape, 'back substitution')
    rhs = _as_columns(b, upper.rows, 'back substitution')
    _check_diagonal(upper.view(), 'back substitution')
    return Matrix._adopt(_backward(upper.view(), rhs))


def lu_solve(factorization: LUResult, b: Matrix) -> Matrix:
    """
    Solve A·x = b given the LU factorization of A.

    The rows of b are permuted as recorded, then L·y = P·b is solved by
    forward substitution and U·x = y by back substitution.

    Args:
        factorization: Result of lu(A)
        b: Right-hand side (n x k), one column per system

    Returns:
        Solution x (n x k)
    """
    n = factorization.L.rows
    rhs = _as_columns(b, n, 'LU solve')
    permuted = rhs[list(factorization.permutation), :]
    y = _forward(factorization.L.view(), permuted)
    return Matrix._adopt(_backward(factorization.U.view(), y))
