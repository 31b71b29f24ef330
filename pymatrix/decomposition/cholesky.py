"""
Cholesky decomposition.

Computes A = L·Lᵗ for symmetric positive definite A, with L lower
triangular and a positive diagonal.
"""

from __future__ import annotations

from dataclasses import dataclass
import numpy as np

from pymatrix.core.exceptions import NotPositiveDefiniteError
from pymatrix.core.validation import check_square
from pymatrix.matrix.matrix import Matrix
from pymatrix.matrix.properties import is_positive_definite


@dataclass(frozen=True)
class CholeskyResult:
    """
    Result of Cholesky decomposition.

    Attributes:
        L: Lower triangular factor with L·Lᵗ = A
    """
    L: Matrix

    def __str__(self) -> str:
        return f"Cholesky Decomposition:\nL =\n{self.L}"


def cholesky(a: Matrix) -> CholeskyResult:
    """
    Cholesky decomposition of a symmetric positive definite matrix.

    Row by row: each diagonal entry is the square root of the residual
    left after subtracting the squares of the entries already computed in
    its row; each off-diagonal entry divides its residual by the diagonal
    of its column.

    Raises:
        InvalidDomainError: If a is not square
        NotPositiveDefiniteError: If a fails the positive definite check, or
            a residual under the square root is not positive
    """
    check_square(a.shape, 'Cholesky decomposition')
    if not is_positive_definite(a):
        raise NotPositiveDefiniteError(
            "Cholesky decomposition requires a symmetric positive definite matrix",
            matrix_name='A',
        )

    data = a.view()
    n = a.rows
    L = np.zeros((n, n), dtype=np.float64)

    for i in range(n):
        for j in range(i):
            L[i, j] = (data[i, j] - L[i, :j] @ L[j, :j]) / L[j, j]
        residual = data[i, i] - L[i, :i] @ L[i, :i]
        if residual <= 0.0:
            raise NotPositiveDefiniteError(
                f"Matrix is not positive definite: residual {residual:.3e} "
                f"under the square root at row {i}",
                matrix_name='A',
                pivot_index=i,
                pivot_value=float(residual),
            )
        L[i, i] = np.sqrt(residual)

    return CholeskyResult(L=Matrix._adopt(L))
