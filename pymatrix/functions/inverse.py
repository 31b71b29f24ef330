"""
Inverse, linear solve, pseudo-inverse and condition number.
"""

from __future__ import annotations

import math

import numpy as np

from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.core.tolerances import DETERMINANT_TOLERANCE, PSEUDO_INVERSE_RTOL
from pymatrix.core.validation import check_matrix, check_square
from pymatrix.decomposition.lu import lu, lu_solve
from pymatrix.decomposition.svd import svd
from pymatrix.matrix.construction import identity
from pymatrix.matrix.matrix import Matrix
from pymatrix.matrix.properties import determinant, norm_one


def inverse(a: Matrix) -> Matrix:
    """
    Inverse of a square matrix.

    Rejects near-singular input by determinant, then solves A·X = I one
    column at a time from the LU factorization.

    Raises:
        InvalidDomainError: If a is not square
        SingularMatrixError: If |det(a)| < DETERMINANT_TOLERANCE or a pivot
            vanishes during factorization
    """
    check_square(a.shape, 'inverse')
    det = determinant(a)
    if abs(det) < DETERMINANT_TOLERANCE:
        raise SingularMatrixError(
            f"Matrix is singular: |det| = {abs(det):.3e} is below {DETERMINANT_TOLERANCE:.0e}",
            determinant=det,
        )
    return lu_solve(lu(a), identity(a.rows))


def solve(a: Matrix, b: Matrix) -> Matrix:
    """
    Solve A·x = b through the LU factorization of A.

    Args:
        a: Square, non-singular coefficient matrix
        b: Right-hand side with a.rows rows, one column per system

    Raises:
        ValidationError: If b is not a Matrix
        InvalidDomainError: If a is not square
        DimensionError: If b has the wrong number of rows
        SingularMatrixError: If a pivot vanishes
    """
    check_matrix(b, 'b')
    check_square(a.shape, 'solve')
    return lu_solve(lu(a), b)


def pseudo_inverse(a: Matrix, rtol: float = PSEUDO_INVERSE_RTOL) -> Matrix:
    """
    Moore-Penrose pseudo-inverse V·S⁺·Uᵗ from the SVD.

    Singular values at or below rtol times the largest one are treated
    as zero. Defined for every shape; the result is cols x rows.
    """
    result = svd(a)
    values = np.diag(result.S.view())
    if values.size == 0:
        return Matrix(a.cols, a.rows)

    cutoff = rtol * values[0]
    inverted = np.zeros_like(values)
    keep = np.abs(values) > cutoff
    inverted[keep] = 1.0 / values[keep]

    V = result.V.view()
    U = result.U.view()
    return Matrix._adopt((V * inverted) @ U.T)


def condition(a: Matrix) -> float:
    """
    Condition number in the 1-norm, ‖A‖₁·‖A⁻¹‖₁.

    Returns math.inf for singular matrices instead of raising.

    Raises:
        InvalidDomainError: If a is not square
    """
    check_square(a.shape, 'condition number')
    try:
        inv = inverse(a)
    except SingularMatrixError:
        return math.inf
    return norm_one(a) * norm_one(inv)
