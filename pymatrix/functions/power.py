"""
Matrix exponential and matrix powers.
"""

from __future__ import annotations

import numbers

import numpy as np

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.tolerances import EXP_TERMS, POWER_TOLERANCE
from pymatrix.core.validation import check_square
from pymatrix.decomposition.svd import svd
from pymatrix.functions.inverse import inverse
from pymatrix.matrix.arithmetic import add, multiply, scalar_multiply
from pymatrix.matrix.construction import identity
from pymatrix.matrix.matrix import Matrix


def exp(a: Matrix, terms: int = EXP_TERMS) -> Matrix:
    """
    Matrix exponential by truncated Taylor series.

    e^A ≈ I + A + A²/2! + ... + Aⁿ/n! with n = terms. Accurate for
    matrices of modest norm; no scaling and squaring is applied.

    Raises:
        InvalidDomainError: If a is not square
    """
    check_square(a.shape, 'matrix exponential')
    result = identity(a.rows)
    term = identity(a.rows)
    for k in range(1, terms + 1):
        term = scalar_multiply(multiply(term, a), 1.0 / k)
        result = add(result, term)
    return result


def power(a: Matrix, exponent: float) -> Matrix:
    """
    Raise a square matrix to a real exponent.

    Integer exponents use repeated multiplication: 0 gives the identity,
    negative exponents multiply the inverse. Other exponents use the SVD,
    A^p = U·S^p·Vᵗ, dropping singular values at or below POWER_TOLERANCE.
    The SVD route equals the true matrix power only for symmetric positive
    semidefinite input, where U and V coincide.

    Raises:
        ValidationError: If exponent is not a real number
        InvalidDomainError: If a is not square
        SingularMatrixError: If exponent is negative and a is singular
    """
    if isinstance(exponent, bool) or not isinstance(exponent, numbers.Real):
        raise ValidationError(f"exponent: expected a real number, got {exponent!r}")
    check_square(a.shape, 'matrix power')

    if float(exponent).is_integer():
        count = int(exponent)
        if count == 0:
            return identity(a.rows)
        base = a if count > 0 else inverse(a)
        result = base.copy()
        for _ in range(abs(count) - 1):
            result = multiply(result, base)
        return result

    factors = svd(a)
    values = np.diag(factors.S.view())
    keep = np.abs(values) > POWER_TOLERANCE
    powered = np.zeros_like(values)
    powered[keep] = np.abs(values[keep]) ** float(exponent)
    U = factors.U.view()
    V = factors.V.view()
    return Matrix._adopt((U * powered) @ V.T)
