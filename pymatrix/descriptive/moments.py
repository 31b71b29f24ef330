"""
Means, covariance and correlation of a data matrix.

Rows are observations, columns are variables.
"""

from __future__ import annotations

import numpy as np

from pymatrix.core.exceptions import InvalidAxisError, InvalidDomainError
from pymatrix.matrix.matrix import Matrix


def mean(a: Matrix, axis: int = -1) -> Matrix:
    """
    Arithmetic mean along an axis.

    Parameters
    ----------
    a : Matrix
        Non-empty data matrix.
    axis : int
        -1 for the grand mean (1 x 1), 0 for column means (1 x cols),
        1 for row means (rows x 1).

    Returns
    -------
    Matrix

    Raises
    ------
    InvalidDomainError
        If a has no elements.
    InvalidAxisError
        If axis is not -1, 0 or 1.
    """
    if axis not in (-1, 0, 1):
        raise InvalidAxisError(
            f"mean: axis must be -1, 0 or 1, got {axis!r}", axis=axis
        )
    data = a.view()
    if data.size == 0:
        raise InvalidDomainError(f"mean: matrix is empty ({a.rows}x{a.cols})")

    if axis == -1:
        return Matrix._adopt(np.array([[data.sum() / data.size]]))
    if axis == 0:
        return Matrix._adopt(data.mean(axis=0, keepdims=True))
    return Matrix._adopt(data.mean(axis=1, keepdims=True))


def _check_observations(a: Matrix, operation: str) -> None:
    if a.rows < 2 or a.cols < 2:
        raise InvalidDomainError(
            f"{operation}: requires at least 2 observations and 2 variables, "
            f"got {a.rows}x{a.cols}"
        )


def covariance(a: Matrix) -> Matrix:
    """
    Sample covariance matrix of the columns (N - 1 divisor).

    Parameters
    ----------
    a : Matrix
        Data matrix with at least 2 rows and 2 columns.

    Returns
    -------
    Matrix
        cols x cols, exactly symmetric.

    Raises
    ------
    InvalidDomainError
        If a has fewer than 2 rows or fewer than 2 columns.
    """
    _check_observations(a, 'covariance')
    cov = np.cov(a.view(), rowvar=False, ddof=1)
    return Matrix._adopt((cov + cov.T) / 2.0)


def correlation(a: Matrix) -> Matrix:
    """
    Pearson correlation matrix of the columns.

    Entries involving a constant column (zero standard deviation) are 0.

    Raises
    ------
    InvalidDomainError
        If a has fewer than 2 rows or fewer than 2 columns.
    """
    _check_observations(a, 'correlation')
    cov = covariance(a).view()
    sd = np.sqrt(np.diag(cov))
    scale = np.outer(sd, sd)
    cor = np.zeros_like(cov)
    nonzero = scale > 0.0
    cor[nonzero] = cov[nonzero] / scale[nonzero]
    return Matrix._adopt(cor)
