"""
Descriptive statistics over the columns of a data matrix.
"""

from pymatrix.descriptive.moments import mean, covariance, correlation

__all__ = [
    "mean",
    "covariance",
    "correlation",
]
