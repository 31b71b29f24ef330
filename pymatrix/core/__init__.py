"""
Core infrastructure for pymatrix.

This module provides shared abstractions used by every capability
subpackage (matrix, decomposition, functions, vector, descriptive,
iterative).

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    tolerances: Numerical thresholds, iteration limits, comparison tiers
"""

from pymatrix.core.exceptions import (
    MatrixError,
    ValidationError,
    DimensionError,
    IndexOutOfBoundsError,
    InvalidAxisError,
    InvalidDomainError,
    DegenerateVectorError,
    NumericalError,
    SingularMatrixError,
    RankDeficientError,
    NotPositiveDefiniteError,
    ConvergenceError,
)
from pymatrix.core.tolerances import ToleranceTier, select_tolerance

__all__ = [
    # Exceptions
    "MatrixError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfBoundsError",
    "InvalidAxisError",
    "InvalidDomainError",
    "DegenerateVectorError",
    "NumericalError",
    "SingularMatrixError",
    "RankDeficientError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    # Tolerances
    "ToleranceTier",
    "select_tolerance",
]
