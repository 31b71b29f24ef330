"""
Operations derived from the decompositions.

Public API:
    inverse         - LU-based inverse with determinant guard
    solve           - LU-based linear solve
    pseudo_inverse  - Moore-Penrose inverse from the SVD
    condition       - 1-norm condition number (inf when singular)
    exp             - matrix exponential by Taylor series
    power           - integer or SVD-based real matrix power
"""

from pymatrix.functions.inverse import inverse, solve, pseudo_inverse, condition
from pymatrix.functions.power import exp, power

__all__ = [
    "inverse",
    "solve",
    "pseudo_inverse",
    "condition",
    "exp",
    "power",
]
