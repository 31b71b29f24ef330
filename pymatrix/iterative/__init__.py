"""
Iterative methods.

Public API:
    solve_iterative - conjugate gradient, Gauss-Seidel or Jacobi for A·x = b
    power_method    - dominant eigenpair, or nearest to a shift
    Eigenpair       - result of power_method
"""

from pymatrix.iterative.solvers import IterativeMethod, solve_iterative
from pymatrix.iterative.power_method import Eigenpair, power_method

__all__ = [
    "IterativeMethod",
    "solve_iterative",
    "Eigenpair",
    "power_method",
]
