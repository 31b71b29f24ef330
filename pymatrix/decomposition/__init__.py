"""
Matrix decompositions.

Public API:
    lu          - P·A = L·U with partial pivoting, plus triangular solvers
    qr          - A = Q·R by modified Gram-Schmidt
    cholesky    - A = L·Lᵗ for symmetric positive definite A
    eigen       - closed form for n <= 2, shifted QR iteration otherwise
    svd         - A = U·S·Vᵗ by Golub-Reinsch
"""

from pymatrix.decomposition.lu import (
    LUResult,
    lu,
    lu_solve,
    forward_substitution,
    back_substitution,
)
from pymatrix.decomposition.qr import QRResult, qr
from pymatrix.decomposition.cholesky import CholeskyResult, cholesky
from pymatrix.decomposition.eigen import EigenResult, eigen
from pymatrix.decomposition.svd import SVDResult, svd

__all__ = [
    "LUResult",
    "lu",
    "lu_solve",
    "forward_substitution",
    "back_substitution",
    "QRResult",
    "qr",
    "CholeskyResult",
    "cholesky",
    "EigenResult",
    "eigen",
    "SVDResult",
    "svd",
]
