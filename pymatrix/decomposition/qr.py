"""
QR decomposition by modified Gram-Schmidt.

Computes A = Q·R where Q has orthonormal columns and R is upper
triangular. Used directly and as the inner step of the shifted QR
iteration in the eigendecomposition.
"""

from __future__ import annotations

from dataclasses import dataclass
import numpy as np

from pymatrix.core.exceptions import RankDeficientError
from pymatrix.core.tolerances import DEPENDENCE_TOLERANCE
from pymatrix.matrix.matrix import Matrix


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Matrix with orthonormal columns (rows x cols)
        R: Upper triangular matrix (cols x cols)
    """
    Q: Matrix
    R: Matrix

    def __str__(self) -> str:
        return (
            f"QR Decomposition:\n"
            f"Q =\n{self.Q}\n"
            f"R =\n{self.R}"
        )


def gram_schmidt(
    data: np.ndarray,
    tol: float = DEPENDENCE_TOLERANCE,
    reorthogonalize: bool = False,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Modified Gram-Schmidt on the columns of a 2D array.

    For each column, the projection onto every previously orthonormalized
    column is removed in turn (the coefficients fill R above the diagonal)
    and the residual is normalized. With reorthogonalize=True the
    projection sweep runs twice, which keeps Q orthonormal to working
    precision even for nearly dependent columns.

    Returns:
        (Q, R) as new arrays

    Raises:
        RankDeficientError: If a residual norm is at or below tol
    """
    rows, cols = data.shape
    Q = np.zeros((rows, cols), dtype=np.float64)
    R = np.zeros((cols, cols), dtype=np.float64)

    for j in range(cols):
        v = data[:, j].astype(np.float64, copy=True)
        for _ in range(2 if reorthogonalize else 1):
            for k in range(j):
                coefficient = Q[:, k] @ v
                R[k, j] += coefficient
                v -= coefficient * Q[:, k]

        norm = float(np.sqrt(v @ v))
        if norm <= tol:
            raise RankDeficientError(
                f"Matrix columns are linearly dependent: residual norm {norm:.3e} "
                f"of column {j} is at or below {tol:.0e}",
                column=j,
                residual_norm=norm,
            )
        R[j, j] = norm
        Q[:, j] = v / norm

    return Q, R


def qr(a: Matrix, tol: float = DEPENDENCE_TOLERANCE) -> QRResult:
    """
    QR decomposition by modified Gram-Schmidt.

    Args:
        a: Matrix with linearly independent columns (rows >= cols)
        tol: Residual norm at or below which a column counts as dependent

    Returns:
        QRResult with Q (rows x cols) and R (cols x cols)

    Raises:
        RankDeficientError: If the columns are linearly dependent (always the
            case when cols > rows)
    """
    Q, R = gram_schmidt(a.view(), tol=tol)
    return QRResult(Q=Matrix._adopt(Q), R=Matrix._adopt(R))
