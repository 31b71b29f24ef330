"""
Numerical tolerances and iteration limits.

Single source of truth for the thresholds used by the algorithms.
Public functions expose the relevant values as keyword arguments
defaulting to these constants; nothing reads environment variables
or configuration files.

Also defines tolerance tiers for comparing reconstructions
(L·U, Q·R, U·S·Vᵗ, ...) against the original matrix, used by the
test suite.
"""

from dataclasses import dataclass


# Elimination: pivots at or below this magnitude mean "singular"
PIVOT_TOLERANCE = 1e-12

# |det| below this rejects inversion
DETERMINANT_TOLERANCE = 1e-12

# Gram-Schmidt residual norm at or below this means "linearly dependent"
DEPENDENCE_TOLERANCE = 1e-12

# Row-echelon entries at or below this count as zero for rank
RANK_TOLERANCE = 1e-12

# Squared norm below this cannot be normalized
NORMALIZE_TOLERANCE = 1e-12

# |A·Aᵗ - I| entries above this fail the orthogonality test
ORTHOGONALITY_TOLERANCE = 1e-12

# |a_ij - a_ji| above this (scaled by max(1, max|a|)) fails symmetry
SYMMETRY_TOLERANCE = 1e-12

# Shifted QR iteration for the eigendecomposition
EIGEN_TOLERANCE = 1e-8
EIGEN_MAX_ITERATIONS = 1000

# A QR shift that lands on an eigenvalue is nudged by this (times the
# block scale, growing 100x per retry) at most SHIFT_RETRIES times
SHIFT_PERTURBATION = 1e-8
SHIFT_RETRIES = 4

# Golub-Reinsch diagonalization, per singular value
SVD_MAX_ITERATIONS = 50

# Singular values below this fraction of the largest are treated as zero
PSEUDO_INVERSE_RTOL = 1e-12

# Singular values at or below this are dropped from fractional powers
POWER_TOLERANCE = 1e-12

# Tile edge for block matrix multiplication
BLOCK_SIZE = 4

# Number of Taylor terms in the matrix exponential
EXP_TERMS = 20

# Iterative solvers and power method
ITERATIVE_MAX_ITERATIONS = 1000
ITERATIVE_TOLERANCE = 1e-10
POWER_METHOD_MAX_ITERATIONS = 100
POWER_METHOD_TOLERANCE = 1e-10


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Direct factorizations of well-conditioned input (LU, Cholesky, inverse)
DIRECT = ToleranceTier(
    rtol=1e-10,
    atol=1e-9,
    name='direct',
    description='Direct factorization, well-conditioned input',
)

# Gram-Schmidt QR loses orthogonality proportionally to cond(A)
ORTHOGONALIZATION = ToleranceTier(
    rtol=1e-8,
    atol=1e-8,
    name='orthogonalization',
    description='Gram-Schmidt QR, moderately conditioned input',
)

# Iterative methods stopped at EIGEN_TOLERANCE or by Golub-Reinsch sweeps
ITERATIVE = ToleranceTier(
    rtol=1e-6,
    atol=1e-6,
    name='iterative',
    description='Eigen/SVD iterations and iterative solvers',
)


def select_tolerance(kind: str) -> ToleranceTier:
    """Select the comparison tier for an algorithm family."""
    if kind in ('lu', 'cholesky', 'inverse', 'solve', 'direct'):
        return DIRECT
    if kind in ('qr', 'orthogonalization'):
        return ORTHOGONALIZATION
    if kind in ('eigen', 'svd', 'iterative', 'power'):
        return ITERATIVE
    raise ValueError(f"Unknown algorithm family: {kind!r}")
