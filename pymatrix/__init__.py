"""
PyMatrix: dense real-valued linear algebra on NumPy.

A Matrix value type whose operations return new matrices, with
construction helpers, arithmetic, structural queries, decompositions
(LU, QR, Cholesky, eigen, SVD), derived operations (inverse,
pseudo-inverse, exponential, powers), vector and statistics helpers,
and iterative methods.

Submodules:
    core: Exceptions, validation, tolerances
    matrix: Matrix type, construction, arithmetic, properties
    decomposition: LU, QR, Cholesky, eigen, SVD
    functions: inverse, solve, pseudo_inverse, condition, exp, power
    vector: dot, cross, normalize
    descriptive: mean, covariance, correlation
    iterative: solve_iterative, power_method
"""

__version__ = "0.1.0"

from pymatrix import core
from pymatrix import matrix
from pymatrix import decomposition
from pymatrix import functions
from pymatrix import vector
from pymatrix import descriptive
from pymatrix import iterative

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
from pymatrix.matrix import (
    Matrix,
    from_array,
    zeros,
    ones,
    identity,
    diagonal,
    symmetric,
    band,
    random,
    hilbert,
    toeplitz,
    vandermonde,
)
from pymatrix.decomposition import (
    LUResult,
    QRResult,
    CholeskyResult,
    EigenResult,
    SVDResult,
    lu,
    qr,
    cholesky,
    eigen,
    svd,
)
from pymatrix.functions import inverse, solve, pseudo_inverse, condition, exp, power
from pymatrix.iterative import Eigenpair, solve_iterative, power_method

__all__ = [
    "__version__",
    # Submodules
    "core",
    "matrix",
    "decomposition",
    "functions",
    "vector",
    "descriptive",
    "iterative",
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
    # Matrix and construction
    "Matrix",
    "from_array",
    "zeros",
    "ones",
    "identity",
    "diagonal",
    "symmetric",
    "band",
    "random",
    "hilbert",
    "toeplitz",
    "vandermonde",
    # Decompositions
    "LUResult",
    "QRResult",
    "CholeskyResult",
    "EigenResult",
    "SVDResult",
    "lu",
    "qr",
    "cholesky",
    "eigen",
    "svd",
    # Derived operations
    "inverse",
    "solve",
    "pseudo_inverse",
    "condition",
    "exp",
    "power",
    # Iterative
    "Eigenpair",
    "solve_iterative",
    "power_method",
]
