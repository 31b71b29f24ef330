"""
The Matrix value type and its basic operations.

Public API:
    Matrix          - dense float64 matrix with bounds-checked access
    construction    - from_array, zeros, ones, identity, diagonal, symmetric,
                      band, random, hilbert, toeplitz, vandermonde
    arithmetic      - add, subtract, multiply (block-wise), scalar_multiply,
                      transpose, element-wise ops, submatrix get/set
    properties      - predicates, determinant, trace, rank, norms
"""

from pymatrix.matrix.matrix import Matrix, format_matrix
from pymatrix.matrix.construction import (
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
from pymatrix.matrix.arithmetic import (
    add,
    subtract,
    multiply,
    scalar_multiply,
    transpose,
    elementwise_multiply,
    elementwise_divide,
    get_submatrix,
    set_submatrix,
    swap_rows,
)
from pymatrix.matrix.properties import (
    is_square,
    is_symmetric,
    is_diagonal,
    is_triangular,
    is_orthogonal,
    is_positive_definite,
    is_positive_semidefinite,
    determinant,
    trace,
    rank,
    norm_one,
    norm_inf,
    norm_frobenius,
)

__all__ = [
    "Matrix",
    "format_matrix",
    # Construction
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
    # Arithmetic
    "add",
    "subtract",
    "multiply",
    "scalar_multiply",
    "transpose",
    "elementwise_multiply",
    "elementwise_divide",
    "get_submatrix",
    "set_submatrix",
    "swap_rows",
    # Properties
    "is_square",
    "is_symmetric",
    "is_diagonal",
    "is_triangular",
    "is_orthogonal",
    "is_positive_definite",
    "is_positive_semidefinite",
    "determinant",
    "trace",
    "rank",
    "norm_one",
    "norm_inf",
    "norm_frobenius",
]
