"""
Vector operations on 1 x n and n x 1 matrices.
"""

from pymatrix.vector.operations import (
    is_vector,
    is_row_vector,
    is_column_vector,
    dot,
    cross,
    normalize,
)

__all__ = [
    "is_vector",
    "is_row_vector",
    "is_column_vector",
    "dot",
    "cross",
    "normalize",
]
