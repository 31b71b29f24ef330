"""
Exception hierarchy for pymatrix.

All exceptions inherit from MatrixError to allow catching any
library-specific error. Operation-specific exceptions inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class MatrixError(Exception):
    """Base exception for all pymatrix errors."""
    pass


class ValidationError(MatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised when operand shapes are incompatible for an operation
    (add, subtract, multiply, element-wise operations, dot product).
    """
    pass


class IndexOutOfBoundsError(ValidationError):
    """
    Element or submatrix access outside the matrix shape.

    Attributes:
        row: Requested row index (or window start row)
        col: Requested column index (or window start column)
        shape: Shape of the matrix that was accessed
    """

    def __init__(
        self,
        message: str,
        row: int | None = None,
        col: int | None = None,
        shape: tuple[int, int] | None = None
    ):
        super().__init__(message)
        self.row = row
        self.col = col
        self.shape = shape


class InvalidAxisError(ValidationError):
    """
    Axis argument is not one of the supported values.

    Attributes:
        axis: The rejected axis value
    """

    def __init__(self, message: str, axis: int | None = None):
        super().__init__(message)
        self.axis = axis


class InvalidDomainError(ValidationError):
    """
    Operation is not defined for this input.

    Raised for square-only operations on rectangular matrices, empty
    inputs, and other arguments outside an operation's domain.
    """
    pass


class DegenerateVectorError(ValidationError):
    """
    Vector operation on a zero or wrongly shaped vector.

    Attributes:
        norm: Euclidean norm of the vector, if computed
    """

    def __init__(self, message: str, norm: float | None = None):
        super().__init__(message)
        self.norm = norm


class NumericalError(MatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when an operation requires invertibility but elimination meets
    a pivot below tolerance or the determinant is numerically zero.

    Attributes:
        pivot_index: Elimination step at which the pivot failed
        pivot_value: Magnitude of the rejected pivot
        determinant: Determinant that failed the threshold, if computed
    """

    def __init__(
        self,
        message: str,
        pivot_index: int | None = None,
        pivot_value: float | None = None,
        determinant: float | None = None
    ):
        super().__init__(message)
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value
        self.determinant = determinant


class RankDeficientError(NumericalError):
    """
    Matrix columns are linearly dependent.

    Raised by Gram-Schmidt QR when a column's residual after removing its
    projections onto the previous columns is numerically zero.

    Attributes:
        column: Index of the dependent column
        residual_norm: Norm of the residual that fell below tolerance
    """

    def __init__(
        self,
        message: str,
        column: int | None = None,
        residual_norm: float | None = None
    ):
        super().__init__(message)
        self.column = column
        self.residual_norm = residual_norm


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when an operation requires a positive definite matrix
    (e.g., Cholesky decomposition) but the matrix fails this requirement.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Row at which the factorization broke down, if known
        pivot_value: The non-positive value found under the square root
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value


class ConvergenceError(MatrixError):
    """
    Iterative algorithm failed to converge.

    Raised when an iterative method (SVD diagonalization, iterative
    solvers, power method) fails to meet its convergence criterion
    within the maximum number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final residual or estimate change
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
