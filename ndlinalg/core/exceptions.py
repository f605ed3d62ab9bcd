"""
Exception hierarchy for ndlinalg.

All exceptions inherit from NdLinalgError to allow catching any
library-specific error. Every failure is synchronous and terminal for the
given input: linear-algebra operations are deterministic, so retrying with
the same operands never helps.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class NdLinalgError(Exception):
    """Base exception for all ndlinalg errors."""
    pass


class ValidationError(NdLinalgError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks
    (non-numeric data, wrong container type, bad argument values).
    """
    pass


class DimensionError(ValidationError):
    """
    Operand dimensions are incorrect or inconsistent.

    Raised for size mismatches in element-wise operations, non-square
    input to inversion or rotation, malformed rotation simplices, ragged
    nested input and buffers whose element count cannot form the
    requested shape.
    """
    pass


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Element, row or column index outside the container's bounds.

    Also an IndexError so that the Python iteration protocol and
    generic callers keep working.

    Attributes:
        index: The offending index
        bound: Exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        bound: int | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class MatrixConsumedError(ValidationError):
    """
    Matrix was used after its storage was handed to inverse_unsafe().

    inverse_unsafe() takes ownership of its argument and reuses the
    argument's storage for the result; the original handle is dead.
    """
    pass


class NumericalError(NdLinalgError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when LU decomposition finds no pivot whose magnitude reaches
    the singularity threshold. Propagates unchanged through inversion and
    rotation construction.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        column: Elimination column at which decomposition failed
        pivot: Largest candidate pivot magnitude found in that column
        threshold: The singularity threshold that was not met
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        column: int | None = None,
        pivot: float | None = None,
        threshold: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.column = column
        self.pivot = pivot
        self.threshold = threshold


class UnsupportedDimensionError(NumericalError, NotImplementedError):
    """
    Operation is not defined in the requested dimension.

    The cross product only exists for 3- and 7-dimensional vectors.

    Attributes:
        dimension: Dimension that was requested
        supported: Dimensions the operation is defined for
    """

    def __init__(
        self,
        message: str,
        dimension: int | None = None,
        supported: tuple[int, ...] = (),
    ):
        super().__init__(message)
        self.dimension = dimension
        self.supported = supported
