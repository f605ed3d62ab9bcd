"""
Core infrastructure for ndlinalg.

This module provides shared abstractions and utilities used by the
vector, matrix and rotation subpackages.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Precision, tolerances and linear algebra kernels
"""

from ndlinalg.core.exceptions import (
    NdLinalgError,
    ValidationError,
    DimensionError,
    IndexOutOfRangeError,
    MatrixConsumedError,
    NumericalError,
    SingularMatrixError,
    UnsupportedDimensionError,
)

__all__ = [
    # Exceptions
    "NdLinalgError",
    "ValidationError",
    "DimensionError",
    "IndexOutOfRangeError",
    "MatrixConsumedError",
    "NumericalError",
    "SingularMatrixError",
    "UnsupportedDimensionError",
]
