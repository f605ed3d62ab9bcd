"""
ndlinalg: fixed-but-arbitrary-dimension linear algebra for Python.

Vectors and matrices over integer and floating element types, pivoted
LU decomposition and inversion, and construction of rotation matrices in
any number of dimensions.

Submodules:
    vector: Vector value type
    matrix: Matrix value type, inverse, elementary builders
    rotation: n-dimensional rotations (Aguilera-Perez)
    core: exceptions, validation, LU/inverse kernels, tolerances
"""

__version__ = "0.1.0"

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
from ndlinalg.core.compute.linalg import LUResult, lu_decompose
from ndlinalg.core.compute.tolerances import DEFAULT_SINGULARITY_THRESHOLD
from ndlinalg.vector import Vector
from ndlinalg.matrix import (
    Matrix,
    identity,
    inverse,
    inverse_unsafe,
    plane_rotation,
    scaling_matrix,
    translation_matrix,
)
from ndlinalg.rotation import init_rotation, rotation_transform

__all__ = [
    "__version__",
    # Value types
    "Vector",
    "Matrix",
    # Decomposition and inversion
    "LUResult",
    "lu_decompose",
    "inverse",
    "inverse_unsafe",
    "DEFAULT_SINGULARITY_THRESHOLD",
    # Builders
    "identity",
    "translation_matrix",
    "scaling_matrix",
    "plane_rotation",
    "init_rotation",
    "rotation_transform",
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
