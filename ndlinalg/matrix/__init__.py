"""
Matrix value type and elementary builders.

Public API:
    Matrix: rectangular matrix over an integer or floating dtype
    inverse(matrix, threshold) -> Matrix
    inverse_unsafe(matrix, threshold) -> Matrix  (consumes its argument)
    identity, translation_matrix, scaling_matrix, plane_rotation
"""

from ndlinalg.matrix.matrix import Matrix, inverse, inverse_unsafe
from ndlinalg.matrix.builders import (
    identity,
    plane_rotation,
    scaling_matrix,
    translation_matrix,
)

__all__ = [
    "Matrix",
    "inverse",
    "inverse_unsafe",
    "identity",
    "plane_rotation",
    "scaling_matrix",
    "translation_matrix",
]
