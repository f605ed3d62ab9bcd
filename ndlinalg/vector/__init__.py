"""
Vector value type.

Public API:
    Vector: immutable n-dimensional vector with element-wise algebra,
        dot/cross products, norms and interpolation
"""

from ndlinalg.vector.vector import Vector

__all__ = [
    "Vector",
]
