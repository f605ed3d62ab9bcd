"""
n-dimensional rotation construction.

Public API:
    init_rotation(simplex, angle) -> Matrix
    rotation_transform(simplex, angle) -> Matrix
"""

from ndlinalg.rotation.builder import init_rotation, rotation_transform

__all__ = [
    "init_rotation",
    "rotation_transform",
]
