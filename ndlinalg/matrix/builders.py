"""
Elementary matrix builders.

Identity, translation, scaling and plane-rotation matrices of arbitrary
size. The ``*_array`` variants return plain arrays for kernels that
compose many of them (the rotation builder); the others wrap the result
in a Matrix.

Axes of plane rotations are 1-based, angles are in degrees. All matrices
follow the column-vector convention: they act as ``M @ v``.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndlinalg.core.exceptions import IndexOutOfRangeError, ValidationError
from ndlinalg.core.validation import check_1d, check_index, check_min_length, check_numeric_array
from ndlinalg.matrix.matrix import Matrix
from ndlinalg.vector.vector import Vector


def _axis(axis: int, size: int, name: str) -> int:
    """0-based position of the 1-based axis number ``axis``."""
    try:
        return check_index(axis - 1, size, name)
    except IndexOutOfRangeError as e:
        raise IndexOutOfRangeError(
            f"{name}: axis {axis} out of range 1..{size}",
            index=axis,
            bound=size + 1,
        ) from e


def identity_array(size: int, dtype: np.dtype | type = np.float64) -> NDArray[Any]:
    return np.eye(size, dtype=dtype)


def translation_array(
    location: NDArray[Any],
    dtype: np.dtype | type | None = None,
) -> NDArray[Any]:
    """(n+1) x (n+1) homogeneous translation by ``location`` (last column)."""
    n = location.shape[0]
    result = np.eye(n + 1, dtype=location.dtype if dtype is None else dtype)
    result[:n, n] = location
    return result


def plane_rotation_array(
    size: int,
    a: int,
    b: int,
    angle: float,
    dtype: np.dtype | type = np.float64,
) -> NDArray[Any]:
    """
    Identity except for the rotation block in the (a, b) plane.

    ``[a,a] = [b,b] = cos``, ``[a,b] = -sin``, ``[b,a] = sin``, so axis
    ``a`` is rotated towards axis ``b``. Axes are 1-based; angle in degrees.
    """
    i = _axis(a, size, 'a')
    j = _axis(b, size, 'b')
    if i == j:
        raise ValidationError(f"plane rotation needs two distinct axes, got a=b={a}")
    theta = np.radians(angle)
    cos, sin = np.cos(theta), np.sin(theta)
    result = np.eye(size, dtype=dtype)
    result[i, i] = cos
    result[j, j] = cos
    result[i, j] = -sin
    result[j, i] = sin
    return result


def identity(size: int, dtype: np.dtype | type = np.float64) -> Matrix:
    """size x size identity matrix."""
    return Matrix(identity_array(size, dtype))


def translation_matrix(location: ArrayLike | Vector) -> Matrix:
    """
    Homogeneous translation matrix for an n-dimensional offset.

    Returns an (n+1) x (n+1) matrix with ``location`` in the last column:
    ``translation_matrix(t) @ [p, 1] == [p + t, 1]``.
    """
    if isinstance(location, Vector):
        location = location.to_array()
    loc = check_numeric_array(location, 'location')
    check_1d(loc, 'location')
    check_min_length(loc, 1, 'location')
    return Matrix(translation_array(loc))


def scaling_matrix(scale: ArrayLike | Vector) -> Matrix:
    """Diagonal matrix with ``scale`` on the diagonal."""
    if isinstance(scale, Vector):
        scale = scale.to_array()
    values = check_numeric_array(scale, 'scale')
    check_1d(values, 'scale')
    check_min_length(values, 2, 'scale')
    return Matrix(np.diag(values))


def plane_rotation(
    size: int,
    a: int,
    b: int,
    angle: float,
    dtype: np.dtype | type = np.float64,
) -> Matrix:
    """
    Rotation by ``angle`` degrees in the plane of axes ``a`` and ``b``.

    Axes are 1-based. Positive angles rotate axis ``a`` towards axis
    ``b``: ``plane_rotation(2, 1, 2, 90) @ (1, 0) == (0, 1)``.

    Raises:
        IndexOutOfRangeError: If an axis is outside 1..size
        ValidationError: If a == b
    """
    return Matrix(plane_rotation_array(size, a, b, angle, dtype))
