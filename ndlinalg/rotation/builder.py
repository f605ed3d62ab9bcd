"""
n-dimensional rotation matrices (Aguilera-Perez algorithm).

In n dimensions a rotation fixes an (n-2)-dimensional hyperplane and turns
the complementary plane. The hyperplane is given by a simplex of n-1
points (the rows of an (n-1) x n matrix).

Construction:

    1. translate the first simplex point to the origin;
    2. apply a cascade of plane rotations that drives the simplex into the
       span of the first n-2 canonical axes, one point and one coordinate
       at a time;
    3. rotate by the requested angle in the plane of the last two axes;
    4. undo step 2, then step 1.

Steps 2-4 are linear and run on n x n matrices, so the simplex's offset
never enters the decomposition that undoes the alignment. The translation
of steps 1 and 4 is composed afterwards into the homogeneous
(n+1) x (n+1) transform ``T(p0) @ R @ T(-p0)``.

The cascade runs in row-vector form (points are rows, transforms multiply
on the right), matching how the simplex is stored. The result is
transposed into the library-wide column-vector convention at the end.

Reference: A. Aguilera, R. Perez-Aguila, "General n-Dimensional Rotations",
WSCG 2004 short papers.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndlinalg.core.compute.linalg.inverse import inverse_matrix
from ndlinalg.core.compute.precision import working_dtype
from ndlinalg.core.exceptions import DimensionError
from ndlinalg.core.validation import check_2d, check_numeric_array, check_rectangular
from ndlinalg.matrix.builders import plane_rotation_array
from ndlinalg.matrix.matrix import Matrix


def init_rotation(simplex: Matrix | ArrayLike, angle: float) -> Matrix:
    """
    Rotation by ``angle`` degrees about the hyperplane through ``simplex``.

    Args:
        simplex: (n-1) x n points, one per row, n >= 2. In 3-D this is two
            points on the rotation axis. In 2-D it is a single point
            (1 x 2); since ``Matrix(...)`` requires at least 2x2, pass it
            as a nested sequence, an array, or a one-row Matrix view such
            as ``Vector([x, y]).horizontal_matrix``.
        angle: Rotation angle in degrees. Positive angles turn the
            (n-1)-th canonical axis of the aligned frame towards the n-th;
            in 2-D that is counter-clockwise, in 3-D a right-handed
            rotation about the axis from the first point to the second.

    Returns:
        n x n orthogonal Matrix acting on column vectors (``R @ v``).
        Only the linear part is returned; see rotation_transform for the
        affine transform that also keeps an off-origin simplex fixed.

    Raises:
        ValidationError: If the simplex is not numeric
        DimensionError: If the simplex is not (n-1) x n with n >= 2
        SingularMatrixError: If the aligning transform is degenerate
    """
    transform = _rotation_transform(_simplex_points(simplex), angle)
    n = transform.shape[0] - 1
    return Matrix._wrap(transform[:n, :n])


def rotation_transform(simplex: Matrix | ArrayLike, angle: float) -> Matrix:
    """
    Homogeneous (n+1) x (n+1) form of :func:`init_rotation`.

    Column-vector convention with the translation in the last column:
    every simplex point p satisfies ``T @ [p, 1] == [p, 1]``.
    """
    return Matrix._wrap(_rotation_transform(_simplex_points(simplex), angle))


def _simplex_points(simplex: Matrix | ArrayLike) -> NDArray[np.floating[Any]]:
    if isinstance(simplex, Matrix):
        points = simplex.to_array()
    else:
        if not isinstance(simplex, np.ndarray):
            simplex = check_rectangular(simplex, 'simplex')
        points = check_numeric_array(simplex, 'simplex')
    check_2d(points, 'simplex')

    rows, n = points.shape
    if n < 2:
        raise DimensionError(f"simplex: can't do rotation in {n}-dimensional space")
    if rows != n - 1:
        raise DimensionError(
            f"simplex: rotation in {n}-dimensional space needs {n - 1} points, got {rows}"
        )
    return points.astype(working_dtype(points.dtype))


def _rotation_transform(points: NDArray[np.floating[Any]], angle: float) -> NDArray[np.floating[Any]]:
    n = points.shape[1]
    dtype = points.dtype
    origin = points[0]

    v = points - origin
    aligning = np.eye(n, dtype=dtype)

    # Point r-1 is rotated into span(e_1 .. e_{r-1}); coordinates c down
    # to r are zeroed one plane at a time. Earlier points only have
    # coordinates below r and are left alone.
    for r in range(2, n):
        for c in range(n, r - 1, -1):
            theta = np.degrees(np.arctan2(v[r - 1, c - 1], v[r - 1, c - 2]))
            step = plane_rotation_array(n, c - 1, c, theta, dtype=dtype)
            v = v @ step
            aligning = aligning @ step

    # Row form of the column-form plane rotation is its transpose
    turn = plane_rotation_array(n, n - 1, n, angle, dtype=dtype).T
    aligned = aligning @ turn
    # aligning is orthogonal and not needed after this; decompose in place
    undo = inverse_matrix(aligning, matrix_name='rotation basis', warn=False)
    linear = (aligned @ undo).T

    transform = np.eye(n + 1, dtype=dtype)
    transform[:n, :n] = linear
    transform[:n, n] = origin - linear @ origin
    return transform
