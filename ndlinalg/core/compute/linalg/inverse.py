"""
Matrix inversion from an LU decomposition.

Given P @ A = L @ U, the inverse X solves A @ X = I, i.e.
L @ U @ X = P. Forward substitution gives Y with L @ Y = P, back
substitution gives X with U @ X = Y. Both sweeps work on whole rows of
the right-hand side at once.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from ndlinalg.core.compute.linalg.lu import doolittle_lup


def permuted_identity(
    permutation: NDArray[np.intp],
    dtype: np.dtype | type = np.float64,
) -> NDArray[np.floating[Any]]:
    """Right-hand side P: row i is the unit vector e_{permutation[i]}."""
    n = len(permutation)
    b = np.zeros((n, n), dtype=dtype)
    b[np.arange(n), permutation] = 1
    return b


def invert_lu(
    lu: NDArray[np.floating[Any]],
    permutation: NDArray[np.intp],
) -> NDArray[np.floating[Any]]:
    """
    Inverse of A from its combined LU storage and row permutation.

    Args:
        lu: Combined L/U storage as produced by doolittle_lup
        permutation: Row permutation as produced by doolittle_lup

    Returns:
        New array holding A^-1
    """
    n = lu.shape[0]
    b = permuted_identity(permutation, dtype=lu.dtype)

    # Solve L @ Y = P
    for col in range(n):
        b[col + 1:] -= np.outer(lu[col + 1:, col], b[col])

    # Solve U @ X = Y
    for col in range(n - 1, -1, -1):
        b[col] /= lu[col, col]
        b[:col] -= np.outer(lu[:col, col], b[col])

    return b


def inverse_matrix(
    lu: NDArray[np.floating[Any]],
    threshold: float | None = None,
    matrix_name: str | None = None,
    warn: bool = True,
) -> NDArray[np.floating[Any]]:
    """
    Decompose ``lu`` in place and return the inverse of its original value.

    ``lu`` is left holding the LU decomposition (or partial LU data if the
    decomposition failed). Callers that need their data intact must pass
    a copy. ``threshold`` and ``warn`` are passed to doolittle_lup.

    Raises:
        DimensionError: If lu is not square
        SingularMatrixError: If lu is singular within threshold
    """
    permutation = doolittle_lup(lu, threshold, matrix_name=matrix_name, warn=warn)
    return invert_lu(lu, permutation)
