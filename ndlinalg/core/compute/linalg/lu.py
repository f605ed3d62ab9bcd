"""
LU decomposition with partial pivoting.

Doolittle's method, processed column by column: the unit lower-triangular
factor L is stored implicitly below the diagonal and the upper-triangular
factor U on and above it, so a single n x n array holds both. Row swaps
chosen by partial pivoting are recorded in a permutation array.

Used by inversion (inverse.py), determinants and the rotation builder.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from functools import cached_property
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndlinalg.core.compute.precision import is_floating, working_dtype
from ndlinalg.core.compute.tolerances import select_tolerance
from ndlinalg.core.exceptions import SingularMatrixError, ValidationError
from ndlinalg.core.validation import check_numeric_array, check_square


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition.

    Satisfies ``P @ A == L @ U`` where ``P = permutation_matrix``.

    Attributes:
        lu: Combined storage (n x n); strictly-lower part holds L's
            multipliers, upper part (with diagonal) holds U
        permutation: permutation[i] is the original row now at position i
        swaps: Number of transpositions in the permutation (its parity
            matches the row interchanges performed)
    """
    lu: NDArray[np.floating[Any]]
    permutation: NDArray[np.intp]
    swaps: int

    @property
    def size(self) -> int:
        return self.lu.shape[0]

    @cached_property
    def lower(self) -> NDArray[np.floating[Any]]:
        """Unit lower-triangular factor L."""
        L = np.tril(self.lu, k=-1)
        np.fill_diagonal(L, 1.0)
        return L

    @cached_property
    def upper(self) -> NDArray[np.floating[Any]]:
        """Upper-triangular factor U."""
        return np.triu(self.lu)

    @cached_property
    def permutation_matrix(self) -> NDArray[np.floating[Any]]:
        """Row-permutation matrix P with (P @ A)[i] == A[permutation[i]]."""
        return np.eye(self.size, dtype=self.lu.dtype)[self.permutation]

    @property
    def determinant(self) -> float:
        """det(A) = (-1)^swaps * prod(diag(U))."""
        sign = -1.0 if self.swaps % 2 else 1.0
        return sign * float(np.prod(np.diag(self.lu)))


def doolittle_lup(
    lu: NDArray[np.floating[Any]],
    threshold: float | None = None,
    matrix_name: str | None = None,
    warn: bool = True,
) -> NDArray[np.intp]:
    """
    Doolittle LUP decomposition, in place.

    ``lu`` is overwritten with the combined L/U storage. For each column:

        1. entries above the diagonal become U entries (row prefix of L
           dotted with column prefix of U subtracted);
        2. entries on/below the diagonal become pivot candidates, the one
           of largest magnitude is remembered;
        3. if that magnitude is below ``threshold`` the matrix is singular;
        4. the pivot row is swapped into place (whole rows) and the swap
           recorded in the permutation;
        5. entries below the pivot are divided by it, giving L's multipliers.

    Args:
        lu: Square floating array; mutated into LU storage
        threshold: Minimum acceptable pivot magnitude. None selects the
            singularity threshold of the dtype's tolerance tier (1e-11
            for float64, 1e-6 for float32).
        matrix_name: Name used in error messages
        warn: Emit a RuntimeWarning when the pivots spread beyond the
            tier's ill-conditioning ratio

    Returns:
        Permutation array; permutation[i] is the original row now at i

    Raises:
        DimensionError: If lu is not square
        SingularMatrixError: If a column has no pivot >= threshold
    """
    check_square(lu, matrix_name or 'lu')
    if not is_floating(lu.dtype):
        raise ValidationError(
            f"{matrix_name or 'lu'}: in-place decomposition needs floating storage, got {lu.dtype}"
        )
    tier = select_tolerance(lu.dtype)
    if threshold is None:
        threshold = tier.singularity_threshold
    n = lu.shape[0]
    permutation = np.arange(n, dtype=np.intp)

    largest_pivot = 0.0
    smallest_pivot = np.inf

    for col in range(n):
        # Upper triangle: rows above the diagonal
        for row in range(col):
            lu[row, col] -= lu[row, :row] @ lu[:row, col]

        # Lower triangle and pivot candidates
        for row in range(col, n):
            lu[row, col] -= lu[row, :col] @ lu[:col, col]

        candidates = np.abs(lu[col:, col])
        pivot_row = col + int(np.argmax(candidates))
        pivot_magnitude = float(candidates[pivot_row - col])

        if not pivot_magnitude >= threshold:
            raise SingularMatrixError(
                f"LUP decomposition impossible: largest pivot in column {col} "
                f"is {pivot_magnitude:.3e}, below singularity threshold {threshold:.0e}",
                matrix_name=matrix_name,
                column=col,
                pivot=pivot_magnitude,
                threshold=threshold,
            )

        if pivot_row != col:
            lu[[col, pivot_row]] = lu[[pivot_row, col]]
            permutation[[col, pivot_row]] = permutation[[pivot_row, col]]

        lu[col + 1:, col] /= lu[col, col]

        largest_pivot = max(largest_pivot, pivot_magnitude)
        smallest_pivot = min(smallest_pivot, pivot_magnitude)

    if warn and smallest_pivot < tier.ill_conditioned_ratio * largest_pivot:
        warnings.warn(
            f"{matrix_name or 'Matrix'} is ill-conditioned: pivot ratio "
            f"{smallest_pivot / largest_pivot:.2e} below {tier.ill_conditioned_ratio:.0e}. "
            f"Results may be inaccurate.",
            RuntimeWarning,
            stacklevel=2,
        )

    return permutation


def lu_decompose(
    matrix: ArrayLike,
    threshold: float | None = None,
    matrix_name: str = 'A',
) -> LUResult:
    """
    LU decomposition of a copy of ``matrix``.

    Args:
        matrix: Square array-like (integers are promoted to float64)
        threshold: Minimum acceptable pivot magnitude (None: dtype tier)
        matrix_name: Name used in error messages

    Returns:
        LUResult with combined storage, permutation and swap count

    Raises:
        ValidationError: If matrix is not numeric
        DimensionError: If matrix is not square
        SingularMatrixError: If matrix is singular within threshold
    """
    arr = check_numeric_array(matrix, matrix_name)
    lu = np.array(arr, dtype=working_dtype(arr.dtype), copy=True)
    permutation = doolittle_lup(lu, threshold, matrix_name=matrix_name)
    return LUResult(lu=lu, permutation=permutation, swaps=count_swaps(permutation))


def count_swaps(permutation: NDArray[np.intp]) -> int:
    """
    Minimum number of transpositions producing ``permutation``.

    Only its parity matters for determinants; computed from the cycle
    decomposition (n - number_of_cycles).
    """
    n = len(permutation)
    seen = np.zeros(n, dtype=bool)
    cycles = 0
    for start in range(n):
        if seen[start]:
            continue
        cycles += 1
        j = start
        while not seen[j]:
            seen[j] = True
            j = int(permutation[j])
    return n - cycles
