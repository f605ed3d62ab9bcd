"""
Input validation utilities for ndlinalg.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import operator
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndlinalg.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)


def is_numeric_dtype(dtype: np.dtype | type) -> bool:
    """True for integer and real floating dtypes (bool is not numeric here)."""
    return bool(
        np.issubdtype(dtype, np.integer) or np.issubdtype(dtype, np.floating)
    )


def check_rectangular(rows: Iterable[Any], name: str) -> list[list[Any]]:
    """
    Verify nested input has rows of equal length.

    NumPy turns ragged input into an object array (or refuses it,
    depending on version); checking up front gives a DimensionError
    naming the first offending row.

    Args:
        rows: Outer iterable of row iterables
        name: Parameter name for error messages

    Returns:
        The rows materialized as lists

    Raises:
        DimensionError: If the input is empty or ragged
        ValidationError: If an entry is not itself iterable
    """
    materialized = []
    for i, row in enumerate(rows):
        if not isinstance(row, Iterable) or isinstance(row, (str, bytes)):
            raise ValidationError(
                f"{name}: row {i} is {type(row).__name__}, expected a sequence"
            )
        materialized.append(list(row))

    if not materialized:
        raise DimensionError(f"{name}: must contain at least one row")

    width = len(materialized[0])
    for i, row in enumerate(materialized):
        if len(row) != width:
            raise DimensionError(
                f"{name}: row {i} has length {len(row)}, expected {width} (length of row 0)"
            )
    return materialized


def check_numeric_array(
    array: ArrayLike,
    name: str,
    dtype: np.dtype | type | None = None,
) -> NDArray[Any]:
    """
    Validate and convert input to a numeric numpy array.

    Unlike a float-promoting converter, the element type is kept: integer
    input stays integer so element-wise algebra is exact where it can be.

    Args:
        array: Input to validate
        name: Parameter name for error messages
        dtype: Optional target dtype (must itself be numeric)

    Returns:
        numpy.ndarray with integer or floating dtype

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array) if dtype is None else np.asarray(array, dtype=dtype)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not is_numeric_dtype(result.dtype):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected integer or floating data"
        )

    return result


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[Any], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_min_length(array: NDArray[Any], min_length: int, name: str) -> None:
    """
    Verify a 1D array has at least ``min_length`` elements.

    Raises:
        DimensionError: If array is shorter
    """
    if array.shape[0] < min_length:
        raise DimensionError(
            f"{name}: requires at least {min_length} elements, got {array.shape[0]}"
        )


def check_min_shape(
    array: NDArray[Any],
    min_rows: int,
    min_columns: int,
    name: str,
) -> None:
    """
    Verify a 2D array has at least the given number of rows and columns.

    Raises:
        DimensionError: If either dimension is too small
    """
    rows, columns = array.shape
    if rows < min_rows or columns < min_columns:
        raise DimensionError(
            f"{name}: requires at least {min_rows}x{min_columns}, got {rows}x{columns}"
        )


def check_square(array: NDArray[Any], name: str) -> None:
    """
    Verify a 2D array is square.

    Raises:
        DimensionError: If row and column counts differ
    """
    check_2d(array, name)
    rows, columns = array.shape
    if rows != columns:
        raise DimensionError(
            f"{name}: must be square, got {rows}x{columns}"
        )


def check_same_shape(
    lhs: NDArray[Any],
    rhs: NDArray[Any],
    names: tuple[str, str],
) -> None:
    """
    Verify two arrays have identical shapes.

    Raises:
        DimensionError: If shapes differ
    """
    if lhs.shape != rhs.shape:
        raise DimensionError(
            f"Shape mismatch: {names[0]}={lhs.shape}, {names[1]}={rhs.shape}"
        )


def check_index(index: Any, bound: int, name: str) -> int:
    """
    Verify ``index`` is an integer in ``[0, bound)``.

    Negative indices are rejected rather than wrapped: an out-of-range
    row or column is a caller bug, not a request for Python slicing rules.

    Args:
        index: Index to check
        bound: Exclusive upper bound
        name: Parameter name for error messages

    Returns:
        The index as a plain int

    Raises:
        ValidationError: If index is not an integer
        IndexOutOfRangeError: If index is outside [0, bound)
    """
    if isinstance(index, (bool, np.bool_)):
        raise ValidationError(f"{name}: expected an integer index, got bool")
    try:
        value = operator.index(index)
    except TypeError as e:
        raise ValidationError(
            f"{name}: expected an integer index, got {type(index).__name__}"
        ) from e

    if not 0 <= value < bound:
        raise IndexOutOfRangeError(
            f"{name}: index {value} out of range [0, {bound})",
            index=value,
            bound=bound,
        )
    return value


def check_indices(indices: Sequence[Any], bound: int, name: str) -> list[int]:
    """Apply check_index to every entry of ``indices``."""
    return [check_index(i, bound, name) for i in indices]


def check_perfect_square(count: int, name: str) -> int:
    """
    Verify ``count`` is a perfect square and return its root.

    Used when a square matrix shape has to be inferred from a flat buffer.

    Raises:
        DimensionError: If count is not a positive perfect square
    """
    side = math.isqrt(count) if count >= 0 else -1
    if side <= 0 or side * side != count:
        raise DimensionError(
            f"{name}: {count} elements cannot form a square matrix"
        )
    return side
