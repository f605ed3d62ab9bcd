"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_rectangular: ragged and empty nested input
    - check_numeric_array: conversion, dtype preservation, rejection
    - check_ndim / check_1d / check_2d / check_square / check_same_shape:
      shape checks
    - check_min_length / check_min_shape: minimum sizes
    - check_index / check_indices: integer bounds
    - check_perfect_square: square shape inference
"""

import numpy as np
import pytest

from ndlinalg.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)
from ndlinalg.core.validation import (
    check_1d,
    check_2d,
    check_index,
    check_indices,
    check_min_length,
    check_min_shape,
    check_ndim,
    check_numeric_array,
    check_perfect_square,
    check_rectangular,
    check_same_shape,
    check_square,
    is_numeric_dtype,
)


# ═══════════════════════════════════════════════════════════════════════
# check_rectangular
# ═══════════════════════════════════════════════════════════════════════


class TestCheckRectangular:

    def test_returns_lists(self):
        result = check_rectangular([(1, 2), (3, 4)], "rows")
        assert result == [[1, 2], [3, 4]]

    def test_accepts_generator(self):
        result = check_rectangular((range(2) for _ in range(3)), "rows")
        assert result == [[0, 1], [0, 1], [0, 1]]

    def test_rejects_ragged(self):
        with pytest.raises(DimensionError, match="row 1 has length 3"):
            check_rectangular([[1, 2], [1, 2, 3]], "rows")

    def test_rejects_empty(self):
        with pytest.raises(DimensionError, match="at least one row"):
            check_rectangular([], "rows")

    def test_rejects_flat_numbers(self):
        with pytest.raises(ValidationError, match="row 0 is int"):
            check_rectangular([1, 2, 3], "rows")

    def test_rejects_string_rows(self):
        with pytest.raises(ValidationError):
            check_rectangular(["ab", "cd"], "rows")


# ═══════════════════════════════════════════════════════════════════════
# check_numeric_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckNumericArray:

    def test_int_kept(self):
        result = check_numeric_array([1, 2, 3], "X")
        assert np.issubdtype(result.dtype, np.integer)

    def test_float32_kept(self):
        arr = np.array([1.0, 2.0], dtype=np.float32)
        assert check_numeric_array(arr, "X").dtype == np.float32

    def test_explicit_dtype(self):
        result = check_numeric_array([1, 2], "X", dtype=np.float64)
        assert result.dtype == np.float64

    def test_rejects_mixed_types(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_numeric_array([None, 1, 2.0], "X")

    def test_rejects_strings(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_numeric_array(["a", "b"], "X")

    def test_rejects_bool(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_numeric_array([True, False], "X")

    def test_rejects_complex(self):
        with pytest.raises(ValidationError, match="non-numeric dtype"):
            check_numeric_array([1 + 2j], "X")

    def test_error_message_includes_name(self):
        with pytest.raises(ValidationError, match="my_var"):
            check_numeric_array(["x"], "my_var")


class TestIsNumericDtype:

    @pytest.mark.parametrize("dtype", [np.int8, np.int64, np.uint16, np.float32, np.float64])
    def test_numeric(self, dtype):
        assert is_numeric_dtype(dtype)

    @pytest.mark.parametrize("dtype", [np.bool_, np.complex128, object])
    def test_not_numeric(self, dtype):
        assert not is_numeric_dtype(dtype)


# ═══════════════════════════════════════════════════════════════════════
# Shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_ndim_mismatch(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "X")

    def test_1d_and_2d(self):
        check_1d(np.zeros(3), "v")
        check_2d(np.zeros((2, 3)), "M")
        with pytest.raises(DimensionError):
            check_1d(np.zeros((2, 2)), "v")

    def test_square(self):
        check_square(np.zeros((3, 3)), "M")
        with pytest.raises(DimensionError, match="must be square, got 2x3"):
            check_square(np.zeros((2, 3)), "M")

    def test_min_length(self):
        check_min_length(np.zeros(1), 1, "v")
        with pytest.raises(DimensionError, match="at least 1 elements, got 0"):
            check_min_length(np.zeros(0), 1, "v")

    def test_min_shape(self):
        check_min_shape(np.zeros((2, 2)), 2, 2, "M")
        with pytest.raises(DimensionError, match="at least 2x2, got 1x3"):
            check_min_shape(np.zeros((1, 3)), 2, 2, "M")

    def test_same_shape(self):
        with pytest.raises(DimensionError, match="Shape mismatch"):
            check_same_shape(np.zeros(2), np.zeros(3), ("a", "b"))


# ═══════════════════════════════════════════════════════════════════════
# check_index
# ═══════════════════════════════════════════════════════════════════════


class TestCheckIndex:

    def test_valid(self):
        assert check_index(2, 3, "i") == 2

    def test_numpy_integer(self):
        result = check_index(np.int64(1), 3, "i")
        assert result == 1
        assert type(result) is int

    def test_upper_bound_exclusive(self):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            check_index(3, 3, "i")
        assert exc_info.value.index == 3
        assert exc_info.value.bound == 3

    def test_negative_rejected(self):
        with pytest.raises(IndexOutOfRangeError, match=r"index -1 out of range \[0, 3\)"):
            check_index(-1, 3, "i")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="got bool"):
            check_index(True, 3, "i")

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="got float"):
            check_index(1.0, 3, "i")

    def test_indices(self):
        assert check_indices([0, 2], 3, "i") == [0, 2]
        with pytest.raises(IndexOutOfRangeError):
            check_indices([0, 5], 3, "i")


class TestCheckPerfectSquare:

    @pytest.mark.parametrize("count,side", [(1, 1), (4, 2), (9, 3), (144, 12)])
    def test_squares(self, count, side):
        assert check_perfect_square(count, "buffer") == side

    @pytest.mark.parametrize("count", [0, 2, 8, 15])
    def test_non_squares(self, count):
        with pytest.raises(DimensionError, match="cannot form a square matrix"):
            check_perfect_square(count, "buffer")
