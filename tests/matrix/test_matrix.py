"""
Tests for the Matrix value type.

Validates:
    - Construction (rows, columns, arrays, copies, buffers, filled)
    - The 2x2 minimum for public construction
    - Element, row and column access with bounds checking
    - Element-wise algebra and matrix products
    - Row/column operations returning new matrices
    - Submatrices, vector conversion, determinant, display
"""

import numpy as np
import pytest

from ndlinalg import Matrix, Vector
from ndlinalg.core.exceptions import (
    DimensionError,
    IndexOutOfRangeError,
    ValidationError,
)


@pytest.fixture
def m23():
    return Matrix([[1, 2, 3], [4, 5, 6]])


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_from_rows(self, m23):
        assert m23.shape == (2, 3)
        assert m23.row_count == 2
        assert m23.column_count == 3
        assert m23.tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_vertical(self):
        m = Matrix([[1, 2, 3], [4, 5, 6]], vertical=True)
        assert m.shape == (3, 2)
        assert m.tolist() == [[1, 4], [2, 5], [3, 6]]

    def test_from_array_is_copy(self):
        arr = np.eye(2)
        m = Matrix(arr)
        arr[0, 0] = 42.0
        assert m[0, 0] == 1.0

    def test_copy_constructor(self, m23):
        copy = Matrix(m23)
        assert copy == m23
        assert copy._array is not m23._array

    def test_read_only(self, m23):
        with pytest.raises(ValueError):
            m23._array[0, 0] = 0

    def test_filled(self):
        m = Matrix.filled(2, 3, 7.0)
        assert m.shape == (2, 3)
        assert np.all(m.to_array() == 7.0)

    @pytest.mark.parametrize("rows", [
        [[1, 2, 3]],
        [[1], [2], [3]],
        [[1]],
    ])
    def test_minimum_two_by_two(self, rows):
        with pytest.raises(DimensionError, match="at least 2x2"):
            Matrix(rows)

    def test_ragged_rejected(self):
        with pytest.raises(DimensionError, match="row 1 has length 1"):
            Matrix([[1, 2], [3]])

    def test_empty_rejected(self):
        with pytest.raises(DimensionError):
            Matrix([])

    def test_non_numeric_rejected(self):
        with pytest.raises(ValidationError):
            Matrix([["a", "b"], ["c", "d"]])

    def test_1d_array_rejected(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            Matrix(np.arange(4))

    def test_validate(self, m23):
        assert m23.validate()


class TestBuffers:

    def test_round_trip(self, m23):
        restored = Matrix.from_buffer(m23.to_buffer(), 2, 3, dtype=m23.dtype)
        assert restored == m23

    def test_square_inferred(self):
        data = np.arange(9, dtype=np.float64).tobytes()
        m = Matrix.from_buffer(data)
        assert m.shape == (3, 3)
        assert m[1, 0] == 3.0

    def test_non_square_count_rejected(self):
        data = np.arange(6, dtype=np.float64).tobytes()
        with pytest.raises(DimensionError, match="cannot form a square matrix"):
            Matrix.from_buffer(data)

    def test_shape_mismatch_rejected(self):
        data = np.arange(6, dtype=np.float64).tobytes()
        with pytest.raises(DimensionError, match="cannot form a 2x2 matrix"):
            Matrix.from_buffer(data, 2, 2)

    def test_one_count_rejected(self):
        data = np.arange(4, dtype=np.float64).tobytes()
        with pytest.raises(ValidationError, match="both row_count and column_count"):
            Matrix.from_buffer(data, row_count=2)


# ═══════════════════════════════════════════════════════════════════════
# Access
# ═══════════════════════════════════════════════════════════════════════


class TestAccess:

    def test_entry(self, m23):
        assert m23[1, 2] == 6

    def test_row_via_getitem(self, m23):
        assert m23[0] == Vector([1, 2, 3])

    def test_row_and_column(self, m23):
        assert m23.row(1) == Vector([4, 5, 6])
        assert m23.column(2) == Vector([3, 6])

    def test_iteration_yields_rows(self, m23):
        assert [r.tolist() for r in m23] == [[1, 2, 3], [4, 5, 6]]
        assert len(m23) == 2

    def test_row_out_of_range(self, m23):
        with pytest.raises(IndexOutOfRangeError):
            m23.row(2)

    def test_column_out_of_range(self, m23):
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            m23[0, 3]
        assert exc_info.value.bound == 3

    def test_three_indices_rejected(self, m23):
        with pytest.raises(ValidationError):
            m23[0, 0, 0]


# ═══════════════════════════════════════════════════════════════════════
# Algebra
# ═══════════════════════════════════════════════════════════════════════


class TestAlgebra:

    def test_add_sub(self, m23):
        assert (m23 + m23).tolist() == [[2, 4, 6], [8, 10, 12]]
        assert (m23 - m23) == Matrix.filled(2, 3, 0)

    def test_shape_mismatch(self, m23):
        with pytest.raises(DimensionError, match=r"Shape mismatch: matrix=\(2, 3\), operand=\(3, 2\)"):
            m23 + m23.T

    def test_scalar_multiply_divide(self, m23):
        assert (m23 * 2).tolist() == [[2, 4, 6], [8, 10, 12]]
        assert (2 * m23) == m23 * 2
        assert (m23 / 2)[0, 0] == 0.5

    def test_elementwise_multiply(self, m23):
        assert (m23 * m23).tolist() == [[1, 4, 9], [16, 25, 36]]

    def test_negation(self, m23):
        assert (-m23)[1, 1] == -5

    def test_matrix_product(self, m23):
        result = m23 @ m23.T
        assert result.tolist() == [[14, 32], [32, 77]]

    def test_matrix_product_shape_mismatch(self, m23):
        with pytest.raises(DimensionError, match=r"\(mat2x3\) \* \(mat2x3\)"):
            m23 @ m23

    def test_matrix_vector_product(self, m23):
        assert m23 @ Vector([1, 0, -1]) == Vector([-2, -2])

    def test_matrix_vector_mismatch(self, m23):
        with pytest.raises(DimensionError, match=r"\(vec2\)"):
            m23 @ Vector([1, 2])

    def test_transpose_involution(self, rng):
        m = Matrix(rng.standard_normal((3, 5)))
        assert m.T.shape == (5, 3)
        assert m.T.T == m


# ═══════════════════════════════════════════════════════════════════════
# Row and column operations
# ═══════════════════════════════════════════════════════════════════════


class TestRowColumnOps:

    def test_switch_rows(self, m23):
        switched = m23.switch_rows(0, 1)
        assert switched.tolist() == [[4, 5, 6], [1, 2, 3]]
        assert m23.tolist() == [[1, 2, 3], [4, 5, 6]]

    def test_switch_columns(self, m23):
        assert m23.switch_columns(0, 2).tolist() == [[3, 2, 1], [6, 5, 4]]

    def test_multiply_row_widens(self, m23):
        result = m23.multiply_row(0, 0.5)
        assert result.tolist() == [[0.5, 1.0, 1.5], [4, 5, 6]]

    def test_multiply_column(self, m23):
        assert m23.multiply_column(1, 10).tolist() == [[1, 20, 3], [4, 50, 6]]

    def test_add_rows(self, m23):
        assert m23.add_rows(0, 1, -4).tolist() == [[1, 2, 3], [0, -3, -6]]

    def test_add_columns_default_multiplier(self, m23):
        assert m23.add_columns(0, 2).tolist() == [[1, 2, 4], [4, 5, 10]]

    def test_with_row(self, m23):
        result = m23.with_row(1, [7, 8, 9])
        assert result.tolist() == [[1, 2, 3], [7, 8, 9], [4, 5, 6]]
        assert m23.with_row(2, Vector([0, 0, 0])).row_count == 3

    def test_with_column(self, m23):
        result = m23.with_column(0, [0.5, 1.5])
        assert result.tolist() == [[0.5, 1, 2, 3], [1.5, 4, 5, 6]]

    def test_with_row_wrong_length(self, m23):
        with pytest.raises(DimensionError, match="illegal size 2, should be 3"):
            m23.with_row(0, [1, 2])

    def test_with_row_index_out_of_range(self, m23):
        with pytest.raises(IndexOutOfRangeError):
            m23.with_row(3, [1, 2, 3])

    def test_row_op_index_checked(self, m23):
        with pytest.raises(IndexOutOfRangeError):
            m23.switch_rows(0, 2)


# ═══════════════════════════════════════════════════════════════════════
# Reshaping
# ═══════════════════════════════════════════════════════════════════════


class TestReshaping:

    def test_submatrix(self):
        m = Matrix(np.arange(16).reshape(4, 4))
        sub = m.submatrix(deleted_rows=[0, 2], deleted_columns=[1])
        assert sub.tolist() == [[4, 6, 7], [12, 14, 15]]

    def test_submatrix_can_be_single_row(self, m23):
        sub = m23.submatrix(deleted_rows=[0])
        assert sub.shape == (1, 3)

    def test_submatrix_cannot_delete_everything(self, m23):
        with pytest.raises(DimensionError):
            m23.submatrix(deleted_rows=[0, 1])

    def test_submatrix_index_checked(self, m23):
        with pytest.raises(IndexOutOfRangeError):
            m23.submatrix(deleted_columns=[3])

    def test_first_row_and_column(self, m23):
        assert m23.first_row().tolist() == [[1, 2, 3]]
        assert m23.first_column().tolist() == [[1], [4]]

    def test_to_vector(self, m23):
        assert m23.first_row().to_vector() == Vector([1, 2, 3])
        assert m23.first_column().to_vector() == Vector([1, 4])

    def test_to_vector_rejects_full_matrix(self, m23):
        with pytest.raises(DimensionError, match="cannot be turned into a vector"):
            m23.to_vector()

    def test_force_to_vector(self, m23):
        assert m23.force_to_vector() == Vector([1, 4])


# ═══════════════════════════════════════════════════════════════════════
# Determinant and LU
# ═══════════════════════════════════════════════════════════════════════


class TestDeterminant:

    def test_known_value(self):
        assert Matrix([[4, 3], [6, 3]]).determinant() == pytest.approx(-6.0)

    def test_matches_numpy(self, invertible_array):
        assert Matrix(invertible_array).determinant() == pytest.approx(
            np.linalg.det(invertible_array), rel=1e-10,
        )

    def test_singular_is_zero(self):
        assert Matrix([[1, 2], [2, 4]]).determinant() == 0.0

    def test_non_square(self, m23):
        with pytest.raises(DimensionError):
            m23.determinant()

    def test_lu(self, pivoting_array):
        result = Matrix(pivoting_array).lu()
        np.testing.assert_allclose(
            result.lower @ result.upper, pivoting_array[result.permutation], atol=1e-14,
        )


# ═══════════════════════════════════════════════════════════════════════
# Comparison and display
# ═══════════════════════════════════════════════════════════════════════


class TestDisplay:

    def test_str(self):
        assert str(Matrix([[1, 2], [3, 4]])) == "{[1, 2],\n[3, 4]}"

    def test_repr(self):
        assert repr(Matrix([[1, 2], [3, 4]])) == "Matrix([[1, 2], [3, 4]])"

    def test_equality_and_hash(self):
        a = Matrix([[1, 2], [3, 4]])
        b = Matrix([[1, 2], [3, 4]])
        assert a == b
        assert hash(a) == hash(b)
        assert a != a.T

    def test_allclose(self):
        a = Matrix([[1.0, 0.0], [0.0, 1.0]])
        assert a.allclose(a + Matrix.filled(2, 2, 1e-14))
        assert not a.allclose(Matrix.filled(2, 3, 0.0))

    def test_allclose_tolerance_follows_dtype(self):
        a = np.eye(2)
        b = a + 5e-6
        assert not Matrix(a).allclose(Matrix(b))
        assert Matrix(a.astype(np.float32)).allclose(Matrix(b.astype(np.float32)))
        assert Matrix(a).allclose(Matrix(b), atol=1e-5)
