"""
Matrix value type.

A Matrix is a rectangular, row-major grid of numbers backed by a read-only
NumPy array. Operations return new, independent matrices. The single
exception is ``inverse_unsafe``, which takes ownership of its argument:
the argument's storage is reused for the result and the argument itself
becomes unusable.

Public construction requires at least 2 rows and 2 columns. Single-row and
single-column matrices only arise as derived views (``Vector`` views,
``first_row``, ``first_column``, ``submatrix``).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndlinalg.core.compute.linalg.inverse import inverse_matrix
from ndlinalg.core.compute.linalg.lu import LUResult, lu_decompose
from ndlinalg.core.compute.precision import is_floating, working_dtype
from ndlinalg.core.compute.tolerances import select_tolerance
from ndlinalg.core.exceptions import (
    DimensionError,
    MatrixConsumedError,
    SingularMatrixError,
    ValidationError,
)
from ndlinalg.core.validation import (
    check_2d,
    check_1d,
    check_index,
    check_indices,
    check_min_shape,
    check_numeric_array,
    check_perfect_square,
    check_rectangular,
    check_same_shape,
    check_square,
)
from ndlinalg.vector.vector import Vector, _freeze, _is_scalar


MIN_DIMENSION = 2


class Matrix:
    """
    Rectangular matrix over an integer or floating dtype.

    Construction:
        Matrix([[1, 2], [3, 4]])              # rows
        Matrix([[1, 2], [3, 4]], vertical=True)  # outer sequence = columns
        Matrix(np.eye(3))                     # from a 2D array
        Matrix(other)                         # copy
        Matrix.filled(3, 4, 0.0)
        Matrix.from_buffer(buf, 2, 3)         # native-order float64 buffer
        Matrix.from_buffer(buf)               # square, size inferred

    Operators: ``+ -`` (same shape), ``* /`` (scalar or element-wise),
    ``@`` (matrix product, or matrix-vector product returning a Vector).
    """

    def __init__(
        self,
        rows: ArrayLike | Matrix,
        *,
        vertical: bool = False,
        dtype: np.dtype | type | None = None,
    ):
        if isinstance(rows, Matrix):
            rows = rows._array
        elif not isinstance(rows, np.ndarray):
            rows = check_rectangular(rows, 'rows')
        arr = check_numeric_array(rows, 'rows', dtype=dtype)
        check_2d(arr, 'rows')
        if vertical:
            arr = arr.T
        check_min_shape(arr, MIN_DIMENSION, MIN_DIMENSION, 'matrix')
        self._data: NDArray[Any] | None = _freeze(np.array(arr, copy=True))

    @classmethod
    def _wrap(cls, array: NDArray[Any]) -> Matrix:
        """Adopt a computed 2D array (any shape) without re-validating it."""
        obj = cls.__new__(cls)
        obj._data = _freeze(array)
        return obj

    @classmethod
    def filled(
        cls,
        row_count: int,
        column_count: int,
        value: float = 0.0,
    ) -> Matrix:
        """Matrix of the given shape with every entry set to ``value``."""
        return cls(np.full((row_count, column_count), value))

    @classmethod
    def from_buffer(
        cls,
        buffer: bytes | bytearray | memoryview,
        row_count: int | None = None,
        column_count: int | None = None,
        dtype: np.dtype | type = np.float64,
    ) -> Matrix:
        """
        Build a matrix from a row-major binary buffer in native byte order.

        With neither count given the matrix is square and its size is
        inferred from the element count, which must be a perfect square.

        Raises:
            ValidationError: If only one of the counts is given
            DimensionError: If the element count does not fit the shape
        """
        try:
            flat = np.frombuffer(buffer, dtype=dtype)
        except ValueError as e:
            raise DimensionError(f"buffer: {e}") from e

        if row_count is None and column_count is None:
            row_count = column_count = check_perfect_square(flat.size, 'buffer')
        elif row_count is None or column_count is None:
            raise ValidationError(
                "buffer: give both row_count and column_count, or neither for a square matrix"
            )
        if row_count * column_count != flat.size:
            raise DimensionError(
                f"buffer: {flat.size} elements cannot form a {row_count}x{column_count} matrix"
            )
        return cls(flat.reshape(row_count, column_count))

    # === Storage and ownership ===

    @property
    def _array(self) -> NDArray[Any]:
        if self._data is None:
            raise MatrixConsumedError(
                "Matrix storage was handed to inverse_unsafe() and is no longer valid"
            )
        return self._data

    def _release(self) -> NDArray[Any]:
        """Detach and return writable storage; this handle becomes consumed."""
        data = self._array
        self._data = None
        data.flags.writeable = True
        return data

    @property
    def is_consumed(self) -> bool:
        return self._data is None

    # === Shape ===

    @property
    def row_count(self) -> int:
        return self._array.shape[0]

    @property
    def column_count(self) -> int:
        return self._array.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._array.shape

    @property
    def is_square(self) -> bool:
        return self.row_count == self.column_count

    @property
    def dtype(self) -> np.dtype:
        return self._array.dtype

    def validate(self) -> bool:
        """
        True iff every row has the length of row 0.

        Ragged input is rejected at construction, so a live matrix
        always validates; a consumed one does not.
        """
        if self._data is None:
            return False
        return self._data.ndim == 2 and self._data.shape[1] > 0

    # === Element access ===

    def __len__(self) -> int:
        return self.row_count

    def __getitem__(self, key: int | tuple[int, int]) -> Any:
        """``m[row]`` returns the row as a Vector, ``m[row, column]`` an entry."""
        data = self._array
        if isinstance(key, tuple):
            if len(key) != 2:
                raise ValidationError(f"index: expected (row, column), got {len(key)} indices")
            row = check_index(key[0], self.row_count, 'row')
            column = check_index(key[1], self.column_count, 'column')
            return data[row, column].item()
        return self.row(key)

    def row(self, index: int) -> Vector:
        index = check_index(index, self.row_count, 'row')
        return Vector._wrap(self._array[index].copy())

    def column(self, index: int) -> Vector:
        index = check_index(index, self.column_count, 'column')
        return Vector._wrap(self._array[:, index].copy())

    def __iter__(self) -> Iterator[Vector]:
        for i in range(self.row_count):
            yield self.row(i)

    def to_array(self) -> NDArray[Any]:
        """Writable copy of the backing data."""
        return self._array.copy()

    def to_buffer(self) -> bytes:
        """Row-major element data as bytes in native byte order."""
        return self._array.tobytes(order='C')

    def tolist(self) -> list[list[Any]]:
        return self._array.tolist()

    # === Algebra ===

    def _same_shape(self, other: Matrix) -> NDArray[Any]:
        check_same_shape(self._array, other._array, ('matrix', 'operand'))
        return other._array

    def __neg__(self) -> Matrix:
        return Matrix._wrap(-self._array)

    def __pos__(self) -> Matrix:
        return self

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix._wrap(self._array + self._same_shape(other))

    def __sub__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        return Matrix._wrap(self._array - self._same_shape(other))

    def __mul__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            return Matrix._wrap(self._array * self._same_shape(other))
        if _is_scalar(other):
            return Matrix._wrap(self._array * other)
        return NotImplemented

    def __rmul__(self, other: float) -> Matrix:
        if not _is_scalar(other):
            return NotImplemented
        return Matrix._wrap(other * self._array)

    def __truediv__(self, other: Matrix | float) -> Matrix:
        if isinstance(other, Matrix):
            return Matrix._wrap(self._array / self._same_shape(other))
        if _is_scalar(other):
            return Matrix._wrap(self._array / other)
        return NotImplemented

    def __matmul__(self, other: Matrix | Vector) -> Matrix | Vector:
        if isinstance(other, Vector):
            if other.size != self.column_count:
                raise DimensionError(
                    f"Invalid multiplication (mat{self.row_count}x{self.column_count}) "
                    f"* (vec{other.size})"
                )
            return Vector._wrap(self._array @ other._data)
        if isinstance(other, Matrix):
            if other.row_count != self.column_count:
                raise DimensionError(
                    f"Invalid multiplication (mat{self.row_count}x{self.column_count}) "
                    f"* (mat{other.row_count}x{other.column_count})"
                )
            return Matrix._wrap(self._array @ other._array)
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix._wrap(self._array.T)

    @property
    def T(self) -> Matrix:
        return self.transpose()

    # === Row and column operations ===

    def switch_rows(self, row_a: int, row_b: int) -> Matrix:
        row_a = check_index(row_a, self.row_count, 'row_a')
        row_b = check_index(row_b, self.row_count, 'row_b')
        data = self._array.copy()
        data[[row_a, row_b]] = data[[row_b, row_a]]
        return Matrix._wrap(data)

    def switch_columns(self, column_a: int, column_b: int) -> Matrix:
        column_a = check_index(column_a, self.column_count, 'column_a')
        column_b = check_index(column_b, self.column_count, 'column_b')
        data = self._array.copy()
        data[:, [column_a, column_b]] = data[:, [column_b, column_a]]
        return Matrix._wrap(data)

    def multiply_row(self, row: int, multiplier: float) -> Matrix:
        row = check_index(row, self.row_count, 'row')
        data = self._array.astype(np.result_type(self.dtype, multiplier))
        data[row] *= multiplier
        return Matrix._wrap(data)

    def multiply_column(self, column: int, multiplier: float) -> Matrix:
        column = check_index(column, self.column_count, 'column')
        data = self._array.astype(np.result_type(self.dtype, multiplier))
        data[:, column] *= multiplier
        return Matrix._wrap(data)

    def add_rows(self, source: int, target: int, multiplier: float = 1) -> Matrix:
        """Add ``multiplier`` times row ``source`` to row ``target``."""
        source = check_index(source, self.row_count, 'source')
        target = check_index(target, self.row_count, 'target')
        data = self._array.astype(np.result_type(self.dtype, multiplier))
        data[target] += data[source] * multiplier
        return Matrix._wrap(data)

    def add_columns(self, source: int, target: int, multiplier: float = 1) -> Matrix:
        """Add ``multiplier`` times column ``source`` to column ``target``."""
        source = check_index(source, self.column_count, 'source')
        target = check_index(target, self.column_count, 'target')
        data = self._array.astype(np.result_type(self.dtype, multiplier))
        data[:, target] += data[:, source] * multiplier
        return Matrix._wrap(data)

    def with_row(self, index: int, data: ArrayLike) -> Matrix:
        """Insert ``data`` as a new row at ``index``, shifting later rows down."""
        index = check_index(index, self.row_count + 1, 'index')
        values = self._line(data, self.column_count, 'row data')
        widened = self._array.astype(np.result_type(self.dtype, values.dtype))
        return Matrix._wrap(np.insert(widened, index, values, axis=0))

    def with_column(self, index: int, data: ArrayLike) -> Matrix:
        """Insert ``data`` as a new column at ``index``, shifting later columns right."""
        index = check_index(index, self.column_count + 1, 'index')
        values = self._line(data, self.row_count, 'column data')
        widened = self._array.astype(np.result_type(self.dtype, values.dtype))
        return Matrix._wrap(np.insert(widened, index, values, axis=1))

    def _line(self, data: ArrayLike, length: int, name: str) -> NDArray[Any]:
        if isinstance(data, Vector):
            data = data._data
        values = check_numeric_array(data, name)
        check_1d(values, name)
        if values.shape[0] != length:
            raise DimensionError(
                f"{name}: illegal size {values.shape[0]}, should be {length}"
            )
        return values

    def submatrix(
        self,
        deleted_rows: Sequence[int] = (),
        deleted_columns: Sequence[int] = (),
    ) -> Matrix:
        """New matrix without the given (0-based) rows and columns."""
        rows = set(check_indices(deleted_rows, self.row_count, 'deleted_rows'))
        columns = set(check_indices(deleted_columns, self.column_count, 'deleted_columns'))
        kept_rows = [i for i in range(self.row_count) if i not in rows]
        kept_columns = [j for j in range(self.column_count) if j not in columns]
        if not kept_rows or not kept_columns:
            raise DimensionError("submatrix: cannot delete every row or every column")
        return Matrix._wrap(self._array[np.ix_(kept_rows, kept_columns)])

    def first_row(self) -> Matrix:
        return Matrix._wrap(self._array[:1, :])

    def first_column(self) -> Matrix:
        return Matrix._wrap(self._array[:, :1])

    def to_vector(self) -> Vector:
        """
        Vector holding the data of a single-row or single-column matrix.

        Raises:
            DimensionError: If the matrix has more than one row and column
        """
        if self.row_count != 1 and self.column_count != 1:
            raise DimensionError(
                f"Matrix {self.row_count}x{self.column_count} cannot be turned into a vector"
            )
        return Vector._wrap(self._array.ravel())

    def force_to_vector(self) -> Vector:
        """Vector of the first column, discarding everything else."""
        return self.column(0)

    # === Decomposition-backed operations ===

    def lu(self, threshold: float | None = None) -> LUResult:
        """Pivoted LU decomposition of a copy of this matrix."""
        return lu_decompose(self._array, threshold, matrix_name='matrix')

    def determinant(self) -> float:
        """
        Determinant via LU decomposition.

        A matrix with no usable pivot is singular and has determinant 0.
        """
        check_square(self._array, 'matrix')
        try:
            # only exactly-zero pivots count as singular here
            tiny = float(np.finfo(working_dtype(self.dtype)).tiny)
            return self.lu(threshold=tiny).determinant
        except SingularMatrixError:
            return 0.0

    def inverse(self, threshold: float | None = None) -> Matrix:
        """See :func:`inverse`."""
        return inverse(self, threshold)

    def inverse_unsafe(self, threshold: float | None = None) -> Matrix:
        """See :func:`inverse_unsafe`. Consumes this matrix."""
        return inverse_unsafe(self, threshold)

    # === Comparison and display ===

    def allclose(
        self,
        other: Matrix,
        rtol: float | None = None,
        atol: float | None = None,
    ) -> bool:
        """
        Element-wise closeness; False for matrices of different shape.

        Omitted tolerances come from the tier of the wider of the two
        dtypes (see select_tolerance).
        """
        if not isinstance(other, Matrix) or other.shape != self.shape:
            return False
        tier = select_tolerance(np.result_type(self.dtype, other.dtype))
        return bool(np.allclose(
            self._array, other._array,
            rtol=tier.rtol if rtol is None else rtol,
            atol=tier.atol if atol is None else atol,
        ))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._array, other._array))

    def __hash__(self) -> int:
        return hash(tuple(map(tuple, self._array.tolist())))

    def __str__(self) -> str:
        rows = ",\n".join(
            f"[{', '.join(str(x) for x in row)}]" for row in self._array.tolist()
        )
        return f"{{{rows}}}"

    def __repr__(self) -> str:
        if self._data is None:
            return "Matrix(<consumed>)"
        return f"Matrix({self._data.tolist()!r})"


def inverse(
    matrix: Matrix,
    threshold: float | None = None,
) -> Matrix:
    """
    Inverse of ``matrix``, computed on a private copy.

    The argument is untouched. Integer matrices are inverted in float64,
    floating matrices in their own precision.

    Args:
        matrix: Square matrix
        threshold: Singularity threshold (minimum pivot magnitude). None
            uses the tier of the working dtype: 1e-11 for float64 and
            integers, 1e-6 for float32.

    Returns:
        New Matrix holding the inverse

    Raises:
        DimensionError: If matrix is not square
        SingularMatrixError: If matrix is singular within threshold
    """
    data = matrix._array
    check_square(data, 'matrix')
    lu = np.array(data, dtype=working_dtype(data.dtype), copy=True)
    return Matrix._wrap(inverse_matrix(lu, threshold, matrix_name='matrix'))


def inverse_unsafe(
    matrix: Matrix,
    threshold: float | None = None,
) -> Matrix:
    """
    Inverse of ``matrix``, reusing (and consuming) its storage.

    Ownership of ``matrix`` moves into this call: its storage is used as
    LU scratch space and then overwritten with the inverse, which is
    returned in a new handle. Any later use of ``matrix`` raises
    MatrixConsumedError. This holds even when decomposition fails,
    because the storage is left with partial LU data.

    Shape and dtype are checked before ownership is taken, so a
    ValidationError leaves ``matrix`` usable.

    Raises:
        DimensionError: If matrix is not square
        ValidationError: If matrix storage is not floating point
            (integer storage cannot hold an inverse; use inverse())
        SingularMatrixError: If matrix is singular within threshold
    """
    data = matrix._array
    check_square(data, 'matrix')
    if not is_floating(data.dtype):
        raise ValidationError(
            f"inverse_unsafe: {data.dtype} storage cannot hold the inverse; use inverse()"
        )
    storage = matrix._release()
    storage[...] = inverse_matrix(storage, threshold, matrix_name='matrix')
    return Matrix._wrap(storage)
