"""
Vector value type.

A Vector is an immutable, fixed-length sequence of numbers backed by a
read-only NumPy array. Every operation returns a new Vector; nothing is
shared with the operands.

Convention: vectors are column vectors when combined with matrices, so a
rotation matrix R acts as ``R @ v`` (see ``rotated``).
"""

from __future__ import annotations

import numbers
from collections.abc import Iterator
from functools import cached_property
from typing import TYPE_CHECKING, Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ndlinalg.core.compute.tolerances import select_tolerance
from ndlinalg.core.exceptions import (
    DimensionError,
    NumericalError,
    UnsupportedDimensionError,
    ValidationError,
)
from ndlinalg.core.validation import (
    check_1d,
    check_index,
    check_min_length,
    check_numeric_array,
    check_same_shape,
)

if TYPE_CHECKING:
    from ndlinalg.matrix.matrix import Matrix


# Index offsets (mod n) of the a_j*b_k - a_k*b_j terms making up component i
# of the cross product. The 7-dimensional table is the octonion product.
_CROSS_TERMS: dict[int, tuple[tuple[int, int], ...]] = {
    3: ((1, 2),),
    7: ((1, 3), (2, 6), (4, 5)),
}


def _freeze(array: NDArray[Any]) -> NDArray[Any]:
    """Make ``array`` an independent, read-only buffer."""
    if array.base is not None:
        array = array.copy()
    array.flags.writeable = False
    return array


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


class Vector:
    """
    Immutable n-dimensional vector over an integer or floating dtype.

    Construction:
        Vector([1, 2, 3])                   # from any flat iterable
        Vector(np.arange(4.0))              # from a 1D array
        Vector(other)                       # copy
        Vector.from_buffer(buf)             # native-order float64 buffer

    Element-wise operators take another Vector of the same size or a real
    scalar: ``+ - * /``. ``v @ w`` is the dot product, ``v @ M`` the
    row-vector product with a matrix.
    """

    def __init__(self, values: ArrayLike | Vector, dtype: np.dtype | type | None = None):
        if isinstance(values, Vector):
            values = values._data
        elif not isinstance(values, np.ndarray):
            try:
                values = list(values)
            except TypeError as e:
                raise ValidationError(
                    f"values: expected an iterable of numbers, got {type(values).__name__}"
                ) from e
        arr = check_numeric_array(values, 'values', dtype=dtype)
        check_1d(arr, 'values')
        check_min_length(arr, 1, 'values')
        self._data = _freeze(np.array(arr, copy=True))

    @classmethod
    def _wrap(cls, array: NDArray[Any]) -> Vector:
        """Adopt a freshly computed 1D array without re-validating it."""
        obj = cls.__new__(cls)
        obj._data = _freeze(array)
        return obj

    @classmethod
    def from_buffer(
        cls,
        buffer: bytes | bytearray | memoryview,
        dtype: np.dtype | type = np.float64,
    ) -> Vector:
        """
        Build a vector from a binary buffer in native byte order.

        Raises:
            DimensionError: If the buffer is empty or not a whole number
                of ``dtype`` elements
        """
        try:
            flat = np.frombuffer(buffer, dtype=dtype)
        except ValueError as e:
            raise DimensionError(f"buffer: {e}") from e
        return cls(flat)

    # === Container protocol ===

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._data.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> Any:
        return self._data[check_index(index, self.size, 'index')].item()

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data.tolist())

    def to_array(self) -> NDArray[Any]:
        """Writable copy of the backing data."""
        return self._data.copy()

    def to_buffer(self) -> bytes:
        """Element data as bytes in native byte order."""
        return self._data.tobytes()

    def tolist(self) -> list[Any]:
        return self._data.tolist()

    @cached_property
    def vertical_matrix(self) -> Matrix:
        """This vector as an N x 1 column matrix."""
        from ndlinalg.matrix.matrix import Matrix
        return Matrix._wrap(self._data.reshape(-1, 1))

    @cached_property
    def horizontal_matrix(self) -> Matrix:
        """This vector as a 1 x N row matrix."""
        from ndlinalg.matrix.matrix import Matrix
        return Matrix._wrap(self._data.reshape(1, -1))

    # === Element-wise algebra ===

    def _operand(self, other: Any) -> NDArray[Any] | float | None:
        if isinstance(other, Vector):
            check_same_shape(self._data, other._data, ('vector', 'operand'))
            return other._data
        if _is_scalar(other):
            return other
        return None

    def __neg__(self) -> Vector:
        return Vector._wrap(-self._data)

    def __pos__(self) -> Vector:
        return self

    def __add__(self, other: Vector | float) -> Vector:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return Vector._wrap(self._data + rhs)

    def __radd__(self, other: float) -> Vector:
        return self.__add__(other)

    def __sub__(self, other: Vector | float) -> Vector:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return Vector._wrap(self._data - rhs)

    def __rsub__(self, other: float) -> Vector:
        if not _is_scalar(other):
            return NotImplemented
        return Vector._wrap(other - self._data)

    def __mul__(self, other: Vector | float) -> Vector:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return Vector._wrap(self._data * rhs)

    def __rmul__(self, other: float) -> Vector:
        return self.__mul__(other)

    def __truediv__(self, other: Vector | float) -> Vector:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return Vector._wrap(self._data / rhs)

    def __matmul__(self, other: Any) -> Any:
        if isinstance(other, Vector):
            return self.dot(other)
        from ndlinalg.matrix.matrix import Matrix
        if isinstance(other, Matrix):
            return (self.horizontal_matrix @ other).to_vector()
        return NotImplemented

    def dot(self, other: Vector) -> Any:
        """Dot product."""
        if not isinstance(other, Vector):
            raise ValidationError(f"dot: expected Vector, got {type(other).__name__}")
        rhs = self._operand(other)
        return (self._data @ rhs).item()

    def cross(self, other: Vector) -> Vector:
        """
        Cross product; defined for 3- and 7-dimensional vectors only.

        Raises:
            DimensionError: If the vectors differ in size
            UnsupportedDimensionError: If the size is not 3 or 7
        """
        if not isinstance(other, Vector):
            raise ValidationError(f"cross: expected Vector, got {type(other).__name__}")
        b = self._operand(other)
        terms = _CROSS_TERMS.get(self.size)
        if terms is None:
            raise UnsupportedDimensionError(
                f"Cross product does not exist in {self.size}-dimensional space",
                dimension=self.size,
                supported=tuple(_CROSS_TERMS),
            )
        a = self._data
        n = self.size
        i = np.arange(n)
        result = np.zeros(n, dtype=np.result_type(a, b))
        for j, k in terms:
            result += a[(i + j) % n] * b[(i + k) % n] - a[(i + k) % n] * b[(i + j) % n]
        return Vector._wrap(result)

    # === Norms and derived quantities ===

    def magnitude(self) -> float:
        """Euclidean length."""
        return float(np.sqrt(self.dot(self)))

    def norm(self, order: float = 2) -> float:
        """
        p-norm of the vector: 1, 2, ``inf`` or any other p > 0.
        """
        return float(np.linalg.norm(self._data, ord=order))

    def normalized(self) -> Vector:
        """
        Unit vector in the same direction.

        Raises:
            NumericalError: If the vector has zero length
        """
        length = self.magnitude()
        if length == 0.0:
            raise NumericalError("Cannot normalize a zero-length vector")
        return self / length

    def distance_to(self, other: Vector) -> float:
        """Euclidean distance between the two points."""
        return (self - other).magnitude()

    def lerp(self, destination: Vector, percent: float) -> Vector:
        """Linear interpolation: ``self + (destination - self) * percent``."""
        return self + (destination - self) * percent

    def max(self) -> Any:
        return self._data.max().item()

    def min(self) -> Any:
        return self._data.min().item()

    def absolute(self) -> Vector:
        return Vector._wrap(np.abs(self._data))

    def rotated(self, rotation: Matrix) -> Vector:
        """
        Apply a rotation (or any square transform) in column-vector form.

        Returns ``rotation @ self``.
        """
        from ndlinalg.matrix.matrix import Matrix
        if not isinstance(rotation, Matrix):
            rotation = Matrix(rotation)
        return rotation @ self

    # === Comparison and display ===

    def allclose(
        self,
        other: Vector,
        rtol: float | None = None,
        atol: float | None = None,
    ) -> bool:
        """
        Element-wise closeness; False for vectors of different size.

        Omitted tolerances come from the tier of the wider of the two
        dtypes (see select_tolerance).
        """
        if not isinstance(other, Vector) or other.size != self.size:
            return False
        tier = select_tolerance(np.result_type(self.dtype, other.dtype))
        return bool(np.allclose(
            self._data, other._data,
            rtol=tier.rtol if rtol is None else rtol,
            atol=tier.atol if atol is None else atol,
        ))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._data.shape == other._data.shape and bool(np.array_equal(self._data, other._data))

    def __hash__(self) -> int:
        return hash(tuple(self._data.tolist()))

    def __str__(self) -> str:
        return f"({', '.join(str(x) for x in self._data.tolist())})"

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"
