"""
Numerical precision constants and utilities.

Provides machine epsilon and the dtype resolution rules shared by the
decomposition, inversion and rotation paths. Those paths only make sense
over floating-point data: integers are promoted, never silently truncated
back.
"""

import numpy as np


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = np.finfo(np.float32).eps  # ~1.19e-7


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type (must be floating)

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def is_floating(dtype: np.dtype | type) -> bool:
    """True if dtype is a real floating-point type."""
    return bool(np.issubdtype(dtype, np.floating))


def working_dtype(dtype: np.dtype | type) -> np.dtype:
    """
    Floating dtype used to decompose, invert or rotate data of ``dtype``.

    Floating dtypes are kept as-is so float32 input stays float32;
    integer dtypes are promoted to float64.

    Args:
        dtype: Element dtype of the operand

    Returns:
        The floating dtype to compute in

    Raises:
        TypeError: If dtype is not an integer or floating type
    """
    dtype = np.dtype(dtype)
    if is_floating(dtype):
        return dtype
    if np.issubdtype(dtype, np.integer):
        return np.dtype(np.float64)
    raise TypeError(f"no floating working dtype for {dtype}")
