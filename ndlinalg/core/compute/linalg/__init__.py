"""
Linear algebra kernels for ndlinalg.

These kernels operate on plain NumPy arrays; the Vector and Matrix value
types wrap them with validation and ownership rules.

All functions follow these conventions:
    - Computation happens in a floating dtype (float32 kept, others float64)
    - In-place kernels say so in their name or docstring
    - Errors are raised immediately with clear messages

Submodules:
    lu: Doolittle LU decomposition with partial pivoting
    inverse: Inversion by forward/back substitution on LU storage
"""

from ndlinalg.core.compute.linalg.lu import (
    LUResult,
    count_swaps,
    doolittle_lup,
    lu_decompose,
)
from ndlinalg.core.compute.linalg.inverse import (
    inverse_matrix,
    invert_lu,
    permuted_identity,
)

__all__ = [
    # LU decomposition
    "LUResult",
    "count_swaps",
    "doolittle_lup",
    "lu_decompose",
    # Inversion
    "inverse_matrix",
    "invert_lu",
    "permuted_identity",
]
