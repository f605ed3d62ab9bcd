"""
Shared compute infrastructure for ndlinalg.

This module provides precision constants, tolerance tiers and the dense
linear algebra kernels that the Matrix type and the rotation builder are
built on.

Submodules:
    precision: Machine epsilon and working-dtype resolution
    tolerances: Tolerance tiers and the default singularity threshold
    linalg: LU decomposition and inversion kernels
"""

from ndlinalg.core.compute.precision import (
    EPSILON_32,
    EPSILON_64,
    machine_epsilon,
    working_dtype,
)
from ndlinalg.core.compute.tolerances import (
    DEFAULT_SINGULARITY_THRESHOLD,
    FP32,
    FP64,
    ToleranceTier,
    select_tolerance,
)

__all__ = [
    # Precision
    "EPSILON_32",
    "EPSILON_64",
    "machine_epsilon",
    "working_dtype",
    # Tolerances
    "DEFAULT_SINGULARITY_THRESHOLD",
    "FP32",
    "FP64",
    "ToleranceTier",
    "select_tolerance",
]
