"""
Tolerance tiers for numerical validation.

Defines precision expectations for the two floating element types the
decomposition paths compute in:
- FP64 (reference): float64 storage, tight comparisons
- FP32: relaxed for single-precision arithmetic

Used by the LU decomposer (default singularity threshold and ill-conditioning
diagnostics), by Vector and Matrix allclose defaults, and by the test suite.
"""

from dataclasses import dataclass

import numpy as np


# Default minimum acceptable pivot magnitude for LU decomposition.
DEFAULT_SINGULARITY_THRESHOLD: float = 1e-11


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    singularity_threshold: float
    ill_conditioned_ratio: float
    name: str
    description: str


# float64: A @ inverse(A) reproduces I to ~1e-12 for well-conditioned A
FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-10,
    singularity_threshold=DEFAULT_SINGULARITY_THRESHOLD,
    ill_conditioned_ratio=1e-12,
    name='fp64',
    description='Double precision reference',
)

# float32: seven significant digits at best
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    singularity_threshold=1e-6,
    ill_conditioned_ratio=1e-5,
    name='fp32',
    description='Single precision, relaxed',
)


def select_tolerance(dtype: np.dtype | type) -> ToleranceTier:
    """
    Select the tolerance tier for a given element dtype.

    Anything that is not single (or half) precision floating point is
    computed in float64 and gets the FP64 tier.
    """
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.floating) and dtype.itemsize <= 4:
        return FP32
    return FP64
