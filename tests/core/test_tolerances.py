"""
Tests for precision constants, working dtypes and tolerance tiers.
"""

import numpy as np
import pytest

from ndlinalg.core.compute.precision import (
    EPSILON_32,
    EPSILON_64,
    is_floating,
    machine_epsilon,
    working_dtype,
)
from ndlinalg.core.compute.tolerances import (
    DEFAULT_SINGULARITY_THRESHOLD,
    FP32,
    FP64,
    select_tolerance,
)


class TestPrecision:

    def test_epsilons(self):
        assert EPSILON_64 == np.finfo(np.float64).eps
        assert EPSILON_32 == np.finfo(np.float32).eps
        assert machine_epsilon(np.float32) == pytest.approx(EPSILON_32)

    def test_is_floating(self):
        assert is_floating(np.float32)
        assert not is_floating(np.int64)

    @pytest.mark.parametrize("dtype,expected", [
        (np.float64, np.float64),
        (np.float32, np.float32),
        (np.int32, np.float64),
        (np.int64, np.float64),
        (np.uint8, np.float64),
    ])
    def test_working_dtype(self, dtype, expected):
        assert working_dtype(dtype) == np.dtype(expected)

    def test_working_dtype_rejects_bool(self):
        with pytest.raises(TypeError):
            working_dtype(np.bool_)


class TestToleranceTiers:

    def test_default_threshold(self):
        assert DEFAULT_SINGULARITY_THRESHOLD == 1e-11
        assert FP64.singularity_threshold == DEFAULT_SINGULARITY_THRESHOLD

    def test_fp32_is_looser(self):
        assert FP32.rtol > FP64.rtol
        assert FP32.singularity_threshold > FP64.singularity_threshold

    def test_tiers_are_frozen(self):
        with pytest.raises(AttributeError):
            FP64.rtol = 1.0

    @pytest.mark.parametrize("dtype,tier", [
        (np.float64, FP64),
        (np.float32, FP32),
        (np.float16, FP32),
        (np.int64, FP64),
    ])
    def test_select_tolerance(self, dtype, tier):
        assert select_tolerance(dtype) is tier
