"""
Tests for timing and tolerance tiers.
"""

import time

import numpy as np
import pytest

from pylinalg.core.compute import Timer, select_tolerance
from pylinalg.core.compute.tolerances import FP32, FP32_ITERATIVE, FP64, FP64_ITERATIVE


# ═══════════════════════════════════════════════════════════════════════
# Timer
# ═══════════════════════════════════════════════════════════════════════


class TestTimer:

    def test_sections_accumulate(self):
        timer = Timer()
        timer.start()
        for _ in range(3):
            with timer.section('factor'):
                time.sleep(0.001)
        timer.stop()
        result = timer.result()
        assert set(result) == {'total_seconds', 'factor'}
        assert result['factor'] >= 0.003
        assert result['total_seconds'] >= result['factor']

    def test_section_recorded_on_exception(self):
        timer = Timer()
        timer.start()
        with pytest.raises(ValueError):
            with timer.section('update'):
                raise ValueError("boom")
        timer.stop()
        assert 'update' in timer.result()

    def test_stop_before_start(self):
        with pytest.raises(RuntimeError, match="before start"):
            Timer().stop()

    def test_result_before_stop(self):
        timer = Timer()
        timer.start()
        with pytest.raises(RuntimeError, match="before stop"):
            timer.result()


# ═══════════════════════════════════════════════════════════════════════
# Tolerance tiers
# ═══════════════════════════════════════════════════════════════════════


class TestSelectTolerance:

    @pytest.mark.parametrize("dtype", [np.float64, np.complex128])
    def test_double(self, dtype):
        assert select_tolerance(dtype) is FP64
        assert select_tolerance(dtype, iterative=True) is FP64_ITERATIVE

    @pytest.mark.parametrize("dtype", [np.float32, np.complex64])
    def test_single(self, dtype):
        assert select_tolerance(dtype) is FP32
        assert select_tolerance(dtype, iterative=True) is FP32_ITERATIVE

    def test_iterative_tiers_are_looser(self):
        assert FP64_ITERATIVE.rtol > FP64.rtol
        assert FP32_ITERATIVE.rtol > FP32.rtol
