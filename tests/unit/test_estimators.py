"""
Unit tests for the estimator helper functions.
"""

import math

import numpy as np
import pytest

from distinctsketch.sketches import (
    InvalidPrecision,
    alpha_for,
    linear_counting_estimate,
    rank_of,
    raw_estimate,
    typical_error_rate,
    validate_precision,
)


class TestAlphaFor:
    """Tests for the bias-correction constant."""

    def test_small_precisions_use_tuned_constants(self):
        """Test the three tabulated constants."""
        assert alpha_for(4) == 0.673
        assert alpha_for(5) == 0.697
        assert alpha_for(6) == 0.709

    @pytest.mark.parametrize("precision", range(7, 17))
    def test_formula_for_larger_precisions(self, precision):
        """Test the asymptotic formula from precision 7 upward."""
        m = 2 ** precision
        assert alpha_for(precision) == 0.7213 / (1 + 1.079 / m)

    @pytest.mark.parametrize("precision", [-1, 0, 3, 17, 64])
    def test_out_of_range(self, precision):
        """Test that precisions outside [4, 16] are rejected."""
        with pytest.raises(InvalidPrecision):
            alpha_for(precision)


class TestValidatePrecision:
    """Tests for precision validation."""

    def test_accepts_numpy_integers(self):
        """Test that integral numpy scalars are accepted."""
        assert validate_precision(np.int64(12)) == 12

    @pytest.mark.parametrize("precision", [True, 8.0, "8", None])
    def test_rejects_non_integers(self, precision):
        """Test that bools, floats and strings are rejected."""
        with pytest.raises(InvalidPrecision):
            validate_precision(precision)

    def test_error_is_value_error(self):
        """Test that InvalidPrecision can be caught as ValueError."""
        with pytest.raises(ValueError) as exc_info:
            validate_precision(17)
        assert exc_info.value.precision == 17


class TestRankOf:
    """Tests for leftmost-one-bit position."""

    def test_leftmost_bit_set(self):
        """Test rank 1 when the top bit of the window is set."""
        assert rank_of(0b10000000, 8) == 1

    def test_three_leading_zeros(self):
        """Test rank after a run of zeros."""
        assert rank_of(0b00010000, 8) == 4

    def test_lowest_bit_only(self):
        """Test the largest rank for a non-zero value."""
        assert rank_of(1, 8) == 8

    def test_zero_fills_window(self):
        """Test that an all-zero window counts every bit as a leading zero."""
        assert rank_of(0, 8) == 9
        assert rank_of(0, 64 - 4) == 61

    def test_window_wider_than_value(self):
        """Test that leading zeros are counted against the window, not the int."""
        assert rank_of(1 << 59, 60) == 1
        assert rank_of(1 << 50, 60) == 10


class TestRawEstimate:
    """Tests for the harmonic-mean formula."""

    def test_empty_registers(self):
        """Test that all-zero registers give alpha * m."""
        registers = np.zeros(16, dtype=np.uint8)
        assert raw_estimate(0.673, registers) == pytest.approx(0.673 * 16)

    def test_matches_direct_formula(self):
        """Test against a direct computation."""
        registers = np.array([0, 1, 2, 3, 4, 5, 6, 7] * 2, dtype=np.uint8)
        expected = 0.673 * 16 * 16 / sum(2.0 ** -int(r) for r in registers)
        assert raw_estimate(0.673, registers) == pytest.approx(expected)


class TestLinearCounting:
    """Tests for the Linear Counting formula."""

    def test_all_registers_empty(self):
        """Test that no occupied registers gives zero."""
        assert linear_counting_estimate(4096, 4096) == 0.0

    def test_half_empty(self):
        """Test m * ln(2) when half the registers are empty."""
        assert linear_counting_estimate(4096, 2048) == pytest.approx(4096 * math.log(2))

    def test_no_empty_registers(self):
        """Test that the formula is undefined without empty registers."""
        with pytest.raises(ValueError):
            linear_counting_estimate(16, 0)


class TestTypicalErrorRate:
    """Tests for the standard error."""

    def test_values(self):
        """Test 1.04 / sqrt(m)."""
        assert typical_error_rate(4096) == pytest.approx(1.04 / 64)
        assert typical_error_rate(16) == pytest.approx(0.26)
