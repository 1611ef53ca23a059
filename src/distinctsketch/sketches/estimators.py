"""
Pure helper functions for HyperLogLog estimation.

These are the stateless leaves used by HyperLogLogSketch:

- alpha_for: bias-correction constant for a precision
- rank_of: position of the leftmost set bit inside a fixed window
- raw_estimate: harmonic-mean HyperLogLog formula
- linear_counting_estimate: small-range estimator
- typical_error_rate: standard error for a register count
"""

from __future__ import annotations

import math
import numbers

import numpy as np

from distinctsketch.sketches.errors import InvalidPrecision

MIN_PRECISION = 4
MAX_PRECISION = 16

# Empirically tuned constants for the smallest register counts
_SMALL_ALPHAS = {
    4: 0.673,   # m = 16
    5: 0.697,   # m = 32
    6: 0.709,   # m = 64
}


def validate_precision(precision) -> int:
    """
    Check that precision is an integer in [MIN_PRECISION, MAX_PRECISION].

    Returns:
        The precision as a plain int

    Raises:
        InvalidPrecision: If precision is out of range or not an integer
    """
    if isinstance(precision, bool) or not isinstance(precision, numbers.Integral):
        raise InvalidPrecision(precision, MIN_PRECISION, MAX_PRECISION)
    precision = int(precision)
    if precision < MIN_PRECISION or precision > MAX_PRECISION:
        raise InvalidPrecision(precision, MIN_PRECISION, MAX_PRECISION)
    return precision


def alpha_for(precision: int) -> float:
    """
    Bias-correction constant for the raw estimate.

    Precisions 4, 5 and 6 use tuned constants because the asymptotic
    formula is inaccurate for so few registers.

    Raises:
        InvalidPrecision: If precision is outside [4, 16]
    """
    precision = validate_precision(precision)
    if precision in _SMALL_ALPHAS:
        return _SMALL_ALPHAS[precision]
    return 0.7213 / (1.0 + 1.079 / (1 << precision))


def rank_of(w: int, width: int) -> int:
    """
    1-indexed position of the leftmost one bit of w in a width-bit window.

    Examples (width 8): 0b10000000 -> 1, 0b00010000 -> 4.
    When w is zero the leading-zero run covers the whole window and the
    rank is width + 1.
    """
    leading_zeros = width - w.bit_length()
    return leading_zeros + 1


def raw_estimate(alpha: float, registers: np.ndarray) -> float:
    """alpha * m^2 / sum(2^-register) over all m registers."""
    m = len(registers)
    indicator = float(np.sum(np.exp2(-registers.astype(np.float64))))
    return alpha * m * m / indicator


def linear_counting_estimate(register_count: int, zero_registers: int) -> float:
    """
    Linear Counting: m * ln(m / v) where v is the number of empty registers.

    Only defined for v > 0.
    """
    if zero_registers <= 0:
        raise ValueError("linear counting needs at least one empty register")
    return register_count * math.log(register_count / zero_registers)


def typical_error_rate(register_count: int) -> float:
    """Standard error of the estimate: 1.04 / sqrt(m)."""
    return 1.04 / math.sqrt(register_count)
