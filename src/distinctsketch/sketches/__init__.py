"""
Distinctsketch Sketches Module

Probabilistic data structures for bounded-memory distinct counting.

Key structures:
- HyperLogLogSketch: Cardinality estimation with seeded hashing
- EstimatorKind / CardinalityEstimate: Estimate results
- RandomnessProvider: Injected source of hash seeds
"""

from distinctsketch.sketches.errors import (
    SketchError,
    InvalidPrecision,
    RandomnessUnavailable,
    IncompatibleSketches,
    UnhashableValue,
)
from distinctsketch.sketches.estimators import (
    MIN_PRECISION,
    MAX_PRECISION,
    alpha_for,
    rank_of,
    raw_estimate,
    linear_counting_estimate,
    typical_error_rate,
    validate_precision,
)
from distinctsketch.sketches.hashing import SeededHasher, encode_value
from distinctsketch.sketches.randomness import (
    RandomnessProvider,
    OSRandomness,
    FixedRandomness,
)
from distinctsketch.sketches.hyperloglog import (
    DEFAULT_PRECISION,
    HyperLogLogSketch,
    EstimatorKind,
    CardinalityEstimate,
)

__all__ = [
    # Errors
    "SketchError",
    "InvalidPrecision",
    "RandomnessUnavailable",
    "IncompatibleSketches",
    "UnhashableValue",
    # Estimators
    "MIN_PRECISION",
    "MAX_PRECISION",
    "alpha_for",
    "rank_of",
    "raw_estimate",
    "linear_counting_estimate",
    "typical_error_rate",
    "validate_precision",
    # Hashing
    "SeededHasher",
    "encode_value",
    # Randomness
    "RandomnessProvider",
    "OSRandomness",
    "FixedRandomness",
    # Sketch
    "DEFAULT_PRECISION",
    "HyperLogLogSketch",
    "EstimatorKind",
    "CardinalityEstimate",
]
