"""
Distinctsketch - Distinct counting in bounded memory

HyperLogLog cardinality estimation with per-sketch seeded hashing.

Modules:
- sketches: HyperLogLog sketch, estimator helpers, hashing, seed sources
- config: Environment-driven settings and logging setup
- report: Optional console rendering of a sketch
"""

__version__ = "0.1.0"

from distinctsketch.sketches import (
    HyperLogLogSketch,
    EstimatorKind,
    CardinalityEstimate,
    SketchError,
    InvalidPrecision,
    RandomnessUnavailable,
    IncompatibleSketches,
    UnhashableValue,
    RandomnessProvider,
    OSRandomness,
    FixedRandomness,
    alpha_for,
)
from distinctsketch.config import SketchSettings, setup_logging

__all__ = [
    # Version
    "__version__",
    # Sketches
    "HyperLogLogSketch",
    "EstimatorKind",
    "CardinalityEstimate",
    "alpha_for",
    # Errors
    "SketchError",
    "InvalidPrecision",
    "RandomnessUnavailable",
    "IncompatibleSketches",
    "UnhashableValue",
    # Randomness
    "RandomnessProvider",
    "OSRandomness",
    "FixedRandomness",
    # Config
    "SketchSettings",
    "setup_logging",
]
