"""
Distinctsketch configuration management.

Settings default from DISTINCTSKETCH_* environment variables.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from distinctsketch.sketches import HyperLogLogSketch, RandomnessProvider
from distinctsketch.sketches.estimators import MAX_PRECISION, MIN_PRECISION


class SketchSettings(BaseModel):
    """Configuration for sketches built by an application."""

    # Register-index bits for new sketches
    precision: int = Field(
        default_factory=lambda: int(os.getenv("DISTINCTSKETCH_PRECISION", "14")),
        ge=MIN_PRECISION,
        le=MAX_PRECISION,
        validate_default=True,
    )

    # Logging
    log_level: str = Field(
        default_factory=lambda: os.getenv("DISTINCTSKETCH_LOG_LEVEL", "INFO")
    )

    def new_sketch(
        self,
        randomness: Optional[RandomnessProvider] = None,
        name: Optional[str] = None,
    ) -> HyperLogLogSketch:
        """Create an empty sketch with the configured precision."""
        return HyperLogLogSketch(
            precision=self.precision,
            randomness=randomness,
            name=name,
        )

    def configure_logging(self):
        """Apply the configured log level to the root logger."""
        setup_logging(self.log_level)


def setup_logging(level: str = "INFO"):
    """Set up logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
