"""
Exceptions raised by the sketches package.

All of them derive from SketchError so callers can catch the whole
family at once. Each also derives from the builtin exception a caller
would naturally expect (ValueError, TypeError, RuntimeError).
"""

from __future__ import annotations

from typing import Any


class SketchError(Exception):
    """Base exception for sketch errors."""
    pass


class InvalidPrecision(SketchError, ValueError):
    """Precision is not an integer in the supported range."""

    def __init__(self, precision: Any, minimum: int, maximum: int):
        self.precision = precision
        super().__init__(
            f"precision must be an integer between {minimum} and {maximum}, "
            f"got {precision!r}"
        )


class RandomnessUnavailable(SketchError, RuntimeError):
    """The secure randomness source could not be read."""
    pass


class IncompatibleSketches(SketchError, ValueError):
    """Two sketches cannot be combined."""
    pass


class UnhashableValue(SketchError, TypeError):
    """A value has no stable byte encoding."""

    def __init__(self, value: Any):
        self.value_type = type(value)
        super().__init__(
            f"cannot encode value of type {type(value).__qualname__} for hashing; "
            f"define __sketch_key__() to make it countable"
        )
