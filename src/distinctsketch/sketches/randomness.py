"""
Randomness providers for sketch hash seeds.

A sketch draws two 64-bit seeds when it is created. The source of those
seeds is passed in rather than read from a global, so tests can swap in
a deterministic provider.
"""

from __future__ import annotations

import os
import random
import struct
from typing import Optional, Protocol, runtime_checkable

from distinctsketch.sketches.errors import RandomnessUnavailable


@runtime_checkable
class RandomnessProvider(Protocol):
    """Anything that can produce uniformly distributed 64-bit integers."""

    def random_u64(self) -> int:
        ...


class OSRandomness:
    """
    Secure randomness from the operating system (os.urandom).

    Raises RandomnessUnavailable when the OS source cannot be read.
    """

    def random_u64(self) -> int:
        try:
            data = os.urandom(8)
        except (OSError, NotImplementedError) as e:
            raise RandomnessUnavailable(f"Failed to read OS randomness: {e}") from e
        return struct.unpack('<Q', data)[0]

    def __repr__(self) -> str:
        return "OSRandomness()"


class FixedRandomness:
    """
    Deterministic provider for reproducible tests and benchmarks.

    Not suitable for production: seeds are predictable.

    Example:
        >>> a = FixedRandomness(42)
        >>> b = FixedRandomness(42)
        >>> a.random_u64() == b.random_u64()
        True
    """

    def __init__(self, seed: Optional[int] = 0):
        self.seed = seed
        self._rng = random.Random(seed)

    def random_u64(self) -> int:
        return self._rng.getrandbits(64)

    def __repr__(self) -> str:
        return f"FixedRandomness(seed={self.seed!r})"
