"""
Unit tests for hash seed providers.
"""

import os

import pytest

from distinctsketch.sketches import (
    FixedRandomness,
    OSRandomness,
    RandomnessProvider,
    RandomnessUnavailable,
)


class TestOSRandomness:
    """Tests for the OS-backed provider."""

    def test_returns_64_bit_values(self):
        """Test that values fit in 64 bits."""
        provider = OSRandomness()
        for _ in range(20):
            value = provider.random_u64()
            assert 0 <= value < 2 ** 64

    def test_values_vary(self):
        """Test that consecutive draws differ."""
        provider = OSRandomness()
        draws = {provider.random_u64() for _ in range(10)}
        assert len(draws) > 1

    def test_unavailable_source(self, monkeypatch):
        """Test that an OS failure surfaces as RandomnessUnavailable."""
        def fail(n):
            raise OSError("no entropy")

        monkeypatch.setattr(os, "urandom", fail)

        with pytest.raises(RandomnessUnavailable) as exc_info:
            OSRandomness().random_u64()
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_satisfies_protocol(self):
        """Test structural typing against RandomnessProvider."""
        assert isinstance(OSRandomness(), RandomnessProvider)


class TestFixedRandomness:
    """Tests for the deterministic provider."""

    def test_same_seed_same_sequence(self):
        """Test reproducibility."""
        a = FixedRandomness(42)
        b = FixedRandomness(42)
        assert [a.random_u64() for _ in range(5)] == [b.random_u64() for _ in range(5)]

    def test_different_seeds(self):
        """Test that different seeds give different sequences."""
        a = FixedRandomness(1)
        b = FixedRandomness(2)
        assert [a.random_u64() for _ in range(5)] != [b.random_u64() for _ in range(5)]

    def test_returns_64_bit_values(self):
        """Test that values fit in 64 bits."""
        provider = FixedRandomness(7)
        for _ in range(20):
            assert 0 <= provider.random_u64() < 2 ** 64

    def test_satisfies_protocol(self):
        """Test structural typing against RandomnessProvider."""
        assert isinstance(FixedRandomness(), RandomnessProvider)
