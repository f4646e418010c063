"""
Shared test fixtures for stakesim.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from stakesim.config.schema import MAX_EFFECTIVE_BALANCE, Config


class ScriptedRandom:
    """Randomness source replaying fixed sequences of floats and integers."""

    def __init__(self, floats=(), ints=()):
        self.floats = list(floats)
        self.ints = list(ints)

    def random(self) -> float:
        return self.floats.pop(0)

    def integers(self, low: int, high: int) -> int:
        value = self.ints.pop(0)
        assert low <= value < high, f"scripted value {value} outside [{low}, {high})"
        return value


@pytest.fixture
def scripted_rng():
    """Factory for scripted randomness sources."""
    return ScriptedRandom


@pytest.fixture
def default_config() -> Config:
    """The reference 500,000-unit set, always online and honest."""
    return Config(
        epochs=10,
        total_at_stake_initial=500_000 * 1_000_000_000,
        probability_online=1.0,
        probability_honest=1.0,
    )


@pytest.fixture
def small_config() -> Config:
    """A 64-validator set for fast end-to-end runs."""
    return Config(
        epochs=5,
        total_at_stake_initial=64 * MAX_EFFECTIVE_BALANCE,
        probability_online=0.9,
        probability_honest=0.95,
        random_seed=11,
    )
