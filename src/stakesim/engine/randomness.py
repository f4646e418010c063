"""Randomness source threaded through proposer selection and activity draws.

Any object with numpy Generator's `random()` and `integers(low, high)`
methods will do, so a seeded `numpy.random.Generator` is used directly and
tests can pass scripted sources.
"""

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Uniform randomness capability."""

    def random(self) -> float:
        """Next float in [0, 1)."""
        ...

    def integers(self, low: int, high: int) -> int:
        """Next integer in [low, high)."""
        ...


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a fresh generator; seed=None draws OS entropy."""
    return np.random.default_rng(seed)
