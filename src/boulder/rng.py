"""Injectable random source for tie-breaks."""

from typing import Protocol

import numpy as np


class RandomSource(Protocol):
    """Anything that can pick one of N options."""

    def pick(self, n: int) -> int:
        """Return an index in [0, n)."""
        ...


class NumpyRandomSource:
    """RandomSource backed by a numpy Generator.

    Args:
        seed: Seed for numpy.random.default_rng. None draws fresh entropy.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._rng: np.random.Generator = np.random.default_rng(seed)

    def pick(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"Cannot pick from {n} options")
        return int(self._rng.integers(n))

    def __repr__(self) -> str:
        return f"NumpyRandomSource(seed={self.seed})"
