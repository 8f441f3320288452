"""
Random source shared by every selection a chain makes.

A run seeds one source once; with the same seed and the same fill order,
both uniform-start indexing and weighted selection replay identically.
Not suitable for anything security related.
"""

import random
from typing import Optional


class RandomSource:
    """Seeded wrapper around a private random.Random instance"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def randrange(self, stop: int) -> int:
        """Uniform integer in [0, stop)"""
        if stop <= 0:
            raise ValueError(f"randrange stop must be positive, got {stop}")
        return self._rng.randrange(stop)

    def reseed(self, seed: Optional[int]):
        """Restart the sequence from a new seed"""
        self.seed = seed
        self._rng.seed(seed)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
