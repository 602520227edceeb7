from __future__ import annotations

import logging
import random
from typing import Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource:
    """
    A thin wrapper around random.Random shared by every generation step.

    - half-open integer ranges, so callers read like the placement rules
    - optional deterministic seeding for tests
    - weighted booleans
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        if seed is not None:
            self._rng = random.Random(seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", seed)
        else:
            # Non-deterministic seed using system random state
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randrange(self, lo: int, hi: int) -> int:
        """Uniform integer in ``[lo, hi)``."""
        if hi <= lo:
            raise ValueError(f"empty range [{lo}, {hi})")
        return self._rng.randrange(lo, hi)

    def gen_bool(self, p: float) -> bool:
        """Return True with probability ``p``."""
        if not 0.0 <= p <= 1.0:
            raise ValueError(f"probability must be within [0, 1], got {p}")
        return self._rng.random() < p

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("RandomSource.choice() received an empty sequence")
        return seq[self.randrange(0, len(seq))]

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"


__all__ = ["RandomSource"]
