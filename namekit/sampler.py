#!/usr/bin/env python3
"""
Weighted Sampler
================
Seedable random source for the sequence model.

Every model owns one sampler, so two models never share random state and a
test can pin a model's output with reseed(). Unseeded samplers draw their
initial seed from the system entropy pool mixed with the clock and PID.
"""

import os
import random
import time
from typing import Any, Iterable, List, Optional, Tuple

MAX_SEED = 2 ** 64 - 1


def fresh_seed() -> int:
    """Combine hardware entropy, time and PID into an unsigned 64-bit seed."""
    hw_entropy = int.from_bytes(os.urandom(8), 'big')
    time_entropy = time.time_ns()
    pid_entropy = os.getpid() << 48
    return (hw_entropy ^ time_entropy ^ pid_entropy) & MAX_SEED


class WeightedSampler:
    """
    Draws one outcome from (outcome, weight) pairs proportional to weight.

    Usage:
        sampler = WeightedSampler(seed=42)
        sampler.choose([('a', 70.0), ('b', 30.0)])
    """

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random()
        self.seed: Optional[int] = None
        self.reseed(fresh_seed() if seed is None else seed)

    def reseed(self, seed: int) -> None:
        """
        Reinitialize the generator deterministically.

        Raises:
            ValueError: seed is not an unsigned 64-bit integer
        """
        if isinstance(seed, bool) or not isinstance(seed, int) or not 0 <= seed <= MAX_SEED:
            raise ValueError(f"seed must be an unsigned 64-bit integer, got {seed!r}")
        self._rng.seed(seed)
        self.seed = seed

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def choose(self, outcomes: Iterable[Tuple[Any, float]]) -> Any:
        """
        Choose from outcomes with weights.

        Draws uniformly over [0, total) and walks the outcomes in the order
        given, returning the first whose running sum reaches the draw.

        Args:
            outcomes: (outcome, weight) pairs, e.g. dict.items()

        Returns:
            The chosen outcome, or None if there are no outcomes
        """
        items: List[Tuple[Any, float]] = list(outcomes)
        if not items:
            return None

        total = sum(w for _, w in items)
        r = self.random() * total

        cumulative = 0.0
        for item, weight in items:
            cumulative += weight
            if cumulative >= r:
                return item

        return items[-1][0]  # rounding left the running sum short

    def shuffle(self, items: list) -> None:
        """Shuffle list in place."""
        self._rng.shuffle(items)


__all__ = ['WeightedSampler', 'fresh_seed', 'MAX_SEED']
