"""Seedable RNG wrapper for reproducible tie-breaks and planner jitter."""

import random
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


class GameRNG:
    """Wrapper around Python's random.Random.

    All randomness in the engine goes through an instance of this class,
    which is injected into the engine so tests can pin it with a seed.
    """

    def __init__(self, seed: int | None = None):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness, or None for
                an OS-seeded generator
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a uniformly random element from a non-empty sequence."""
        return self.rng.choice(seq)

    def uniform(self, a: float, b: float) -> float:
        """Return random float N such that a <= N <= b."""
        return self.rng.uniform(a, b)
