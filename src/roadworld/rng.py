"""Seeded random stream shared by every generation stage.

Each helper consumes exactly one draw from the underlying generator, so the
order of calls fully determines the output for a given seed.
"""

import math
import time
from typing import Sequence, TypeVar

import numpy as np

T = TypeVar("T")

# Negative seeds wrap into the unsigned range numpy accepts
_SEED_MODULUS = 2**64


def time_seed() -> int:
    """Seed derived from the wall clock in milliseconds."""
    return int(time.time() * 1000) & 0xFFFFFFFF


def normalize_seed(seed: object) -> int | None:
    """Return an integer seed, or None if the value cannot be used as one."""
    if seed is None or isinstance(seed, bool):
        return None
    if isinstance(seed, (int, np.integer)):
        return int(seed)
    if isinstance(seed, (float, np.floating)):
        if math.isfinite(seed) and float(seed).is_integer():
            return int(seed)
        return None
    return None


class Rng:
    """Reproducible stream of floats in [0, 1).

    Wraps a numpy Generator; two instances built from the same seed produce
    identical sequences.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the stream.

        Args:
            seed: Integer seed. None gives an unseeded, non-reproducible stream.
        """
        self.seed = seed
        if seed is None:
            self._generator = np.random.default_rng()
        else:
            if seed < 0:
                seed %= _SEED_MODULUS
            self._generator = np.random.default_rng(seed)

    def random(self) -> float:
        """Next float in [0, 1)."""
        return float(self._generator.random())

    def rand_int(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return math.floor(self.random() * (high - low + 1)) + low

    def rand_range(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return self.random() * (high - low) + low

    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element.

        Raises:
            IndexError: If items is empty.
        """
        if len(items) == 0:
            raise IndexError("Cannot choose from an empty sequence")
        return items[math.floor(self.random() * len(items))]
