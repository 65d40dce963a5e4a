"""
Randomness Source Interface

Defines the abstract generator the stream engine draws every stochastic
choice from (spawn timing, speeds, lengths, glyph flicker, events), so a
caller can supply a fixed seed or a scripted sequence.

Usage:
    from digital_rain.randomness import RandomSource, SeededRandomSource

    engine = StreamEngine(rng=SeededRandomSource(seed=1234))

    class MySource(RandomSource):
        def random(self):
            return 0.5
        # ... implement the other methods
"""

import random as _random
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


class RandomSource(ABC):
    """
    Abstract interface for the engine's randomness.

    Every method is total over its documented domain: ranges are closed and
    the engine never asks for a choice from an empty sequence.
    """

    @abstractmethod
    def random(self) -> float:
        """Return a float in [0.0, 1.0)."""
        pass

    @abstractmethod
    def randint(self, a: int, b: int) -> int:
        """Return an integer N with a <= N <= b."""
        pass

    @abstractmethod
    def uniform(self, a: float, b: float) -> float:
        """Return a float N with a <= N <= b."""
        pass

    @abstractmethod
    def choice(self, seq: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        pass

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        if probability <= 0.0:
            return False
        return self.random() < probability


class SeededRandomSource(RandomSource):
    """
    Default implementation backed by a private random.Random instance.

    Passing a seed makes the whole simulation reproducible; without one the
    generator is seeded from the operating system.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = _random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def uniform(self, a: float, b: float) -> float:
        return self._rng.uniform(a, b)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)
