from __future__ import annotations

import math
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32


class SeededRandom:
    """
    Deterministic linear-congruential generator.

    Level layouts must be reproducible bit-for-bit for a given seed and call
    sequence, so this deliberately does not wrap random.Random. Every draw
    advances a 32-bit unsigned state:

        seed = (1664525 * seed + 1013904223) mod 2**32

    and returns ``seed / 2**32``.
    """

    def __init__(self, seed: int = 1) -> None:
        self._seed = int(seed)

    @property
    def state(self) -> int:
        """Current internal seed, for debugging and tests."""
        return self._seed

    def next(self) -> float:
        """Advance the generator and return a float in [0.0, 1.0)."""
        self._seed = (_MULTIPLIER * self._seed + _INCREMENT) % _MODULUS
        return self._seed / _MODULUS

    def range(self, lo: float = 0.0, hi: float = 1.0) -> float:
        """Return a float in [lo, hi)."""
        return lo + self.next() * (hi - lo)

    def range_int(self, lo: int, hi: int) -> int:
        """Return an integer N such that lo <= N <= hi."""
        return math.floor(self.range(lo, hi + 1))

    def pick_one(self, seq: Sequence[T]) -> Optional[T]:
        """Pick a uniformly random element.

        An empty sequence still consumes a draw and yields None; callers must
        guard against the missing value.
        """
        index = math.floor(self.next() * len(seq))
        if index >= len(seq):
            return None
        return seq[index]

    def __repr__(self) -> str:
        return f"SeededRandom(state={self._seed})"
