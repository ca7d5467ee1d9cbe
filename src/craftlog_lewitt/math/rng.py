"""Seeded random stream (Mulberry32).

A 32-bit state generator: every draw adds a fixed odd increment to the
state and mixes it with two xor-shift/multiply rounds. It is not suitable
for anything but visual jitter, but it is tiny and every operation is
exact integer arithmetic, so the same seed yields the same floats on every
platform and in every implementation.

Reference: Tommy Ettinger, "Mulberry32" (2017).
"""

import math

_UINT32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


class SeededRandom:
    """Deterministic random stream seeded with an integer.

    Only the low 32 bits of the seed reach the state; ``seed`` keeps the
    value as given so it can be reported back to the caller.
    """

    def __init__(self, seed: int):
        self.seed = int(seed)
        self._state = self.seed & _UINT32

    def next(self) -> float:
        """Return the next value in ``[0, 1)``."""
        self._state = (self._state + _INCREMENT) & _UINT32
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & _UINT32
        t = (t ^ (t + (((t ^ (t >> 7)) * (t | 61)) & _UINT32))) & _UINT32
        return ((t ^ (t >> 14)) & _UINT32) / _TWO_POW_32

    def range(self, lo: float, hi: float) -> float:
        """Uniform float in ``[lo, hi)``."""
        return lo + self.next() * (hi - lo)

    def int(self, lo: int, hi: int) -> int:
        """Uniform integer in ``[lo, hi]`` inclusive."""
        return int(math.floor(self.range(lo, hi + 1)))
