"""Scalar interpolation helpers shared by the hatching and border rules.

All severity-driven parameters are built from these three operations only,
so a drawing reproduces across platforms up to ordinary double rounding.
"""

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    return max(lo, min(hi, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation: ``a`` at t=0, ``b`` at t=1."""
    return a + (b - a) * t


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``),
    which would shift alpha values and point counts by one on exact halves.
    """
    return int(math.floor(value + 0.5))
