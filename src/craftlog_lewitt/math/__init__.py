"""Numeric building blocks: interpolation, stable hashing, seeded randomness."""

from .hashing import HASH_VERSION, hash_string
from .interpolation import clamp, lerp, round_half_up
from .rng import SeededRandom

__all__ = [
    "clamp",
    "lerp",
    "round_half_up",
    "hash_string",
    "HASH_VERSION",
    "SeededRandom",
]
