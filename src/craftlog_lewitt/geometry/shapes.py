"""Plain geometric value types in canvas coordinates (y grows downward)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


class Segment(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2, self.y + self.h / 2)

    @property
    def diagonal(self) -> float:
        return math.sqrt(self.w * self.w + self.h * self.h)

    @property
    def min_side(self) -> float:
        return min(self.w, self.h)

    def contains(self, x: float, y: float) -> bool:
        """Closed containment test: points on an edge are inside."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def centered_inset(self, ratio: float) -> "Rect":
        """Rectangle with the same center scaled to ``ratio`` of this one."""
        cx, cy = self.center
        w = self.w * ratio
        h = self.h * ratio
        return Rect(cx - w / 2, cy - h / 2, w, h)
