"""Rays cast from a point to the boundary of a rectangle."""

from __future__ import annotations

import math
from typing import Optional

from .clipping import clip_segment
from .shapes import Point, Rect


def ray_boundary_point(origin: Point, angle: float, rect: Rect) -> Optional[Point]:
    """Where a ray from ``origin`` at ``angle`` (radians) leaves ``rect``.

    The ray is extended by the rectangle's diagonal, which is always long
    enough for an origin inside the rectangle, then clipped; the far end
    of the clipped piece is the boundary hit.
    """
    reach = rect.diagonal
    x2 = origin.x + math.cos(angle) * reach
    y2 = origin.y + math.sin(angle) * reach

    clipped = clip_segment(origin.x, origin.y, x2, y2, rect)
    if clipped is None:
        return None
    return clipped.end


def reflect_through(point: Point, center: Point) -> Point:
    """Point reflection of ``point`` through ``center``."""
    return Point(2 * center.x - point.x, 2 * center.y - point.y)
