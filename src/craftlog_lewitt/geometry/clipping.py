"""Segment clipping against rectangles.

Two operations:

* ``clip_segment`` -- Liang-Barsky clipping of a segment to a rectangle.
  The segment is parameterised as P(t) = P1 + t * (P2 - P1), t in [0, 1];
  each of the four edges contributes one half-plane test

      p_k * t <= q_k      with  p = (-dx, dx, -dy, dy)
                                q = (x1 - left, right - x1, y1 - top, bottom - y1)

  that narrows [t0, t1]. The segment is rejected as soon as the interval
  empties.

* ``subtract_hole`` -- removes the part of a segment lying inside a
  smaller "hole" rectangle, returning the 0-2 remaining pieces.

Reference: Liang & Barsky (1984), "A new concept and method for line
clipping", ACM TOG 3(1).
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional

from .shapes import Rect, Segment

# Intersection parameters closer than this are the same crossing (corners)
DEDUPE_TOLERANCE = 1e-4
# Pieces whose crossing sits this close to an endpoint are too short to draw
ENDPOINT_TOLERANCE = 1e-3


def clip_segment(x1: float, y1: float, x2: float, y2: float, rect: Rect) -> Optional[Segment]:
    """Clip the segment (x1, y1)-(x2, y2) to ``rect``.

    Returns:
        The clipped segment, or None when it lies entirely outside.
    """
    dx = x2 - x1
    dy = y2 - y1

    t0 = 0.0
    t1 = 1.0
    p = (-dx, dx, -dy, dy)
    q = (x1 - rect.x, rect.x + rect.w - x1, y1 - rect.y, rect.y + rect.h - y1)

    for p_k, q_k in zip(p, q):
        if p_k == 0:
            # Parallel to this edge: outside if on the wrong side
            if q_k < 0:
                return None
            continue

        t = q_k / p_k
        if p_k < 0:
            if t > t1:
                return None
            if t > t0:
                t0 = t
        else:
            if t < t0:
                return None
            if t < t1:
                t1 = t

    return Segment(x1 + t0 * dx, y1 + t0 * dy, x1 + t1 * dx, y1 + t1 * dy)


class _Crossing(NamedTuple):
    t: float
    x: float
    y: float


def _hole_crossings(seg: Segment, hole: Rect) -> List[_Crossing]:
    """Crossings of ``seg`` with the four hole edges, sorted by t."""
    x1, y1, x2, y2 = seg
    dx = x2 - x1
    dy = y2 - y1
    right = hole.x + hole.w
    bottom = hole.y + hole.h
    crossings: List[_Crossing] = []

    if dx != 0:
        for edge_x in (hole.x, right):
            t = (edge_x - x1) / dx
            if 0 <= t <= 1:
                y = y1 + t * dy
                if hole.y <= y <= bottom:
                    crossings.append(_Crossing(t, edge_x, y))

    if dy != 0:
        for edge_y in (hole.y, bottom):
            t = (edge_y - y1) / dy
            if 0 <= t <= 1:
                x = x1 + t * dx
                if hole.x <= x <= right:
                    crossings.append(_Crossing(t, x, edge_y))

    crossings.sort(key=lambda c: c.t)
    return crossings


def subtract_hole(seg: Segment, hole: Rect) -> List[Segment]:
    """Return the pieces of ``seg`` that lie outside ``hole``.

    * both endpoints inside the (closed) hole: nothing
    * no edge crossings: the whole segment
    * two or more crossings: the piece before the first and the piece
      after the last, each only if its endpoint is outside the hole and
      the piece is not degenerate
    * one crossing (a touch): the half that does not start inside
    """
    x1, y1, x2, y2 = seg
    start_inside = hole.contains(x1, y1)
    end_inside = hole.contains(x2, y2)

    if start_inside and end_inside:
        return []

    crossings = _hole_crossings(seg, hole)
    if not crossings:
        return [seg]

    unique = [crossings[0]]
    for crossing in crossings[1:]:
        if abs(crossing.t - unique[-1].t) > DEDUPE_TOLERANCE:
            unique.append(crossing)

    pieces: List[Segment] = []
    if len(unique) >= 2:
        enter = unique[0]
        exit_ = unique[-1]
        if not start_inside and enter.t > ENDPOINT_TOLERANCE:
            pieces.append(Segment(x1, y1, enter.x, enter.y))
        if not end_inside and exit_.t < 1 - ENDPOINT_TOLERANCE:
            pieces.append(Segment(exit_.x, exit_.y, x2, y2))
    else:
        touch = unique[0]
        if start_inside:
            pieces.append(Segment(touch.x, touch.y, x2, y2))
        else:
            pieces.append(Segment(x1, y1, touch.x, touch.y))

    return pieces
