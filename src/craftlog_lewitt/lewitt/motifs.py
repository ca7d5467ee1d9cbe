"""Cell motifs as geometry.

Every function here only computes points and segments; nothing touches a
surface. ``CellRenderer`` materializes whatever the caller decides to
draw, so the same geometry serves the global point-connection pass and
the standalone per-cell drawing.

Random draws happen in a fixed order (one ``range(0, 2*pi)`` per ray,
plus one length draw per radial line) so a seed replays exactly.
"""

from __future__ import annotations

import math
from typing import List, Optional

from ..config import MotifConfig
from ..geometry import Point, Rect, Segment, clip_segment, ray_boundary_point, reflect_through
from ..math import SeededRandom, clamp, round_half_up

POINT_COUNT_DIVISOR = 1.6
UNDO_MARK_LENGTH = 0.6
PASTE_MARK_LENGTH = 0.7


def edit_point_count(total_change: int, motifs: MotifConfig) -> int:
    """Number of boundary points for an edit that changed ``total_change`` chars."""
    if total_change <= 0:
        return 0
    count = round_half_up(math.log1p(total_change) / POINT_COUNT_DIVISOR)
    return int(clamp(count, 0, motifs.radial_lines_max_count))


def boundary_points(cell: Rect, count: int, rng: SeededRandom) -> List[Point]:
    """Cast ``count`` random rays from the cell center to its boundary."""
    center = cell.center
    points: List[Point] = []
    for _ in range(count):
        angle = rng.range(0, math.pi * 2)
        hit = ray_boundary_point(center, angle, cell)
        if hit is not None:
            points.append(hit)
    return points


def point_symmetric_segments(cell: Rect, points: List[Point]) -> List[Segment]:
    """Lines from each boundary point through the center to its reflection."""
    center = cell.center
    segments: List[Segment] = []
    for point in points:
        mirror = reflect_through(point, center)
        clipped = clip_segment(point.x, point.y, mirror.x, mirror.y, cell)
        if clipped is not None:
            segments.append(clipped)
    return segments


def radial_segments(cell: Rect, count: int, rng: SeededRandom, motifs: MotifConfig) -> List[Segment]:
    """Random-length spokes from the cell center."""
    cx, cy = cell.center
    size = cell.min_side
    segments: List[Segment] = []
    for _ in range(count):
        angle = rng.range(0, math.pi * 2)
        length = size * rng.range(motifs.radial_lines_min_length, motifs.radial_lines_max_length)
        clipped = clip_segment(cx, cy, cx + math.cos(angle) * length, cy + math.sin(angle) * length, cell)
        if clipped is not None:
            segments.append(clipped)
    return segments


def _centered_stroke(cell: Rect, angle_deg: float, length_ratio: float) -> Optional[Segment]:
    cx, cy = cell.center
    length = cell.min_side * length_ratio
    angle = (angle_deg * math.pi) / 180
    dx = math.cos(angle) * length / 2
    dy = math.sin(angle) * length / 2
    return clip_segment(cx - dx, cy - dy, cx + dx, cy + dy, cell)


def undo_mark(cell: Rect, hatch_angle: float) -> Optional[Segment]:
    """Cancellation stroke perpendicular to the hatching."""
    return _centered_stroke(cell, hatch_angle + 90, UNDO_MARK_LENGTH)


def paste_mark(cell: Rect, hatch_angle: float) -> Optional[Segment]:
    """Block stroke along the hatching direction."""
    return _centered_stroke(cell, hatch_angle, PASTE_MARK_LENGTH)


def ai_prompt_mark(cell: Rect) -> Segment:
    """Horizontal line through the center, marking output that follows a prompt."""
    cy = cell.y + cell.h / 2
    return Segment(cell.x, cy, cell.x + cell.w, cy)
