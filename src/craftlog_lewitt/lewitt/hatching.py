"""Severity-driven hatching: angle, spacing, weight, alpha, and the lines.

Each cell is filled with parallel lines. The event decides the direction,
its severity the density and darkness:

    spacing = clamp(lerp(spacing_max, spacing_min, s), clamp_min, clamp_max)
    weight  = lerp(weight_min, weight_max, s)
    alpha   = round(lerp(alpha_min, alpha_max, s))

Deleted characters punch a centered "erase hole" into the hatching whose
side is up to 80% of the cell:

    erase_ratio = clamp(log1p(deleted) / log1p(3000), 0, 1) * 0.8
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple, Union

from ..config import HatchAngles, HatchingConfig
from ..events.schema import AI, EDIT, HUMAN, MODE_CHANGE, POLICY_VIOLATION, SNAPSHOT, NormalizedEvent, PreparedEvent
from ..geometry import Rect, Segment, clip_segment, subtract_hole
from ..math import clamp, hash_string, lerp, round_half_up

ERASE_REFERENCE = 3000
ERASE_MAX_RATIO = 0.8

AnyEvent = Union[NormalizedEvent, PreparedEvent]


@dataclass(frozen=True)
class HatchParams:
    spacing: float
    weight: float
    alpha: int


def hatch_params(severity: float, hatching: HatchingConfig) -> HatchParams:
    """Map a severity in [0, 1] to spacing, weight and alpha."""
    return HatchParams(
        spacing=clamp(
            lerp(hatching.spacing_max, hatching.spacing_min, severity),
            hatching.spacing_clamp_min,
            hatching.spacing_clamp_max,
        ),
        weight=lerp(hatching.weight_min, hatching.weight_max, severity),
        alpha=round_half_up(lerp(hatching.alpha_min, hatching.alpha_max, severity)),
    )


def hatch_angles(event: AnyEvent, angles: HatchAngles) -> Tuple[float, ...]:
    """Hatch directions in degrees for an event.

    Returns one angle for every kind except policy violations, which get
    the cross-hatch pair. Unknown kinds fall into a bucket of
    ``angles.default`` chosen by the stable string hash of the kind.
    """
    kind = event.event
    if kind == EDIT:
        if event.origin_mode == HUMAN:
            return (angles.edit_human,)
        if event.origin_mode == AI:
            return (angles.edit_ai,)
    if kind == SNAPSHOT:
        return (angles.snapshot,)
    if kind == MODE_CHANGE:
        return (angles.mode_change,)
    if kind == POLICY_VIOLATION:
        return tuple(angles.policy_violation)

    bucket = hash_string(kind) % len(angles.default)
    return (angles.default[bucket],)


def erase_ratio(deleted_chars: int) -> float:
    """Fraction of the cell blanked out for ``deleted_chars`` deletions."""
    if deleted_chars <= 0:
        return 0.0
    return clamp(math.log1p(deleted_chars) / math.log1p(ERASE_REFERENCE), 0.0, 1.0) * ERASE_MAX_RATIO


def hatch_segments(
    cell: Rect,
    angle_deg: float,
    spacing: float,
    scale: float = 1.0,
    erase: float = 0.0,
) -> List[Segment]:
    """Parallel lines at ``angle_deg`` filling ``cell``.

    Lines are laid out around the cell center, ``spacing * scale`` apart,
    each long enough to span the cell diagonal, then clipped to the cell.
    With ``erase > 0`` the part of every line inside the centered hole of
    relative size ``erase`` is removed.
    """
    angle = (angle_deg * math.pi) / 180
    cos = math.cos(angle)
    sin = math.sin(angle)

    step = spacing * scale
    diag = cell.diagonal
    cx, cy = cell.center
    hole = cell.centered_inset(erase) if erase > 0 else None

    count = math.ceil(diag / step) + 2
    segments: List[Segment] = []

    for i in range(-count, count + 1):
        offset_x = -sin * i * step
        offset_y = cos * i * step

        x1 = cx + offset_x - cos * diag
        y1 = cy + offset_y - sin * diag
        x2 = cx + offset_x + cos * diag
        y2 = cy + offset_y + sin * diag

        clipped = clip_segment(x1, y1, x2, y2, cell)
        if clipped is None:
            continue
        if hole is not None:
            segments.extend(subtract_hole(clipped, hole))
        else:
            segments.append(clipped)

    return segments
