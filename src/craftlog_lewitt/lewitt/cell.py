"""Per-cell rendering.

``CellRenderer.render`` draws one grid cell -- border, hatching, policy
violation fill -- and returns the boundary points of the cell's edit
motif without drawing them. The grid composer then either pools those
points for the global connection pass or hands them back to
``draw_point_symmetric`` for a standalone drawing.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from ..config import INK, POLICY_VIOLATION_FILL, LewittConfig
from ..events.schema import EDIT, POLICY_VIOLATION, PreparedEvent
from ..geometry import Point, Rect, Segment
from ..math import SeededRandom, clamp, lerp, round_half_up
from ..surfaces import Surface
from . import motifs
from .hatching import erase_ratio, hatch_angles, hatch_params, hatch_segments

POLICY_FILL_ALPHA = 20

# Border emphasis for AI edits, log-scaled over typical prompt lengths
PROMPT_LENGTH_REFERENCE = 1000
PROMPT_BORDER_WEIGHT = (3.0, 10.0)
PROMPT_BORDER_MIN_WEIGHT = 2.0
PROMPT_BORDER_ALPHA = (150.0, 255.0)

SYMMETRIC_LINE_ALPHA = 150
SYMMETRIC_LINE_WEIGHT = 1.2
RADIAL_LINE_ALPHA = 120
RADIAL_LINE_WEIGHT = 1.2
MARKER_ALPHA = 200
MARKER_SIZE = 4.0
PASTE_MARK_ALPHA = 180
UNDO_MARK_WEIGHT = 1.5
AI_PROMPT_MARK_ALPHA = 200
AI_PROMPT_MARK_WEIGHT = 2.0


class CellRenderer:
    """Draws grid cells onto one surface at one scale."""

    def __init__(self, surface: Surface, config: LewittConfig, scale: float = 1.0):
        self.surface = surface
        self.config = config
        self.scale = scale

    # -- cell ------------------------------------------------------------------

    def render(self, event: Optional[PreparedEvent], cell: Rect, rng: SeededRandom) -> List[Point]:
        """Draw ``cell`` for ``event`` (None for an empty cell).

        Returns:
            Boundary points of the edit motif, not yet drawn.
        """
        self.draw_border(cell, event.ai_prompt_length if event is not None else 0)

        if event is None:
            return []

        if event.event == POLICY_VIOLATION:
            self.draw_policy_violation(cell, event)
            return []

        hatching = self.config.hatching
        params = hatch_params(event.severity, hatching)
        deleted = event.delta.deleted_chars if event.delta is not None else 0
        for angle in hatch_angles(event, hatching.angles):
            self.draw_hatch(cell, angle, params.spacing, params.weight, params.alpha, erase_ratio(deleted))

        if event.event != EDIT or event.delta is None:
            return []

        count = motifs.edit_point_count(event.delta.total_chars, self.config.motifs)
        if count <= 0:
            return []
        return motifs.boundary_points(cell, count, rng)

    def draw_border(self, cell: Rect, ai_prompt_length: int = 0) -> None:
        hatching = self.config.hatching
        weight = max(0.5, hatching.cell_border_weight * self.scale)
        alpha = hatching.cell_border_alpha

        if ai_prompt_length > 0:
            ratio = clamp(math.log1p(ai_prompt_length) / math.log1p(PROMPT_LENGTH_REFERENCE), 0.0, 1.0)
            weight = max(PROMPT_BORDER_MIN_WEIGHT, lerp(*PROMPT_BORDER_WEIGHT, ratio) * self.scale)
            alpha = round_half_up(lerp(*PROMPT_BORDER_ALPHA, ratio))

        self.surface.set_stroke(INK, alpha)
        self.surface.set_stroke_weight(weight)
        self.surface.no_fill()
        self.surface.draw_rect(cell.x, cell.y, cell.w, cell.h)

    def draw_policy_violation(self, cell: Rect, event: PreparedEvent) -> None:
        """Translucent red fill under a heavier cross-hatch."""
        hatching = self.config.hatching
        params = hatch_params(event.severity, hatching)

        self.surface.no_stroke()
        self.surface.set_fill(POLICY_VIOLATION_FILL, POLICY_FILL_ALPHA)
        self.surface.draw_rect(cell.x, cell.y, cell.w, cell.h)

        weight = params.weight + hatching.policy_violation_weight_bonus
        for angle in hatching.angles.policy_violation:
            self.draw_hatch(cell, angle, params.spacing, weight, params.alpha)

    def draw_hatch(
        self,
        cell: Rect,
        angle: float,
        spacing: float,
        weight: float,
        alpha: int,
        erase: float = 0.0,
    ) -> None:
        self.surface.set_stroke(INK, alpha)
        self.surface.set_stroke_weight(max(0.5, weight * self.scale))
        self._draw_segments(hatch_segments(cell, angle, spacing, self.scale, erase))

    # -- motifs ----------------------------------------------------------------

    def draw_point_symmetric(self, cell: Rect, points: List[Point]) -> None:
        """Standalone edit motif: lines through the center plus boundary markers."""
        self.surface.set_stroke(INK, SYMMETRIC_LINE_ALPHA)
        self.surface.set_stroke_weight(max(0.5, SYMMETRIC_LINE_WEIGHT * self.scale))
        self._draw_segments(motifs.point_symmetric_segments(cell, points))
        self.draw_markers(points)

    def draw_markers(self, points: Iterable[Point], size: float = MARKER_SIZE, alpha: int = MARKER_ALPHA) -> None:
        self.surface.set_fill(INK, alpha)
        self.surface.no_stroke()
        diameter = max(2.0, size * self.scale)
        for point in points:
            self.surface.draw_ellipse(point.x, point.y, diameter, diameter)

    def draw_radial_lines(self, cell: Rect, count: int, rng: SeededRandom) -> None:
        self.surface.set_stroke(INK, RADIAL_LINE_ALPHA)
        self.surface.set_stroke_weight(max(0.5, RADIAL_LINE_WEIGHT * self.scale))
        self._draw_segments(motifs.radial_segments(cell, count, rng, self.config.motifs))

    def draw_undo_mark(self, cell: Rect, hatch_angle: float) -> None:
        self.surface.set_stroke(INK, self.config.motifs.undo_line_alpha)
        self.surface.set_stroke_weight(max(0.5, UNDO_MARK_WEIGHT * self.scale))
        self._draw_segments([motifs.undo_mark(cell, hatch_angle)])

    def draw_paste_mark(self, cell: Rect, hatch_angle: float, weight: float) -> None:
        multiplier = self.config.motifs.paste_line_weight_multiplier
        self.surface.set_stroke(INK, PASTE_MARK_ALPHA)
        self.surface.set_stroke_weight(max(1.0, weight * multiplier * self.scale))
        self._draw_segments([motifs.paste_mark(cell, hatch_angle)])

    def draw_ai_prompt_mark(self, cell: Rect) -> None:
        self.surface.set_stroke(INK, AI_PROMPT_MARK_ALPHA)
        self.surface.set_stroke_weight(max(1.0, AI_PROMPT_MARK_WEIGHT * self.scale))
        self._draw_segments([motifs.ai_prompt_mark(cell)])

    def draw_flag_marks(self, event: PreparedEvent, cell: Rect) -> None:
        """Undo and paste marks for an edit's flags, over its hatching."""
        if event.event != EDIT or event.flags is None:
            return
        angle = hatch_angles(event, self.config.hatching.angles)[0]
        if event.flags.is_undo_like:
            self.draw_undo_mark(cell, angle)
        if event.flags.is_paste_like:
            self.draw_paste_mark(cell, angle, hatch_params(event.severity, self.config.hatching).weight)

    def _draw_segments(self, segments: Iterable[Optional[Segment]]) -> None:
        for segment in segments:
            if segment is not None:
                self.surface.draw_line(*segment)
