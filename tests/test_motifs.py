"""Tests for cell motifs and the cell renderer."""

import math

import pytest

from craftlog_lewitt.config import DEFAULT_CONFIG, MotifConfig
from craftlog_lewitt.events import normalize_event
from craftlog_lewitt.events.schema import PreparedEvent
from craftlog_lewitt.geometry import Rect
from craftlog_lewitt.lewitt import CellRenderer, motifs
from craftlog_lewitt.math import SeededRandom
from craftlog_lewitt.surfaces import RecordingSurface

CELL = Rect(0, 0, 200, 100)
MOTIFS = MotifConfig()


def prepared(record, **annotations):
    return PreparedEvent(normalize_event(record), **annotations)


class TestEditPointCount:
    @pytest.mark.parametrize("total,expected", [(0, 0), (5, 1), (100, 3), (120, 3), (4800, 5), (10**9, 12)])
    def test_counts(self, total, expected):
        assert motifs.edit_point_count(total, MOTIFS) == expected

    def test_respects_configured_max(self):
        assert motifs.edit_point_count(10**9, MotifConfig(radial_lines_max_count=4)) == 4


class TestBoundaryPoints:
    def test_points_on_boundary(self):
        points = motifs.boundary_points(CELL, 8, SeededRandom(42))
        assert len(points) == 8
        for x, y in points:
            on_edge = min(abs(x - CELL.x), abs(x - CELL.right), abs(y - CELL.y), abs(y - CELL.bottom))
            assert on_edge == pytest.approx(0, abs=1e-9)

    def test_deterministic(self):
        a = motifs.boundary_points(CELL, 5, SeededRandom(1))
        b = motifs.boundary_points(CELL, 5, SeededRandom(1))
        assert a == b

    def test_consumes_one_draw_per_point(self):
        rng = SeededRandom(42)
        motifs.boundary_points(CELL, 2, rng)
        assert rng.next() == 0.8524657934904099


class TestSegments:
    def test_point_symmetric_lines_cross_center(self):
        points = motifs.boundary_points(CELL, 6, SeededRandom(3))
        for seg in motifs.point_symmetric_segments(CELL, points):
            mid = ((seg.x1 + seg.x2) / 2, (seg.y1 + seg.y2) / 2)
            assert mid == pytest.approx(tuple(CELL.center))

    def test_radial_lengths(self):
        segments = motifs.radial_segments(CELL, 10, SeededRandom(5), MOTIFS)
        assert len(segments) == 10
        for seg in segments:
            assert (seg.x1, seg.y1) == tuple(CELL.center)
            length = math.hypot(seg.x2 - seg.x1, seg.y2 - seg.y1)
            assert 0.05 * 100 - 1e-9 <= length <= 0.35 * 100 + 1e-9

    def test_undo_mark_is_perpendicular(self):
        seg = motifs.undo_mark(CELL, 0)
        assert seg.x1 == pytest.approx(seg.x2)
        assert abs(seg.y2 - seg.y1) == pytest.approx(60)

    def test_paste_mark_follows_hatch(self):
        seg = motifs.paste_mark(CELL, 0)
        assert seg.y1 == pytest.approx(seg.y2)
        assert abs(seg.x2 - seg.x1) == pytest.approx(70)

    def test_ai_prompt_mark_spans_cell(self):
        seg = motifs.ai_prompt_mark(CELL)
        assert (seg.x1, seg.x2) == (0, 200)
        assert seg.y1 == seg.y2 == 50


class TestCellRenderer:
    """Tests for CellRenderer.render."""

    def test_empty_cell_draws_border_only(self):
        surface = RecordingSurface(400, 400)
        points = CellRenderer(surface, DEFAULT_CONFIG).render(None, CELL, SeededRandom(1))
        assert points == []
        assert surface.count("draw_rect") == 1
        assert surface.count("draw_line") == 0
        assert ("set_stroke", ((0, 0, 0), 25)) in surface.commands

    def test_policy_violation_fill_and_cross_hatch(self):
        surface = RecordingSurface(400, 400)
        event = prepared({"event": "policy_violation"})
        points = CellRenderer(surface, DEFAULT_CONFIG).render(event, CELL, SeededRandom(1))
        assert points == []
        assert surface.count("draw_rect") == 2
        assert ("set_fill", ((255, 0, 0), 20)) in surface.commands
        # Weight 3.0 + 1.0 bonus for the cross-hatch
        assert ("set_stroke_weight", (4.0,)) in surface.commands
        assert surface.count("draw_line") > 0

    def test_edit_returns_points_without_drawing_them(self):
        surface = RecordingSurface(400, 400)
        event = prepared({"event": "edit", "origin_mode": "human", "delta": {"added_chars": 120}})
        points = CellRenderer(surface, DEFAULT_CONFIG).render(event, CELL, SeededRandom(1))
        assert len(points) == 3
        assert surface.count("draw_ellipse") == 0

    def test_non_edit_consumes_no_randomness(self):
        rng = SeededRandom(42)
        CellRenderer(RecordingSurface(400, 400), DEFAULT_CONFIG).render(prepared({"event": "snapshot"}), CELL, rng)
        assert rng.next() == 0.6011037519201636

    def test_prompt_length_thickens_border(self):
        surface = RecordingSurface(400, 400)
        renderer = CellRenderer(surface, DEFAULT_CONFIG)
        renderer.draw_border(CELL, ai_prompt_length=1000)
        assert ("set_stroke_weight", (10.0,)) in surface.commands
        assert ("set_stroke", ((0, 0, 0), 255)) in surface.commands

    def test_flag_marks(self):
        surface = RecordingSurface(400, 400)
        event = prepared({"event": "edit", "origin_mode": "human", "flags": {"is_undo_like": True, "is_paste_like": True}})
        CellRenderer(surface, DEFAULT_CONFIG).draw_flag_marks(event, CELL)
        assert surface.count("draw_line") == 2
        assert ("set_stroke", ((0, 0, 0), 80)) in surface.commands

    def test_standalone_points_draw_lines_and_markers(self):
        surface = RecordingSurface(400, 400)
        renderer = CellRenderer(surface, DEFAULT_CONFIG, scale=2.0)
        points = motifs.boundary_points(CELL, 4, SeededRandom(9))
        renderer.draw_point_symmetric(CELL, points)
        assert surface.count("draw_line") == 4
        assert surface.count("draw_ellipse") == 4
        assert surface.commands[-1].args[2:] == (8.0, 8.0)
