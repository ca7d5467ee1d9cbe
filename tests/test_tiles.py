"""Tests for the tile compositor."""

import logging

import pytest

from craftlog_lewitt.config import LewittConfig, TileConfig
from craftlog_lewitt.tiles import render_tiles, tile_scale

SMALL_TILES = TileConfig(tile="B6", cols=2, rows=1, pixel_density=1)


class TestTileScale:
    def test_default_b1(self):
        assert tile_scale(TileConfig()) == pytest.approx(8598 / 1512)

    def test_single_preview_tile(self):
        assert tile_scale(TileConfig(tile="B6", cols=1, rows=1, landscape_tiles=False)) == 1.0


class TestRenderTiles:
    """Tests for render_tiles."""

    def test_assembled_size_and_progress(self, three_edit_context):
        calls = []
        rendered = render_tiles(
            three_edit_context,
            LewittConfig(seed=7),
            SMALL_TILES,
            progress=lambda done, total: calls.append((done, total)),
        )
        assert rendered.image.size == (4300, 1512)
        assert calls == [(1, 2), (2, 2)]
        assert rendered.tile_count == 2
        assert rendered.scale == pytest.approx(4300 / 1512)
        assert rendered.grid.seed == 7

    def test_both_tiles_have_ink(self, three_edit_context):
        rendered = render_tiles(three_edit_context, LewittConfig(seed=7), SMALL_TILES)
        left = rendered.image.crop((0, 0, 2150, 1512))
        right = rendered.image.crop((2150, 0, 4300, 1512))
        assert left.convert("L").getextrema()[0] < 200
        assert right.convert("L").getextrema()[0] < 200

    def test_deterministic(self, three_edit_context):
        a = render_tiles(three_edit_context, LewittConfig(seed=3), SMALL_TILES)
        b = render_tiles(three_edit_context, LewittConfig(seed=3), SMALL_TILES)
        assert a.image.tobytes() == b.image.tobytes()

    def test_zero_seed_resolved_once(self, three_edit_context, caplog):
        with caplog.at_level(logging.WARNING, logger="craftlog_lewitt"):
            rendered = render_tiles(three_edit_context, LewittConfig(seed=0), SMALL_TILES)
        assert rendered.grid.seed > 0
        assert caplog.text.count("time-derived seed") == 1
