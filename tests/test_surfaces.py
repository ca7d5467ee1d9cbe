"""Tests for the recording, SVG and raster surfaces."""

import pytest
from PIL import Image

from craftlog_lewitt.exceptions import SurfaceError
from craftlog_lewitt.lewitt import draw_lewitt_grid
from craftlog_lewitt.config import LewittConfig
from craftlog_lewitt.surfaces import DrawCommand, RasterSurface, RecordingSurface, SvgSurface


class TestSurfaceState:
    def test_alpha_is_clamped(self):
        surface = RecordingSurface(10, 10)
        surface.set_stroke((0, 0, 0), 300)
        assert surface.stroke == ((0, 0, 0), 255)
        surface.set_fill((255, 0, 0), -5)
        assert surface.fill == ((255, 0, 0), 0)

    def test_no_fill_no_stroke(self):
        surface = RecordingSurface(10, 10)
        surface.no_fill()
        surface.no_stroke()
        assert surface.fill is None
        assert surface.stroke is None

    def test_to_device(self):
        surface = RecordingSurface(10, 10, origin=(100, 50), density=2)
        assert surface.to_device(110, 55) == (20, 10)


class TestRecordingSurface:
    def test_records_in_order(self):
        surface = RecordingSurface(10, 10)
        surface.set_stroke((0, 0, 0), 100)
        surface.draw_line(0, 0, 5, 5)
        assert surface.commands == [
            DrawCommand("set_stroke", ((0, 0, 0), 100)),
            DrawCommand("draw_line", (0, 0, 5, 5)),
        ]
        assert surface.count("draw_line") == 1

    def test_replay(self, mixed_context):
        recording = RecordingSurface(400, 400)
        draw_lewitt_grid(recording, mixed_context, 400, 400, LewittConfig(seed=5))
        copy = RecordingSurface(400, 400)
        recording.replay(copy)
        assert copy.commands == recording.commands

    def test_create_buffer(self):
        buffer = RecordingSurface(10, 10).create_buffer(20, 30, density=2, origin=(5, 5))
        assert isinstance(buffer, RecordingSurface)
        assert (buffer.width, buffer.height, buffer.density, buffer.origin) == (20, 30, 2, (5, 5))


class TestSvgSurface:
    def test_document(self):
        surface = SvgSurface(100, 50)
        surface.set_stroke((0, 0, 0), 150)
        surface.set_stroke_weight(1.5)
        surface.draw_line(0, 0, 10, 10.5)
        svg = surface.to_svg()
        assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" width="100" height="50"')
        assert '<line x1="0" y1="0" x2="10" y2="10.5"' in svg
        assert 'stroke-width="1.5"' in svg
        assert 'stroke-linecap="square"' in svg
        assert svg.rstrip().endswith("</svg>")

    def test_skips_invisible_primitives(self):
        surface = SvgSurface(10, 10)
        surface.no_stroke()
        surface.draw_line(0, 0, 5, 5)
        surface.no_fill()
        surface.draw_rect(0, 0, 5, 5)
        assert surface.elements == []

    def test_origin_offsets_elements(self):
        surface = SvgSurface(100, 100, origin=(50, 50))
        surface.no_stroke()
        surface.set_fill((0, 0, 0), 200)
        surface.draw_ellipse(60, 70, 4, 4)
        assert '<ellipse cx="10" cy="20" rx="2" ry="2"' in surface.elements[0]

    def test_save(self, tmp_path):
        path = SvgSurface(10, 10).save(tmp_path / "out.svg")
        assert path.read_text().startswith("<svg")

    def test_save_error(self, tmp_path):
        with pytest.raises(SurfaceError):
            SvgSurface(10, 10).save(tmp_path / "missing" / "out.svg")


class TestRasterSurface:
    def test_image_size_follows_density(self):
        surface = RasterSurface(100, 50, density=2)
        assert surface.image.size == (200, 100)
        assert surface.to_image((100, 50)).size == (100, 50)

    def test_draws_black_line(self):
        surface = RasterSurface(20, 20)
        surface.set_stroke((0, 0, 0), 255)
        surface.set_stroke_weight(1)
        surface.draw_line(0, 10, 19, 10)
        assert surface.image.getpixel((10, 10)) == (0, 0, 0)
        assert surface.image.getpixel((10, 2)) == (255, 255, 255)

    def test_translucent_fill_blends(self):
        surface = RasterSurface(20, 20)
        surface.no_stroke()
        surface.set_fill((255, 0, 0), 128)
        surface.draw_rect(0, 0, 20, 20)
        r, g, b = surface.image.getpixel((10, 10))
        assert r == 255
        assert 100 < g < 160
        assert g == b

    def test_origin_window(self):
        surface = RasterSurface(20, 20, origin=(100, 100))
        surface.no_stroke()
        surface.set_fill((0, 0, 0), 255)
        surface.draw_rect(105, 105, 5, 5)
        surface.draw_rect(0, 0, 5, 5)
        assert surface.image.getpixel((7, 7)) == (0, 0, 0)
        assert surface.image.getpixel((2, 2)) == (255, 255, 255)

    def test_save_png(self, tmp_path):
        surface = RasterSurface(30, 30, density=2)
        path = surface.save(tmp_path / "out.png")
        with Image.open(path) as image:
            assert image.size == (30, 30)

    def test_save_error(self, tmp_path):
        with pytest.raises(SurfaceError):
            RasterSurface(10, 10).save(tmp_path / "missing" / "out.png")
