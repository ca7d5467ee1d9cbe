"""Pillow raster surface.

Draws onto an RGB image through an RGBA ``ImageDraw`` so translucent
strokes and fills blend with what is already there. Primitives entirely
outside the surface are skipped, which keeps tiled renders (each tile a
small window onto a huge canvas) cheap.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw

from ..exceptions import SurfaceError
from .base import Surface

BACKGROUND = (255, 255, 255)


class RasterSurface(Surface):
    """Surface backed by a ``PIL.Image``.

    ``width``/``height`` are in canvas pixels; the image itself is
    ``density`` times larger in each direction.
    """

    def __init__(
        self,
        width: int,
        height: int,
        origin: Tuple[float, float] = (0.0, 0.0),
        density: int = 1,
        background=BACKGROUND,
    ):
        super().__init__(width, height, origin=origin, density=density)
        self.image = Image.new("RGB", (int(width * density), int(height * density)), background)
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def _device_width(self) -> int:
        return max(1, int(round(self.stroke_weight * self.density)))

    def _visible(self, x0: float, y0: float, x1: float, y1: float, pad: float) -> bool:
        w, h = self.image.size
        return not (max(x0, x1) < -pad or min(x0, x1) > w + pad or max(y0, y1) < -pad or min(y0, y1) > h + pad)

    def _stroke_rgba(self) -> Optional[Tuple[int, int, int, int]]:
        if self.stroke is None:
            return None
        (r, g, b), a = self.stroke
        return (r, g, b, a)

    def _fill_rgba(self) -> Optional[Tuple[int, int, int, int]]:
        if self.fill is None:
            return None
        (r, g, b), a = self.fill
        return (r, g, b, a)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        stroke = self._stroke_rgba()
        if stroke is None:
            return
        ax, ay = self.to_device(x1, y1)
        bx, by = self.to_device(x2, y2)
        width = self._device_width()
        if not self._visible(ax, ay, bx, by, width):
            return
        self._draw.line([(ax, ay), (bx, by)], fill=stroke, width=width)

    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        fill = self._fill_rgba()
        stroke = self._stroke_rgba()
        if fill is None and stroke is None:
            return
        ax, ay = self.to_device(x, y)
        bx, by = self.to_device(x + w, y + h)
        x0, x1 = sorted((ax, bx))
        y0, y1 = sorted((ay, by))
        width = self._device_width() if stroke is not None else 0
        if not self._visible(x0, y0, x1, y1, width):
            return
        self._draw.rectangle([x0, y0, x1, y1], fill=fill, outline=stroke, width=width)

    def draw_ellipse(self, cx: float, cy: float, w: float, h: float) -> None:
        fill = self._fill_rgba()
        stroke = self._stroke_rgba()
        if fill is None and stroke is None:
            return
        ax, ay = self.to_device(cx, cy)
        rx = abs(w) * self.density / 2
        ry = abs(h) * self.density / 2
        width = self._device_width() if stroke is not None else 0
        if not self._visible(ax - rx, ay - ry, ax + rx, ay + ry, width):
            return
        self._draw.ellipse([ax - rx, ay - ry, ax + rx, ay + ry], fill=fill, outline=stroke, width=width)

    def create_buffer(self, width: int, height: int, density: int = 1, origin=(0.0, 0.0)) -> "RasterSurface":
        return RasterSurface(width, height, origin=origin, density=density)

    def to_image(self, size: Optional[Tuple[int, int]] = None) -> Image.Image:
        """Return the image, resampled to ``size`` when given."""
        if size is None or tuple(size) == self.image.size:
            return self.image
        return self.image.resize(size, Image.Resampling.LANCZOS)

    def save(self, path: Path) -> Path:
        path = Path(path)
        try:
            self.to_image((self.width, self.height)).save(path, "PNG", optimize=True)
        except OSError as e:
            raise SurfaceError("raster", str(e), output=str(path))
        return path
