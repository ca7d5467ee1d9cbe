"""SVG surface: one element per primitive, written as a standalone file."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..exceptions import SurfaceError
from .base import Paint, Surface

BACKGROUND = "#ffffff"


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _paint_attrs(kind: str, paint: Optional[Paint]) -> str:
    if paint is None:
        return f' {kind}="none"'
    (r, g, b), alpha = paint
    attrs = f' {kind}="rgb({r},{g},{b})"'
    if alpha < 255:
        attrs += f' {kind}-opacity="{_num(alpha / 255)}"'
    return attrs


class SvgSurface(Surface):
    """Surface producing SVG markup.

    Lines use square caps, matching how the hatching is laid out edge to
    edge inside each cell.
    """

    def __init__(self, width: int, height: int, origin=(0.0, 0.0), density: int = 1):
        super().__init__(width, height, origin=origin, density=density)
        self.elements: List[str] = []

    def _stroke_attrs(self) -> str:
        attrs = _paint_attrs("stroke", self.stroke)
        if self.stroke is not None:
            attrs += f' stroke-width="{_num(self.stroke_weight * self.density)}"'
        return attrs

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        if self.stroke is None:
            return
        ax, ay = self.to_device(x1, y1)
        bx, by = self.to_device(x2, y2)
        self.elements.append(
            f'<line x1="{_num(ax)}" y1="{_num(ay)}" x2="{_num(bx)}" y2="{_num(by)}"'
            f'{self._stroke_attrs()} stroke-linecap="square"/>'
        )

    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        if self.stroke is None and self.fill is None:
            return
        ax, ay = self.to_device(x, y)
        self.elements.append(
            f'<rect x="{_num(ax)}" y="{_num(ay)}" width="{_num(w * self.density)}" '
            f'height="{_num(h * self.density)}"{_paint_attrs("fill", self.fill)}{self._stroke_attrs()}/>'
        )

    def draw_ellipse(self, cx: float, cy: float, w: float, h: float) -> None:
        if self.stroke is None and self.fill is None:
            return
        ax, ay = self.to_device(cx, cy)
        self.elements.append(
            f'<ellipse cx="{_num(ax)}" cy="{_num(ay)}" rx="{_num(w * self.density / 2)}" '
            f'ry="{_num(h * self.density / 2)}"{_paint_attrs("fill", self.fill)}{self._stroke_attrs()}/>'
        )

    def create_buffer(self, width: int, height: int, density: int = 1, origin=(0.0, 0.0)) -> "SvgSurface":
        return SvgSurface(width, height, origin=origin, density=density)

    def to_svg(self) -> str:
        w = self.width * self.density
        h = self.height * self.density
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">',
            f'<rect x="0" y="0" width="{w}" height="{h}" fill="{BACKGROUND}"/>',
        ]
        parts.extend(self.elements)
        parts.append("</svg>")
        return "\n".join(parts) + "\n"

    def save(self, path: Path) -> Path:
        path = Path(path)
        try:
            path.write_text(self.to_svg(), encoding="utf-8")
        except OSError as e:
            raise SurfaceError("svg", str(e), output=str(path))
        return path
