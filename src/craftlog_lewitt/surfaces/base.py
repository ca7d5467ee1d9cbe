"""Drawing surface contract used by the grid renderer.

The renderer is an immediate-mode client: it sets stroke/fill state and
issues primitives, and never reads pixels back. Concrete surfaces decide
what a primitive becomes (a recorded command, an SVG element, pixels).

Coordinates are canvas pixels. Surfaces may render a window of a larger
canvas: ``origin`` is the canvas point that maps to the surface's top-left
corner and ``density`` the number of output pixels per canvas pixel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

RGB = Tuple[int, int, int]
Paint = Tuple[RGB, int]  # (rgb, alpha 0-255)


def _clamp_alpha(alpha: float) -> int:
    return max(0, min(255, int(alpha)))


class Surface(ABC):
    """Abstract immediate-mode drawing target.

    Holds the current stroke, stroke weight and fill; subclasses implement
    the three primitives and the offscreen buffer factory.
    """

    def __init__(
        self,
        width: int,
        height: int,
        origin: Tuple[float, float] = (0.0, 0.0),
        density: int = 1,
    ):
        self.width = width
        self.height = height
        self.origin = origin
        self.density = density
        self.stroke: Optional[Paint] = ((0, 0, 0), 255)
        self.stroke_weight: float = 1.0
        self.fill: Optional[Paint] = ((255, 255, 255), 255)

    # -- state -------------------------------------------------------------

    def set_stroke(self, rgb: RGB, alpha: float = 255) -> None:
        self.stroke = (tuple(rgb), _clamp_alpha(alpha))

    def set_stroke_weight(self, weight: float) -> None:
        self.stroke_weight = weight

    def set_fill(self, rgb: RGB, alpha: float = 255) -> None:
        self.fill = (tuple(rgb), _clamp_alpha(alpha))

    def no_fill(self) -> None:
        self.fill = None

    def no_stroke(self) -> None:
        self.stroke = None

    # -- primitives ----------------------------------------------------------

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Stroke a line segment."""

    @abstractmethod
    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        """Fill and stroke a rectangle given its top-left corner."""

    @abstractmethod
    def draw_ellipse(self, cx: float, cy: float, w: float, h: float) -> None:
        """Fill and stroke an ellipse given its center and diameters."""

    @abstractmethod
    def create_buffer(
        self,
        width: int,
        height: int,
        density: int = 1,
        origin: Tuple[float, float] = (0.0, 0.0),
    ) -> "Surface":
        """Create an offscreen surface of the same kind."""

    # -- helpers for subclasses ----------------------------------------------

    def to_device(self, x: float, y: float) -> Tuple[float, float]:
        """Map canvas coordinates to this surface's output coordinates."""
        ox, oy = self.origin
        return (x - ox) * self.density, (y - oy) * self.density
