"""Surface that records every call as a command list.

Used to compare two renders for determinism and to replay a drawing onto
another surface later.
"""

from __future__ import annotations

from typing import Any, List, NamedTuple, Tuple

from .base import RGB, Surface


class DrawCommand(NamedTuple):
    op: str
    args: Tuple[Any, ...]


class RecordingSurface(Surface):
    """Surface that keeps an ordered list of DrawCommand."""

    def __init__(self, width: int, height: int, origin=(0.0, 0.0), density: int = 1):
        super().__init__(width, height, origin=origin, density=density)
        self.commands: List[DrawCommand] = []

    def _record(self, op: str, *args: Any) -> None:
        self.commands.append(DrawCommand(op, args))

    def set_stroke(self, rgb: RGB, alpha: float = 255) -> None:
        super().set_stroke(rgb, alpha)
        self._record("set_stroke", tuple(rgb), alpha)

    def set_stroke_weight(self, weight: float) -> None:
        super().set_stroke_weight(weight)
        self._record("set_stroke_weight", weight)

    def set_fill(self, rgb: RGB, alpha: float = 255) -> None:
        super().set_fill(rgb, alpha)
        self._record("set_fill", tuple(rgb), alpha)

    def no_fill(self) -> None:
        super().no_fill()
        self._record("no_fill")

    def no_stroke(self) -> None:
        super().no_stroke()
        self._record("no_stroke")

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._record("draw_line", x1, y1, x2, y2)

    def draw_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._record("draw_rect", x, y, w, h)

    def draw_ellipse(self, cx: float, cy: float, w: float, h: float) -> None:
        self._record("draw_ellipse", cx, cy, w, h)

    def create_buffer(self, width: int, height: int, density: int = 1, origin=(0.0, 0.0)) -> "RecordingSurface":
        return RecordingSurface(width, height, origin=origin, density=density)

    def count(self, op: str) -> int:
        return sum(1 for command in self.commands if command.op == op)

    def replay(self, target: Surface) -> None:
        """Re-issue every recorded command on ``target``, in order."""
        for command in self.commands:
            getattr(target, command.op)(*command.args)
