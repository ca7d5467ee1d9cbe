"""Grid composer: the LeWitt grid drawing for one canvas.

A square grid, sized so its cell count roughly matches the number of
events, is walked in boustrophedon order (even rows left to right, odd
rows right to left) so consecutive events stay adjacent like a pen
tracing the page. Each position draws the next prepared event.

In ``connect`` mode the boundary points of every edit motif are pooled
and, after all cells are drawn, marked and joined to their two nearest
neighbors across the whole composition. In ``standalone`` mode each cell
draws its own point-symmetric lines instead.

The composer is a pure function of (events, config, canvas size, scale):
rendering a window of the canvas is a matter of handing it a surface
whose origin is the window's top-left corner.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Iterator, List, Literal, Tuple

from ..config import DEFAULT_CONFIG, INK, LewittConfig
from ..events.context import LogContext
from ..events.schema import AI, EDIT
from ..geometry import Point, Rect
from ..logging_config import get_logger
from ..math import SeededRandom, clamp, round_half_up
from ..surfaces import Surface
from .cell import MARKER_ALPHA, MARKER_SIZE, CellRenderer
from .network import nearest_neighbor_edges
from .preparation import prepare_events

logger = get_logger(__name__)

MotifMode = Literal["connect", "standalone"]
MOTIF_MODES: Tuple[str, ...] = ("connect", "standalone")

NEIGHBORS = 2
NETWORK_ALPHA = 150
NETWORK_WEIGHT = 1.2


@dataclass(frozen=True)
class GridLayout:
    """Cell geometry for a square grid inside a margin."""

    grid_size: int
    margin: float
    cell_width: float
    cell_height: float

    @classmethod
    def for_canvas(cls, width: float, height: float, grid_size: int, margin_ratio: float) -> "GridLayout":
        margin = width * margin_ratio
        return cls(
            grid_size=grid_size,
            margin=margin,
            cell_width=(width - 2 * margin) / grid_size,
            cell_height=(height - 2 * margin) / grid_size,
        )

    def cell(self, row: int, col: int) -> Rect:
        return Rect(
            self.margin + col * self.cell_width,
            self.margin + row * self.cell_height,
            self.cell_width,
            self.cell_height,
        )


@dataclass(frozen=True)
class GridResult:
    """What one grid render produced."""

    seed: int
    grid_size: int
    event_count: int
    cell_width: float
    cell_height: float
    boundary_point_count: int
    edge_count: int = 0


def calculate_grid_size(event_count: int, config: LewittConfig = DEFAULT_CONFIG) -> int:
    """Side of the square grid for ``event_count`` events."""
    k = min(max(0, event_count), config.max_events)
    n = round_half_up(math.sqrt(k))
    return int(clamp(n, config.min_grid_size, config.max_grid_size))


def boustrophedon(grid_size: int) -> Iterator[Tuple[int, int]]:
    """Yield ``(row, col)`` in serpentine order."""
    for row in range(grid_size):
        cols = range(grid_size) if row % 2 == 0 else range(grid_size - 1, -1, -1)
        for col in cols:
            yield row, col


def resolve_seed(seed: int) -> int:
    """Return ``seed``, or a wall-clock seed when it is 0 (unset)."""
    if seed:
        return seed
    derived = int(time.time() * 1000)
    logger.warning(f"No seed configured; using time-derived seed {derived} (drawing is not reproducible)")
    return derived


def draw_lewitt_grid(
    surface: Surface,
    context: LogContext,
    width: float,
    height: float,
    config: LewittConfig = DEFAULT_CONFIG,
    scale: float = 1.0,
    mode: MotifMode = "connect",
) -> GridResult:
    """Draw the full grid for ``context`` onto ``surface``.

    Args:
        surface: Target surface (may be a window onto a larger canvas)
        context: Loaded log
        width, height: Logical canvas size in pixels
        config: Drawing configuration
        scale: Multiplier for spacing, weights and marker sizes
        mode: ``connect`` for the global point network, ``standalone`` for
            per-cell point-symmetric lines

    Returns:
        GridResult with the seed actually used.
    """
    if mode not in MOTIF_MODES:
        raise ValueError(f"mode must be one of {', '.join(MOTIF_MODES)}")

    seed = resolve_seed(config.seed)
    rng = SeededRandom(seed)

    prepared = prepare_events(context.events, config)
    grid_size = calculate_grid_size(len(prepared), config)
    layout = GridLayout.for_canvas(width, height, grid_size, config.margin_ratio)

    renderer = CellRenderer(surface, config, scale)
    surface.no_fill()

    pooled: List[Point] = []
    positions = boustrophedon(grid_size)
    for index, (row, col) in enumerate(positions):
        event = prepared[index] if index < len(prepared) else None
        cell = layout.cell(row, col)
        points = renderer.render(event, cell, rng)

        if event is not None and config.motifs.flag_marks:
            renderer.draw_flag_marks(event, cell)
            if event.event == EDIT and event.origin_mode == AI and event.ai_prompt_length > 0:
                renderer.draw_ai_prompt_mark(cell)

        if not points:
            continue
        if mode == "connect":
            pooled.extend(points)
        else:
            renderer.draw_point_symmetric(cell, points)

    edge_count = 0
    if pooled:
        renderer.draw_markers(pooled, MARKER_SIZE, MARKER_ALPHA)
        edge_count = _connect(surface, pooled, scale)

    logger.debug(
        f"Drew {grid_size}x{grid_size} grid: {len(prepared)} events, "
        f"{len(pooled)} boundary points, {edge_count} edges, seed {seed}"
    )

    return GridResult(
        seed=seed,
        grid_size=grid_size,
        event_count=len(prepared),
        cell_width=layout.cell_width,
        cell_height=layout.cell_height,
        boundary_point_count=len(pooled),
        edge_count=edge_count,
    )


def _connect(surface: Surface, points: List[Point], scale: float) -> int:
    if len(points) < 2:
        return 0
    surface.set_stroke(INK, NETWORK_ALPHA)
    surface.set_stroke_weight(max(0.5, NETWORK_WEIGHT * scale))
    edges = nearest_neighbor_edges(points, NEIGHBORS)
    for i, j in edges:
        surface.draw_line(points[i].x, points[i].y, points[j].x, points[j].y)
    return len(edges)
