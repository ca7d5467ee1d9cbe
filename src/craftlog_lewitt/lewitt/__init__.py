"""LeWitt grid hatching engine."""

from .cell import CellRenderer
from .grid import (
    GridLayout,
    GridResult,
    boustrophedon,
    calculate_grid_size,
    draw_lewitt_grid,
    resolve_seed,
)
from .hatching import HatchParams, erase_ratio, hatch_angles, hatch_params, hatch_segments
from .network import nearest_neighbor_edges
from .preparation import prepare_events

__all__ = [
    "CellRenderer",
    "GridLayout",
    "GridResult",
    "HatchParams",
    "boustrophedon",
    "calculate_grid_size",
    "draw_lewitt_grid",
    "erase_ratio",
    "hatch_angles",
    "hatch_params",
    "hatch_segments",
    "nearest_neighbor_edges",
    "prepare_events",
    "resolve_seed",
]
