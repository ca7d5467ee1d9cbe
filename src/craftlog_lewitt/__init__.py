"""
craftlog-lewitt - LeWitt-style wall drawings from editor craftlogs

Reads the JSON-lines event log an editor extension records while code is
written (edits, snapshots, AI prompts, policy violations) and draws it as
a square grid of hatched cells, after Sol LeWitt's wall drawings: every
cell's line angle, density, weight and tone follow from one event.
"""

__version__ = "0.1.0"

from .config import DEFAULT_CONFIG, LewittConfig, TileConfig, load_config
from .events import LogContext
from .lewitt import draw_lewitt_grid
from .merge import merge_logs
from .reports import generate_instructions, generate_summary
from .tiles import render_tiles

__all__ = [
    "DEFAULT_CONFIG",
    "LewittConfig",
    "TileConfig",
    "load_config",
    "LogContext",
    "draw_lewitt_grid",
    "merge_logs",
    "generate_instructions",
    "generate_summary",
    "render_tiles",
]
