"""Large-format output assembled from tiles.

A print-size canvas is far too large to rasterize in one go at high
pixel density, so it is rendered as a grid of tiles. Each tile runs the
whole grid drawing through a viewport onto its own window of the final
canvas, oversampled by ``pixel_density``, and is then downsampled into
place. All tiles share one seed so they line up seamlessly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from PIL import Image

from .config import BACKGROUND, DEFAULT_CONFIG, PREVIEW_PAPER, LewittConfig, TileConfig, paper_size
from .events.context import LogContext
from .lewitt.grid import GridResult, MotifMode, draw_lewitt_grid, resolve_seed
from .logging_config import get_logger
from .surfaces import RasterSurface

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class TileRender:
    """Assembled image plus what the grid pass reported."""

    image: Image.Image
    grid: GridResult
    scale: float
    tile_count: int


def tile_scale(tile_config: TileConfig, preview: str = PREVIEW_PAPER) -> float:
    """Line-weight scale of the final canvas relative to the preview paper."""
    base = paper_size(preview)
    return max(tile_config.final_width / base.width, tile_config.final_height / base.height)


def render_tiles(
    context: LogContext,
    config: LewittConfig = DEFAULT_CONFIG,
    tile_config: Optional[TileConfig] = None,
    progress: Optional[ProgressCallback] = None,
    mode: MotifMode = "connect",
) -> TileRender:
    """Render ``context`` at ``tile_config``'s final size.

    Args:
        context: Loaded log
        config: Drawing configuration; a 0 seed is resolved once here
        tile_config: Tiling layout (B1 from eight B4 tiles by default)
        progress: Called as ``progress(done, total)`` before each tile
        mode: Motif mode passed to the grid composer
    """
    tile_config = tile_config or TileConfig()
    config = config.with_seed(resolve_seed(config.seed))

    tile_w = tile_config.tile_width
    tile_h = tile_config.tile_height
    final_w = tile_config.final_width
    final_h = tile_config.final_height
    density = tile_config.pixel_density
    scale = tile_scale(tile_config)
    total = tile_config.cols * tile_config.rows

    logger.info(
        f"Rendering {final_w}x{final_h} from {total} tiles of {tile_w}x{tile_h} "
        f"(density {density}, scale {scale:.3f}, seed {config.seed})"
    )

    final = Image.new("RGB", (final_w, final_h), BACKGROUND)
    grid: Optional[GridResult] = None

    for row in range(tile_config.rows):
        for col in range(tile_config.cols):
            index = row * tile_config.cols + col
            if progress is not None:
                progress(index + 1, total)

            offset = (col * tile_w, row * tile_h)
            surface = RasterSurface(tile_w, tile_h, origin=offset, density=density)
            grid = draw_lewitt_grid(surface, context, final_w, final_h, config, scale, mode)

            final.paste(surface.to_image((tile_w, tile_h)), offset)
            logger.debug(f"Tile {index + 1}/{total} at {offset}")

    return TileRender(image=final, grid=grid, scale=scale, tile_count=total)
