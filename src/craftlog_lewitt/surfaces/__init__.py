"""Drawing surfaces: recording, SVG and raster."""

from .base import Surface
from .raster import RasterSurface
from .recording import DrawCommand, RecordingSurface
from .svg import SvgSurface

__all__ = [
    "Surface",
    "DrawCommand",
    "RecordingSurface",
    "SvgSurface",
    "RasterSurface",
]
