"""Geometric primitives: shapes, clipping, rays."""

from .clipping import clip_segment, subtract_hole
from .rays import ray_boundary_point, reflect_through
from .shapes import Point, Rect, Segment

__all__ = [
    "Point",
    "Rect",
    "Segment",
    "clip_segment",
    "subtract_hole",
    "ray_boundary_point",
    "reflect_through",
]
