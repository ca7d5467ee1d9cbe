"""Rendering exceptions: surfaces and output files."""

from typing import Optional

from .base import CraftlogError


class RenderError(CraftlogError):
    """Base class for rendering errors."""

    pass


class SurfaceError(RenderError):
    """Raised when a drawing surface cannot perform an operation."""

    def __init__(self, surface: str, reason: str, output: Optional[str] = None):
        details = {"surface": surface, "reason": reason}
        if output:
            details["output"] = output
        super().__init__(f"Surface {surface} failed: {reason}", details=details)
        self.surface = surface
        self.reason = reason
        self.output = output
