"""Exception hierarchy for craftlog-lewitt."""

from .base import CraftlogError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .input import InputError, LogFileError
from .render import RenderError, SurfaceError

__all__ = [
    "CraftlogError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "InputError",
    "LogFileError",
    "RenderError",
    "SurfaceError",
]
