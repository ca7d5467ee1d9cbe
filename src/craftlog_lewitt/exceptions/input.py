"""Input exceptions: event logs and log directories."""

from pathlib import Path

from .base import CraftlogError


class InputError(CraftlogError):
    """Base class for errors reading craftlog input."""

    pass


class LogFileError(InputError):
    """Raised when a log file or log directory cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Cannot read log: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason
