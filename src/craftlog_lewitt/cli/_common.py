"""Shared CLI helpers."""

from dataclasses import replace
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import LewittConfig, load_config
from ..events.context import LogContext

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    seed: Optional[int] = None,
    order: Optional[str] = None,
    max_events: Optional[int] = None,
    marks: Optional[bool] = None,
) -> LewittConfig:
    """Build a LewittConfig from CLI options."""
    settings = load_config(config_file=config, seed=seed, order=order, max_events=max_events)
    if marks is not None:
        settings = replace(settings, motifs=replace(settings.motifs, flag_marks=marks))
    return settings


def load_log(path: Path) -> LogContext:
    """Load a craftlog; malformed lines are reported through logging."""
    return LogContext.from_file(path)
