"""
Logging configuration for craftlog-lewitt.

Everything is logged to stderr through a rich handler. Rendered output
(SVG, JSON summaries, instructions text) may go to stdout, so log lines
must never share that stream.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "craftlog_lewitt"

# Pillow logs every PNG chunk at DEBUG
NOISY_LOGGERS = ("PIL",)

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level(verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


def _handlers(verbose: bool, log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=verbose,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(str(log_file), mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)
    return handlers


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Route craftlog_lewitt logging to stderr (and optionally a file).

    Safe to call more than once; each call replaces the previous handlers.

    Args:
        verbose: DEBUG level, with timestamps and source paths
        quiet: ERROR level only
        log_file: Also append plain-text log lines to this file

    Returns:
        The craftlog_lewitt root logger
    """
    level = _level(verbose, quiet)
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=_handlers(verbose, log_file), force=True
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Logger under the craftlog_lewitt namespace.

    Args:
        name: Module name such as ``craftlog_lewitt.lewitt.grid``; a bare
              name like ``tiles`` is prefixed. None returns the root logger.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
