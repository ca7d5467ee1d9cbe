"""Craftlog event model: records, normalization, severity."""

from .context import LogContext
from .parser import ParseResult, load_jsonl, normalize_event, parse_jsonl
from .schema import Delta, Flags, NormalizedEvent, PreparedEvent
from .severity import calculate_severity

__all__ = [
    "Delta",
    "Flags",
    "NormalizedEvent",
    "PreparedEvent",
    "LogContext",
    "ParseResult",
    "calculate_severity",
    "load_jsonl",
    "normalize_event",
    "parse_jsonl",
]
