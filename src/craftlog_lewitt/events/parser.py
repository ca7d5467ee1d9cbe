"""JSON-lines parsing and record normalization.

Malformed lines never abort a load: each one is skipped and reported as a
warning string carrying its 1-based line number and a truncated copy of
the offending text.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from ..exceptions import LogFileError
from ..logging_config import get_logger
from .schema import Delta, Flags, NormalizedEvent
from .severity import calculate_severity

logger = get_logger(__name__)

SNIPPET_LENGTH = 50

# Largest integer a JSON number can carry exactly
MAX_COUNT = 2**53 - 1


@dataclass
class ParseResult:
    """Events parsed from one JSON-lines document."""

    events: List[NormalizedEvent] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    session_id: str = ""


def _count(value: Any) -> int:
    """Coerce a delta counter to an int in [0, MAX_COUNT]; junk counts as 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return min(MAX_COUNT, max(0, int(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _parse_delta(raw: Any) -> Delta | None:
    if not isinstance(raw, dict):
        return None
    return Delta(
        added_chars=_count(raw.get("added_chars")),
        deleted_chars=_count(raw.get("deleted_chars")),
        added_lines=_count(raw.get("added_lines")),
        deleted_lines=_count(raw.get("deleted_lines")),
    )


def _parse_flags(raw: Any) -> Flags | None:
    if not isinstance(raw, dict):
        return None
    return Flags(
        is_paste_like=bool(raw.get("is_paste_like")),
        is_undo_like=bool(raw.get("is_undo_like")),
        is_redo_like=bool(raw.get("is_redo_like")),
    )


def normalize_event(raw: dict) -> NormalizedEvent:
    """Build a NormalizedEvent (with severity) from one decoded record."""
    file_info = raw.get("file") if isinstance(raw.get("file"), dict) else {}
    event = str(raw.get("event") or "")
    delta = _parse_delta(raw.get("delta"))
    flags = _parse_flags(raw.get("flags"))

    return NormalizedEvent(
        event=event,
        ts=_optional_int(raw.get("ts")),
        elapsed_ms=_optional_int(raw.get("elapsed_ms")),
        origin_mode=_optional_str(raw.get("origin_mode")),
        kind=_optional_str(raw.get("kind")),
        file_path=_optional_str(file_info.get("path")),
        lang=_optional_str(file_info.get("lang")),
        delta=delta,
        flags=flags,
        detail=raw.get("detail"),
        session_id=_optional_str(raw.get("session_id")),
        workspace_id=_optional_str(raw.get("workspace_id")),
        prompt=_optional_str(raw.get("prompt")),
        to=_optional_str(raw.get("to")),
        severity=calculate_severity(event, flags, delta),
        raw=raw,
    )


def _snippet(line: str) -> str:
    if len(line) <= SNIPPET_LENGTH:
        return line
    return line[:SNIPPET_LENGTH] + "..."


def parse_jsonl(text: str) -> ParseResult:
    """Parse a JSON-lines document into normalized events.

    Blank lines are ignored. Lines that are not valid JSON, or whose JSON
    is not an object, are skipped with a warning.
    """
    result = ParseResult()

    for index, line in enumerate(text.strip().splitlines()):
        line = line.strip()
        if not line:
            continue

        line_no = index + 1
        try:
            raw = json.loads(line)
        except json.JSONDecodeError as e:
            result.warnings.append(f"Line {line_no}: Parse error - {e.msg} [{_snippet(line)}]")
            continue

        if not isinstance(raw, dict):
            result.warnings.append(
                f"Line {line_no}: Parse error - expected a JSON object [{_snippet(line)}]"
            )
            continue

        result.events.append(normalize_event(raw))

        if not result.session_id and raw.get("session_id"):
            result.session_id = str(raw["session_id"])

    if result.warnings:
        logger.warning(f"Skipped {len(result.warnings)} malformed line(s)")
        for warning in result.warnings:
            logger.debug(warning)

    return result


def load_jsonl(path: Path) -> ParseResult:
    """Read and parse a craftlog file.

    Raises:
        LogFileError: If the file cannot be read or decoded as UTF-8
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LogFileError(path, "file not found")
    except (OSError, UnicodeDecodeError) as e:
        raise LogFileError(path, str(e))

    result = parse_jsonl(text)
    logger.info(f"Loaded {len(result.events)} events from {path} ({len(result.warnings)} warnings)")
    return result
