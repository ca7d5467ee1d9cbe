"""Loaded-log context shared by the preparer, composer and report writers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .parser import ParseResult, load_jsonl, parse_jsonl
from .schema import NormalizedEvent


@dataclass(frozen=True)
class LogContext:
    """Everything derived from one craftlog load.

    Built once per loaded log and never mutated; every render pass reads
    from it and builds its own PreparedEvent list.
    """

    events: Tuple[NormalizedEvent, ...] = ()
    warnings: Tuple[str, ...] = ()
    session_id: str = ""
    source: Optional[Path] = None

    @classmethod
    def from_parse_result(cls, result: ParseResult, source: Optional[Path] = None) -> "LogContext":
        return cls(
            events=tuple(result.events),
            warnings=tuple(result.warnings),
            session_id=result.session_id,
            source=source,
        )

    @classmethod
    def from_text(cls, text: str) -> "LogContext":
        return cls.from_parse_result(parse_jsonl(text))

    @classmethod
    def from_file(cls, path: Path) -> "LogContext":
        path = Path(path)
        return cls.from_parse_result(load_jsonl(path), source=path)

    @classmethod
    def from_events(cls, events: Iterable[NormalizedEvent], session_id: str = "") -> "LogContext":
        events = tuple(events)
        if not session_id:
            session_id = next((e.session_id for e in events if e.session_id), "")
        return cls(events=events, session_id=session_id)

    def __len__(self) -> int:
        return len(self.events)
