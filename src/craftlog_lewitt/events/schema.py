"""Event dataclasses for craftlog records.

A craftlog is a newline-delimited JSON file written by the editor
extension, one record per editing event. Records are normalized into
``NormalizedEvent`` once at load time; every render pass then wraps them in
``PreparedEvent`` to attach transient annotations.

Record shape (all fields except ``event`` optional)::

    {
        "ts": 1718000000000,            # epoch-ms
        "elapsed_ms": 5230,
        "event": "edit",                # kind tag
        "origin_mode": "human",         # human | ai
        "kind": "secret_leak",          # sub-kind (policy violations)
        "file": {"path": "src/a.ts", "lang": "typescript"},
        "delta": {"added_chars": 12, "deleted_chars": 0,
                  "added_lines": 1, "deleted_lines": 0},
        "flags": {"is_paste_like": false, "is_undo_like": false,
                  "is_redo_like": false},
        "detail": {...},
        "session_id": "...",
        "workspace_id": "...",
        "prompt": "...",                # ai_prompt only
        "to": "human"                   # mode_change only
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Event kinds
# ---------------------------------------------------------------------------

EDIT = "edit"
SNAPSHOT = "snapshot"
MODE_CHANGE = "mode_change"
POLICY_VIOLATION = "policy_violation"
AI_PROMPT = "ai_prompt"
SESSION_START = "session_start"
SESSION_PAUSE = "session_pause"
SESSION_RESUME = "session_resume"

HUMAN = "human"
AI = "ai"


@dataclass(frozen=True)
class Delta:
    """Character and line counts changed by one edit."""

    added_chars: int = 0
    deleted_chars: int = 0
    added_lines: int = 0
    deleted_lines: int = 0

    @property
    def total_chars(self) -> int:
        return self.added_chars + self.deleted_chars


@dataclass(frozen=True)
class Flags:
    """Heuristic edit classification set by the recorder."""

    is_paste_like: bool = False
    is_undo_like: bool = False
    is_redo_like: bool = False


@dataclass(frozen=True)
class NormalizedEvent:
    """One craftlog record with every optional field defaulted.

    ``delta`` and ``flags`` stay ``None`` when the record carries no such
    object; inside a present object missing counters are 0 and missing
    flags are False. ``severity`` depends only on (event, flags, delta).
    """

    event: str
    ts: int | None = None
    elapsed_ms: int | None = None
    origin_mode: str | None = None
    kind: str | None = None
    file_path: str | None = None
    lang: str | None = None
    delta: Delta | None = None
    flags: Flags | None = None
    detail: Any = None
    session_id: str | None = None
    workspace_id: str | None = None
    prompt: str | None = None
    to: str | None = None
    severity: float = 0.5
    raw: dict = field(default_factory=dict, compare=False, hash=False, repr=False)

    @property
    def sort_ts(self) -> int:
        """Timestamp for ordering; records without ``ts`` sort as 0."""
        return self.ts or 0


@dataclass
class PreparedEvent:
    """A NormalizedEvent plus annotations from one preparation pass.

    Attributes:
        source: The immutable normalized event
        has_snapshot_after: The next event in time order is a snapshot
        ai_prompt_length: Length of the AI prompt this AI edit answers
            (0 when none is active)
    """

    source: NormalizedEvent
    has_snapshot_after: bool = False
    ai_prompt_length: int = 0

    @property
    def event(self) -> str:
        return self.source.event

    @property
    def ts(self) -> int | None:
        return self.source.ts

    @property
    def sort_ts(self) -> int:
        return self.source.sort_ts

    @property
    def origin_mode(self) -> str | None:
        return self.source.origin_mode

    @property
    def severity(self) -> float:
        return self.source.severity

    @property
    def delta(self) -> Delta | None:
        return self.source.delta

    @property
    def flags(self) -> Flags | None:
        return self.source.flags
