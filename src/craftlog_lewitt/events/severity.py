"""Severity scoring for craftlog events.

Severity is a scalar in [0, 1] that drives hatch density, stroke weight
and stroke alpha. Rules are checked in order, first match wins:

    1. policy_violation                         -> 1.0
    2. edit + undo / redo / paste flag          -> 0.15 / 0.25 / 0.85
    3. edit, by size:
           chars = added_chars + deleted_chars
           severity = max(0.1, clamp(sqrt(log1p(chars) / log1p(30000)), 0, 1))
    4. snapshot 0.2, session_start 0.4, session_pause 0.3,
       session_resume 0.35, mode_change 0.3
    5. anything else                            -> 0.5

The square root lifts mid-sized edits so most edits read as moderately
severe; the 0.1 floor keeps zero-change edits visible.
"""

from __future__ import annotations

import math

from ..math import clamp
from .schema import EDIT, POLICY_VIOLATION, Delta, Flags

EDIT_SIZE_REFERENCE = 30000
EDIT_SEVERITY_FLOOR = 0.1

UNDO_SEVERITY = 0.15
REDO_SEVERITY = 0.25
PASTE_SEVERITY = 0.85
DEFAULT_SEVERITY = 0.5

KIND_SEVERITY = {
    "snapshot": 0.2,
    "session_start": 0.4,
    "session_pause": 0.3,
    "session_resume": 0.35,
    "mode_change": 0.3,
}


def edit_size_severity(chars: int) -> float:
    """Severity of an unflagged edit that changed ``chars`` characters."""
    normalized = math.log1p(clamp(chars, 0, EDIT_SIZE_REFERENCE)) / math.log1p(EDIT_SIZE_REFERENCE)
    return max(EDIT_SEVERITY_FLOOR, clamp(math.sqrt(normalized), 0.0, 1.0))


def calculate_severity(event: str, flags: Flags | None = None, delta: Delta | None = None) -> float:
    """Score one event from its kind, flags and delta."""
    if event == POLICY_VIOLATION:
        return 1.0

    if event == EDIT:
        flags = flags or Flags()
        if flags.is_undo_like:
            return UNDO_SEVERITY
        if flags.is_redo_like:
            return REDO_SEVERITY
        if flags.is_paste_like:
            return PASTE_SEVERITY

        delta = delta or Delta()
        return edit_size_severity(delta.total_chars)

    return KIND_SEVERITY.get(event, DEFAULT_SEVERITY)
