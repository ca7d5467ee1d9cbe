"""JSON summary statistics for a loaded craftlog."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, Optional

from ..events.schema import EDIT, POLICY_VIOLATION, NormalizedEvent
from ..math import round_half_up

TOP_FILE_PATHS = 10


def _char_stats() -> Dict[str, int]:
    return {"total": 0, "mean": 0, "max": 0}


def generate_summary(events: Iterable[NormalizedEvent], session_id: str = "") -> Dict[str, Any]:
    """Count and aggregate ``events`` into a JSON-ready dict.

    Key order follows the published summary format::

        session_id, counts{by_event, by_origin_mode, by_lang,
        by_file_path_top10}, edits{added_chars, deleted_chars},
        policy_violation{count, kinds}, time_span{min_ts, max_ts,
        duration_ms}, total_events

    Records with a missing or zero ``ts`` do not contribute to the time
    span. File paths tied on count keep first-seen order.
    """
    events = list(events)

    by_event: Counter = Counter()
    by_origin_mode: Counter = Counter()
    by_lang: Counter = Counter()
    by_file: Counter = Counter()
    added = _char_stats()
    deleted = _char_stats()
    violation_kinds: Counter = Counter()
    violation_count = 0
    edit_count = 0
    min_ts: Optional[int] = None
    max_ts: Optional[int] = None

    for e in events:
        by_event[e.event] += 1
        if e.origin_mode:
            by_origin_mode[e.origin_mode] += 1
        if e.lang:
            by_lang[e.lang] += 1
        if e.file_path:
            by_file[e.file_path] += 1

        if e.event == EDIT and e.delta is not None:
            edit_count += 1
            added["total"] += e.delta.added_chars
            deleted["total"] += e.delta.deleted_chars
            added["max"] = max(added["max"], e.delta.added_chars)
            deleted["max"] = max(deleted["max"], e.delta.deleted_chars)

        if e.event == POLICY_VIOLATION:
            violation_count += 1
            if e.kind:
                violation_kinds[e.kind] += 1

        if e.ts:
            min_ts = e.ts if min_ts is None else min(min_ts, e.ts)
            max_ts = e.ts if max_ts is None else max(max_ts, e.ts)

    if edit_count:
        added["mean"] = round_half_up(added["total"] / edit_count)
        deleted["mean"] = round_half_up(deleted["total"] / edit_count)

    # Counter.most_common is stable for equal counts (insertion order)
    top_files = [{"path": path, "count": count} for path, count in by_file.most_common(TOP_FILE_PATHS)]

    return {
        "session_id": session_id,
        "counts": {
            "by_event": dict(by_event),
            "by_origin_mode": dict(by_origin_mode),
            "by_lang": dict(by_lang),
            "by_file_path_top10": top_files,
        },
        "edits": {
            "added_chars": added,
            "deleted_chars": deleted,
        },
        "policy_violation": {
            "count": violation_count,
            "kinds": dict(violation_kinds),
        },
        "time_span": {
            "min_ts": min_ts,
            "max_ts": max_ts,
            "duration_ms": max_ts - min_ts if min_ts is not None and max_ts is not None else 0,
        },
        "total_events": len(events),
    }
