"""Merge per-session craftlog files into one continuous log.

The recorder writes one JSON-lines file per editing session into a
``.craftlog`` directory, each with its own ``elapsed_ms`` clock starting
near zero. Merging concatenates the sessions in start order and shifts
every session's clock so ``elapsed_ms`` keeps increasing across the whole
history.

Re-merging is idempotent: an existing ``merged.jsonl`` is read first and
its entries (stamped with ``merged_at``) lose to fresh session-file
entries with the same identity.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import LogFileError
from .logging_config import get_logger

logger = get_logger(__name__)

CRAFTLOG_DIR = Path(".craftlog")
MERGED_FILENAME = "merged.jsonl"
SNIPPET_LENGTH = 50

Entry = Dict[str, Any]


@dataclass
class SessionStats:
    """Entry count and elapsed range of one session after merging."""

    session_id: Optional[str]
    count: int = 0
    min_elapsed: Optional[int] = None
    max_elapsed: int = 0


@dataclass
class MergeResult:
    """Outcome of one merge run."""

    files: List[Path] = field(default_factory=list)
    read_count: int = 0
    entries: List[Entry] = field(default_factory=list)
    sessions: List[SessionStats] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    output: Optional[Path] = None
    written: bool = False

    @property
    def duplicate_count(self) -> int:
        return self.read_count - len(self.entries)

    @property
    def total_duration_ms(self) -> int:
        """``elapsed_ms`` of the last merged entry."""
        if not self.entries:
            return 0
        return self.entries[-1].get("elapsed_ms") or 0


def list_log_files(directory: Path) -> List[Path]:
    """``merged.jsonl`` first, then session files sorted by name."""
    if not directory.is_dir():
        raise LogFileError(directory, "not a directory")
    names = sorted(p.name for p in directory.iterdir() if p.suffix == ".jsonl" and p.is_file())
    files = [directory / MERGED_FILENAME] if MERGED_FILENAME in names else []
    files.extend(directory / name for name in names if name != MERGED_FILENAME)
    return files


def read_entries(path: Path, warnings: Optional[List[str]] = None) -> List[Entry]:
    """Decode every JSON object line of ``path``; bad lines are skipped."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LogFileError(path, str(e))

    entries: List[Entry] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            entry = None
        if not isinstance(entry, dict):
            snippet = line[:SNIPPET_LENGTH]
            message = f"Failed to parse line in {path}: {snippet}..."
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
            continue
        entries.append(entry)
    return entries


def _identity(entry: Entry) -> Tuple[Any, Any, Any]:
    return (entry.get("ts"), entry.get("session_id"), entry.get("event"))


def deduplicate(entries: List[Entry]) -> List[Entry]:
    """Collapse entries sharing (ts, session_id, event).

    A later entry replaces an earlier one unless it carries ``merged_at``,
    so fresh session data beats a stale merged copy. The surviving entry
    keeps the position of the first occurrence.
    """
    seen: Dict[Tuple[Any, Any, Any], Entry] = {}
    for entry in entries:
        key = _identity(entry)
        if key not in seen or not entry.get("merged_at"):
            seen[key] = entry
    return list(seen.values())


def _ts(entry: Entry) -> int:
    return entry.get("ts") or 0


def original_elapsed(entry: Entry, session_start_ts: int) -> int:
    """Elapsed time within the entry's own session."""
    if entry.get("original_elapsed_ms") is not None:
        return entry["original_elapsed_ms"]
    return _ts(entry) - session_start_ts


def renumber_elapsed(entries: List[Entry], merged_at: str) -> List[Entry]:
    """Return copies of ``entries`` with a continuous ``elapsed_ms`` clock.

    Sessions are ordered by their first timestamp; each starts where the
    previous one's largest in-session elapsed time left off. Every copy
    records its in-session value as ``original_elapsed_ms`` and is stamped
    with ``merged_at``.
    """
    sessions: Dict[Any, List[Entry]] = {}
    for entry in entries:
        sessions.setdefault(entry.get("session_id"), []).append(entry)

    ordered = []
    for session_entries in sessions.values():
        session_entries.sort(key=_ts)
        ordered.append(session_entries)
    ordered.sort(key=lambda group: _ts(group[0]))

    merged: List[Entry] = []
    offset = 0
    for group in ordered:
        start_ts = _ts(group[0])
        longest = 0
        for entry in group:
            elapsed = original_elapsed(entry, start_ts)
            copy = dict(entry)
            copy["elapsed_ms"] = offset + elapsed
            copy["original_elapsed_ms"] = elapsed
            copy["merged_at"] = merged_at
            merged.append(copy)
            longest = max(longest, elapsed)
        offset += longest

    return merged


def session_stats(entries: List[Entry]) -> List[SessionStats]:
    stats: Dict[Any, SessionStats] = {}
    for entry in entries:
        session_id = entry.get("session_id")
        item = stats.setdefault(session_id, SessionStats(session_id))
        elapsed = entry.get("elapsed_ms") or 0
        item.count += 1
        item.min_elapsed = elapsed if item.min_elapsed is None else min(item.min_elapsed, elapsed)
        item.max_elapsed = max(item.max_elapsed, elapsed)
    return list(stats.values())


def write_entries(path: Path, entries: List[Entry]) -> None:
    lines = [json.dumps(e, ensure_ascii=False, separators=(",", ":")) for e in entries]
    try:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        raise LogFileError(path, str(e))


def merge_logs(
    directory: Path = CRAFTLOG_DIR,
    output: Optional[Path] = None,
    keep_original: bool = False,
    dry_run: bool = False,
    now: Optional[datetime] = None,
) -> MergeResult:
    """Merge every ``.jsonl`` file in ``directory``.

    Args:
        directory: Directory holding session files (and maybe merged.jsonl)
        output: Destination; defaults to ``directory/merged.jsonl``
        keep_original: Keep ``original_elapsed_ms`` on every entry
        dry_run: Compute everything but write nothing
        now: Merge timestamp (UTC now when None)

    Raises:
        LogFileError: If the directory or a file cannot be read, or the
            output cannot be written
    """
    directory = Path(directory)
    output = Path(output) if output is not None else directory / MERGED_FILENAME
    result = MergeResult(output=output)

    result.files = list_log_files(directory)
    if not result.files:
        logger.info(f"No JSONL files found in {directory}")
        return result

    collected: List[Entry] = []
    for path in result.files:
        entries = read_entries(path, result.warnings)
        logger.debug(f"{path}: {len(entries)} entries")
        collected.extend(entries)
    result.read_count = len(collected)

    unique = deduplicate(collected)
    stamp = (now or datetime.now(timezone.utc)).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    merged = renumber_elapsed(unique, stamp)
    if not keep_original:
        for entry in merged:
            entry.pop("original_elapsed_ms", None)

    result.entries = merged
    result.sessions = session_stats(merged)
    logger.info(
        f"Merged {result.read_count} entries from {len(result.files)} files into {len(merged)} "
        f"({result.duplicate_count} duplicates, {len(result.sessions)} sessions)"
    )

    if not dry_run:
        write_entries(output, merged)
        result.written = True
    return result
