"""Event preparation: sort, annotate, filter, sample, reorder.

Annotations are recomputed from the full time-ordered sequence on every
pass, before filtering, so an edit can see the snapshot or AI prompt that
surrounds it even though only edits end up in the grid.
"""

from __future__ import annotations

from typing import Iterable, List

from ..config import TYPE_BLOCK_ORDER, LewittConfig
from ..events.schema import AI, AI_PROMPT, EDIT, HUMAN, MODE_CHANGE, SNAPSHOT, NormalizedEvent, PreparedEvent
from ..logging_config import get_logger

logger = get_logger(__name__)


def annotate_snapshots(events: List[PreparedEvent]) -> None:
    """Flag edits immediately followed by a snapshot (time order)."""
    for current, following in zip(events, events[1:]):
        if current.event == EDIT and following.event == SNAPSHOT:
            current.has_snapshot_after = True


def annotate_ai_prompts(events: List[PreparedEvent]) -> None:
    """Attach the active AI prompt length to AI-origin edits.

    A non-empty ``ai_prompt`` sets the active length, a mode change back
    to ``human`` clears it; every AI edit in between gets the length.
    """
    current_length = 0
    for prepared in events:
        source = prepared.source
        if prepared.event == AI_PROMPT and source.prompt:
            current_length = len(source.prompt)
        elif prepared.event == MODE_CHANGE and source.to == HUMAN:
            current_length = 0
        elif prepared.event == EDIT and prepared.origin_mode == AI and current_length > 0:
            prepared.ai_prompt_length = current_length


def sample_uniform(events: List[PreparedEvent], max_events: int) -> List[PreparedEvent]:
    """Nearest-stride sample: item ``floor(i * n / max_events)`` for each i.

    The index is computed in exact integer arithmetic. A floating-point
    stride ``floor(i * (n / max_events))`` picks a neighbouring item for
    some sizes (n=720, max_events=530, i=371), so samples are not
    identical to a float-stride implementation.
    """
    n = len(events)
    if n <= max_events:
        return list(events)
    return [events[(i * n) // max_events] for i in range(max_events)]


def order_events(events: List[PreparedEvent], order: str) -> List[PreparedEvent]:
    """Reorder prepared events for cell assignment.

    ``type_blocks`` groups kinds by TYPE_BLOCK_ORDER; kinds not in the list
    rank before all listed ones.
    """
    if order == "severity":
        return sorted(events, key=lambda e: -e.severity)
    if order == "type_blocks":

        def block(e: PreparedEvent) -> int:
            return TYPE_BLOCK_ORDER.index(e.event) if e.event in TYPE_BLOCK_ORDER else -1

        return sorted(events, key=lambda e: (block(e), e.sort_ts))
    return sorted(events, key=lambda e: e.sort_ts)


def prepare_events(events: Iterable[NormalizedEvent], config: LewittConfig) -> List[PreparedEvent]:
    """Turn normalized events into the ordered cell sequence for one render."""
    ordered = [PreparedEvent(source) for source in sorted(events, key=lambda e: e.sort_ts)]

    annotate_snapshots(ordered)
    annotate_ai_prompts(ordered)

    filtered = [e for e in ordered if e.event == EDIT]
    if not filtered:
        filtered = list(ordered)

    if len(filtered) > config.max_events:
        logger.debug(f"Sampling {len(filtered)} events down to {config.max_events} ({config.sampling})")
        filtered = sample_uniform(filtered, config.max_events)

    return order_events(filtered, config.order)
