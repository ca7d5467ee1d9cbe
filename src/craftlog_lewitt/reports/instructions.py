"""LeWitt-style instructions text for a rendered grid.

The text is the drawing's "certificate": enough rules and parameters for
someone to redraw the piece by hand from the same log.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from ..config import LewittConfig
from ..events.schema import AI, EDIT, HUMAN, NormalizedEvent
from ..lewitt.grid import calculate_grid_size
from ..lewitt.preparation import prepare_events
from ..math import round_half_up


@dataclass(frozen=True)
class InstructionParams:
    """Render parameters quoted in the instructions text."""

    session_id: str
    seed: int
    canvas_width: int
    canvas_height: int
    grid_size: int
    config: LewittConfig

    @classmethod
    def for_render(
        cls,
        config: LewittConfig,
        events: Iterable[NormalizedEvent],
        canvas_width: int,
        canvas_height: int,
        seed: int,
        session_id: str = "",
    ) -> "InstructionParams":
        """Derive the grid size the composer would pick for ``events``."""
        prepared = prepare_events(events, config)
        return cls(
            session_id=session_id,
            seed=seed,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            grid_size=calculate_grid_size(len(prepared), config),
            config=config,
        )


def _angles(values) -> str:
    return " + ".join(f"{a:g}°" for a in values)


def generate_instructions(
    params: InstructionParams,
    summary: Dict[str, Any],
    events: Iterable[NormalizedEvent],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render the instructions text.

    Args:
        params: Render parameters
        summary: Output of ``generate_summary`` for the same events
        events: The loaded events
        generated_at: Timestamp for the footer; omitted when None
    """
    config = params.config
    hatching = config.hatching
    angles = hatching.angles
    motifs = config.motifs

    edits = [e for e in events if e.event == EDIT]
    human_edits = sum(1 for e in edits if e.origin_mode == HUMAN)
    ai_edits = sum(1 for e in edits if e.origin_mode == AI)

    inner_ratio = 1 - 2 * config.margin_ratio
    inner_width = round_half_up(params.canvas_width * inner_ratio)
    inner_height = round_half_up(params.canvas_height * inner_ratio)
    duration_minutes = round_half_up(summary["time_span"]["duration_ms"] / 1000 / 60)

    added = summary["edits"]["added_chars"]
    deleted = summary["edits"]["deleted_chars"]
    default_angles = ", ".join(f"{a:g}°" for a in angles.default)

    lines = [
        "WALL DRAWING (CRAFTLOG)",
        f"Session: {params.session_id}",
        f"Preset: {config.preset}",
        f"Seed: {params.seed}",
        "",
        "CANVAS",
        "------",
        f"Dimensions: {params.canvas_width} × {params.canvas_height} pixels",
        f"Margin ratio: {config.margin_ratio * 100:g}%",
        f"Drawing area: inner {inner_width} × {inner_height} pixels",
        "",
        "GRID",
        "----",
        f"Grid: {params.grid_size} × {params.grid_size} cells",
        "Traversal: boustrophedon (even rows left to right, odd rows right to left)",
        f"Cell assignment order: {config.order}",
        f"Maximum events: {config.max_events}",
        f"Sampling method: {config.sampling}",
        "",
        "HATCHING RULES",
        "--------------",
        "Each cell contains parallel lines (hatching). Parameters determined by log data:",
        "",
        "Direction (angle) by event and origin_mode:",
        f"  - edit + human     → {angles.edit_human:g}°",
        f"  - edit + ai        → {angles.edit_ai:g}°",
        f"  - snapshot         → {angles.snapshot:g}°",
        f"  - mode_change      → {angles.mode_change:g}°",
        f"  - policy_violation → {_angles(angles.policy_violation)} (cross-hatch)",
        f"  - other            → hash(event) picks one of {default_angles}",
        "",
        "Density (spacing) by severity:",
        f"  spacing = lerp({hatching.spacing_max:g}, {hatching.spacing_min:g}, severity) pixels",
        "  (higher severity = denser lines)",
        f"  Range: {hatching.spacing_clamp_min:g}px to {hatching.spacing_clamp_max:g}px",
        "",
        "Stroke weight by severity:",
        f"  weight = lerp({hatching.weight_min:g}, {hatching.weight_max:g}, severity)",
        f"  policy_violation: +{hatching.policy_violation_weight_bonus:g}",
        "",
        "Stroke alpha by severity:",
        f"  alpha = lerp({hatching.alpha_min:g}, {hatching.alpha_max:g}, severity)",
        "",
        "SPECIAL RULES",
        "-------------",
        "- policy_violation: Red fill (255,0,0,20), then cross-hatch",
        "- deleted_chars: a central hole erases part of the hatching",
        "- edit: points where random rays from the cell center meet its border",
        f"  count = clamp(round(log1p(added_chars + deleted_chars)/1.6), 0, {motifs.radial_lines_max_count})",
        "  every point is joined to its two nearest points across the whole grid",
    ]
    if motifs.flag_marks:
        lines += [
            "- undo_like flag: One perpendicular line (cancellation mark)",
            "- paste_like flag: One thick line (block indicator)",
            "- ai edit answering a prompt: One horizontal line through the center",
        ]
    lines += [
        "",
        "STATISTICS",
        "----------",
        f"Total events: {summary['total_events']}",
        f"Edit events: {len(edits)} (human: {human_edits}, ai: {ai_edits})",
        f"Snapshots: {summary['counts']['by_event'].get('snapshot', 0)}",
        f"Policy violations: {summary['policy_violation']['count']}",
        f"Session duration: {duration_minutes} minutes",
        f"Added chars (total/mean/max): {added['total']} / {added['mean']} / {added['max']}",
        f"Deleted chars (total/mean/max): {deleted['total']} / {deleted['mean']} / {deleted['max']}",
        "",
        "RANDOM SEED",
        "-----------",
        f"Seed: {params.seed}",
        "All randomness derived from this seed for reproducibility.",
    ]
    if generated_at is not None:
        lines += ["", "---", f"Generated: {generated_at.isoformat()}"]

    return "\n".join(lines) + "\n"
