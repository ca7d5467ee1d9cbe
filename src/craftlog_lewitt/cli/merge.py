"""Merge CLI command -- join session files into one continuous craftlog."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ..exceptions import CraftlogError
from ..logging_config import setup_logging
from ..merge import CRAFTLOG_DIR, MergeResult, merge_logs
from . import app
from ._common import console

SAMPLE_ENTRIES = 3


@app.command()
def merge(
    directory: Path = typer.Argument(
        CRAFTLOG_DIR,
        help="Directory of session .jsonl files",
        file_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Merged file (default: <directory>/merged.jsonl)",
        dir_okay=False,
    ),
    keep_original: bool = typer.Option(
        False,
        "--keep-original",
        help="Keep each entry's in-session original_elapsed_ms",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be written without writing"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
):
    """
    Merge session logs so elapsed_ms runs continuously across sessions.

    An existing merged.jsonl is read first; entries from session files
    replace its copies, so re-running after a new session is safe.

    [bold cyan]Examples:[/bold cyan]

      craftlog-lewitt merge

      craftlog-lewitt merge .craftlog --dry-run
    """
    setup_logging(verbose=verbose)
    try:
        result = merge_logs(directory, output, keep_original=keep_original, dry_run=dry_run)
    except CraftlogError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not result.files:
        console.print("[yellow]No JSONL files found.[/yellow]")
        raise typer.Exit(0)

    _print_stats(result)

    if dry_run:
        console.print(f"\n[yellow]Dry run[/yellow] - would write to {result.output}")
        for i, entry in enumerate(result.entries[:SAMPLE_ENTRIES], start=1):
            console.print(
                f"  {i}. elapsed_ms={entry.get('elapsed_ms')}, event={entry.get('event')}, "
                f"session={entry.get('session_id')}"
            )
    else:
        console.print(f"\n[green]Merged output written to[/green] {result.output}")


def _print_stats(result: MergeResult) -> None:
    console.print()
    console.print(f"Files: {len(result.files)}")
    console.print(
        f"Entries: {result.read_count} read, {len(result.entries)} kept "
        f"([dim]{result.duplicate_count} duplicates removed[/dim])"
    )
    duration = result.total_duration_ms
    console.print(f"Total duration: {duration}ms ({duration / 1000:.1f}s / {duration / 60000:.2f}min)")

    table = Table(title="Sessions", show_lines=False, pad_edge=True)
    table.add_column("Session", style="cyan")
    table.add_column("Entries", justify="right")
    table.add_column("elapsed_ms", justify="right", style="green")
    for stats in result.sessions:
        table.add_row(
            str(stats.session_id),
            str(stats.count),
            f"{stats.min_elapsed} - {stats.max_elapsed}",
        )
    console.print(table)
