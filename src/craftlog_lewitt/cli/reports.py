"""Summary and instructions CLI commands."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from ..config import PREVIEW_PAPER, paper_size
from ..exceptions import CraftlogError
from ..lewitt import resolve_seed
from ..logging_config import setup_logging
from ..reports import InstructionParams, generate_instructions, generate_summary
from . import app
from ._common import console, load_log, resolve_config


def _write_or_print(text: str, output: Optional[Path]) -> None:
    if output is None:
        print(text, end="" if text.endswith("\n") else "\n")
        return
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote[/green] {output}")


@app.command()
def summary(
    log: Path = typer.Argument(..., help="Craftlog JSON-lines file", exists=True, dir_okay=False, readable=True),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write JSON here instead of stdout",
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
):
    """
    Print summary statistics for a craftlog as JSON.

    [bold cyan]Examples:[/bold cyan]

      craftlog-lewitt summary session.jsonl

      craftlog-lewitt summary session.jsonl -o summary.json
    """
    setup_logging(verbose=verbose)
    try:
        context = load_log(log)
        data = generate_summary(context.events, context.session_id)
        _write_or_print(json.dumps(data, indent=2, ensure_ascii=False) + "\n", output)
    except (CraftlogError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def instructions(
    log: Path = typer.Argument(..., help="Craftlog JSON-lines file", exists=True, dir_okay=False, readable=True),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write text here instead of stdout",
        dir_okay=False,
    ),
    paper: str = typer.Option(PREVIEW_PAPER, "--paper", "-p", help="Canvas paper size the drawing uses"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed (0 = time-derived)", min=0),
    order: Optional[str] = typer.Option(None, "--order", help="Cell order: time, severity, type_blocks"),
    max_events: Optional[int] = typer.Option(None, "--max-events", help="Maximum events drawn", min=1),
    marks: Optional[bool] = typer.Option(None, "--marks/--no-marks", help="Describe undo/paste/AI-prompt marks"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML config file",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging"),
):
    """
    Print the LeWitt-style instructions for drawing a craftlog by hand.

    [bold cyan]Examples:[/bold cyan]

      craftlog-lewitt instructions session.jsonl --seed 42 -o instructions.txt
    """
    setup_logging(verbose=verbose)
    try:
        settings = resolve_config(config, seed=seed, order=order, max_events=max_events, marks=marks)
        size = paper_size(paper)
        context = load_log(log)
        params = InstructionParams.for_render(
            settings,
            context.events,
            size.width,
            size.height,
            seed=resolve_seed(settings.seed),
            session_id=context.session_id,
        )
        text = generate_instructions(
            params,
            generate_summary(context.events, context.session_id),
            context.events,
            generated_at=datetime.now(timezone.utc),
        )
        _write_or_print(text, output)
    except (CraftlogError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
