"""Render CLI command -- draw one canvas as SVG or PNG."""

from pathlib import Path
from typing import Optional

import typer

from ..config import PREVIEW_PAPER, paper_size
from ..exceptions import CraftlogError
from ..lewitt import draw_lewitt_grid
from ..lewitt.grid import MOTIF_MODES
from ..logging_config import setup_logging
from ..surfaces import RasterSurface, SvgSurface
from . import app
from ._common import console, load_log, resolve_config


@app.command()
def render(
    log: Path = typer.Argument(
        ...,
        help="Craftlog JSON-lines file",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    output: Path = typer.Option(
        Path("lewitt.svg"),
        "--output",
        "-o",
        help="Output file; .svg for vector output, .png for raster",
        dir_okay=False,
    ),
    paper: str = typer.Option(
        PREVIEW_PAPER,
        "--paper",
        "-p",
        help="Canvas paper size (B0-B6 at 300 DPI)",
    ),
    width: Optional[int] = typer.Option(None, "--width", help="Canvas width in pixels (overrides --paper)", min=1),
    height: Optional[int] = typer.Option(None, "--height", help="Canvas height in pixels (overrides --paper)", min=1),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed (0 = time-derived)", min=0),
    order: Optional[str] = typer.Option(None, "--order", help="Cell order: time, severity, type_blocks"),
    max_events: Optional[int] = typer.Option(None, "--max-events", help="Maximum events drawn", min=1),
    mode: str = typer.Option(
        "connect",
        "--mode",
        "-m",
        help="Motif mode: connect (global point network) or standalone (per-cell lines)",
    ),
    marks: Optional[bool] = typer.Option(
        None,
        "--marks/--no-marks",
        help="Draw undo/paste/AI-prompt marks",
    ),
    scale: float = typer.Option(1.0, "--scale", help="Line weight and spacing multiplier", min=0.01),
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
    Draw a craftlog as a LeWitt grid.

    [bold cyan]Examples:[/bold cyan]

      craftlog-lewitt render session.jsonl -o drawing.svg --seed 42

      craftlog-lewitt render session.jsonl -o drawing.png --paper B4 --mode standalone
    """
    setup_logging(verbose=verbose)

    if mode not in MOTIF_MODES:
        console.print(f"[red]Unknown mode:[/red] {mode} (expected {', '.join(MOTIF_MODES)})")
        raise typer.Exit(2)

    suffix = output.suffix.lower()
    if suffix not in (".svg", ".png"):
        console.print(f"[red]Unsupported output type:[/red] {output.suffix or '(none)'} (use .svg or .png)")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config, seed=seed, order=order, max_events=max_events, marks=marks)
        size = paper_size(paper)
        canvas_w = width or size.width
        canvas_h = height or size.height

        context = load_log(log)
        surface = SvgSurface(canvas_w, canvas_h) if suffix == ".svg" else RasterSurface(canvas_w, canvas_h)
        result = draw_lewitt_grid(surface, context, canvas_w, canvas_h, settings, scale, mode)
        surface.save(output)
    except CraftlogError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Wrote[/green] {output} "
        f"[dim]({canvas_w}x{canvas_h}, grid {result.grid_size}x{result.grid_size}, "
        f"{result.event_count} events, seed {result.seed})[/dim]"
    )
