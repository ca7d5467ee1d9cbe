"""Tiles CLI command -- large-format PNG assembled from tiles."""

from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn

from ..config import TileConfig
from ..exceptions import CraftlogError, SurfaceError
from ..lewitt.grid import MOTIF_MODES
from ..logging_config import setup_logging
from ..tiles import render_tiles
from . import app
from ._common import console, load_log, resolve_config


@app.command()
def tiles(
    log: Path = typer.Argument(
        ...,
        help="Craftlog JSON-lines file",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    output: Path = typer.Option(Path("lewitt_b1.png"), "--output", "-o", help="Output PNG file", dir_okay=False),
    target: str = typer.Option("B1", "--target", help="Paper size of the assembled print"),
    tile: str = typer.Option("B4", "--tile", help="Paper size of one tile"),
    cols: int = typer.Option(2, "--cols", help="Tile columns", min=1),
    rows: int = typer.Option(4, "--rows", help="Tile rows", min=1),
    portrait: bool = typer.Option(False, "--portrait", help="Use portrait tiles instead of landscape"),
    density: int = typer.Option(2, "--density", help="Oversampling factor per tile", min=1, max=8),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed (0 = time-derived)", min=0),
    mode: str = typer.Option("connect", "--mode", "-m", help="Motif mode: connect or standalone"),
    marks: Optional[bool] = typer.Option(None, "--marks/--no-marks", help="Draw undo/paste/AI-prompt marks"),
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
    Render a print-size PNG tile by tile (B1 from eight B4 tiles by default).

    [bold cyan]Examples:[/bold cyan]

      craftlog-lewitt tiles session.jsonl --seed 42

      craftlog-lewitt tiles session.jsonl --target B3 --tile B5 --cols 2 --rows 2
    """
    setup_logging(verbose=verbose)

    if mode not in MOTIF_MODES:
        console.print(f"[red]Unknown mode:[/red] {mode} (expected {', '.join(MOTIF_MODES)})")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config, seed=seed, marks=marks)
        tile_config = TileConfig(
            target=target,
            tile=tile,
            cols=cols,
            rows=rows,
            landscape_tiles=not portrait,
            pixel_density=density,
        )
        context = load_log(log)

        with Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Rendering tiles", total=cols * rows)

            def on_tile(done: int, total: int) -> None:
                progress.update(task, completed=done - 1, description=f"Rendering tile {done}/{total}")

            rendered = render_tiles(context, settings, tile_config, on_tile, mode)
            progress.update(task, completed=cols * rows)

        try:
            rendered.image.save(output, "PNG", optimize=True)
        except OSError as e:
            raise SurfaceError("raster", str(e), output=str(output))
    except ValueError as e:
        console.print(f"[red]Invalid tile layout:[/red] {e}")
        raise typer.Exit(1)
    except CraftlogError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Wrote[/green] {output} "
        f"[dim]({rendered.image.width}x{rendered.image.height}, {rendered.tile_count} tiles, "
        f"seed {rendered.grid.seed})[/dim]"
    )
