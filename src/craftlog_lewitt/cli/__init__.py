"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="craftlog-lewitt",
    help="craftlog-lewitt - LeWitt-style wall drawings from editor craftlogs",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"craftlog-lewitt {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Turn a craftlog (JSON-lines editing log) into a LeWitt grid drawing."""


# Import subcommands to register them
from .render import render as _render  # noqa: F401, E402
from .tiles import tiles as _tiles  # noqa: F401, E402
from .reports import summary as _summary, instructions as _instructions  # noqa: F401, E402
from .merge import merge as _merge  # noqa: F401, E402
