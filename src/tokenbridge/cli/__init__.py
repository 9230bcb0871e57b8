"""
tokenbridge CLI.

Commands:

- export: convert a variable dump into token files
- classify: show inferred semantic types
- validate: check an exported token document
"""

from __future__ import annotations

import typer

from .export import export_command
from .inspection import classify_command, validate_command
from .utils import version_callback

app = typer.Typer(
    help="tokenbridge - export design variables as design tokens",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """tokenbridge CLI main callback for global options."""


app.command(name="export")(export_command)
app.command(name="classify")(classify_command)
app.command(name="validate")(validate_command)


def main() -> None:
    app()


__all__ = ["app", "main"]
