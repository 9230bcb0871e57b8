"""
Shared helpers for the tokenbridge CLI.
"""

from __future__ import annotations

import logging
import os
import platform
from typing import NoReturn

import typer
from rich.console import Console

from tokenbridge._version import get_version

LOG_LEVEL_ENV = "TOKENBRIDGE_LOG_LEVEL"

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"tokenbridge {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from --verbose or TOKENBRIDGE_LOG_LEVEL."""
    if verbose:
        level = logging.DEBUG
    else:
        name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
        level = logging.getLevelNamesMapping().get(name, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def fail(message: str) -> NoReturn:
    """Print an error to stderr and exit with status 1."""
    err_console.print(f"[bold red]Error:[/bold red] {message}", highlight=False)
    raise typer.Exit(code=1)
