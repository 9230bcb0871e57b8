"""
Export command for the tokenbridge CLI.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from tokenbridge.core.coordinator import ExportCoordinator, format_summary
from tokenbridge.core.errors import InputDocumentError, SettingsError
from tokenbridge.core.files import format_file_size
from tokenbridge.core.input_loader import load_input_document
from tokenbridge.core.ir import ExportProgress, ExportResult
from tokenbridge.core.settings_loader import load_settings

from .utils import configure_logging, console, err_console, fail


def _print_progress(progress: ExportProgress) -> None:
    err_console.print(f"[dim][{progress.percentage:>3}%] {progress.message}[/dim]")


def _print_result(result: ExportResult, output_dir: Path) -> None:
    table = Table(title=f"Exported to {output_dir}")
    table.add_column("File", style="cyan")
    table.add_column("Format")
    table.add_column("Size", justify="right")
    for export_file in result.files:
        table.add_row(
            export_file.filename,
            export_file.format_tag.value,
            format_file_size(export_file.byte_size),
        )
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]warning:[/yellow] {warning}", highlight=False)
    for error in result.errors:
        console.print(f"[red]error:[/red] {error}", highlight=False)

    stats = result.statistics
    status = "[green]OK[/green]" if result.success else "[red]FAILED[/red]"
    console.print(
        f"{status} {stats.token_count} token(s), {stats.file_count} file(s), "
        f"{stats.warning_count} warning(s), {stats.error_count} error(s)"
    )


def export_command(
    input_file: Path = typer.Argument(..., help="JSON dump of collections and variables"),  # noqa: B008
    settings_file: Path | None = typer.Option(  # noqa: B008
        None, "--settings", "-s", help="YAML export settings file"
    ),
    output_dir: Path = typer.Option(  # noqa: B008
        Path("tokens"), "--output-dir", "-o", help="Directory to write the exported files to"
    ),
    output_format: str | None = typer.Option(
        None, "--format", "-f", help="canonical, extended, both or platform-code"
    ),
    structure: str | None = typer.Option(None, "--structure", help="flat or nested"),
    naming_convention: str | None = typer.Option(
        None, "--naming", help="kebab, camel, snake or original"
    ),
    default_unit: str | None = typer.Option(None, "--unit", help="px or rem"),
    identifier_mode: str | None = typer.Option(
        None, "--identifiers", help="deterministic, random or none"
    ),
    target_platform: str | None = typer.Option(
        None, "--platform", "-p", help="ios, android, compose or web (platform-code only)"
    ),
    modes: str | None = typer.Option(None, "--modes", help="default or all"),
    include_private: bool | None = typer.Option(
        None, "--include-private/--exclude-private", help="Export hidden variables"
    ),
    include_deprecated: bool | None = typer.Option(
        None, "--include-deprecated/--exclude-deprecated", help="Export deprecated variables"
    ),
    include_metadata: bool | None = typer.Option(
        None, "--metadata/--no-metadata", help="Attach source metadata to canonical tokens"
    ),
    text_summary: bool = typer.Option(
        False, "--summary", help="Print the plain-text export summary instead of a table"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the export result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Debug logging and progress"),
) -> None:
    """
    Export design variables to token files.

    Examples:
        tokenbridge export variables.json
        tokenbridge export variables.json -s tokens.yaml -o build/tokens
        tokenbridge export variables.json -f platform-code -p compose
    """
    configure_logging(verbose)

    overrides = {
        "format": output_format,
        "structure": structure,
        "naming_convention": naming_convention,
        "default_unit": default_unit,
        "identifier_mode": identifier_mode,
        "platform": target_platform,
        "modes": modes,
        "include_private": include_private,
        "include_deprecated": include_deprecated,
        "include_metadata": include_metadata,
    }
    try:
        settings = load_settings(settings_file, overrides)
        document = load_input_document(input_file)
    except (SettingsError, InputDocumentError) as e:
        fail(str(e))

    coordinator = ExportCoordinator(on_progress=_print_progress if verbose else None)
    result = coordinator.export(document.collections, document.variables, settings)

    if result.files:
        output_dir.mkdir(parents=True, exist_ok=True)
        for export_file in result.files:
            (output_dir / export_file.filename).write_text(export_file.content, encoding="utf-8")

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif text_summary:
        console.print(format_summary(result), highlight=False, markup=False)
    else:
        _print_result(result, output_dir)

    if not result.success:
        raise typer.Exit(code=1)
