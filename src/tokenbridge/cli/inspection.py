"""
Inspection commands: classify variables and validate token documents.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.table import Table

from tokenbridge.core.classifier import classify
from tokenbridge.core.errors import InputDocumentError
from tokenbridge.core.input_loader import InputDocument, load_input_document
from tokenbridge.core.ir import SchemaKind, Variable
from tokenbridge.core.token_validator import format_validation_report, validate_document

from .utils import configure_logging, console, fail


def _sample_value(document: InputDocument, variable: Variable) -> tuple[str, object]:
    """Pick the default-mode value of *variable*, falling back to its first value."""
    for collection in document.collections:
        if variable.id in collection.variable_ids:
            mode_id = collection.default_mode_id
            if mode_id in variable.values_by_mode:
                return collection.mode_name(mode_id), variable.values_by_mode[mode_id]
    for mode_id, value in variable.values_by_mode.items():
        return mode_id, value
    return "", None


def classify_command(
    input_file: Path = typer.Argument(..., help="JSON dump of collections and variables"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Debug logging"),
) -> None:
    """
    Show the semantic type inferred for every variable.

    Each variable is classified with its default-mode value.
    """
    configure_logging(verbose)
    try:
        document = load_input_document(input_file)
    except InputDocumentError as e:
        fail(str(e))

    rows = []
    for variable in document.variables:
        mode, value = _sample_value(document, variable)
        result = classify(variable, value)
        rows.append(
            {
                "name": variable.name,
                "mode": mode,
                "type": result.semantic_type.value,
                "confidence": result.confidence.value,
                "hint": result.target_schema_hint.value if result.target_schema_hint else None,
                "reason": result.reason,
            }
        )

    if as_json:
        typer.echo(json.dumps(rows, indent=2))
        return

    table = Table(title=f"{len(rows)} variable(s)")
    for column in ("Variable", "Mode", "Type", "Confidence", "Hint", "Reason"):
        table.add_column(column)
    styles = {"high": "green", "medium": "yellow", "low": "red"}
    for row in rows:
        confidence = row["confidence"]
        table.add_row(
            row["name"],
            row["mode"],
            row["type"],
            f"[{styles[confidence]}]{confidence}[/{styles[confidence]}]",
            row["hint"] or "",
            row["reason"],
        )
    console.print(table)


def validate_command(
    token_file: Path = typer.Argument(..., help="Exported token document (JSON)"),  # noqa: B008
    kind: SchemaKind = typer.Option(
        SchemaKind.CANONICAL, "--kind", "-k", help="Schema of the document"
    ),
    require_identifier: bool = typer.Option(
        True,
        "--require-uuid/--no-require-uuid",
        help="Require a uuid on extended tokens",
    ),
    schema_base_url: str | None = typer.Option(
        None, "--schema-base-url", help="Expected prefix of extended $schema URLs"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """
    Validate an exported token document.

    Exits with status 1 when any error is found.
    """
    if not token_file.exists():
        fail(f"File not found: {token_file}")
    try:
        document = json.loads(token_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        fail(f"{token_file}: invalid JSON: {e.msg}")
    if not isinstance(document, dict):
        fail(f"{token_file}: token document must be a JSON object")

    options: dict[str, object] = {}
    if kind == SchemaKind.EXTENDED:
        options["require_identifier"] = require_identifier
        if schema_base_url:
            options["schema_base_url"] = schema_base_url
    report = validate_document(document, kind, **options)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        typer.echo(format_validation_report(report))
    if not report.valid:
        raise typer.Exit(code=1)
