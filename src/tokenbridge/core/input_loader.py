"""
Input document loader.

Reads the JSON dump produced by a host-tool adapter:

    {
      "collections": [{"id", "name", "modes", "defaultModeId", "variableIds"}],
      "variables": [{"id", "name", "resolvedType", "valuesByMode", ...}]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import make_input_error
from .ir.variables import Collection, Variable


class InputDocument(BaseModel):
    """Collections and variables read from one adapter dump."""

    model_config = ConfigDict(frozen=True)

    collections: list[Collection] = Field(default_factory=list)
    variables: list[Variable] = Field(default_factory=list)


def _first_location(error: ValidationError) -> str | None:
    errors = error.errors()
    if not errors:
        return None
    loc = errors[0].get("loc", ())
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(f".{item}" if parts else str(item))
    return "".join(parts) or None


def parse_input_document(data: Any, source: Path | None = None) -> InputDocument:
    """Validate raw JSON data into an InputDocument.

    Raises:
        InputDocumentError: The data does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise make_input_error("Input document must be a JSON object", source)
    try:
        return InputDocument.model_validate(data)
    except ValidationError as e:
        raise make_input_error(
            f"Invalid input document: {e.error_count()} problem(s): {e}",
            source,
            _first_location(e),
        ) from e


def load_input_document(path: Path) -> InputDocument:
    """Read and validate an adapter dump from *path*.

    Raises:
        InputDocumentError: The file is missing, not JSON, or malformed.
    """
    if not path.exists():
        raise make_input_error("Input file not found", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise make_input_error(f"Invalid JSON: {e.msg}", path, f"line {e.lineno}") from e
    return parse_input_document(data, path)
