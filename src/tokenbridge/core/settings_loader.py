"""
Export settings loader.

Settings live in a YAML file whose keys match ``ExportSettings`` fields:

    format: both
    structure: nested
    naming_convention: kebab
    include_metadata: true

Unknown keys are rejected. Enumerated values are not checked here; the
coordinator validates them with specific error and warning codes.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import make_settings_error
from .ir.settings import ExportSettings

logger = logging.getLogger(__name__)


def parse_settings(data: dict[str, Any] | None, source: Path | None = None) -> ExportSettings:
    """Build ExportSettings from a mapping.

    Raises:
        SettingsError: The mapping has unknown keys or badly typed values.
    """
    if data is None:
        return ExportSettings()
    if not isinstance(data, dict):
        raise make_settings_error("Settings must be a mapping of option names to values", source)
    try:
        return ExportSettings.model_validate(data)
    except ValidationError as e:
        raise make_settings_error(f"Invalid export settings: {e}", source) from e


def load_settings(path: Path | None = None, overrides: dict[str, Any] | None = None) -> ExportSettings:
    """Load settings from *path* (optional) and apply *overrides* on top.

    Args:
        path: YAML settings file. When None, defaults are used.
        overrides: Values that win over the file, e.g. from CLI options.
            Keys whose value is None are ignored.

    Raises:
        SettingsError: The file is missing, unreadable, or invalid.
    """
    data: dict[str, Any] = {}
    if path is not None:
        if not path.exists():
            raise make_settings_error("Settings file not found", path)
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise make_settings_error(f"Invalid YAML: {e}", path) from e
        if loaded is None:
            logger.warning("Empty settings file %s, using defaults", path)
        elif not isinstance(loaded, dict):
            raise make_settings_error("Settings must be a mapping of option names to values", path)
        else:
            data.update(loaded)

    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value
    return parse_settings(data, path)
