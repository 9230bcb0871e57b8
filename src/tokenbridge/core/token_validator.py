"""
Structural validation for tokens, export settings and input variables.

Every validator returns a ``ValidationReport`` and never raises. Validity
is decided by the error list alone; warnings never make a report invalid.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from .ir.settings import (
    DEFAULT_SCHEMA_BASE_URL,
    DefaultUnit,
    ExportSettings,
    IdentifierMode,
    ModeSelection,
    NamingConvention,
    OutputFormat,
    Platform,
    TreeStructure,
)
from .ir.tokens import SchemaKind
from .ir.variables import ColorComponents, ResolvedPrimitive, Variable, is_alias
from .predicates import (
    is_finite_number,
    is_number,
    is_valid_alias,
    is_valid_color,
    is_valid_dimension,
    is_valid_duration,
    is_valid_font_weight,
    is_valid_multiplier,
    is_valid_opacity,
    is_valid_rgb,
)

# =============================================================================
# Constants
# =============================================================================

CANONICAL_TYPES: tuple[str, ...] = (
    "color",
    "dimension",
    "fontFamily",
    "fontWeight",
    "duration",
    "cubicBezier",
    "number",
    "string",
)

MAX_DESCRIPTION_LENGTH = 500

_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)
_UNSAFE_NAME_CHARS_RE = re.compile(r'[<>:"|?*]')


# =============================================================================
# Result types
# =============================================================================


@dataclass
class ValidationIssue:
    """A single error or warning."""

    code: str
    message: str
    path: str | None = None
    suggestion: str | None = None
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.path is not None:
            data["path"] = self.path
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        if self.value is not None:
            data["value"] = self.value
        return data

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


@dataclass
class ValidationReport:
    """Errors and warnings collected by one or more validators."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, code: str, message: str, **kwargs: Any) -> None:
        self.errors.append(ValidationIssue(code, message, **kwargs))

    def warn(self, code: str, message: str, **kwargs: Any) -> None:
        self.warnings.append(ValidationIssue(code, message, **kwargs))

    def extend(self, other: ValidationReport) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }


# =============================================================================
# Token values
# =============================================================================


def validate_token_value(token_type: str, value: Any) -> ValidationReport:
    """Check a canonical value against the shape its ``$type`` requires.

    Alias references are accepted for every type.
    """
    report = ValidationReport()
    if is_valid_alias(value):
        return report

    if token_type == "color":
        if not is_valid_color(value):
            report.error(
                "INVALID_COLOR",
                "Color value must be a hex string, an RGB object or an sRGB color object",
                value=value,
            )
    elif token_type == "dimension":
        if not is_valid_dimension(value):
            report.error(
                "INVALID_DIMENSION",
                "Dimension value must be a non-negative number, "
                "a string with unit (px, rem, em, %) or a {value, unit} object",
                value=value,
            )
    elif token_type == "duration":
        if not is_valid_duration(value):
            report.error(
                "INVALID_DURATION",
                "Duration value must be a non-negative number or a {value, unit} object (ms, s)",
                value=value,
            )
    elif token_type == "opacity":
        if not is_valid_opacity(value):
            report.error(
                "INVALID_OPACITY", "Opacity value must be a number between 0 and 1", value=value
            )
    elif token_type == "fontWeight":
        if not is_valid_font_weight(value):
            report.error(
                "INVALID_FONT_WEIGHT",
                "Font weight must be 100-900 (in steps of 100) or a valid keyword",
                value=value,
            )
    elif token_type in ("multiplier", "number"):
        if not is_valid_multiplier(value):
            report.error(
                "INVALID_NUMBER",
                "Multiplier/number value must be a non-negative finite number",
                value=value,
            )
    elif token_type in ("fontFamily", "string"):
        if not isinstance(value, str):
            report.error("INVALID_STRING", f"{token_type} value must be a string", value=value)
    else:
        report.warn(
            "UNKNOWN_TYPE",
            f'Unknown token type "{token_type}", skipping value validation',
        )
    return report


# =============================================================================
# Token structure
# =============================================================================


def _validate_canonical(name: str, token: Mapping[str, Any]) -> ValidationReport:
    report = ValidationReport()

    if "$value" not in token:
        report.error(
            "MISSING_VALUE",
            f'Token "{name}" is missing required $value property',
            path=name,
        )
        return report

    token_type = token.get("$type")
    if token_type is not None:
        if token_type not in CANONICAL_TYPES:
            report.warn(
                "UNKNOWN_TYPE",
                f'Token "{name}" has unknown type "{token_type}"',
                path=name,
                suggestion=f"Valid types: {', '.join(CANONICAL_TYPES)}",
            )
        else:
            value_report = validate_token_value(str(token_type), token["$value"])
            for issue in value_report.errors:
                issue.path = name
            report.extend(value_report)

    description = token.get("$description")
    if isinstance(description, str) and len(description) > MAX_DESCRIPTION_LENGTH:
        report.warn(
            "LONG_DESCRIPTION",
            f'Token "{name}" has a very long description ({len(description)} chars)',
            path=name,
            suggestion="Consider shortening the description for better readability",
        )
    return report


def _check_identifier(
    report: ValidationReport, name: str, token: Mapping[str, Any], require_identifier: bool
) -> None:
    uuid_value = token.get("uuid")
    if not uuid_value:
        if require_identifier:
            report.error(
                "MISSING_UUID",
                f'Token "{name}" is missing required uuid property',
                path=name,
            )
        return
    if not isinstance(uuid_value, str) or not _UUID_RE.fullmatch(uuid_value):
        report.error(
            "INVALID_UUID",
            f'Token "{name}" has invalid UUID format',
            path=name,
            value=uuid_value,
        )


def _validate_extended(
    name: str,
    token: Mapping[str, Any],
    schema_base_url: str,
    require_identifier: bool,
) -> ValidationReport:
    report = ValidationReport()

    schema = token.get("$schema")
    if not schema:
        report.error(
            "MISSING_SCHEMA",
            f'Token "{name}" is missing required $schema property',
            path=name,
        )
    elif not str(schema).startswith(schema_base_url.rstrip("/") + "/"):
        report.warn(
            "INVALID_SCHEMA_URL",
            f'Token "{name}" has non-standard schema URL',
            path=name,
            suggestion=f"Schema should start with {schema_base_url}",
        )

    sets = token.get("sets")
    if isinstance(sets, Mapping):
        for mode_key, member in sets.items():
            member_path = f"{name}.sets.{mode_key}"
            if not isinstance(member, Mapping) or "value" not in member:
                report.error(
                    "MISSING_VALUE",
                    f'Token "{member_path}" is missing required value property',
                    path=member_path,
                )
                continue
            _check_identifier(report, member_path, member, require_identifier)
        return report

    if "value" not in token:
        report.error(
            "MISSING_VALUE",
            f'Token "{name}" is missing required value property',
            path=name,
        )
    _check_identifier(report, name, token, require_identifier)
    return report


def validate_token(
    name: str,
    token: Any,
    schema_kind: str = SchemaKind.CANONICAL,
    *,
    schema_base_url: str = DEFAULT_SCHEMA_BASE_URL,
    require_identifier: bool = True,
) -> ValidationReport:
    """Validate one constructed token.

    Args:
        name: Token name or path, used in messages.
        token: The token mapping.
        schema_kind: "canonical" or "extended".
        schema_base_url: Expected prefix of extended ``$schema`` URLs.
        require_identifier: Whether extended tokens must carry a ``uuid``.

    Returns:
        ValidationReport; ``valid`` is False when any error was found.
    """
    if not isinstance(token, Mapping):
        report = ValidationReport()
        report.error(
            "MISSING_VALUE",
            f'Token "{name}" is not an object and has no value',
            path=name,
            value=token,
        )
        return report
    if schema_kind == SchemaKind.EXTENDED:
        return _validate_extended(name, token, schema_base_url, require_identifier)
    return _validate_canonical(name, token)


def validate_tokens(
    tokens: Mapping[str, Any],
    schema_kind: str = SchemaKind.CANONICAL,
    **kwargs: Any,
) -> ValidationReport:
    """Validate every token in a name -> token map and concatenate the results."""
    report = ValidationReport()
    for name, token in tokens.items():
        report.extend(validate_token(name, token, schema_kind, **kwargs))
    return report


def _is_token_node(node: Mapping[str, Any], schema_kind: str) -> bool:
    if schema_kind == SchemaKind.EXTENDED:
        return any(key in node for key in ("$schema", "value", "uuid", "sets"))
    if "$value" in node:
        return True
    # A node with only $-keys is a token that lost its value, not a group
    return bool(node) and all(key.startswith("$") for key in node)


def iter_tokens(
    document: Mapping[str, Any],
    schema_kind: str = SchemaKind.CANONICAL,
    prefix: str = "",
) -> Iterator[tuple[str, Mapping[str, Any]]]:
    """Yield (dotted path, token) for every token in a (possibly nested) document."""
    for key, node in document.items():
        if key.startswith("$") or not isinstance(node, Mapping):
            continue
        path = f"{prefix}.{key}" if prefix else key
        if _is_token_node(node, schema_kind):
            yield path, node
        else:
            yield from iter_tokens(node, schema_kind, path)


def validate_document(
    document: Mapping[str, Any],
    schema_kind: str = SchemaKind.CANONICAL,
    **kwargs: Any,
) -> ValidationReport:
    """Validate every token found in a serialized token document."""
    return validate_tokens(dict(iter_tokens(document, schema_kind)), schema_kind, **kwargs)


# =============================================================================
# Settings
# =============================================================================


def _allowed(enum_cls: Any) -> list[str]:
    return [member.value for member in enum_cls]


def validate_export_settings(settings: ExportSettings) -> ValidationReport:
    """Check every enumerated setting.

    Errors are fatal for an export run. Warnings mark a value that will be
    replaced by its default.
    """
    report = ValidationReport()

    hard_checks = [
        ("format", OutputFormat, "INVALID_FORMAT"),
        ("structure", TreeStructure, "INVALID_STRUCTURE"),
    ]
    if settings.format == OutputFormat.PLATFORM_CODE:
        hard_checks.append(("platform", Platform, "INVALID_PLATFORM"))

    for field_name, enum_cls, code in hard_checks:
        value = getattr(settings, field_name)
        allowed = _allowed(enum_cls)
        if value not in allowed:
            report.error(
                code,
                f'Invalid {field_name} "{value}". Must be one of: {", ".join(allowed)}',
                path=field_name,
                value=value,
            )

    soft_checks = [
        ("naming_convention", NamingConvention, "INVALID_NAMING_CONVENTION", "conventions"),
        ("default_unit", DefaultUnit, "INVALID_DEFAULT_UNIT", "units"),
        ("identifier_mode", IdentifierMode, "INVALID_IDENTIFIER_MODE", "modes"),
        ("modes", ModeSelection, "INVALID_MODE_SELECTION", "selections"),
    ]
    for field_name, enum_cls, code, noun in soft_checks:
        value = getattr(settings, field_name)
        allowed = _allowed(enum_cls)
        if value not in allowed:
            default = type(settings).model_fields[field_name].default
            report.warn(
                code,
                f'Unknown {field_name.replace("_", " ")} "{value}", using "{default}"',
                path=field_name,
                suggestion=f"Valid {noun}: {', '.join(allowed)}",
            )
    return report


# =============================================================================
# Input variables
# =============================================================================


def validate_variable(variable: Variable) -> ValidationReport:
    """Check that a variable record is complete enough to export."""
    report = ValidationReport()

    if not variable.id:
        report.error("MISSING_ID", "Variable is missing required id property")
    if not variable.name:
        report.error("MISSING_NAME", "Variable is missing required name property", path=variable.id)
    if not variable.resolved_type:
        report.error(
            "MISSING_TYPE",
            f'Variable "{variable.name}" is missing required resolvedType property',
            path=variable.name,
        )
    elif variable.resolved_type not in _allowed(ResolvedPrimitive):
        report.error(
            "INVALID_TYPE",
            f'Variable "{variable.name}" has invalid type "{variable.resolved_type}"',
            path=variable.name,
            value=variable.resolved_type,
        )

    if not variable.values_by_mode:
        report.warn(
            "NO_VALUES",
            f'Variable "{variable.name}" has no values defined',
            path=variable.name,
            suggestion="Variable will be skipped during export",
        )

    if variable.name and _UNSAFE_NAME_CHARS_RE.search(variable.name):
        report.warn(
            "INVALID_NAME_CHARACTERS",
            f'Variable "{variable.name}" contains characters that may cause issues in file systems',
            path=variable.name,
            suggestion="Consider renaming to avoid special characters",
        )
    return report


def validate_variable_value(variable: Variable, mode_id: str, value: Any) -> ValidationReport:
    """Check one per-mode value against the variable's declared primitive."""
    report = ValidationReport()

    if value is None:
        report.warn(
            "MISSING_MODE_VALUE",
            f'Variable "{variable.name}" has no value for mode "{mode_id}"',
            path=variable.name,
        )
        return report
    if is_alias(value):
        return report

    primitive = variable.resolved_type
    if primitive == ResolvedPrimitive.COLOR:
        raw = value.model_dump(exclude_none=True) if isinstance(value, ColorComponents) else value
        alpha = raw.get("a") if isinstance(raw, dict) else None
        if not is_valid_rgb(raw) or (alpha is not None and not is_finite_number(alpha)):
            report.error(
                "INVALID_COLOR_VALUE",
                f'Variable "{variable.name}" has invalid color value',
                path=variable.name,
                value=raw,
            )
        elif alpha is not None and not 0 <= alpha <= 1:
            report.error(
                "INVALID_COLOR_VALUE",
                f'Variable "{variable.name}" has alpha outside [0, 1]',
                path=variable.name,
                value=raw,
            )
    elif primitive == ResolvedPrimitive.FLOAT:
        if not is_number(value) or not math.isfinite(value):
            report.error(
                "INVALID_FLOAT_VALUE",
                f'Variable "{variable.name}" has invalid float value',
                path=variable.name,
                value=value,
            )
    elif primitive == ResolvedPrimitive.STRING:
        if not isinstance(value, str):
            report.error(
                "INVALID_STRING_VALUE",
                f'Variable "{variable.name}" has invalid string value',
                path=variable.name,
                value=value,
            )
    elif primitive == ResolvedPrimitive.BOOLEAN:
        if not isinstance(value, bool):
            report.error(
                "INVALID_BOOLEAN_VALUE",
                f'Variable "{variable.name}" has invalid boolean value',
                path=variable.name,
                value=value,
            )
    return report


# =============================================================================
# Reporting
# =============================================================================


def _format_value(value: Any) -> str:
    try:
        return json.dumps(value, default=str)
    except ValueError:
        return repr(value)


def format_validation_report(report: ValidationReport) -> str:
    """Render a report as indented plain text."""
    if report.valid and not report.warnings:
        return "Validation passed with no issues"

    lines: list[str] = []
    if report.errors:
        lines.append(f"Validation failed with {len(report.errors)} error(s):")
        lines.append("")
        for issue in report.errors:
            lines.append(f"  {issue}")
            if issue.path:
                lines.append(f"    Path: {issue.path}")
            if issue.value is not None:
                lines.append(f"    Value: {_format_value(issue.value)}")

    if report.warnings:
        if report.errors:
            lines.append("")
        lines.append(f"{len(report.warnings)} warning(s):")
        lines.append("")
        for issue in report.warnings:
            lines.append(f"  {issue}")
            if issue.path:
                lines.append(f"    Path: {issue.path}")
            if issue.suggestion:
                lines.append(f"    Suggestion: {issue.suggestion}")

    return "\n".join(lines)
