"""
Value conversion from resolved variable values to token values.

Two renderings exist for every concrete value:

- canonical: vendor-neutral structured values (color objects,
  ``{value, unit}`` dimensions, numeric font weights)
- extended: the string conventions of the extended schema
  (``rgb(...)``, ``16px``, weight keywords)

Aliases are not handled here; the assembler turns them into references.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any

from .classifier import font_weight_from_name
from .color import clamp01, to_byte
from .ir.tokens import SemanticType
from .ir.variables import ColorComponents
from .predicates import is_number

_DIMENSION_STRING_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px|rem|em|%|pt|dp)\s*$")

# Units accepted verbatim; the others are mapped to px
CANONICAL_DIMENSION_UNITS = frozenset({"px", "rem", "em", "%"})
DURATION_UNIT = "ms"


@dataclass
class ConvertedValue:
    """A converted value plus any notes raised while converting it."""

    value: Any
    notes: list[str] = field(default_factory=list)


# =============================================================================
# Numbers
# =============================================================================


def clean_number(value: float) -> int | float:
    """Return integral floats as int so 16.0 serializes as 16."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def format_number(value: float) -> str:
    return str(clean_number(value))


def font_weight_keyword(weight: float) -> str:
    """Bucket a numeric weight into a keyword."""
    if weight <= 200:
        return "light"
    if weight <= 400:
        return "regular"
    if weight <= 500:
        return "medium"
    if weight <= 700:
        return "bold"
    if weight <= 900:
        return "extra-bold"
    return "black"


def parse_dimension_string(text: str) -> tuple[float, str] | None:
    """Split "16px" into (16.0, "px"); None when the string has no unit."""
    match = _DIMENSION_STRING_RE.match(text)
    if not match:
        return None
    return float(match.group(1)), match.group(2)


def _safe_magnitude(value: float, label: str, converted: ConvertedValue) -> int | float:
    if not math.isfinite(value):
        converted.notes.append(f"{label} is not finite, using 0")
        return 0
    if value < 0:
        converted.notes.append(f"{label} is negative ({format_number(value)}), using its magnitude")
        return clean_number(abs(value))
    return clean_number(value)


def _dimension_parts(
    value: Any, default_unit: str, converted: ConvertedValue
) -> tuple[Any, str] | None:
    """Resolve a number or unit string into (magnitude, unit); None for anything else."""
    if is_number(value):
        return _safe_magnitude(float(value), "Dimension", converted), default_unit
    parsed = parse_dimension_string(value) if isinstance(value, str) else None
    if parsed is None:
        return None
    magnitude, unit = parsed
    if unit not in CANONICAL_DIMENSION_UNITS:
        converted.notes.append(f'Unit "{unit}" is not a canonical dimension unit, using px')
        unit = "px"
    return _safe_magnitude(magnitude, "Dimension", converted), unit


# =============================================================================
# Colors
# =============================================================================


def canonical_color(color: ColorComponents) -> dict[str, Any]:
    """sRGB color object with clamped components and an uppercase hex."""
    components = [clean_number(clamp01(c)) for c in (color.r, color.g, color.b)]
    result: dict[str, Any] = {"colorSpace": "srgb", "components": components}
    if color.a is not None and clamp01(color.a) < 1:
        result["alpha"] = clean_number(clamp01(color.a))
    result["hex"] = "#" + "".join(f"{to_byte(c):02X}" for c in (color.r, color.g, color.b))
    return result


def extended_color(color: ColorComponents) -> str:
    """CSS functional notation: rgb(r, g, b) or rgba(r, g, b, a)."""
    red, green, blue = (to_byte(c) for c in (color.r, color.g, color.b))
    if color.a is not None and clamp01(color.a) < 1:
        return f"rgba({red}, {green}, {blue}, {format_number(clamp01(color.a))})"
    return f"rgb({red}, {green}, {blue})"


# =============================================================================
# Public converters
# =============================================================================


def to_canonical_value(
    value: Any, semantic_type: SemanticType, default_unit: str = "px"
) -> ConvertedValue:
    """Convert one concrete value for the canonical document."""
    converted = ConvertedValue(value)

    if isinstance(value, ColorComponents):
        converted.value = canonical_color(value)
    elif isinstance(value, bool):
        converted.value = 1 if value else 0
    elif semantic_type == SemanticType.DIMENSION and (
        parts := _dimension_parts(value, default_unit, converted)
    ):
        converted.value = {"value": parts[0], "unit": parts[1]}
    elif semantic_type == SemanticType.DURATION and is_number(value):
        magnitude = _safe_magnitude(float(value), "Duration", converted)
        converted.value = {"value": magnitude, "unit": DURATION_UNIT}
    elif semantic_type == SemanticType.FONT_WEIGHT and isinstance(value, str):
        text = value.strip()
        converted.value = int(text) if text.isdigit() else font_weight_from_name(text)
    elif is_number(value):
        converted.value = clean_number(value)
    return converted


def to_extended_value(
    value: Any, semantic_type: SemanticType, default_unit: str = "px"
) -> ConvertedValue:
    """Convert one concrete value for the extended document."""
    converted = ConvertedValue(value)

    if isinstance(value, ColorComponents):
        converted.value = extended_color(value)
    elif isinstance(value, bool):
        converted.value = "1" if value else "0"
    elif semantic_type == SemanticType.DIMENSION and (
        parts := _dimension_parts(value, default_unit, converted)
    ):
        converted.value = f"{parts[0]}{parts[1]}"
    elif semantic_type == SemanticType.DURATION and is_number(value):
        magnitude = _safe_magnitude(float(value), "Duration", converted)
        converted.value = f"{magnitude}{DURATION_UNIT}"
    elif semantic_type == SemanticType.FONT_WEIGHT and is_number(value):
        converted.value = font_weight_keyword(value)
    elif is_number(value):
        converted.value = format_number(value)
    return converted
