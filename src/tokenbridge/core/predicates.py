"""
Value predicates for token values.

Every predicate is a total boolean function: it never raises, whatever
it is given.
"""

from __future__ import annotations

import math
import re
from typing import Any

DIMENSION_UNITS: tuple[str, ...] = ("px", "rem", "em", "%")
DURATION_UNITS: tuple[str, ...] = ("ms", "s")

FONT_WEIGHT_KEYWORDS = frozenset(
    {
        "normal",
        "bold",
        "bolder",
        "lighter",
        "100",
        "200",
        "300",
        "400",
        "500",
        "600",
        "700",
        "800",
        "900",
    }
)

_HEX_COLOR_RE = re.compile(r"#([0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})", re.IGNORECASE)
_DIMENSION_RE = re.compile(r"\d+(\.\d+)?(px|rem|em|%)")
_ALIAS_RE = re.compile(r"\{[^{}\s]+\}")


def is_number(value: Any) -> bool:
    """True for int/float values, excluding bool."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_finite_number(value: Any) -> bool:
    return is_number(value) and math.isfinite(value)


def _in_unit_interval(value: Any) -> bool:
    return is_finite_number(value) and 0 <= value <= 1


def is_valid_rgb(value: Any) -> bool:
    """A mapping with r, g, b numeric components in [0, 1]."""
    if not isinstance(value, dict):
        return False
    return all(_in_unit_interval(value.get(channel)) for channel in ("r", "g", "b"))


def is_valid_rgba(value: Any) -> bool:
    """An RGB mapping that also carries an alpha in [0, 1]."""
    return is_valid_rgb(value) and _in_unit_interval(value.get("a"))


def is_valid_color_object(value: Any) -> bool:
    """A vendor-neutral color object: colorSpace + three 0-1 components."""
    if not isinstance(value, dict):
        return False
    components = value.get("components")
    if not isinstance(components, list | tuple) or len(components) != 3:
        return False
    if not all(_in_unit_interval(c) for c in components):
        return False
    if "alpha" in value and not _in_unit_interval(value["alpha"]):
        return False
    return isinstance(value.get("colorSpace"), str)


def is_valid_hex_color(value: Any) -> bool:
    """#RGB, #RGBA, #RRGGBB or #RRGGBBAA."""
    return isinstance(value, str) and bool(_HEX_COLOR_RE.fullmatch(value))


def is_valid_color(value: Any) -> bool:
    if isinstance(value, str):
        return is_valid_hex_color(value)
    return is_valid_rgb(value) or is_valid_color_object(value)


def is_valid_dimension(value: Any) -> bool:
    """Non-negative finite number, "<number><unit>" string, or {value, unit} object."""
    if is_number(value):
        return math.isfinite(value) and value >= 0
    if isinstance(value, str):
        return bool(_DIMENSION_RE.fullmatch(value))
    if isinstance(value, dict):
        return (
            is_finite_number(value.get("value"))
            and value["value"] >= 0
            and value.get("unit") in DIMENSION_UNITS
        )
    return False


def is_valid_duration(value: Any) -> bool:
    """Non-negative finite number or {value, unit} with unit ms or s."""
    if is_number(value):
        return math.isfinite(value) and value >= 0
    if isinstance(value, dict):
        return (
            is_finite_number(value.get("value"))
            and value["value"] >= 0
            and value.get("unit") in DURATION_UNITS
        )
    return False


def is_valid_opacity(value: Any) -> bool:
    return _in_unit_interval(value)


def is_valid_font_weight(value: Any) -> bool:
    """A multiple of 100 in [100, 900], or one of the weight keywords."""
    if is_number(value):
        return math.isfinite(value) and 100 <= value <= 900 and value % 100 == 0
    if isinstance(value, str):
        return value in FONT_WEIGHT_KEYWORDS
    return False


def is_valid_multiplier(value: Any) -> bool:
    return is_finite_number(value) and value >= 0


def is_valid_alias(value: Any) -> bool:
    """Exactly one "{path}" with no whitespace and no nested braces."""
    return isinstance(value, str) and bool(_ALIAS_RE.fullmatch(value))
