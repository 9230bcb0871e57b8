"""
Color parsing and formatting helpers.

All internal math works on normalized 0-1 RGBA components. Inputs may be
hex strings, canonical color objects (``components``/``alpha``/``hex``),
host-tool ``{r, g, b, a}`` mappings, or 0-255 component lists.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

_HEX_DIGITS_RE = re.compile(r"^[0-9a-fA-F]+$")
_TRAILING_ZEROS_RE = re.compile(r"\.?0+$")


@dataclass(frozen=True)
class RGBA:
    """Normalized color: every channel in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @property
    def hex(self) -> str:
        """Six-digit uppercase hex without the leading "#"."""
        return f"{byte_hex(self.red)}{byte_hex(self.green)}{byte_hex(self.blue)}"

    @property
    def argb_hex(self) -> str:
        return f"{byte_hex(self.alpha)}{self.hex}"


def clamp01(value: Any) -> float:
    """Clamp to [0, 1]; anything that is not a real number becomes 0."""
    if isinstance(value, bool) or not isinstance(value, int | float) or math.isnan(value):
        return 0.0
    return min(1.0, max(0.0, float(value)))


def normalize_component(value: Any) -> float:
    """Accept a 0-1 or 0-255 channel and return it in 0-1."""
    if isinstance(value, bool) or not isinstance(value, int | float) or math.isnan(value):
        return 0.0
    return clamp01(value / 255 if value > 1 else value)


def to_byte(value: float) -> int:
    """0-1 channel to an integer byte, rounding halves up."""
    return math.floor(clamp01(value) * 255 + 0.5)


def byte_hex(value: float) -> str:
    """0-1 channel to a two-digit uppercase hex byte."""
    return f"{to_byte(value):02X}"


def format_component(value: float) -> str:
    """Three decimals with trailing zeros removed: 0.5 -> "0.5", 1 -> "1", 0 -> "0"."""
    return _TRAILING_ZEROS_RE.sub("", f"{clamp01(value):.3f}") or "0"


def normalize_hex(value: str) -> str:
    """Expand and uppercase a hex color to RRGGBB or RRGGBBAA.

    Short forms (#RGB, #RGBA) are expanded. Anything unparseable yields
    "000000".
    """
    if not value:
        return "000000"
    digits = value.strip().lstrip("#")
    if not _HEX_DIGITS_RE.match(digits):
        return "000000"
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) in (6, 8):
        return digits.upper()
    return "000000"


def hex_to_rgba(value: str) -> RGBA:
    """Parse a hex color. Eight digits are read as RRGGBBAA."""
    digits = normalize_hex(value)
    red, green, blue = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return RGBA(red, green, blue, alpha)


def rgba_to_hex(color: RGBA, *, include_alpha: bool = False) -> str:
    """Format as "#RRGGBB", or "#RRGGBBAA" when *include_alpha* is set."""
    if include_alpha:
        return f"#{color.hex}{byte_hex(color.alpha)}"
    return f"#{color.hex}"


def parse_color_value(value: Any) -> RGBA:
    """Parse any supported color representation into normalized RGBA.

    Unknown shapes parse as opaque black.
    """
    if isinstance(value, str):
        return hex_to_rgba(value)

    if isinstance(value, list | tuple) and len(value) >= 3:
        alpha = value[3] if len(value) > 3 else 1.0
        return RGBA(
            normalize_component(value[0]),
            normalize_component(value[1]),
            normalize_component(value[2]),
            clamp01(alpha),
        )

    if isinstance(value, dict):
        explicit_alpha = value.get("alpha", value.get("a"))
        components = value.get("components")
        if isinstance(components, list | tuple) and len(components) >= 3:
            parsed = parse_color_value(list(components))
        elif all(channel in value for channel in ("r", "g", "b")):
            parsed = parse_color_value([value["r"], value["g"], value["b"]])
        elif isinstance(value.get("hex"), str):
            parsed = hex_to_rgba(value["hex"])
        else:
            parsed = RGBA(0.0, 0.0, 0.0)
        if explicit_alpha is not None:
            return RGBA(parsed.red, parsed.green, parsed.blue, clamp01(explicit_alpha))
        return parsed

    return RGBA(0.0, 0.0, 0.0)
