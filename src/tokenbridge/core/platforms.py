"""
Platform code generators.

Walks a canonical token tree and rewrites leaf values into literal syntax
for a target platform. One small function per (token type, platform) pair
is registered in ``PLATFORM_TRANSFORMS``; leaves with no registered
function keep their canonical value.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from .color import format_component, parse_color_value
from .ir.settings import Platform
from .ir.tokens import EXTENSION_NAMESPACE
from .predicates import is_number
from .values import clean_number

_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")

SWIFT_FONT_WEIGHTS: dict[int, str] = {
    100: ".ultralight",
    200: ".thin",
    300: ".light",
    400: ".regular",
    500: ".medium",
    600: ".semibold",
    700: ".bold",
    800: ".heavy",
    900: ".black",
}


# =============================================================================
# Value extraction
# =============================================================================


def number_of(value: Any) -> int | float:
    """Numeric magnitude of a number, "16px" string, or {value, unit} object."""
    if isinstance(value, dict) and "value" in value:
        return number_of(value["value"])
    if is_number(value):
        return clean_number(value)
    if isinstance(value, str):
        try:
            return clean_number(float(_NON_NUMERIC_RE.sub("", value)))
        except ValueError:
            return 0
    return 0


def string_of(value: Any) -> str:
    if isinstance(value, str):
        return value
    if is_number(value):
        return str(clean_number(value))
    if isinstance(value, dict) and "value" in value:
        return string_of(value["value"])
    return ""


# =============================================================================
# Per-platform literals
# =============================================================================


def swift_color(value: Any) -> str:
    color = parse_color_value(value)
    return (
        f"Color(red: {format_component(color.red)}, green: {format_component(color.green)}, "
        f"blue: {format_component(color.blue)}, opacity: {format_component(color.alpha)})"
    )


def swift_cgfloat(value: Any) -> str:
    return f"CGFloat({number_of(value)})"


def swift_font(value: Any) -> str:
    if not isinstance(value, dict):
        return ""
    try:
        weight = int(float(string_of(value.get("fontWeight", 400))))
    except (ValueError, OverflowError):
        weight = 400
    swift_weight = SWIFT_FONT_WEIGHTS.get(weight, ".regular")
    return f"Font.system(size: {number_of(value.get('fontSize'))}, weight: {swift_weight})"


def argb_color(value: Any) -> str:
    """Color(0xAARRGGBB), shared by Android and Compose."""
    return f"Color(0x{parse_color_value(value).argb_hex})"


def android_dp(value: Any) -> str:
    return f"{number_of(value)}dp"


def android_sp(value: Any) -> str:
    return f"{number_of(value)}sp"


def compose_dp(value: Any) -> str:
    return f"{number_of(value)}.dp"


def compose_sp(value: Any) -> str:
    return f"{number_of(value)}.sp"


def compose_text_style(value: Any) -> str:
    if not isinstance(value, dict):
        return ""
    family = string_of(value.get("fontFamily")).lower().replace(" ", "_")
    weight = value.get("fontWeight", 400)
    return (
        f"TextStyle(fontFamily = FontFamily(Font(R.font.{family})), "
        f"fontSize = {number_of(value.get('fontSize'))}.sp, fontWeight = FontWeight({weight}))"
    )


Transform = Callable[[Any], str]

# (platform, canonical $type) -> literal generator
PLATFORM_TRANSFORMS: dict[tuple[str, str], Transform] = {
    (Platform.IOS, "color"): swift_color,
    (Platform.IOS, "dimension"): swift_cgfloat,
    (Platform.IOS, "number"): swift_cgfloat,
    (Platform.IOS, "typography"): swift_font,
    (Platform.ANDROID, "color"): argb_color,
    (Platform.ANDROID, "dimension"): android_dp,
    (Platform.COMPOSE, "color"): argb_color,
    (Platform.COMPOSE, "dimension"): compose_dp,
    (Platform.COMPOSE, "typography"): compose_text_style,
}

# Font sizes are dimensions carrying a fontSize hint; they use scaled units
FONT_SIZE_TRANSFORMS: dict[str, Transform] = {
    Platform.ANDROID: android_sp,
    Platform.COMPOSE: compose_sp,
}


def _schema_hint(token: dict[str, Any]) -> str | None:
    extensions = token.get("$extensions")
    if not isinstance(extensions, dict):
        return None
    metadata = extensions.get(EXTENSION_NAMESPACE)
    return metadata.get("schemaHint") if isinstance(metadata, dict) else None


def select_transform(platform: str, token: dict[str, Any]) -> Transform | None:
    """Find the generator for a canonical token, or None to keep its value."""
    token_type = token.get("$type")
    if not isinstance(token_type, str):
        return None
    if token_type == "dimension" and _schema_hint(token) == "fontSize":
        font_size = FONT_SIZE_TRANSFORMS.get(platform)
        if font_size is not None:
            return font_size
    return PLATFORM_TRANSFORMS.get((platform, token_type))


def _is_alias_reference(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("{") and value.endswith("}")


# =============================================================================
# Tree walk
# =============================================================================


def transform_token(token: dict[str, Any], path: list[str], platform: str) -> dict[str, Any]:
    """Rewrite one canonical leaf into a platform token."""
    value = token["$value"]
    result: dict[str, Any] = {"value": value, "type": token.get("$type"), "path": path}
    if token.get("$description"):
        result["comment"] = token["$description"]
    result["original"] = {"value": value}

    transform = select_transform(platform, token)
    if transform is not None and not _is_alias_reference(value):
        result["value"] = transform(value)
    return result


def transform_for_platform(
    tree: dict[str, Any], platform: str, path: list[str] | None = None
) -> dict[str, Any]:
    """Walk a canonical tree, rewriting every leaf for *platform*.

    Keys starting with "$" on groups are metadata and are dropped.
    """
    path = path or []
    output: dict[str, Any] = {}
    for key, node in tree.items():
        if key.startswith("$") or not isinstance(node, dict):
            continue
        child_path = [*path, key]
        if "$value" in node:
            output[key] = transform_token(node, child_path, platform)
        else:
            output[key] = transform_for_platform(node, platform, child_path)
    return output
