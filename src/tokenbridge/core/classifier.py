"""
Semantic type classification for design variables.

Infers a token type from the variable's declared primitive kind plus weak
textual signals (name, description, scope hints) and the value itself.

FLOAT and STRING variables are classified by ordered rule tables. Rules
are evaluated top to bottom and the first match wins, so the position of a
rule in its table is its priority.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .ir.tokens import ClassificationResult, Confidence, SchemaHint, SemanticType
from .ir.variables import ResolvedPrimitive, Variable, VariableScope, is_alias
from .predicates import is_number

# =============================================================================
# Keyword tables
# =============================================================================

BORDER_RADIUS_KEYWORDS: tuple[str, ...] = (
    "radius",
    "corner-radius",
    "border-radius",
    "rounded",
    "corner",
)
DIMENSION_KEYWORDS: tuple[str, ...] = (
    "size",
    "width",
    "height",
    "spacing",
    "padding",
    "margin",
    "gap",
    "border",
    "stroke",
    "offset",
    "indent",
    "distance",
)
OPACITY_KEYWORDS: tuple[str, ...] = ("opacity", "alpha", "transparency", "transparent")
MULTIPLIER_KEYWORDS: tuple[str, ...] = ("scale", "ratio", "multiplier", "factor", "coefficient")
FONT_SIZE_KEYWORDS: tuple[str, ...] = ("font-size", "text-size")
FONT_WEIGHT_KEYWORDS: tuple[str, ...] = ("font-weight", "weight")
DURATION_KEYWORDS: tuple[str, ...] = ("duration", "time", "delay", "transition", "animation")
LINE_HEIGHT_KEYWORDS: tuple[str, ...] = ("line-height", "leading")
FONT_FAMILY_KEYWORDS: tuple[str, ...] = ("font-family", "typeface", "family")

KNOWN_FONT_INDICATORS: tuple[str, ...] = (
    "sans",
    "serif",
    "mono",
    "arial",
    "helvetica",
    "roboto",
    "open sans",
    "lato",
    "montserrat",
    "source",
    "noto",
    "inter",
    "poppins",
    "system-ui",
)
NAMED_FONT_WEIGHTS: dict[str, int] = {
    "thin": 100,
    "light": 300,
    "regular": 400,
    "normal": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
    "extrabold": 800,
    "black": 900,
}

COMMON_SPACING_VALUES = frozenset({4, 8, 12, 16, 20, 24, 32, 40, 48, 64, 80, 96, 128})

_UNIT_SUFFIX_RE = re.compile(r"^\d+(\.\d+)?(px|rem|em|%|pt|dp)$")


# =============================================================================
# Signals and rules
# =============================================================================


@dataclass(frozen=True)
class Signals:
    """Normalized evidence extracted once per classification."""

    name: str
    description: str
    scopes: frozenset[str]
    number: float | None
    text: str | None

    @classmethod
    def from_variable(cls, variable: Variable, value: Any) -> Signals:
        number = float(value) if is_number(value) and math.isfinite(value) else None
        text = value if isinstance(value, str) else None
        return cls(
            name=(variable.name or "").lower(),
            description=(variable.description or "").lower(),
            scopes=frozenset(variable.scope_hints or ()),
            number=number,
            text=text,
        )

    def mentions(self, keywords: Sequence[str], *, include_description: bool = True) -> bool:
        """True when the name (and optionally description) contains any keyword."""
        texts = (self.name, self.description) if include_description else (self.name,)
        return any(keyword in text for text in texts for keyword in keywords)

    def in_range(self, low: float, high: float) -> bool:
        return self.number is not None and low <= self.number <= high


@dataclass(frozen=True)
class ClassificationRule:
    """One guard in a classification cascade."""

    name: str
    matches: Callable[[Signals], bool]
    result: ClassificationResult


def _result(
    semantic_type: SemanticType,
    confidence: Confidence,
    reason: str,
    hint: SchemaHint | None = None,
) -> ClassificationResult:
    return ClassificationResult(
        semantic_type=semantic_type,
        confidence=confidence,
        reason=reason,
        target_schema_hint=hint,
    )


def _is_font_name(text: str | None) -> bool:
    if not text:
        return False
    lowered = text.lower()
    return any(indicator in lowered for indicator in KNOWN_FONT_INDICATORS)


def _is_font_family_name(signals: Signals) -> bool:
    if signals.mentions(FONT_FAMILY_KEYWORDS, include_description=False):
        return True
    # A bare "font" path segment (e.g. "typography/font") names a family
    return "font" in re.split(r"[/\s._-]+", signals.name)


def _is_weight_name(text: str | None) -> bool:
    return bool(text) and text.lower() in NAMED_FONT_WEIGHTS


def _has_unit_suffix(text: str | None) -> bool:
    return bool(text) and bool(_UNIT_SUFFIX_RE.match(text.strip()))


FLOAT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "corner-radius-scope",
        lambda s: VariableScope.CORNER_RADIUS in s.scopes,
        _result(
            SemanticType.DIMENSION,
            Confidence.HIGH,
            "CORNER_RADIUS scope hint present",
            SchemaHint.BORDER_RADIUS,
        ),
    ),
    ClassificationRule(
        "border-radius-keyword",
        lambda s: s.mentions(BORDER_RADIUS_KEYWORDS),
        _result(
            SemanticType.DIMENSION,
            Confidence.HIGH,
            "Border radius keywords detected",
            SchemaHint.BORDER_RADIUS,
        ),
    ),
    ClassificationRule(
        "unit-interval-opacity",
        lambda s: s.in_range(0, 1) and s.mentions(OPACITY_KEYWORDS),
        _result(
            SemanticType.OPACITY,
            Confidence.HIGH,
            "Value in [0,1] with opacity keywords",
            SchemaHint.OPACITY,
        ),
    ),
    ClassificationRule(
        "unit-interval-multiplier",
        lambda s: s.in_range(0, 1) and s.mentions(MULTIPLIER_KEYWORDS),
        _result(
            SemanticType.MULTIPLIER,
            Confidence.HIGH,
            "Value in [0,1] with multiplier keywords",
            SchemaHint.MULTIPLIER,
        ),
    ),
    ClassificationRule(
        "unit-interval-default",
        lambda s: s.in_range(0, 1),
        _result(
            SemanticType.OPACITY,
            Confidence.MEDIUM,
            "Value in [0,1] without keywords, assumed opacity",
            SchemaHint.OPACITY,
        ),
    ),
    ClassificationRule(
        "font-weight",
        lambda s: s.in_range(100, 1000) and s.mentions(FONT_WEIGHT_KEYWORDS),
        _result(
            SemanticType.FONT_WEIGHT,
            Confidence.HIGH,
            "Value in [100,1000] with weight keywords",
            SchemaHint.FONT_WEIGHT,
        ),
    ),
    ClassificationRule(
        "duration-keyword",
        lambda s: s.mentions(DURATION_KEYWORDS),
        _result(SemanticType.DURATION, Confidence.HIGH, "Duration keywords detected"),
    ),
    ClassificationRule(
        "multiplier-keyword",
        lambda s: s.mentions(MULTIPLIER_KEYWORDS),
        _result(
            SemanticType.MULTIPLIER,
            Confidence.HIGH,
            "Multiplier keywords detected",
            SchemaHint.MULTIPLIER,
        ),
    ),
    ClassificationRule(
        "line-height",
        lambda s: s.in_range(1, 3) and s.mentions(LINE_HEIGHT_KEYWORDS),
        _result(SemanticType.NUMBER, Confidence.HIGH, "Line height keywords detected"),
    ),
    ClassificationRule(
        "font-size-keyword",
        lambda s: s.mentions(FONT_SIZE_KEYWORDS),
        _result(
            SemanticType.DIMENSION,
            Confidence.HIGH,
            "Font size keywords detected",
            SchemaHint.FONT_SIZE,
        ),
    ),
    ClassificationRule(
        "dimension-keyword",
        lambda s: s.mentions(DIMENSION_KEYWORDS),
        _result(
            SemanticType.DIMENSION,
            Confidence.HIGH,
            "Dimension keywords detected",
            SchemaHint.DIMENSION,
        ),
    ),
    ClassificationRule(
        "common-spacing-value",
        lambda s: s.number is not None and s.number in COMMON_SPACING_VALUES,
        _result(
            SemanticType.DIMENSION,
            Confidence.MEDIUM,
            "Value matches a common spacing scale step",
            SchemaHint.DIMENSION,
        ),
    ),
    ClassificationRule(
        "float-fallback",
        lambda s: True,
        _result(
            SemanticType.DIMENSION,
            Confidence.LOW,
            "No specific pattern detected, defaulting to dimension",
            SchemaHint.DIMENSION,
        ),
    ),
)

STRING_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "font-family",
        lambda s: _is_font_family_name(s) or _is_font_name(s.text),
        _result(
            SemanticType.FONT_FAMILY,
            Confidence.HIGH,
            "Font family keywords or font name detected",
            SchemaHint.FONT_FAMILY,
        ),
    ),
    ClassificationRule(
        "font-weight",
        lambda s: s.mentions(FONT_WEIGHT_KEYWORDS, include_description=False)
        or _is_weight_name(s.text),
        _result(
            SemanticType.FONT_WEIGHT,
            Confidence.HIGH,
            "Font weight keywords or weight name detected",
            SchemaHint.FONT_WEIGHT,
        ),
    ),
    ClassificationRule(
        "unit-suffix",
        lambda s: _has_unit_suffix(s.text),
        _result(
            SemanticType.DIMENSION,
            Confidence.HIGH,
            "Value carries a dimension unit",
            SchemaHint.DIMENSION,
        ),
    ),
    ClassificationRule(
        "string-fallback",
        lambda s: True,
        _result(SemanticType.STRING, Confidence.MEDIUM, "Generic string value"),
    ),
)

_ALIAS_RESULT = _result(
    SemanticType.ALIAS, Confidence.HIGH, "Value is an alias reference", SchemaHint.ALIAS
)
_COLOR_RESULT = _result(
    SemanticType.COLOR, Confidence.HIGH, "Declared COLOR variable", SchemaHint.COLOR
)
_BOOLEAN_RESULT = _result(SemanticType.NUMBER, Confidence.HIGH, "boolean coerced to 0/1")


# =============================================================================
# Public API
# =============================================================================


def run_rules(rules: Sequence[ClassificationRule], signals: Signals) -> ClassificationRule | None:
    """Return the first rule in *rules* that matches *signals*."""
    for rule in rules:
        if rule.matches(signals):
            return rule
    return None


def classify(variable: Variable, value: Any) -> ClassificationResult:
    """Classify one (variable, value) pair.

    Total: never raises. The worst case is a low-confidence generic result.

    Args:
        variable: The variable supplying name, description and scope signals.
        value: One resolved value of that variable (for a single mode).

    Returns:
        ClassificationResult with semantic type, confidence and reason.
    """
    if is_alias(value):
        return _ALIAS_RESULT

    primitive = variable.resolved_type
    if primitive == ResolvedPrimitive.COLOR:
        return _COLOR_RESULT
    if primitive == ResolvedPrimitive.BOOLEAN:
        return _BOOLEAN_RESULT

    if primitive == ResolvedPrimitive.STRING:
        rules = STRING_RULES
    elif primitive == ResolvedPrimitive.FLOAT:
        rules = FLOAT_RULES
    else:
        return _result(
            SemanticType.STRING,
            Confidence.LOW,
            f"Unknown primitive kind: {primitive or '(empty)'}",
        )

    rule = run_rules(rules, Signals.from_variable(variable, value))
    if rule is None:  # pragma: no cover - both tables end with a catch-all
        return _result(SemanticType.STRING, Confidence.LOW, "No rule matched")
    return rule.result


def font_weight_from_name(name: str, default: int = 400) -> int:
    """Map a named weight ("bold") to its numeric value."""
    return NAMED_FONT_WEIGHTS.get(name.strip().lower(), default)
