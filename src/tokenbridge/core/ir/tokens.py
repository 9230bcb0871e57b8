"""
Token-side IR types: semantic types, confidence grades and classification results.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SemanticType(StrEnum):
    """Semantic token type inferred for a variable value."""

    COLOR = "color"
    DIMENSION = "dimension"
    OPACITY = "opacity"
    FONT_WEIGHT = "fontWeight"
    DURATION = "duration"
    MULTIPLIER = "multiplier"
    FONT_FAMILY = "fontFamily"
    NUMBER = "number"
    STRING = "string"
    ALIAS = "alias"


class Confidence(StrEnum):
    """How strong the evidence behind a classification was."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SchemaHint(StrEnum):
    """Finer-grained target hint carried alongside a semantic type."""

    COLOR = "color"
    DIMENSION = "dimension"
    BORDER_RADIUS = "borderRadius"
    FONT_SIZE = "fontSize"
    OPACITY = "opacity"
    MULTIPLIER = "multiplier"
    FONT_WEIGHT = "fontWeight"
    FONT_FAMILY = "fontFamily"
    ALIAS = "alias"


# Vendor key for tokenbridge data under a canonical token's $extensions
EXTENSION_NAMESPACE = "com.tokenbridge"


class SchemaKind(StrEnum):
    """Output schema a constructed token belongs to."""

    CANONICAL = "canonical"
    EXTENDED = "extended"


class ClassificationResult(BaseModel):
    """Outcome of classifying one (variable, value) pair."""

    model_config = ConfigDict(frozen=True)

    semantic_type: SemanticType
    confidence: Confidence
    reason: str
    target_schema_hint: SchemaHint | None = Field(default=None)
