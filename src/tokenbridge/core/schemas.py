"""
Extended-schema URL selection.
"""

from __future__ import annotations

from .ir.settings import DEFAULT_SCHEMA_BASE_URL
from .ir.tokens import ClassificationResult, SchemaHint, SemanticType

# Schema file stem per classifier hint
HINT_SCHEMAS: dict[str, str] = {
    SchemaHint.COLOR: "color",
    SchemaHint.DIMENSION: "dimension",
    SchemaHint.BORDER_RADIUS: "dimension",
    SchemaHint.FONT_SIZE: "font-size",
    SchemaHint.OPACITY: "opacity",
    SchemaHint.MULTIPLIER: "multiplier",
    SchemaHint.FONT_WEIGHT: "font-weight",
    SchemaHint.FONT_FAMILY: "font-family",
    SchemaHint.ALIAS: "alias",
}

# Fallback when the classifier gave no hint
TYPE_SCHEMAS: dict[str, str] = {
    SemanticType.COLOR: "color",
    SemanticType.DIMENSION: "dimension",
    SemanticType.OPACITY: "opacity",
    SemanticType.FONT_WEIGHT: "font-weight",
    SemanticType.FONT_FAMILY: "font-family",
    SemanticType.MULTIPLIER: "multiplier",
    SemanticType.DURATION: "multiplier",
    SemanticType.NUMBER: "multiplier",
    SemanticType.STRING: "alias",
    SemanticType.ALIAS: "alias",
}

COLOR_SET_SCHEMA = "color-set"
SCALE_SET_SCHEMA = "scale-set"


def schema_url(stem: str, base_url: str = DEFAULT_SCHEMA_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{stem}.json"


def schema_for(classification: ClassificationResult, base_url: str = DEFAULT_SCHEMA_BASE_URL) -> str:
    """Pick the schema URL for a single-value extended token."""
    hint = classification.target_schema_hint
    stem = HINT_SCHEMAS.get(hint) if hint else None
    if stem is None:
        stem = TYPE_SCHEMAS.get(classification.semantic_type, "alias")
    return schema_url(stem, base_url)


def set_schema_for(semantic_type: SemanticType, base_url: str = DEFAULT_SCHEMA_BASE_URL) -> str:
    """Schema URL for a multi-mode set token."""
    stem = COLOR_SET_SCHEMA if semantic_type == SemanticType.COLOR else SCALE_SET_SCHEMA
    return schema_url(stem, base_url)
