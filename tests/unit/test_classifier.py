"""Tests for semantic type classification."""

import math

import pytest

from tokenbridge.core.classifier import classify
from tokenbridge.core.ir import (
    AliasReference,
    ColorComponents,
    Confidence,
    SchemaHint,
    SemanticType,
    Variable,
)


def make_variable(id, name, resolved_type, values, **kwargs):
    return Variable(id=id, name=name, resolved_type=resolved_type, values_by_mode=values, **kwargs)


def alias(target_id: str) -> AliasReference:
    return AliasReference(target_variable_id=target_id)


def float_var(name: str, value, description: str = "", scopes=()):
    return make_variable(
        "f", name, "FLOAT", {"m1": value}, description=description, scope_hints=frozenset(scopes)
    )


def string_var(name: str, value):
    return make_variable("s", name, "STRING", {"m1": value})


class TestFloatCascade:
    """Each step of the FLOAT rule table, in priority order."""

    def test_corner_radius_scope(self):
        result = classify(float_var("opacity", 0.5, scopes=["CORNER_RADIUS"]), 0.5)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.HIGH
        assert result.target_schema_hint == SchemaHint.BORDER_RADIUS

    def test_radius_keyword(self):
        result = classify(float_var("corner-radius-100", 4), 4)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.HIGH
        assert result.target_schema_hint == SchemaHint.BORDER_RADIUS

    def test_radius_keyword_in_description(self):
        result = classify(float_var("card/shape", 8, description="Rounded card corners"), 8)
        assert result.target_schema_hint == SchemaHint.BORDER_RADIUS

    def test_unit_interval_with_opacity_keyword(self):
        result = classify(float_var("overlay-opacity", 0.5), 0.5)
        assert result.semantic_type == SemanticType.OPACITY
        assert result.confidence == Confidence.HIGH

    def test_unit_interval_with_multiplier_keyword(self):
        result = classify(float_var("scale-factor", 0.5), 0.5)
        assert result.semantic_type == SemanticType.MULTIPLIER
        assert result.confidence == Confidence.HIGH

    def test_unit_interval_without_keywords(self):
        result = classify(float_var("surface/tint", 0.4), 0.4)
        assert result.semantic_type == SemanticType.OPACITY
        assert result.confidence == Confidence.MEDIUM

    def test_font_weight(self):
        result = classify(float_var("font-weight-bold", 700), 700)
        assert result.semantic_type == SemanticType.FONT_WEIGHT
        assert result.target_schema_hint == SchemaHint.FONT_WEIGHT

    def test_weight_keyword_outside_range_falls_through(self):
        result = classify(float_var("weight", 50), 50)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.LOW

    def test_duration(self):
        result = classify(float_var("animation-duration", 200), 200)
        assert result.semantic_type == SemanticType.DURATION
        assert result.confidence == Confidence.HIGH
        assert result.target_schema_hint is None

    def test_multiplier_keyword(self):
        result = classify(float_var("scale-large", 2), 2)
        assert result.semantic_type == SemanticType.MULTIPLIER

    def test_line_height(self):
        result = classify(float_var("line-height-body", 1.5), 1.5)
        assert result.semantic_type == SemanticType.NUMBER
        assert result.confidence == Confidence.HIGH

    def test_font_size(self):
        result = classify(float_var("font-size-body", 16), 16)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.target_schema_hint == SchemaHint.FONT_SIZE

    def test_dimension_keyword(self):
        result = classify(float_var("spacing-md", 16), 16)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.HIGH
        assert result.target_schema_hint == SchemaHint.DIMENSION

    def test_common_spacing_value(self):
        result = classify(float_var("foo", 24), 24)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.MEDIUM

    def test_fallback_is_low_confidence_dimension(self):
        result = classify(float_var("foo", 13), 13)
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.LOW

    def test_non_finite_value_falls_back(self):
        result = classify(float_var("foo", math.nan), math.nan)
        assert result.confidence == Confidence.LOW


class TestStringCascade:
    def test_font_family_keyword(self):
        result = classify(string_var("font-family-base", "Whatever"), "Whatever")
        assert result.semantic_type == SemanticType.FONT_FAMILY
        assert result.target_schema_hint == SchemaHint.FONT_FAMILY

    def test_font_segment_with_font_name(self):
        result = classify(string_var("typography/font", "Helvetica"), "Helvetica")
        assert result.semantic_type == SemanticType.FONT_FAMILY

    def test_known_font_name_value(self):
        result = classify(string_var("heading", "Open Sans"), "Open Sans")
        assert result.semantic_type == SemanticType.FONT_FAMILY

    def test_font_weight_name(self):
        result = classify(string_var("typography/weight", "bold"), "bold")
        assert result.semantic_type == SemanticType.FONT_WEIGHT

    def test_unit_suffix(self):
        result = classify(string_var("spacing/sm", "16px"), "16px")
        assert result.semantic_type == SemanticType.DIMENSION
        assert result.confidence == Confidence.HIGH

    def test_generic_string(self):
        result = classify(string_var("label", "hello"), "hello")
        assert result.semantic_type == SemanticType.STRING
        assert result.confidence == Confidence.MEDIUM


class TestPrimitiveKinds:
    def test_color(self):
        value = ColorComponents(r=1, g=0, b=0)
        result = classify(make_variable("c", "brand", "COLOR", {"m1": value}), value)
        assert result.semantic_type == SemanticType.COLOR
        assert result.confidence == Confidence.HIGH

    def test_boolean_is_number(self):
        result = classify(make_variable("b", "flag", "BOOLEAN", {"m1": True}), True)
        assert result.semantic_type == SemanticType.NUMBER
        assert result.reason == "boolean coerced to 0/1"

    def test_alias_wins_over_declared_kind(self):
        result = classify(make_variable("c", "brand", "COLOR", {"m1": alias("x")}), alias("x"))
        assert result.semantic_type == SemanticType.ALIAS
        assert result.confidence == Confidence.HIGH

    def test_unknown_primitive(self):
        result = classify(make_variable("x", "thing", "VECTOR", {"m1": 1}), 1)
        assert result.semantic_type == SemanticType.STRING
        assert result.confidence == Confidence.LOW


class TestProperties:
    @pytest.mark.parametrize("name", ["font-size", "opacity", "duration", "spacing", "foo"])
    def test_corner_radius_scope_beats_any_name(self, name):
        result = classify(float_var(name, 0.5, scopes=["CORNER_RADIUS"]), 0.5)
        assert result.target_schema_hint == SchemaHint.BORDER_RADIUS

    @pytest.mark.parametrize("value", [None, "text", [], {}, object()])
    def test_classify_is_total(self, value):
        result = classify(float_var("anything", 1), value)
        assert result.semantic_type in set(SemanticType)

    def test_same_input_same_output(self):
        variable = float_var("spacing-md", 16)
        assert classify(variable, 16) == classify(variable, 16)
