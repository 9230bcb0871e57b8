"""Tests for token value predicates."""

import math

import pytest

from tokenbridge.core.predicates import (
    is_number,
    is_valid_alias,
    is_valid_color,
    is_valid_color_object,
    is_valid_dimension,
    is_valid_duration,
    is_valid_font_weight,
    is_valid_hex_color,
    is_valid_multiplier,
    is_valid_opacity,
    is_valid_rgb,
    is_valid_rgba,
)


class TestNumbers:
    def test_bool_is_not_a_number(self):
        assert is_number(1)
        assert is_number(1.5)
        assert not is_number(True)
        assert not is_number("1")

    def test_multiplier_rejects_negative_and_nan(self):
        assert is_valid_multiplier(0)
        assert is_valid_multiplier(2.5)
        assert not is_valid_multiplier(-1)
        assert not is_valid_multiplier(math.nan)
        assert not is_valid_multiplier(math.inf)


class TestColors:
    @pytest.mark.parametrize("value", ["#fff", "#FFFA", "#ff8800", "#FF880080"])
    def test_valid_hex(self, value):
        assert is_valid_hex_color(value)
        assert is_valid_color(value)

    @pytest.mark.parametrize("value", ["fff", "#ff888", "#ggg", "#1234567", "", None, 123])
    def test_invalid_hex(self, value):
        assert not is_valid_hex_color(value)

    def test_rgb_components_must_be_in_unit_interval(self):
        assert is_valid_rgb({"r": 1, "g": 0.5, "b": 0})
        assert not is_valid_rgb({"r": 2, "g": 0, "b": 0})
        assert not is_valid_rgb({"r": 1, "g": 0})
        assert not is_valid_rgb([1, 0, 0])

    def test_rgba_requires_alpha(self):
        assert is_valid_rgba({"r": 1, "g": 0, "b": 0, "a": 0.5})
        assert not is_valid_rgba({"r": 1, "g": 0, "b": 0})
        assert not is_valid_rgba({"r": 1, "g": 0, "b": 0, "a": 1.5})

    def test_color_object(self):
        value = {"colorSpace": "srgb", "components": [1, 0, 0], "hex": "#FF0000"}
        assert is_valid_color_object(value)
        assert is_valid_color(value)
        assert not is_valid_color_object({"colorSpace": "srgb", "components": [1, 0]})
        assert not is_valid_color_object({"components": [1, 0, 0]})
        assert not is_valid_color_object({**value, "alpha": 2})


class TestDimensionsAndDurations:
    @pytest.mark.parametrize(
        "value", [0, 16, 1.5, "16px", "1.5rem", "2em", "50%", {"value": 4, "unit": "px"}]
    )
    def test_valid_dimension(self, value):
        assert is_valid_dimension(value)

    @pytest.mark.parametrize(
        "value", [-1, math.inf, "16", "16pt", "-4px", {"value": 4, "unit": "pt"}, None]
    )
    def test_invalid_dimension(self, value):
        assert not is_valid_dimension(value)

    def test_duration(self):
        assert is_valid_duration(200)
        assert is_valid_duration({"value": 0.2, "unit": "s"})
        assert not is_valid_duration({"value": 200, "unit": "px"})
        assert not is_valid_duration("200ms")
        assert not is_valid_duration(-10)


class TestScalars:
    def test_opacity(self):
        assert is_valid_opacity(0)
        assert is_valid_opacity(1)
        assert not is_valid_opacity(1.01)
        assert not is_valid_opacity("0.5")

    @pytest.mark.parametrize("value", [100, 400, 900, "bold", "normal", "700"])
    def test_valid_font_weight(self, value):
        assert is_valid_font_weight(value)

    @pytest.mark.parametrize("value", [0, 450, 1000, "heavy", None])
    def test_invalid_font_weight(self, value):
        assert not is_valid_font_weight(value)

    def test_alias(self):
        assert is_valid_alias("{color.brand.primary}")
        assert not is_valid_alias("{color brand}")
        assert not is_valid_alias("{a}{b}")
        assert not is_valid_alias("{{a}}")
        assert not is_valid_alias("color.brand")


class TestWholeStringMatch:
    @pytest.mark.parametrize("suffix", ["\n", " ", "\r\n", "x"])
    def test_trailing_text_is_rejected(self, suffix):
        assert not is_valid_alias("{color.red}" + suffix)
        assert not is_valid_dimension("16px" + suffix)
        assert not is_valid_hex_color("#FFFFFF" + suffix)

    def test_leading_text_is_rejected(self):
        assert not is_valid_alias("\n{color.red}")
        assert not is_valid_dimension(" 16px")
        assert not is_valid_hex_color(" #FFFFFF")


class TestTotality:
    @pytest.mark.parametrize("value", [None, object(), [], {}, b"x", math.nan, True])
    def test_predicates_never_raise(self, value):
        for predicate in (
            is_valid_rgb,
            is_valid_rgba,
            is_valid_color,
            is_valid_dimension,
            is_valid_duration,
            is_valid_opacity,
            is_valid_font_weight,
            is_valid_multiplier,
            is_valid_alias,
        ):
            assert predicate(value) in (True, False)
