"""Tests for CSS color parsing."""

import pytest

from design_engine.css.color import is_color_token, parse_color, solid_color


class TestHexColors:
    @pytest.mark.parametrize("value", ["#000", "#fff", "#a1b", "#123456", "#abcdef", "#12345678", "#ffffff00"])
    def test_channels_in_unit_range(self, value):
        color = parse_color(value)
        for channel in ("r", "g", "b"):
            assert 0.0 <= color[channel] <= 1.0

    def test_short_hex_expands_digits(self):
        assert parse_color("#f00") == {"r": 1.0, "g": 0.0, "b": 0.0}

    def test_long_hex(self):
        color = parse_color("#336699")
        assert color["r"] == pytest.approx(0x33 / 255)
        assert color["g"] == pytest.approx(0x66 / 255)
        assert color["b"] == pytest.approx(0x99 / 255)
        assert "opacity" not in color

    def test_eight_digit_hex_carries_alpha(self):
        color = parse_color("#ff000080")
        assert color["r"] == 1.0
        assert color["opacity"] == pytest.approx(128 / 255)

    def test_uppercase_hex(self):
        assert parse_color("#FFF") == {"r": 1.0, "g": 1.0, "b": 1.0}


class TestFunctionalColors:
    def test_rgb(self):
        assert parse_color("rgb(255, 0, 0)") == {"r": 1.0, "g": 0.0, "b": 0.0}

    def test_rgb_without_spaces(self):
        assert parse_color("rgb(0,255,0)") == {"r": 0.0, "g": 1.0, "b": 0.0}

    def test_rgba_reports_opacity(self):
        color = parse_color("rgba(0, 0, 255, 0.5)")
        assert color == {"r": 0.0, "g": 0.0, "b": 1.0, "opacity": 0.5}

    def test_channels_are_clamped(self):
        assert parse_color("rgb(300, 0, 0)")["r"] == 1.0

    def test_alpha_is_clamped(self):
        assert parse_color("rgba(0, 0, 0, 2)")["opacity"] == 1.0


class TestNamedAndFallback:
    def test_named_color(self):
        assert parse_color("gray") == {"r": 0.5, "g": 0.5, "b": 0.5}

    def test_named_color_is_case_insensitive(self):
        assert parse_color("  Red ") == {"r": 1.0, "g": 0.0, "b": 0.0}

    def test_unknown_color_is_black(self):
        assert parse_color("rebeccapurple") == {"r": 0.0, "g": 0.0, "b": 0.0}

    def test_invalid_hex_is_black(self):
        assert parse_color("#zzz") == {"r": 0.0, "g": 0.0, "b": 0.0}

    def test_empty_is_none(self):
        assert parse_color("") is None
        assert parse_color(None) is None

    def test_named_result_is_a_copy(self):
        color = parse_color("white")
        color["r"] = 0.0
        assert parse_color("white")["r"] == 1.0


class TestColorTokens:
    @pytest.mark.parametrize("token", ["red", "#333", "rgb(1,2,3)", "rgba(1,2,3,0.5)"])
    def test_color_tokens(self, token):
        assert is_color_token(token)

    @pytest.mark.parametrize("token", ["4px", "inset", "solid", "#xyz"])
    def test_non_color_tokens(self, token):
        assert not is_color_token(token)

    def test_solid_color_drops_opacity(self):
        assert solid_color({"r": 1.0, "g": 0.5, "b": 0.0, "opacity": 0.2}) == {"r": 1.0, "g": 0.5, "b": 0.0}
