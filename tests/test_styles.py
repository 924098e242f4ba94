"""Tests for applying style maps to host nodes."""

import asyncio

import pytest

from design_engine.scene.memory import MemoryHost
from design_engine.scene.styles import StyleApplicator, configure_flex


def styled_text(styles, host=None, characters="Sample"):
    host = host or MemoryHost()

    async def _run():
        await host.load_font({"family": "Inter", "style": "Regular"})
        text = await host.create_text()
        text.characters = characters
        await StyleApplicator(host).apply(text, styles)
        return text
    return asyncio.run(_run())


def styled_frame(styles, host=None):
    host = host or MemoryHost()

    async def _run():
        frame = await host.create_frame()
        await StyleApplicator(host).apply(frame, styles)
        return frame
    return asyncio.run(_run())


class TestTextStyles:
    def test_letter_spacing(self):
        assert styled_text({"letter-spacing": "3px"}).letter_spacing == {"unit": "PIXELS", "value": 3}
        assert styled_text({"letter-spacing": "0.2em"}).letter_spacing == {"unit": "PERCENT", "value": 20}

    def test_line_height(self):
        assert styled_text({"line-height": "180%"}).line_height == {"unit": "PERCENT", "value": 180}
        assert styled_text({"line-height": "20px"}).line_height == {"unit": "PIXELS", "value": 20}

    def test_unsupported_line_height_keeps_default(self):
        assert styled_text({"line-height": "1.5"}).line_height == {"unit": "AUTO"}

    def test_color_alpha_becomes_opacity(self):
        text = styled_text({"color": "rgba(255, 0, 0, 0.5)"})
        assert text.fills == [{"type": "SOLID", "color": {"r": 1.0, "g": 0.0, "b": 0.0}}]
        assert text.opacity == 0.5

    def test_explicit_opacity_wins_over_color_alpha(self):
        text = styled_text({"color": "rgba(255, 0, 0, 0.5)", "opacity": "80%"})
        assert text.opacity == pytest.approx(0.8)

    def test_font_size_and_weight(self):
        text = styled_text({"font-size": "18px", "font-weight": "bold"})
        assert text.font_size == 18
        assert text.font_name == {"family": "Inter", "style": "Bold"}

    def test_text_align(self):
        assert styled_text({"text-align": "center"}).text_align_horizontal == "CENTER"

    def test_compound_text_decoration(self):
        assert styled_text({"text-decoration": "underline solid red"}).text_decoration == "UNDERLINE"

    def test_text_decoration_falls_back_to_regular_font(self):
        host = MemoryHost()
        asyncio.run(host.load_font({"family": "Inter", "style": "Bold"}))
        text = styled_text({"font-weight": "bold"}, host=host)
        host.unavailable_fonts.add(("Inter", "Bold"))
        host.loaded_fonts.discard(("Inter", "Bold"))

        asyncio.run(StyleApplicator(host).apply(text, {"text-decoration": "line-through"}))

        assert text.font_name == {"family": "Inter", "style": "Regular"}
        assert text.text_decoration == "STRIKETHROUGH"

    def test_frame_only_properties_are_ignored_on_text(self):
        text = styled_text({"background-color": "red", "padding": "10px"})
        assert text.fills == []


class TestFrameStyles:
    def test_background_border_radius_padding(self):
        frame = styled_frame({
            "background-color": "#00ff00",
            "border": "2px solid blue",
            "border-radius": "8px",
            "padding": "12px",
        })
        assert frame.fills == [{"type": "SOLID", "color": {"r": 0.0, "g": 1.0, "b": 0.0}}]
        assert frame.strokes == [{"type": "SOLID", "color": {"r": 0.0, "g": 0.0, "b": 1.0}}]
        assert frame.stroke_weight == 2
        assert frame.corner_radius == 8
        assert (frame.padding_top, frame.padding_right, frame.padding_bottom, frame.padding_left) == (12, 12, 12, 12)

    def test_size(self):
        frame = styled_frame({"width": "320px", "height": "40px"})
        assert (frame.width, frame.height) == (320, 40)

    def test_box_shadow(self):
        frame = styled_frame({"box-shadow": "0 4px 12px rgba(0,0,0,0.2)"})
        assert len(frame.effects) == 1
        assert frame.effects[0]["type"] == "DROP_SHADOW"

    def test_display_none_hides(self):
        assert styled_frame({"display": "none"}).visible is False

    def test_display_block(self):
        frame = styled_frame({"display": "block"})
        assert frame.layout_mode == "VERTICAL"
        assert frame.layout_sizing_horizontal == "FILL"
        assert frame.item_spacing == 10

    def test_display_inline(self):
        frame = styled_frame({"display": "inline"})
        assert frame.layout_mode == "HORIZONTAL"
        assert frame.item_spacing == 5

    def test_opacity_is_clamped(self):
        assert styled_frame({"opacity": "1.7"}).opacity == 1.0

    def test_failing_step_does_not_stop_the_rest(self):
        frame = styled_frame({"width": "0px", "background-color": "red", "opacity": "0.3"})
        assert frame.width == 100
        assert frame.fills[0]["color"] == {"r": 1.0, "g": 0.0, "b": 0.0}
        assert frame.opacity == pytest.approx(0.3)

    def test_failing_font_does_not_stop_frame_styles(self):
        host = MemoryHost(unavailable_fonts=[("Inter", "Regular")])
        text = asyncio.run(host.create_text())
        asyncio.run(StyleApplicator(host).apply(text, {"font-size": "20px", "opacity": "0.5"}))
        assert text.font_size == 12
        assert text.opacity == 0.5


class TestFlex:
    def test_column_flex(self):
        frame = styled_frame({
            "display": "flex",
            "flex-direction": "column",
            "justify-content": "space-between",
            "align-items": "center",
            "gap": "12px",
        })
        assert frame.layout_mode == "VERTICAL"
        assert frame.primary_axis_sizing_mode == "AUTO"
        assert frame.counter_axis_sizing_mode == "AUTO"
        assert frame.primary_axis_align_items == "SPACE_BETWEEN"
        assert frame.counter_axis_align_items == "CENTER"
        assert frame.item_spacing == 12

    def test_row_flex_defaults(self):
        frame = styled_frame({"display": "flex"})
        assert frame.layout_mode == "HORIZONTAL"
        assert frame.primary_axis_align_items == "MIN"
        assert frame.counter_axis_align_items == "MIN"
        assert frame.item_spacing == 10
        assert frame.get_plugin_data("align_items") == "stretch"

    def test_configure_flex_uses_column_gap(self):
        frame = asyncio.run(MemoryHost().create_frame())
        configure_flex(frame, {"column-gap": "6px", "align-items": "flex-end"})
        assert frame.item_spacing == 6
        assert frame.counter_axis_align_items == "MAX"
        assert frame.get_plugin_data("align_items") == ""
