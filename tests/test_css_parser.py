"""Tests for the stylesheet and declaration parsers."""

from design_engine.parser.css_parser import CSSParser, Rule, parse_declarations


class TestDeclarations:
    def test_basic(self):
        assert parse_declarations("color: red; padding: 4px") == {"color": "red", "padding": "4px"}

    def test_property_names_are_lowercased(self):
        assert parse_declarations("Color: RED") == {"color": "RED"}

    def test_splits_on_first_colon(self):
        styles = parse_declarations("background: url(http://example.com/a.png)")
        assert styles == {"background": "url(http://example.com/a.png)"}

    def test_empty_parts_are_dropped(self):
        assert parse_declarations(": red; color: ; ;; margin: 0") == {"margin": "0"}

    def test_later_declaration_wins(self):
        assert parse_declarations("color: red; color: blue") == {"color": "blue"}

    def test_empty(self):
        assert parse_declarations("") == {}


class TestStylesheet:
    def setup_method(self):
        self.parser = CSSParser()

    def test_rules_in_textual_order(self):
        rules = self.parser.parse("p { color: red; } .note { font-size: 12px }")
        assert rules == [
            Rule("p", {"color": "red"}),
            Rule(".note", {"font-size": "12px"}),
        ]

    def test_id_selector(self):
        rules = self.parser.parse("#flexbox{display:flex;flex-direction:column;gap:12px;}")
        assert rules == [Rule("#flexbox", {"display": "flex", "flex-direction": "column", "gap": "12px"})]

    def test_comments_are_ignored(self):
        rules = self.parser.parse("/* header */ p { color: red; /* inline */ margin: 0 }")
        assert rules == [Rule("p", {"color": "red", "margin": "0"})]

    def test_at_rules_are_skipped(self):
        rules = self.parser.parse("@media screen { p { color: red } } div { color: blue }")
        assert rules == [Rule("div", {"color": "blue"})]

    def test_function_values_survive(self):
        rules = self.parser.parse("div { box-shadow: 0 4px 12px rgba(0, 0, 0, 0.2) }")
        assert rules[0].styles["box-shadow"] == "0 4px 12px rgba(0, 0, 0, 0.2)"

    def test_duplicate_selectors_are_kept(self):
        rules = self.parser.parse("p { color: red } p { color: blue }")
        assert len(rules) == 2

    def test_blank_input(self):
        assert self.parser.parse("") == []
        assert self.parser.parse("   ") == []

    def test_inline_styles(self):
        assert self.parser.parse_inline_styles("opacity: 0.5") == {"opacity": "0.5"}
