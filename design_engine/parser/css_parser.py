"""
CSS parser implementation.
This module turns a stylesheet into an ordered list of rules and inline
``style`` attributes into declaration maps.
"""

import logging
from typing import Dict, List

import tinycss2

logger = logging.getLogger(__name__)


class Rule:
    """One ``selector { declarations }`` block, selector kept as a raw token."""

    def __init__(self, selector: str, styles: Dict[str, str]):
        self.selector = selector
        self.styles = styles

    def __eq__(self, other) -> bool:
        if not isinstance(other, Rule):
            return NotImplemented
        return self.selector == other.selector and self.styles == other.styles

    def __repr__(self) -> str:
        return f"Rule({self.selector!r}, {self.styles!r})"


def parse_declarations(declaration_str: str) -> Dict[str, str]:
    """
    Parse a CSS declaration string into a dictionary of property-value pairs.

    Declarations are split on ``;`` and then on the first ``:``. Property names
    are lower-cased; declarations with an empty property or value are dropped.
    A property repeated later in the string replaces the earlier value.

    Args:
        declaration_str: CSS declaration string

    Returns:
        Dictionary of property-value pairs
    """
    styles: Dict[str, str] = {}

    if not declaration_str:
        return styles

    for declaration in declaration_str.split(';'):
        if ':' not in declaration:
            continue
        property_name, property_value = declaration.split(':', 1)
        property_name = property_name.strip().lower()
        property_value = property_value.strip()
        if property_name and property_value:
            styles[property_name] = property_value

    return styles


class CSSParser:
    """Stylesheet parser built on tinycss2 tokenization."""

    def parse(self, css_content: str) -> List[Rule]:
        """
        Parse CSS content into rules, in the order they appear.

        At-rules are skipped and tokenizer errors are logged; parsing never
        raises on malformed input.

        Args:
            css_content: CSS content to parse

        Returns:
            List[Rule]: Parsed rules in textual order
        """
        rules: List[Rule] = []

        if not css_content or not css_content.strip():
            return rules

        for node in tinycss2.parse_stylesheet(css_content, skip_comments=True, skip_whitespace=True):
            if node.type == 'qualified-rule':
                selector = tinycss2.serialize(node.prelude).strip()
                body = tinycss2.serialize(
                    [token for token in node.content if token.type != 'comment']
                )
                styles = parse_declarations(body)
                rules.append(Rule(selector, styles))
                logger.debug(f"Parsed CSS rule for selector '{selector}': {styles}")
            elif node.type == 'at-rule':
                logger.debug(f"Skipping unsupported at-rule @{node.at_keyword}")
            elif node.type == 'error':
                logger.debug(f"Skipping malformed CSS: {node.message}")

        return rules

    def parse_inline_styles(self, style_attr: str) -> Dict[str, str]:
        """
        Parse an inline style attribute.

        Args:
            style_attr: Inline style attribute value

        Returns:
            Dictionary of CSS properties
        """
        return parse_declarations(style_attr)
