"""
Parsers for HTML fragments, documents and stylesheets.
"""

from .css_parser import CSSParser, Rule, parse_declarations
from .html_parser import HTMLParser, parse_html, parse_attributes
from .document import load_document

__all__ = [
    'CSSParser', 'Rule', 'parse_declarations',
    'HTMLParser', 'parse_html', 'parse_attributes',
    'load_document',
]
