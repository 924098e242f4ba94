"""
CSS value parsing and cascade resolution.
"""

from .color import parse_color, NAMED_COLORS
from .values import (
    parse_box_shadow,
    parse_letter_spacing,
    parse_line_height,
    parse_length,
    parse_opacity,
    parse_text_decoration,
)
from .cascade import Cascade, apply_css, merge_styles

__all__ = [
    'parse_color', 'NAMED_COLORS',
    'parse_box_shadow', 'parse_letter_spacing', 'parse_line_height',
    'parse_length', 'parse_opacity', 'parse_text_decoration',
    'Cascade', 'apply_css', 'merge_styles',
]
