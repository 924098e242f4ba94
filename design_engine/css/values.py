"""
Parsers for individual CSS property values.
Each function turns one CSS string into the structured value the host expects,
and returns None (or an empty list) instead of raising on bad input.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from design_engine.css.color import is_color_token, parse_color, solid_color

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r'-?\d*\.?\d+')
LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')
LEADING_FLOAT_PATTERN = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+))')
INSET_PATTERN = re.compile(r'\binset\b', re.IGNORECASE)
RGB_FUNCTION_PATTERN = re.compile(r'rgba?\([^)]+\)', re.IGNORECASE)
HEX_PATTERN = re.compile(r'#[0-9a-fA-F]{3,8}\b')
LETTER_SPACING_PATTERN = re.compile(r'^(-?\d*\.?\d+)(px|em|%)$')
LINE_HEIGHT_PATTERN = re.compile(r'^(-?\d*\.?\d+)(px|%)$')

DEFAULT_SHADOW_COLOR = 'rgba(0,0,0,0.25)'

# CSS justify-content / align-items to auto-layout alignment
PRIMARY_AXIS_ALIGN = {
    'flex-start': 'MIN',
    'start': 'MIN',
    'center': 'CENTER',
    'flex-end': 'MAX',
    'end': 'MAX',
    'space-between': 'SPACE_BETWEEN',
}

COUNTER_AXIS_ALIGN = {
    'flex-start': 'MIN',
    'start': 'MIN',
    'center': 'CENTER',
    'flex-end': 'MAX',
    'end': 'MAX',
    'baseline': 'BASELINE',
}

TEXT_ALIGN = {
    'left': 'LEFT',
    'center': 'CENTER',
    'right': 'RIGHT',
}


def parse_length(value: Optional[str]) -> Optional[int]:
    """
    Read the leading integer of a CSS value, ignoring any unit.

    ``"12px"`` gives 12, ``"12.7em"`` gives 12 and ``"auto"`` gives None.
    """
    if not value:
        return None
    match = LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else None


def parse_number(value: Optional[str]) -> Optional[float]:
    """Read the leading decimal number of a CSS value, ignoring any unit."""
    if not value:
        return None
    match = LEADING_FLOAT_PATTERN.match(value)
    return float(match.group(1)) if match else None


def parse_opacity(value: Optional[str]) -> Optional[float]:
    """
    Parse an opacity value such as ``0.4`` or ``40%``, clamped to [0, 1].
    """
    number = parse_number(value)
    if number is None:
        return None
    if '%' in value:
        number = number / 100
    return max(0.0, min(1.0, number))


def split_shadows(shadow_string: str) -> List[str]:
    """Split a box-shadow list on commas that are not inside parentheses."""
    parts = []
    depth = 0
    start = 0
    for index, char in enumerate(shadow_string):
        if char == '(':
            depth += 1
        elif char == ')':
            depth = max(0, depth - 1)
        elif char == ',' and depth == 0:
            parts.append(shadow_string[start:index])
            start = index + 1
    parts.append(shadow_string[start:])
    return parts


def _to_number(token: Optional[str]) -> float:
    if not token:
        return 0.0
    match = NUMBER_PATTERN.search(token)
    return float(match.group(0)) if match else 0.0


def _take_color(shadow: str) -> Tuple[Optional[str], str]:
    """Remove the color from one shadow, returning (color, remainder)."""
    match = RGB_FUNCTION_PATTERN.search(shadow) or HEX_PATTERN.search(shadow)
    if match:
        remainder = shadow[:match.start()] + shadow[match.end():]
        return match.group(0), remainder.strip()

    tokens = shadow.split()
    if tokens and is_color_token(tokens[-1]):
        return tokens[-1], ' '.join(tokens[:-1])

    return None, shadow


def parse_box_shadow(shadow_string: Optional[str]) -> List[Dict[str, Any]]:
    """
    Parse a CSS ``box-shadow`` into shadow effects.

    Every comma-separated shadow becomes one effect. ``inset`` anywhere in a
    shadow makes it an INNER_SHADOW. The remaining tokens are read as
    ``offset-x offset-y blur spread``; spread has no effect equivalent and is
    dropped. A shadow without a color uses ``rgba(0,0,0,0.25)``.

    Args:
        shadow_string: CSS box-shadow value

    Returns:
        List of effect dictionaries (empty for ``none`` or blank input)
    """
    effects: List[Dict[str, Any]] = []

    if not shadow_string or shadow_string.strip().lower() == 'none':
        return effects

    for raw in split_shadows(shadow_string):
        shadow = raw.strip()
        if not shadow:
            continue

        inset = False
        if INSET_PATTERN.search(shadow):
            inset = True
            shadow = INSET_PATTERN.sub('', shadow, count=1).strip()

        color_string, shadow = _take_color(shadow)
        tokens = shadow.split()

        offset_x = _to_number(tokens[0] if len(tokens) > 0 else None)
        offset_y = _to_number(tokens[1] if len(tokens) > 1 else None)
        blur = _to_number(tokens[2] if len(tokens) > 2 else None)

        color = parse_color(color_string or DEFAULT_SHADOW_COLOR)
        effects.append({
            'type': 'INNER_SHADOW' if inset else 'DROP_SHADOW',
            'visible': True,
            'color': dict(solid_color(color), a=color.get('opacity', 1.0)),
            'blendMode': 'NORMAL',
            'offset': {'x': offset_x, 'y': offset_y},
            'radius': blur,
        })

    return effects


def parse_letter_spacing(value: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse ``letter-spacing``.

    ``normal`` maps to unit NORMAL, ``px`` to PIXELS and ``em`` to PERCENT
    with 1em = 100%. Percentages pass through as PERCENT.
    """
    if not value:
        return None

    value = value.strip().lower()
    if value == 'normal':
        return {'unit': 'NORMAL', 'value': 0}

    match = LETTER_SPACING_PATTERN.match(value)
    if not match:
        return None

    number = float(match.group(1))
    unit = match.group(2)
    if unit == 'px':
        return {'unit': 'PIXELS', 'value': number}
    if unit == 'em':
        return {'unit': 'PERCENT', 'value': round(number * 100, 6)}
    return {'unit': 'PERCENT', 'value': number}


def parse_line_height(value: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse ``line-height``: ``<n>%`` is PERCENT, ``<n>px`` is PIXELS and
    ``normal`` is AUTO. Unitless ratios are not supported.
    """
    if not value:
        return None

    value = value.strip().lower()
    if value == 'normal':
        return {'unit': 'AUTO'}

    match = LINE_HEIGHT_PATTERN.match(value)
    if not match:
        return None

    unit = 'PIXELS' if match.group(2) == 'px' else 'PERCENT'
    return {'unit': unit, 'value': float(match.group(1))}


def parse_text_decoration(value: Optional[str]) -> Optional[str]:
    """
    Map ``text-decoration`` to UNDERLINE, STRIKETHROUGH or NONE.

    Compound values such as ``underline solid red`` are searched for the
    decoration line keyword.
    """
    if not value:
        return None

    decoration = value.lower().strip()
    if 'underline' in decoration:
        return 'UNDERLINE'
    if 'line-through' in decoration or 'strikethrough' in decoration:
        return 'STRIKETHROUGH'
    if decoration == 'none':
        return 'NONE'
    return None


def parse_font_weight(value: Optional[str]) -> Optional[bool]:
    """Return True for bold weights, False for regular ones, None if unknown."""
    if not value:
        return None

    value = value.strip().lower()
    if value == 'bold':
        return True
    if value == 'normal':
        return False

    weight = parse_length(value)
    if weight is None:
        return None
    return weight >= 700


def parse_border(value: Optional[str]) -> Optional[Tuple[int, Dict[str, float]]]:
    """
    Parse a ``<width> <style> <color>`` border shorthand.

    Returns:
        (stroke weight, paint color) or None when the shorthand is incomplete
    """
    if not value:
        return None

    parts = value.split()
    if len(parts) < 3:
        return None

    width = parse_length(parts[0])
    color = parse_color(parts[2])
    if width is None or color is None:
        return None
    return width, solid_color(color)
