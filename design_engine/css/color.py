"""
CSS color parsing.
Colors are returned as dictionaries of normalized channels, ready to be used
as host paint colors.
"""

import logging
import re
from typing import Dict, Optional

logger = logging.getLogger(__name__)

RGB_PATTERN = re.compile(r'rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)')
RGBA_PATTERN = re.compile(r'rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([\d.]+)\s*\)')

NAMED_COLORS: Dict[str, Dict[str, float]] = {
    'black': {'r': 0.0, 'g': 0.0, 'b': 0.0},
    'white': {'r': 1.0, 'g': 1.0, 'b': 1.0},
    'red': {'r': 1.0, 'g': 0.0, 'b': 0.0},
    'green': {'r': 0.0, 'g': 1.0, 'b': 0.0},
    'blue': {'r': 0.0, 'g': 0.0, 'b': 1.0},
    'yellow': {'r': 1.0, 'g': 1.0, 'b': 0.0},
    'cyan': {'r': 0.0, 'g': 1.0, 'b': 1.0},
    'magenta': {'r': 1.0, 'g': 0.0, 'b': 1.0},
    'gray': {'r': 0.5, 'g': 0.5, 'b': 0.5},
}

BLACK = NAMED_COLORS['black']


def _channel(value: str) -> float:
    return min(255, int(value)) / 255


def _unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def _parse_hex(hex_digits: str) -> Optional[Dict[str, float]]:
    try:
        if len(hex_digits) == 3:
            r, g, b = (int(digit * 2, 16) / 255 for digit in hex_digits)
            return {'r': r, 'g': g, 'b': b}
        if len(hex_digits) in (6, 8):
            channels = [int(hex_digits[i:i + 2], 16) / 255 for i in range(0, len(hex_digits), 2)]
            color = {'r': channels[0], 'g': channels[1], 'b': channels[2]}
            if len(channels) == 4:
                color['opacity'] = channels[3]
            return color
    except ValueError:
        logger.debug(f"Invalid hex color: #{hex_digits}")
    return None


def parse_color(color_string: Optional[str]) -> Optional[Dict[str, float]]:
    """
    Parse a CSS color.

    Supports ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``, ``rgba()`` and a
    small table of named colors. Alpha, when present, is reported separately as
    ``opacity``. Input that cannot be parsed yields opaque black.

    Args:
        color_string: CSS color value

    Returns:
        Dict with ``r``, ``g``, ``b`` (and optionally ``opacity``) in [0, 1],
        or None when no color was given at all
    """
    if not color_string:
        return None

    color_string = color_string.lower().strip()

    if color_string.startswith('#'):
        color = _parse_hex(color_string[1:])
        if color is not None:
            return color

    rgb_match = RGB_PATTERN.search(color_string)
    if rgb_match:
        r, g, b = (_channel(group) for group in rgb_match.groups())
        return {'r': r, 'g': g, 'b': b}

    rgba_match = RGBA_PATTERN.search(color_string)
    if rgba_match:
        r, g, b = (_channel(group) for group in rgba_match.groups()[:3])
        try:
            alpha = _unit(float(rgba_match.group(4)))
        except ValueError:
            alpha = 1.0
        return {'r': r, 'g': g, 'b': b, 'opacity': alpha}

    if color_string in NAMED_COLORS:
        return dict(NAMED_COLORS[color_string])

    logger.debug(f"Unrecognized color '{color_string}', defaulting to black")
    return dict(BLACK)


def is_color_token(token: str) -> bool:
    """Whether a single token spells a color on its own (hex, rgb()/rgba() or a known name)."""
    token = token.lower().strip()
    if token.startswith('#'):
        return _parse_hex(token[1:]) is not None
    return bool(RGB_PATTERN.fullmatch(token) or RGBA_PATTERN.fullmatch(token)) or token in NAMED_COLORS


def solid_color(color: Dict[str, float]) -> Dict[str, float]:
    """Drop the alpha component, leaving a paint color."""
    return {'r': color['r'], 'g': color['g'], 'b': color['b']}
