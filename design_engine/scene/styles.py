"""
Style application.
Maps a resolved CSS style map onto host node properties.
"""

import logging
from typing import Any, Dict, Optional

from design_engine.css.color import parse_color, solid_color
from design_engine.css.values import (
    COUNTER_AXIS_ALIGN,
    PRIMARY_AXIS_ALIGN,
    TEXT_ALIGN,
    parse_border,
    parse_box_shadow,
    parse_font_weight,
    parse_length,
    parse_letter_spacing,
    parse_line_height,
    parse_opacity,
    parse_text_decoration,
)
from design_engine.scene.host import FontName, Host
from design_engine.utils.config import Config
from design_engine.utils.logging import log_exception

logger = logging.getLogger(__name__)


def configure_flex(frame: Any, styles: Dict[str, str], default_gap: int = 10) -> None:
    """
    Turn a frame into an auto-layout container following its flex styles.

    ``align-items: stretch`` has no alignment equivalent; it is recorded as
    plugin data so children can be stretched along the cross axis when they
    are appended.
    """
    direction = styles.get('flex-direction', 'row').lower().strip()
    frame.layout_mode = 'VERTICAL' if direction == 'column' else 'HORIZONTAL'
    frame.primary_axis_sizing_mode = 'AUTO'
    frame.counter_axis_sizing_mode = 'AUTO'

    justify = styles.get('justify-content', 'flex-start').lower().strip()
    align = styles.get('align-items', 'stretch').lower().strip()
    frame.primary_axis_align_items = PRIMARY_AXIS_ALIGN.get(justify, 'MIN')
    frame.counter_axis_align_items = COUNTER_AXIS_ALIGN.get(align, 'MIN')
    if align == 'stretch':
        frame.set_plugin_data('align_items', 'stretch')
    frame.set_plugin_data('flex_direction', direction)

    gap = parse_length(styles.get('gap') or styles.get('column-gap') or styles.get('row-gap'))
    frame.item_spacing = gap if gap is not None else default_gap


class StyleApplicator:
    """
    Applies style maps to host nodes.

    Every property is applied in its own guarded step: a step that raises is
    logged and skipped, and the remaining steps still run.
    """

    STEPS = (
        'color', 'background_color', 'box_shadow', 'font_size', 'font_weight',
        'size', 'border', 'border_radius', 'padding', 'display', 'text_align',
        'opacity', 'letter_spacing', 'line_height', 'text_decoration',
    )

    def __init__(self, host: Host, config: Optional[Config] = None):
        self.host = host
        self.config = config or Config()
        family = self.config.get('fonts.family', 'Inter')
        self.regular_font: FontName = {'family': family, 'style': self.config.get('fonts.regular_style', 'Regular')}
        self.bold_font: FontName = {'family': family, 'style': self.config.get('fonts.bold_style', 'Bold')}

    async def apply(self, target: Any, styles: Optional[Dict[str, str]]) -> None:
        """
        Apply a style map to a node.

        Args:
            target: Host text or frame node
            styles: Resolved CSS properties
        """
        if not styles:
            return

        if target.type == 'TEXT':
            try:
                await self.host.load_font(target.font_name or self.regular_font)
            except Exception as e:
                log_exception(logger, e, "Error loading font")

        for step in self.STEPS:
            try:
                await getattr(self, f"_apply_{step}")(target, styles)
            except Exception as e:
                log_exception(logger, e, f"Error applying {step.replace('_', '-')} to {target.name}")

    def _apply_fill(self, target: Any, styles: Dict[str, str], value: str) -> None:
        color = parse_color(value)
        if color is None:
            return
        # Alpha in the color becomes node opacity unless opacity is explicit
        if 'opacity' in color and not styles.get('opacity'):
            target.opacity = color['opacity']
        target.fills = [{'type': 'SOLID', 'color': solid_color(color)}]

    async def _apply_color(self, target: Any, styles: Dict[str, str]) -> None:
        if styles.get('color') and target.type == 'TEXT':
            self._apply_fill(target, styles, styles['color'])

    async def _apply_background_color(self, target: Any, styles: Dict[str, str]) -> None:
        if styles.get('background-color') and target.type == 'FRAME':
            self._apply_fill(target, styles, styles['background-color'])

    async def _apply_box_shadow(self, target: Any, styles: Dict[str, str]) -> None:
        value = styles.get('box-shadow', '').strip()
        if not value:
            return
        if value.lower() == 'none':
            target.effects = []
            return
        effects = parse_box_shadow(value)
        if effects:
            target.effects = effects

    async def _apply_font_size(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'TEXT':
            return
        size = parse_length(styles.get('font-size'))
        if size is not None:
            target.font_size = size

    async def _apply_font_weight(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'TEXT':
            return
        bold = parse_font_weight(styles.get('font-weight'))
        if bold is not None:
            font = dict(self.bold_font if bold else self.regular_font)
            await self.host.load_font(font)
            target.font_name = font

    async def _apply_size(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'FRAME':
            return
        width = parse_length(styles.get('width'))
        if width is not None:
            target.resize(width, target.height)
        height = parse_length(styles.get('height'))
        if height is not None:
            target.resize(target.width, height)

    async def _apply_border(self, target: Any, styles: Dict[str, str]) -> None:
        border = parse_border(styles.get('border'))
        if border is None:
            return
        weight, color = border
        target.strokes = [{'type': 'SOLID', 'color': color}]
        target.stroke_weight = weight

    async def _apply_border_radius(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'FRAME':
            return
        radius = parse_length(styles.get('border-radius'))
        if radius is not None:
            target.corner_radius = radius

    async def _apply_padding(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'FRAME':
            return
        padding = parse_length(styles.get('padding'))
        if padding is not None:
            target.padding_left = padding
            target.padding_right = padding
            target.padding_top = padding
            target.padding_bottom = padding

    async def _apply_display(self, target: Any, styles: Dict[str, str]) -> None:
        display = styles.get('display', '').lower().strip()
        if not display:
            return

        if display == 'none':
            target.visible = False
        elif target.type != 'FRAME':
            logger.debug(f"display: {display} has no effect on {target.type} nodes")
        elif display == 'flex':
            configure_flex(target, styles, self.config.get('layout.flex_gap', 10))
        elif display == 'block':
            target.layout_mode = 'VERTICAL'
            target.layout_sizing_horizontal = 'FILL'
            target.item_spacing = self.config.get('layout.block_item_spacing', 10)
        elif display == 'inline':
            target.layout_mode = 'HORIZONTAL'
            target.layout_sizing_horizontal = 'HUG'
            target.layout_sizing_vertical = 'HUG'
            target.item_spacing = self.config.get('layout.inline_item_spacing', 5)
        else:
            logger.warning(f"Unsupported display value: {display}")

    async def _apply_text_align(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'TEXT':
            return
        alignment = TEXT_ALIGN.get(styles.get('text-align', '').lower().strip())
        if alignment:
            target.text_align_horizontal = alignment

    async def _apply_opacity(self, target: Any, styles: Dict[str, str]) -> None:
        opacity = parse_opacity(styles.get('opacity'))
        if opacity is not None:
            target.opacity = opacity

    async def _apply_letter_spacing(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'TEXT':
            return
        spacing = parse_letter_spacing(styles.get('letter-spacing'))
        if spacing is not None:
            target.letter_spacing = spacing

    async def _apply_line_height(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'TEXT':
            return
        line_height = parse_line_height(styles.get('line-height'))
        if line_height is not None:
            target.line_height = line_height

    async def _apply_text_decoration(self, target: Any, styles: Dict[str, str]) -> None:
        if target.type != 'TEXT' or not styles.get('text-decoration'):
            return

        decoration = parse_text_decoration(styles['text-decoration'])
        if decoration is None:
            logger.warning(f"Unsupported text-decoration value: {styles['text-decoration']}")
            return

        try:
            await self.host.load_font(target.font_name)
            target.text_decoration = decoration
        except Exception as e:
            log_exception(logger, e, "Error applying text decoration, retrying with the regular font")
            await self.host.load_font(self.regular_font)
            target.font_name = dict(self.regular_font)
            target.text_decoration = decoration
