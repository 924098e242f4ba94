"""
Scene builder.
Walks a styled node tree and creates the matching host nodes.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from design_engine.css.values import parse_length, parse_text_decoration
from design_engine.dom import Node, NodeType
from design_engine.scene.host import Host
from design_engine.scene.styles import StyleApplicator
from design_engine.utils.config import Config
from design_engine.utils.logging import log_exception

logger = logging.getLogger(__name__)

# Inline tags and the decoration their text range receives
RANGE_DECORATIONS = {
    'u': 'UNDERLINE',
    's': 'STRIKETHROUGH',
    'strike': 'STRIKETHROUGH',
    'del': 'STRIKETHROUGH',
}


class TextRange:
    """A ``[start, end)`` slice of rich text produced by one inline span."""

    def __init__(self, start: int, end: int, tag: Optional[str], styles: Optional[Dict[str, str]] = None):
        self.start = start
        self.end = end
        self.tag = tag
        self.styles = styles or {}

    @property
    def decoration(self) -> Optional[str]:
        if self.tag in RANGE_DECORATIONS:
            return RANGE_DECORATIONS[self.tag]
        decoration = parse_text_decoration(self.styles.get('text-decoration'))
        return decoration if decoration in ('UNDERLINE', 'STRIKETHROUGH') else None

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end}, {self.tag!r})"


def collect_rich_text(node: Node) -> Tuple[str, List[TextRange]]:
    """
    Concatenate the text below ``node`` and record where each span lands.

    Returns:
        (text, ranges) with ranges in the order their spans close
    """
    parts: List[str] = []
    ranges: List[TextRange] = []
    length = 0

    def visit(children: List[Node]) -> None:
        nonlocal length
        for child in children:
            if child.is_text:
                parts.append(child.content)
                length += len(child.content)
            elif child.node_type is NodeType.SPAN:
                start = length
                if child.children:
                    visit(child.children)
                elif child.content:
                    parts.append(child.content)
                    length += len(child.content)
                ranges.append(TextRange(start, length, child.original_tag, child.styles))
            elif child.children:
                visit(child.children)

    visit(node.children)
    return "".join(parts), ranges


class SceneBuilder:
    """
    Creates host nodes for a styled tree.

    Paragraphs and headings become text nodes holding their whole inline
    content; divs become frames whose children are built recursively; spans
    outside a paragraph or heading become text nodes of their own. Text nodes
    and unknown nodes produce nothing.
    """

    def __init__(self, host: Host, config: Optional[Config] = None):
        self.host = host
        self.config = config or Config()
        self.styles = StyleApplicator(host, self.config)
        self.regular_font = self.styles.regular_font
        self.bold_font = self.styles.bold_font

    async def build(self, parent: Any, nodes: List[Node]) -> List[Any]:
        """
        Build ``nodes`` into ``parent``.

        Args:
            parent: Host frame receiving the top-level nodes
            nodes: Styled forest

        Returns:
            The host nodes created for the top-level nodes
        """
        await self._preload_fonts()

        created = []
        for node in nodes:
            target = await self.build_node(parent, node)
            if target is not None:
                created.append(target)
        return created

    async def _preload_fonts(self) -> None:
        for font in (self.regular_font, self.bold_font):
            try:
                await self.host.load_font(font)
            except Exception as e:
                log_exception(logger, e, "Error pre-loading fonts")

    async def build_node(self, parent: Any, node: Node) -> Optional[Any]:
        """Create, style, attach and position the host node for one tree node."""
        styles = node.styles or {}

        if node.node_type in (NodeType.PARAGRAPH, NodeType.HEADING):
            target = await self._create_text_block(node)
        elif node.node_type is NodeType.SPAN:
            target = await self._create_span(node)
        elif node.node_type is NodeType.DIV:
            target = await self._create_frame(node)
        else:
            return None

        await self.styles.apply(target, styles)

        parent.append_child(target)
        self._position(parent, target, styles)

        if node.node_type is NodeType.DIV:
            if node.children:
                logger.debug(f"Processing {len(node.children)} nested nodes in div")
            for child in node.children:
                await self.build_node(target, child)

        return target

    async def _set_characters(self, target: Any, text: str) -> None:
        try:
            await self.host.load_font(target.font_name or self.regular_font)
            target.characters = text
        except Exception as e:
            log_exception(logger, e, "Error setting text")

    async def _create_text_block(self, node: Node) -> Any:
        target = await self.host.create_text()
        target.name = node.tag or node.node_type.value

        if node.children:
            text, ranges = collect_rich_text(node)
            if not text:
                text = node.content
        else:
            text, ranges = node.content, []

        await self._set_characters(target, text)

        for text_range in ranges:
            decoration = text_range.decoration
            if decoration is None or text_range.start >= text_range.end:
                continue
            try:
                target.set_range_text_decoration(text_range.start, text_range.end, decoration)
            except Exception as e:
                log_exception(logger, e, "Error applying range decoration")

        if node.node_type is NodeType.HEADING:
            base = self.config.get('headings.base_size', 24)
            step = self.config.get('headings.size_step', 2)
            try:
                target.font_size = base - ((node.level or 1) - 1) * step
                target.font_name = dict(self.bold_font)
            except Exception as e:
                log_exception(logger, e, "Error applying heading style")

        return target

    async def _create_span(self, node: Node) -> Any:
        target = await self.host.create_text()
        tag = node.original_tag or 'span'
        target.name = 'span' if tag == 'span' else f"span-{tag}"

        text, _ = collect_rich_text(node)
        await self._set_characters(target, text.strip() or node.content)
        logger.debug(f"Created standalone span from <{tag}> with content: {node.content!r}")
        return target

    async def _create_frame(self, node: Node) -> Any:
        frame = await self.host.create_frame()
        frame.name = 'div'
        frame.resize(self.config.get('layout.frame_width', 200), self.config.get('layout.frame_height', 100))

        if node.content.strip():
            text = await self.host.create_text()
            await self._set_characters(text, node.content)
            frame.append_child(text)
            offset = self.config.get('layout.frame_text_offset', 10)
            text.x = offset
            text.y = offset

        return frame

    def _position(self, parent: Any, target: Any, styles: Dict[str, str]) -> None:
        """
        Place a freshly appended node.

        Auto-layout parents position their children themselves and hidden nodes
        are left alone. Otherwise nodes are stacked vertically below their
        previous sibling, offset by the node's margin.
        """
        if parent.layout_mode != 'NONE':
            self._stretch(parent, target)
            return
        if styles.get('display', '').lower().strip() == 'none':
            return

        gap = self.config.get('layout.stack_gap', 20)
        siblings = parent.children
        if len(siblings) > 1:
            previous = siblings[-2]
            target.y = previous.y + previous.height + gap
        else:
            target.y = gap
        target.x = self.config.get('layout.stack_x', 20)

        margin = parse_length(styles.get('margin'))
        if margin is not None and target.type == 'FRAME':
            target.x += margin
            target.y += margin

    def _stretch(self, parent: Any, target: Any) -> None:
        if parent.get_plugin_data('align_items') != 'stretch':
            return
        direction = parent.get_plugin_data('flex_direction')
        if direction == 'row':
            target.layout_sizing_vertical = 'FILL'
        elif direction == 'column':
            target.layout_sizing_horizontal = 'FILL'
