"""
In-memory host.
Records the scene a conversion produces so it can be inspected or exported as
JSON without a design editor.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from design_engine.errors import FontLoadError, HostError
from design_engine.scene.host import FontName, Host

logger = logging.getLogger(__name__)

DEFAULT_FONT: FontName = {'family': 'Inter', 'style': 'Regular'}

# Text properties the editor refuses to change before the font is loaded
FONT_BOUND_PROPERTIES = {
    'characters', 'font_size', 'font_name', 'text_decoration',
    'letter_spacing', 'line_height',
}

# Rough glyph metrics used to size text nodes
CHAR_WIDTH_RATIO = 0.6
LINE_HEIGHT_RATIO = 1.2


def _font_key(font_name: FontName) -> Tuple[str, str]:
    return font_name.get('family', ''), font_name.get('style', '')


class SceneNode:
    """A text or frame node living in a :class:`MemoryHost`."""

    def __init__(self, node_type: str, host: 'MemoryHost', node_id: str):
        self.id = node_id
        self.type = node_type
        self.name = 'Text' if node_type == 'TEXT' else 'Frame'
        self.parent: Optional['SceneNode'] = None
        self.children: List['SceneNode'] = []

        self.x = 0.0
        self.y = 0.0
        self.width = 0.0 if node_type == 'TEXT' else 100.0
        self.height = 0.0 if node_type == 'TEXT' else 100.0
        self.opacity = 1.0
        self.visible = True
        self.fills: List[Dict[str, Any]] = []
        self.strokes: List[Dict[str, Any]] = []
        self.stroke_weight = 1
        self.effects: List[Dict[str, Any]] = []
        self.corner_radius = 0

        self.layout_mode = 'NONE'
        self.primary_axis_sizing_mode = 'FIXED'
        self.counter_axis_sizing_mode = 'FIXED'
        self.primary_axis_align_items = 'MIN'
        self.counter_axis_align_items = 'MIN'
        self.item_spacing = 0
        self.padding_left = 0
        self.padding_right = 0
        self.padding_top = 0
        self.padding_bottom = 0
        self.layout_sizing_horizontal = 'FIXED'
        self.layout_sizing_vertical = 'FIXED'

        self.characters = ''
        self.font_name: FontName = dict(DEFAULT_FONT)
        self.font_size = 12
        self.text_decoration = 'NONE'
        self.text_align_horizontal = 'LEFT'
        self.letter_spacing: Dict[str, Any] = {'unit': 'PERCENT', 'value': 0}
        self.line_height: Dict[str, Any] = {'unit': 'AUTO'}
        self.range_decorations: List[Dict[str, Any]] = []

        self._plugin_data: Dict[str, str] = {}
        self._host = host

    def __setattr__(self, name: str, value: Any) -> None:
        host = self.__dict__.get('_host')
        if host is not None and self.type == 'TEXT' and name in FONT_BOUND_PROPERTIES:
            host.ensure_font_loaded(value if name == 'font_name' else self.font_name)
            super().__setattr__(name, value)
            self._auto_size()
            return
        super().__setattr__(name, value)

    def _auto_size(self) -> None:
        lines = self.characters.split('\n') if self.characters else []
        longest = max((len(line) for line in lines), default=0)
        object.__setattr__(self, 'width', round(longest * self.font_size * CHAR_WIDTH_RATIO, 2))
        object.__setattr__(self, 'height', round(len(lines) * self.font_size * LINE_HEIGHT_RATIO, 2))
        if self.parent is not None:
            self.parent.relayout()

    def resize(self, width: float, height: float) -> None:
        if width < 0.01 or height < 0.01:
            raise HostError(f"Cannot resize {self.type.lower()} to {width}x{height}")
        self.width = width
        self.height = height
        if self.parent is not None:
            self.parent.relayout()

    def append_child(self, child: 'SceneNode') -> None:
        if self.type != 'FRAME':
            raise HostError(f"{self.type} nodes cannot have children")
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        self.relayout()

    def set_range_text_decoration(self, start: int, end: int, decoration: str) -> None:
        if self.type != 'TEXT':
            raise HostError("Range decorations only apply to text nodes")
        self._host.ensure_font_loaded(self.font_name)
        if not 0 <= start < end <= len(self.characters):
            raise HostError(f"Invalid range [{start}, {end}) for text of length {len(self.characters)}")
        self.range_decorations.append({'start': start, 'end': end, 'decoration': decoration})

    def set_plugin_data(self, key: str, value: str) -> None:
        self._plugin_data[key] = value

    def get_plugin_data(self, key: str) -> str:
        return self._plugin_data.get(key, '')

    def relayout(self) -> None:
        """Arrange children and hug their size when this frame uses auto-layout."""
        if self.type != 'FRAME' or self.layout_mode == 'NONE':
            return

        vertical = self.layout_mode == 'VERTICAL'
        flow = [child for child in self.children if child.visible]

        cursor = self.padding_top if vertical else self.padding_left
        cross = 0.0
        for child in flow:
            if vertical:
                object.__setattr__(child, 'x', self.padding_left)
                object.__setattr__(child, 'y', cursor)
                cursor += child.height + self.item_spacing
                cross = max(cross, child.width)
            else:
                object.__setattr__(child, 'x', cursor)
                object.__setattr__(child, 'y', self.padding_top)
                cursor += child.width + self.item_spacing
                cross = max(cross, child.height)
        if flow:
            cursor -= self.item_spacing

        main_size = cursor + (self.padding_bottom if vertical else self.padding_right)
        cross_size = cross + (self.padding_left + self.padding_right if vertical
                              else self.padding_top + self.padding_bottom)

        width, height = (cross_size, main_size) if vertical else (main_size, cross_size)
        if self.primary_axis_sizing_mode == 'AUTO':
            if vertical:
                object.__setattr__(self, 'height', height)
            else:
                object.__setattr__(self, 'width', width)
        if self.counter_axis_sizing_mode == 'AUTO':
            if vertical:
                object.__setattr__(self, 'width', width)
            else:
                object.__setattr__(self, 'height', height)

        if self.parent is not None:
            self.parent.relayout()

    def find_all(self, node_type: Optional[str] = None) -> List['SceneNode']:
        """All descendants (self included), optionally filtered by type."""
        found = [self] if node_type in (None, self.type) else []
        for child in self.children:
            found.extend(child.find_all(node_type))
        return found

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'type': self.type,
            'name': self.name,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'opacity': self.opacity,
            'visible': self.visible,
            'fills': self.fills,
            'strokes': self.strokes,
            'strokeWeight': self.stroke_weight,
            'effects': self.effects,
        }
        if self.type == 'TEXT':
            data.update({
                'characters': self.characters,
                'fontName': self.font_name,
                'fontSize': self.font_size,
                'textDecoration': self.text_decoration,
                'textAlignHorizontal': self.text_align_horizontal,
                'letterSpacing': self.letter_spacing,
                'lineHeight': self.line_height,
                'rangeDecorations': self.range_decorations,
                'layoutSizingHorizontal': self.layout_sizing_horizontal,
                'layoutSizingVertical': self.layout_sizing_vertical,
            })
        else:
            data.update({
                'cornerRadius': self.corner_radius,
                'layoutMode': self.layout_mode,
                'primaryAxisSizingMode': self.primary_axis_sizing_mode,
                'counterAxisSizingMode': self.counter_axis_sizing_mode,
                'primaryAxisAlignItems': self.primary_axis_align_items,
                'counterAxisAlignItems': self.counter_axis_align_items,
                'itemSpacing': self.item_spacing,
                'padding': [self.padding_top, self.padding_right, self.padding_bottom, self.padding_left],
                'layoutSizingHorizontal': self.layout_sizing_horizontal,
                'layoutSizingVertical': self.layout_sizing_vertical,
                'children': [child.to_dict() for child in self.children],
            })
        return data

    def __repr__(self) -> str:
        label = self.characters if self.type == 'TEXT' else self.name
        return f"SceneNode({self.type}, {label!r})"


class MemoryHost(Host):
    """
    Host that keeps every node in memory.

    Args:
        unavailable_fonts: (family, style) pairs whose loading fails
    """

    def __init__(self, unavailable_fonts: Optional[Iterable[Tuple[str, str]]] = None):
        self.unavailable_fonts: Set[Tuple[str, str]] = set(unavailable_fonts or ())
        self.loaded_fonts: Set[Tuple[str, str]] = set()
        self.nodes: List[SceneNode] = []
        self.selection: List[SceneNode] = []
        self.viewport: List[SceneNode] = []
        self.messages: List[Dict[str, Any]] = []
        self.closed = False
        self._next_id = 1

    def _new_node(self, node_type: str) -> SceneNode:
        node = SceneNode(node_type, self, f"{self._next_id}:1")
        self._next_id += 1
        self.nodes.append(node)
        return node

    async def create_text(self) -> SceneNode:
        await asyncio.sleep(0)
        return self._new_node('TEXT')

    async def create_frame(self) -> SceneNode:
        await asyncio.sleep(0)
        return self._new_node('FRAME')

    async def load_font(self, font_name: FontName) -> None:
        await asyncio.sleep(0)
        key = _font_key(font_name)
        if key in self.unavailable_fonts:
            raise FontLoadError(font_name)
        self.loaded_fonts.add(key)
        logger.debug(f"Loaded font {key[0]} {key[1]}")

    def is_font_loaded(self, font_name: FontName) -> bool:
        return _font_key(font_name) in self.loaded_fonts

    def ensure_font_loaded(self, font_name: FontName) -> None:
        if not self.is_font_loaded(font_name):
            raise FontLoadError(font_name, f"Font '{font_name.get('family')} {font_name.get('style')}' "
                                           f"must be loaded before editing text")

    def set_selection(self, nodes: List[SceneNode]) -> None:
        self.selection = list(nodes)

    def scroll_and_zoom_into_view(self, nodes: List[SceneNode]) -> None:
        self.viewport = list(nodes)

    def post_message(self, message: Dict[str, Any]) -> None:
        logger.debug(f"UI message: {message}")
        self.messages.append(message)

    def close_plugin(self) -> None:
        logger.info("Plugin closed")
        self.closed = True

    @property
    def top_level_nodes(self) -> List[SceneNode]:
        return [node for node in self.nodes if node.parent is None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [node.to_dict() for node in self.top_level_nodes],
            'selection': [node.id for node in self.selection],
        }
