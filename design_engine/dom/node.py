"""
Node implementation for the parsed fragment tree.
This module defines the typed nodes produced by the HTML parser and consumed
by the cascade and the scene builder.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class NodeType(Enum):
    """Kinds of nodes the HTML parser produces."""
    DIV = "div"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    SPAN = "span"
    TEXT = "text"
    UNKNOWN = "unknown"


# Inline tags rewritten to spans, and the text-decoration each one implies
DECORATION_TAGS = {
    'u': 'underline',
    's': 'line-through',
    'strike': 'line-through',
    'del': 'line-through',
}

INLINE_TAGS = {'span'} | set(DECORATION_TAGS)


class Attributes:
    """The subset of HTML attributes the converter understands."""

    def __init__(self, classes: Optional[List[str]] = None, id: Optional[str] = None,
                 style: Optional[Dict[str, str]] = None):
        self.classes: List[str] = list(classes or [])
        self.id = id
        self.style: Dict[str, str] = dict(style or {})

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.classes:
            result['class'] = list(self.classes)
        if self.id is not None:
            result['id'] = self.id
        if self.style:
            result['style'] = dict(self.style)
        return result

    def __repr__(self) -> str:
        return f"Attributes({self.to_dict()!r})"


class Node:
    """
    A node of the parsed tree.

    The node type is fixed at creation and ``children`` keeps document order.
    ``styles`` stays ``None`` until the cascade has resolved it.
    """

    def __init__(self, node_type: NodeType, tag: Optional[str] = None,
                 attributes: Optional[Attributes] = None, content: str = "",
                 level: Optional[int] = None, original_tag: Optional[str] = None):
        self.node_type = node_type
        self.tag = tag
        self.attributes = attributes or Attributes()
        self.content = content
        self.raw_content = content
        self.children: List['Node'] = []
        self.styles: Optional[Dict[str, str]] = None
        self.level = level
        self.original_tag = original_tag

    @property
    def is_text(self) -> bool:
        return self.node_type is NodeType.TEXT

    def append_child(self, child: 'Node') -> 'Node':
        """Append a child node and return it."""
        self.children.append(child)
        return child

    def depth_first(self) -> Iterator['Node']:
        """Traverse the subtree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()

    def text_content(self) -> str:
        """
        Concatenate the text of all descendant text nodes in document order.

        Whitespace is kept verbatim, so spaces around inline tags survive.
        """
        if self.is_text:
            return self.content
        if not self.children:
            return self.content if self.node_type is NodeType.SPAN else ""
        return "".join(child.text_content() for child in self.children)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the subtree to plain data."""
        if self.is_text:
            return {'type': self.node_type.value, 'content': self.content}

        result: Dict[str, Any] = {
            'type': self.node_type.value,
            'attributes': self.attributes.to_dict(),
            'content': self.content,
            'rawContent': self.raw_content,
            'children': [child.to_dict() for child in self.children],
        }
        if self.styles is not None:
            result['styles'] = dict(self.styles)
        if self.level is not None:
            result['level'] = self.level
        if self.original_tag is not None:
            result['originalTag'] = self.original_tag
        return result

    def __repr__(self) -> str:
        if self.is_text:
            return f"Node(text, {self.content!r})"
        return f"Node({self.node_type.value}, tag={self.tag!r}, children={len(self.children)})"


def iter_nodes(nodes: List[Node]) -> Iterator[Node]:
    """Depth-first iteration over a forest."""
    for node in nodes:
        yield from node.depth_first()
