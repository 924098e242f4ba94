"""
HTML parser implementation.
This module turns an HTML fragment into a tree of typed nodes with a single
regex scan and an explicit stack of open elements.
"""

import html
import logging
import re
from typing import List

from design_engine.dom import Attributes, DECORATION_TAGS, INLINE_TAGS, Node, NodeType
from design_engine.parser.css_parser import parse_declarations

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r'<\/?([a-zA-Z][a-zA-Z0-9]*)\b([^>]*)>')
COMMENT_PATTERN = re.compile(r'<!--.*?-->', re.DOTALL)
DOCTYPE_PATTERN = re.compile(r'<!doctype[^>]*>', re.IGNORECASE)
HEADING_PATTERN = re.compile(r'^h([1-6])$')
WHITESPACE_PATTERN = re.compile(r'\s+')

CLASS_ATTR_PATTERN = re.compile(r'(?<![\w-])class\s*=\s*(["\'])(.*?)\1', re.DOTALL)
ID_ATTR_PATTERN = re.compile(r'(?<![\w-])id\s*=\s*(["\'])(.*?)\1', re.DOTALL)
STYLE_ATTR_PATTERN = re.compile(r'(?<![\w-])style\s*=\s*(["\'])(.*?)\1', re.DOTALL)

# Set of HTML5 void elements (never have a closing tag)
HTML5_VOID_ELEMENTS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
}

# Node types whose direct text is accumulated into content/raw_content
CONTENT_TYPES = {NodeType.DIV, NodeType.PARAGRAPH, NodeType.HEADING, NodeType.SPAN}


def parse_attributes(attribute_string: str) -> Attributes:
    """
    Parse the ``class``, ``id`` and ``style`` attributes of a tag.

    Args:
        attribute_string: Everything between the tag name and ``>``

    Returns:
        Attributes: Parsed attributes
    """
    attributes = Attributes()

    class_match = CLASS_ATTR_PATTERN.search(attribute_string)
    if class_match:
        attributes.classes = class_match.group(2).split()

    id_match = ID_ATTR_PATTERN.search(attribute_string)
    if id_match:
        attributes.id = id_match.group(2)

    style_match = STYLE_ATTR_PATTERN.search(attribute_string)
    if style_match:
        attributes.style = parse_declarations(style_match.group(2))

    return attributes


class HTMLParser:
    """
    Stack-based HTML fragment parser.

    Recognizes ``div``, ``p``, ``h1``-``h6`` and the inline tags ``span``,
    ``u``, ``s``, ``strike`` and ``del``. Any other tag is parsed like an
    element and then unwrapped, its children taking its place in the parent.

    Closing tags pop the stack until an element with the same tag name has been
    popped. A closing tag that matches nothing open therefore force-closes
    every open element; malformed markup is not repaired any other way.
    """

    def parse(self, html_content: str) -> List[Node]:
        """
        Parse an HTML fragment into an ordered forest of nodes.

        Args:
            html_content: HTML fragment

        Returns:
            List[Node]: Top-level nodes in document order
        """
        root = Node(NodeType.UNKNOWN, tag='#root')
        stack: List[Node] = [root]

        if not html_content:
            return []

        html_content = COMMENT_PATTERN.sub('', html_content)
        html_content = DOCTYPE_PATTERN.sub('', html_content)

        last_index = 0
        for match in TAG_PATTERN.finditer(html_content):
            tag_name = match.group(1).lower()
            attrs = match.group(2)
            is_closing = match.group(0).startswith('</')

            self._append_text(stack[-1], html_content[last_index:match.start()], root)
            last_index = match.end()

            if is_closing:
                self._close(stack, tag_name)
                continue

            if tag_name in HTML5_VOID_ELEMENTS:
                continue

            self_closing = attrs.rstrip().endswith('/')
            node = self._create_node(tag_name, attrs.rstrip().rstrip('/') if self_closing else attrs)
            stack[-1].append_child(node)
            if not self_closing:
                stack.append(node)

        self._append_text(stack[-1], html_content[last_index:], root)

        return self._normalize(root.children)

    def _create_node(self, tag_name: str, attrs: str) -> Node:
        attributes = parse_attributes(attrs)

        heading_match = HEADING_PATTERN.match(tag_name)
        if heading_match:
            return Node(NodeType.HEADING, tag=tag_name, attributes=attributes,
                        level=int(heading_match.group(1)))

        if tag_name == 'p':
            return Node(NodeType.PARAGRAPH, tag=tag_name, attributes=attributes)

        if tag_name == 'div':
            return Node(NodeType.DIV, tag=tag_name, attributes=attributes)

        if tag_name in INLINE_TAGS:
            decoration = DECORATION_TAGS.get(tag_name)
            if decoration:
                attributes.style.setdefault('text-decoration', decoration)
            return Node(NodeType.SPAN, tag=tag_name, attributes=attributes, original_tag=tag_name)

        return Node(NodeType.UNKNOWN, tag=tag_name, attributes=attributes)

    def _append_text(self, node: Node, text: str, root: Node) -> None:
        if not text:
            return
        # Formatting whitespace between top-level elements is not content
        if node is root and not text.strip():
            return

        text = html.unescape(text)
        node.append_child(Node(NodeType.TEXT, content=text))
        if node.node_type in CONTENT_TYPES:
            node.content += text
            node.raw_content += text

    def _close(self, stack: List[Node], tag_name: str) -> None:
        while len(stack) > 1:
            node = stack.pop()
            if node.tag == tag_name:
                return
            logger.debug(f"Force-closing <{node.tag}> while looking for </{tag_name}>")

    def _normalize(self, nodes: List[Node]) -> List[Node]:
        out: List[Node] = []

        for node in nodes:
            if node.node_type is NodeType.UNKNOWN:
                out.extend(self._normalize(node.children))
                continue

            if node.children:
                node.children = self._normalize(node.children)

            if not node.is_text:
                node.content = WHITESPACE_PATTERN.sub(' ', node.content).strip()
                node.raw_content = node.raw_content.strip()

            if node.node_type is NodeType.PARAGRAPH and not node.content and not node.children:
                continue

            out.append(node)

        return out


def parse_html(html_content: str) -> List[Node]:
    """Parse an HTML fragment with a fresh :class:`HTMLParser`."""
    return HTMLParser().parse(html_content)

