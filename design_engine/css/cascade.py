"""
CSS cascade.
Resolves the effective style map of every node from tag, class, id and inline
declarations.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Set, Union

from design_engine.dom import Node, NodeType
from design_engine.parser.css_parser import CSSParser, Rule

logger = logging.getLogger(__name__)


def merge_styles(*sources: Mapping[str, str]) -> Dict[str, str]:
    """
    Shallow-merge style maps into a new dictionary, later sources winning.

    None of the sources is modified.
    """
    merged: Dict[str, str] = {}
    for source in sources:
        merged.update(source)
    return merged


def tag_selectors(node: Node) -> Set[str]:
    """Tag selectors that address a node: its source tag and its type name."""
    selectors = {node.node_type.value}
    if node.tag:
        selectors.add(node.tag)
    if node.node_type is NodeType.PARAGRAPH:
        selectors.add('p')
    elif node.node_type is NodeType.HEADING and node.level:
        selectors.add(f"h{node.level}")
    return selectors


class Cascade:
    """
    Resolves styles against an ordered rule list.

    Precedence, lowest to highest: tag rules, class rules (in the order the
    classes appear on the element), id rules, the inline ``style`` attribute.
    Within a tier, rules apply in stylesheet order. Properties are never
    inherited from parents.
    """

    def __init__(self, rules: Iterable[Rule]):
        self.rules: List[Rule] = list(rules)

    def resolve(self, node: Node) -> Dict[str, str]:
        """
        Compute the style map of one node.

        Args:
            node: Element node

        Returns:
            Dict[str, str]: A new style map
        """
        tags = tag_selectors(node)
        sources: List[Mapping[str, str]] = [
            rule.styles for rule in self.rules if rule.selector in tags
        ]

        for class_name in node.attributes.classes:
            sources.extend(rule.styles for rule in self.rules if rule.selector == f".{class_name}")

        if node.attributes.id:
            sources.extend(rule.styles for rule in self.rules if rule.selector == f"#{node.attributes.id}")

        sources.append(node.attributes.style)

        return merge_styles(*sources)

    def apply(self, nodes: List[Node]) -> List[Node]:
        """
        Assign resolved styles to every element node of a forest.

        Text nodes carry no styles and are left untouched.

        Returns:
            The same forest, for chaining
        """
        for node in nodes:
            if node.is_text:
                continue
            node.styles = self.resolve(node)
            if node.styles:
                logger.debug(f"Resolved styles for {node.node_type.value} <{node.tag}>: {node.styles}")
            self.apply(node.children)
        return nodes


def apply_css(nodes: List[Node], css: Union[str, Iterable[Rule]]) -> List[Node]:
    """
    Parse ``css`` (unless it is already a rule list) and apply it to ``nodes``.
    """
    rules = CSSParser().parse(css) if isinstance(css, str) else css
    return Cascade(rules).apply(nodes)
