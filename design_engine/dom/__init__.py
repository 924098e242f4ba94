"""
Tree model for parsed HTML fragments.
"""

from .node import Node, NodeType, Attributes, DECORATION_TAGS, INLINE_TAGS, iter_nodes

__all__ = ['Node', 'NodeType', 'Attributes', 'DECORATION_TAGS', 'INLINE_TAGS', 'iter_nodes']
