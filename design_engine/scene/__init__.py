"""
Scene construction against a design-editor host.
"""

from .host import Host, FontName
from .memory import MemoryHost, SceneNode
from .styles import StyleApplicator, configure_flex
from .builder import SceneBuilder, TextRange, collect_rich_text

__all__ = [
    'Host', 'FontName', 'MemoryHost', 'SceneNode',
    'StyleApplicator', 'configure_flex',
    'SceneBuilder', 'TextRange', 'collect_rich_text',
]
