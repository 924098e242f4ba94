"""
Design Engine - Convert HTML and CSS fragments into design-canvas nodes.
"""

import logging

# Package information
__version__ = "0.1.0"
__author__ = "html-to-design Team"
__description__ = "Convert HTML and CSS fragments into design-canvas nodes"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from design_engine.converter import create_from_html  # noqa: E402
from design_engine.plugin import PluginController  # noqa: E402
from design_engine.scene.memory import MemoryHost  # noqa: E402

__all__ = ['create_from_html', 'PluginController', 'MemoryHost', '__version__']
