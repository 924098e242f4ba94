"""
HTML to design conversion.
Runs the whole pipeline: container frame, parsing, cascade and scene building.
"""

import logging
from typing import Any, Optional

from design_engine.css.cascade import apply_css
from design_engine.parser.css_parser import CSSParser
from design_engine.parser.document import load_document
from design_engine.parser.html_parser import HTMLParser
from design_engine.scene.builder import SceneBuilder
from design_engine.scene.host import Host
from design_engine.utils.config import Config
from design_engine.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)


async def create_root_frame(host: Host, config: Config) -> Any:
    """Create the vertical auto-layout frame that holds a conversion's output."""
    frame = await host.create_frame()
    frame.name = config.get('root_frame.name', 'HTML to Design')
    frame.layout_mode = 'VERTICAL'
    frame.primary_axis_sizing_mode = 'AUTO'
    frame.counter_axis_sizing_mode = 'AUTO'
    frame.primary_axis_align_items = 'MIN'
    frame.counter_axis_align_items = 'MIN'
    frame.item_spacing = config.get('root_frame.item_spacing', 12)

    padding = config.get('root_frame.padding', 16)
    frame.padding_left = padding
    frame.padding_right = padding
    frame.padding_top = padding
    frame.padding_bottom = padding
    return frame


async def create_from_html(host: Host, html_content: str, css_content: str = "",
                           config: Optional[Config] = None) -> Any:
    """
    Convert HTML and CSS into design nodes.

    Args:
        host: Host the nodes are created in
        html_content: HTML fragment or full document
        css_content: Stylesheet applied on top of any embedded ``<style>``
        config: Configuration, defaults used when omitted

    Returns:
        The root frame, selected and zoomed into view
    """
    config = config or Config()
    perf = PerformanceLogger(logger, "Conversion")

    root = await create_root_frame(host, config)

    perf.start("parse")
    fragment, css = load_document(html_content, css_content)
    nodes = HTMLParser().parse(fragment)
    rules = CSSParser().parse(css)
    perf.end("parse")
    logger.info(f"Parsed {len(nodes)} top-level node(s) and {len(rules)} CSS rule(s)")

    perf.start("cascade")
    apply_css(nodes, rules)
    perf.end("cascade")

    perf.start("build")
    await SceneBuilder(host, config).build(root, nodes)
    perf.end("build")

    host.set_selection([root])
    host.scroll_and_zoom_into_view([root])

    return root
