"""
Host interface.
The design editor the scene is built in. Node creation and font loading may
suspend; everything else is immediate.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

# A font is addressed as {'family': ..., 'style': ...}
FontName = Dict[str, str]


class Host(ABC):
    """
    Base class for design-editor hosts.

    Nodes returned by :meth:`create_text` and :meth:`create_frame` expose the
    editor's node properties as attributes (``name``, ``characters``,
    ``fills``, ``strokes``, ``stroke_weight``, ``corner_radius``,
    ``padding_left``/``right``/``top``/``bottom``, ``layout_mode``,
    ``primary_axis_sizing_mode``, ``counter_axis_sizing_mode``,
    ``primary_axis_align_items``, ``counter_axis_align_items``,
    ``item_spacing``, ``layout_sizing_horizontal``,
    ``layout_sizing_vertical``, ``text_decoration``,
    ``text_align_horizontal``, ``letter_spacing``, ``line_height``,
    ``font_size``, ``font_name``, ``opacity``, ``visible``, ``x``, ``y``,
    ``width``, ``height``, ``effects``, ``children``, ``type``) and the methods
    ``resize``, ``append_child``, ``set_range_text_decoration``,
    ``set_plugin_data`` and ``get_plugin_data``.

    Text properties may only be set once the node's font has been loaded.
    """

    @abstractmethod
    async def create_text(self) -> Any:
        """Create an empty text node."""
        ...

    @abstractmethod
    async def create_frame(self) -> Any:
        """Create an empty frame node."""
        ...

    @abstractmethod
    async def load_font(self, font_name: FontName) -> None:
        """
        Load a font so text using it can be edited.

        Raises:
            FontLoadError: if the font is not available
        """
        ...

    @abstractmethod
    def set_selection(self, nodes: List[Any]) -> None:
        """Replace the current selection."""
        ...

    @abstractmethod
    def scroll_and_zoom_into_view(self, nodes: List[Any]) -> None:
        """Fit the viewport around ``nodes``."""
        ...

    @abstractmethod
    def post_message(self, message: Dict[str, Any]) -> None:
        """Send a message to the plugin UI."""
        ...

    @abstractmethod
    def close_plugin(self) -> None:
        """Terminate the plugin."""
        ...
