"""
Exceptions raised by the converter and its hosts.
"""


class DesignEngineError(Exception):
    """Base class for converter errors."""


class HostError(DesignEngineError):
    """A host operation (node creation, mutation, selection) failed."""


class FontLoadError(HostError):
    """A font could not be loaded, or a text property was set before its font loaded."""

    def __init__(self, font_name, message=None):
        self.font_name = font_name
        family = font_name.get('family') if isinstance(font_name, dict) else font_name
        style = font_name.get('style') if isinstance(font_name, dict) else ''
        label = f"{family} {style}".strip()
        super().__init__(message or f"Font '{label}' is not available")
