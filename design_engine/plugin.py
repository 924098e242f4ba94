"""
Plugin controller.
Handles messages from the plugin UI and reports conversion progress back.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from design_engine.converter import create_from_html
from design_engine.scene.host import Host
from design_engine.utils.config import Config
from design_engine.utils.logging import log_exception

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = 'An unknown error occurred'


class PluginController:
    """
    Dispatches UI messages.

    ``create-from-html`` runs a conversion and answers with ``processing``
    followed by ``success`` or ``error``. ``cancel`` closes the plugin.
    Conversions never overlap: a request arriving while another is running
    waits for it to finish.
    """

    def __init__(self, host: Host, config: Optional[Config] = None):
        self.host = host
        self.config = config or Config()
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

    def _conversion_lock(self) -> asyncio.Lock:
        # A lock belongs to one event loop; the controller may outlive it
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def handle_message(self, message: Dict[str, Any]) -> None:
        """
        Handle one message from the UI.

        Args:
            message: Message with a ``type`` key
        """
        message_type = message.get('type') if isinstance(message, dict) else None

        if message_type == 'create-from-html':
            await self._convert(message.get('html') or '', message.get('css') or '')
        elif message_type == 'cancel':
            self.host.close_plugin()
        else:
            logger.warning(f"Ignoring unknown message type: {message_type}")

    async def _convert(self, html_content: str, css_content: str) -> None:
        lock = self._conversion_lock()
        if lock.locked():
            logger.info("Conversion already running, request queued")

        async with lock:
            self.host.post_message({'type': 'processing'})
            try:
                await create_from_html(self.host, html_content, css_content, self.config)
            except Exception as e:
                log_exception(logger, e, "Conversion failed")
                self.host.post_message({'type': 'error', 'message': str(e) or UNKNOWN_ERROR_MESSAGE})
                return
            self.host.post_message({'type': 'success'})
