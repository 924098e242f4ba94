"""Tests for UI message handling."""

import asyncio

from design_engine.errors import HostError
from design_engine.plugin import PluginController
from design_engine.scene.memory import MemoryHost

REQUEST = {"type": "create-from-html", "html": "<p>Hello</p>", "css": ""}


class FailingHost(MemoryHost):
    """Host whose first frame creations fail."""

    def __init__(self, failures=1):
        super().__init__()
        self.failures = failures

    async def create_frame(self):
        if self.failures:
            self.failures -= 1
            raise HostError("frame creation failed")
        return await super().create_frame()


class TestMessages:
    def test_successful_conversion(self, config):
        host = MemoryHost()
        asyncio.run(PluginController(host, config).handle_message(REQUEST))
        assert host.messages == [{"type": "processing"}, {"type": "success"}]
        assert host.top_level_nodes[0].children[0].characters == "Hello"

    def test_failure_is_reported(self, config):
        host = FailingHost()
        asyncio.run(PluginController(host, config).handle_message(REQUEST))
        assert host.messages == [
            {"type": "processing"},
            {"type": "error", "message": "frame creation failed"},
        ]

    def test_controller_survives_failure(self, config):
        host = FailingHost()
        controller = PluginController(host, config)

        async def _run():
            await controller.handle_message(REQUEST)
            await controller.handle_message(REQUEST)

        asyncio.run(_run())
        assert [message["type"] for message in host.messages] == ["processing", "error", "processing", "success"]

    def test_cancel_closes_plugin(self, config):
        host = MemoryHost()
        asyncio.run(PluginController(host, config).handle_message({"type": "cancel"}))
        assert host.closed
        assert host.messages == []

    def test_unknown_messages_are_ignored(self, config):
        host = MemoryHost()
        controller = PluginController(host, config)
        asyncio.run(controller.handle_message({"type": "resize"}))
        asyncio.run(controller.handle_message("not a message"))
        assert host.messages == []
        assert not host.closed

    def test_missing_fields_default_to_empty(self, config):
        host = MemoryHost()
        asyncio.run(PluginController(host, config).handle_message({"type": "create-from-html"}))
        assert host.messages[-1] == {"type": "success"}


class TestSerialization:
    def test_overlapping_requests_run_one_after_another(self, config):
        host = MemoryHost()
        controller = PluginController(host, config)

        async def _run():
            await asyncio.gather(
                controller.handle_message(REQUEST),
                controller.handle_message({"type": "create-from-html", "html": "<p>Second</p>"}),
            )

        asyncio.run(_run())
        assert [message["type"] for message in host.messages] == ["processing", "success", "processing", "success"]
        roots = host.top_level_nodes
        assert [root.children[0].characters for root in roots] == ["Hello", "Second"]


class SilentFailingHost(MemoryHost):
    """Host raising an exception without a message."""

    async def create_frame(self):
        raise RuntimeError()


class TestErrorMessages:
    def test_empty_exception_text_gets_a_message(self, config):
        host = SilentFailingHost()
        asyncio.run(PluginController(host, config).handle_message(REQUEST))
        assert host.messages[-1] == {"type": "error", "message": "An unknown error occurred"}


class TestEventLoops:
    def test_controller_is_reusable_across_event_loops(self, config):
        host = MemoryHost()
        controller = PluginController(host, config)

        async def _run():
            await asyncio.gather(controller.handle_message(REQUEST), controller.handle_message(REQUEST))

        asyncio.run(_run())
        asyncio.run(_run())
        assert [message["type"] for message in host.messages] == ["processing", "success"] * 4
