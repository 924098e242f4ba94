"""Shared fixtures."""

import asyncio

import pytest

from design_engine.converter import create_from_html
from design_engine.scene.memory import MemoryHost
from design_engine.utils.config import Config


@pytest.fixture
def config(tmp_path):
    return Config(str(tmp_path / "config.json"))


@pytest.fixture
def host():
    return MemoryHost()


@pytest.fixture
def convert(host, config):
    """Run a conversion synchronously and return the root frame."""
    def _convert(html, css=""):
        return asyncio.run(create_from_html(host, html, css, config))
    return _convert
