#!/usr/bin/env python3
"""
html-to-design command line tool.

Converts an HTML file into a design scene using the in-memory host and writes
the scene as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional, Tuple

from design_engine.plugin import PluginController
from design_engine.scene.memory import MemoryHost
from design_engine.utils.config import Config
from design_engine.utils.logging import get_default_log_file, setup_logging

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="html-to-design - Convert HTML and CSS into design nodes")
    parser.add_argument('input', nargs='?', default=None, help='HTML file to convert (- for stdin)')
    parser.add_argument('--css', type=str, default=None, help='Stylesheet applied to the markup')
    parser.add_argument('--output', '-o', type=str, default=None, help='Write the scene JSON here instead of stdout')
    parser.add_argument('--config', type=str, default=None, help='Use the specified config file')
    parser.add_argument('--set', dest='overrides', action='append', default=[], metavar='KEY=VALUE',
                        help='Override a config value, e.g. layout.stack_gap=30 (repeatable)')
    parser.add_argument('--write-config', action='store_true',
                        help='Save the configuration (with any --set overrides) to the config file')
    parser.add_argument('--log-file', type=str, default=None, help='Write a debug log to this file')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)
    if args.input is None and not args.write_config:
        parser.error("an input file is required unless --write-config is given")
    return args


def parse_override(override: str) -> Tuple[str, Any]:
    """
    Split a ``KEY=VALUE`` override.

    The value is read as JSON when possible (numbers, booleans, strings in
    quotes) and kept as a plain string otherwise.

    Returns:
        (key, value)

    Raises:
        ValueError: if the override has no ``=`` or an empty key
    """
    key, sep, raw_value = override.partition('=')
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Invalid override '{override}', expected KEY=VALUE")
    try:
        value = json.loads(raw_value)
    except ValueError:
        value = raw_value
    return key, value


def _read(path: str) -> str:
    if path == '-':
        return sys.stdin.read()
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


async def run(html_content: str, css_content: str, config: Config) -> MemoryHost:
    """Run one conversion through the plugin controller."""
    host = MemoryHost()
    controller = PluginController(host, config)
    await controller.handle_message({'type': 'create-from-html', 'html': html_content, 'css': css_content})
    return host


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line tool."""
    args = parse_arguments(argv)

    log_file = args.log_file or (get_default_log_file() if args.debug else None)
    setup_logging(log_file=log_file, console_level="DEBUG" if args.debug else "WARNING")

    config = Config(args.config)
    try:
        for override in args.overrides:
            key, value = parse_override(override)
            config.set(key, value)
    except ValueError as e:
        logger.error(str(e))
        return 1

    if args.write_config:
        config.save()
        logger.info(f"Configuration written to {config.config_path}")
        if args.input is None:
            return 0

    try:
        html_content = _read(args.input)
        css_content = _read(args.css) if args.css else ""
    except OSError as e:
        logger.error(f"Error reading input: {e}")
        return 1

    host = asyncio.run(run(html_content, css_content, config))

    errors = [message for message in host.messages if message.get('type') == 'error']
    if errors:
        logger.error(f"Conversion failed: {errors[-1].get('message')}")
        return 1

    scene = json.dumps(host.to_dict(), indent=2)
    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(scene + "\n")
        logger.info(f"Scene written to {args.output}")
    else:
        print(scene)

    return 0


if __name__ == "__main__":
    sys.exit(main())
