#!/usr/bin/env python3
"""
stealth-browser: launch a stealth browser and print its fingerprint.

Useful to check which evasions are active and what a page can observe.
"""

import argparse
import asyncio
import json
import logging
from typing import List, Optional

from stealth_plugin.browser.manager import BrowserManager
from stealth_plugin.config import StealthConfig
from stealth_plugin.plugin import StealthPlugin

logger = logging.getLogger("stealth-browser")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Stealth browser launcher")
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available evasions and exit",
    )
    parser.add_argument(
        "--only",
        action="append",
        default=[],
        metavar="NAME",
        help="Enable only this evasion (repeatable)",
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="NAME",
        help="Disable an evasion (repeatable)",
    )
    parser.add_argument(
        "--url",
        default="about:blank",
        help="URL to open before probing (default: about:blank)",
    )
    parser.add_argument("--screenshot", help="Save a screenshot to this path")
    parser.add_argument(
        "--headful",
        action="store_true",
        help="Launch with a visible window",
    )
    return parser


def configure_plugin(args: argparse.Namespace, config: StealthConfig) -> StealthPlugin:
    """Build the plugin from env configuration and command line overrides."""
    plugin = StealthPlugin()
    if args.only:
        plugin.enabled_evasions = args.only
    else:
        plugin.enabled_evasions = config.resolve_enabled_evasions(plugin.available_evasions)
    for name in args.disable:
        plugin.enabled_evasions.discard(name)
    return plugin


def format_evasions(plugin: StealthPlugin) -> str:
    lines = []
    for name in plugin.available_evasions:
        marker = "x" if name in plugin.enabled_evasions else " "
        lines.append(f"[{marker}] {name}")
    return "\n".join(lines)


async def probe(manager: BrowserManager, url: str, screenshot: Optional[str] = None) -> dict:
    """Open a page, navigate and return the fingerprint probe."""
    page = await manager.new_page()
    await page.goto(url, wait_until="load")
    if screenshot:
        await page.screenshot(path=screenshot)
        logger.info(f"Screenshot saved: {screenshot}")
    return await manager.check_stealth(page)


async def main(argv: Optional[List[str]] = None) -> int:
    """Entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    config = StealthConfig()
    plugin = configure_plugin(args, config)

    if args.list:
        print(format_evasions(plugin))
        return 0

    if args.headful:
        config.headless = False

    manager = BrowserManager(plugin=plugin, config=config)
    try:
        await manager.start()
        result = await probe(manager, args.url, args.screenshot)
    finally:
        await manager.stop()

    print(json.dumps(result, indent=2))
    return 0


def run():
    """Console script wrapper."""
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
