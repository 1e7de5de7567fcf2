"""Browser automation components."""

from stealth_plugin.browser.manager import BrowserManager

__all__ = ["BrowserManager"]
