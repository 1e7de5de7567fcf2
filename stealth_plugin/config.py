"""
Environment configuration for the stealth browser.
"""

import os
import logging
from typing import Optional, Dict, Any, Iterable, List

logger = logging.getLogger(__name__)


def _parse_list(value: Optional[str]) -> Optional[List[str]]:
    """Parse a comma separated env value. Unset means None, not empty."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


class StealthConfig:
    """Configuration for stealth browser automation."""

    def __init__(self):
        self.stealth_mode = os.getenv("STEALTH_MODE", "true").lower() == "true"
        self.headless = os.getenv("HEADLESS", "true").lower() == "true"
        self.channel = os.getenv("BROWSER_CHANNEL", "chrome")
        self.cdp_endpoint = os.getenv("BROWSER_CDP_ENDPOINT") or None
        self.locale = os.getenv("BROWSER_LOCALE", "en-US")
        self.enabled_evasions = _parse_list(os.getenv("STEALTH_EVASIONS"))
        self.disabled_evasions = _parse_list(os.getenv("STEALTH_DISABLED_EVASIONS")) or []

    def resolve_enabled_evasions(self, available: Iterable[str]) -> List[str]:
        """Apply STEALTH_EVASIONS / STEALTH_DISABLED_EVASIONS to the available names.

        Args:
            available: Evasion names in registry order

        Returns:
            Enabled evasion names. Names from STEALTH_EVASIONS keep the order
            they were given in.
        """
        available = list(available)
        names = available if self.enabled_evasions is None else self.enabled_evasions
        enabled = [name for name in names if name not in self.disabled_evasions]
        unknown = set(enabled) - set(available)
        if unknown:
            logger.warning(f"Unknown evasions will be ignored: {', '.join(sorted(unknown))}")
        return enabled

    def get_launch_options(self) -> Dict[str, Any]:
        """Get kwargs for chromium.launch()."""
        options: Dict[str, Any] = {
            "headless": self.headless,
            "args": [
                "--no-sandbox",
                "--disable-setuid-sandbox",
                "--disable-dev-shm-usage",
                "--window-size=1920,1080",
            ],
        }
        if self.channel:
            options["channel"] = self.channel
        return options

    def get_connect_options(self) -> Dict[str, Any]:
        """Get kwargs for chromium.connect_over_cdp()."""
        return {"endpoint_url": self.cdp_endpoint}

    def get_context_options(self) -> Dict[str, Any]:
        """Get browser context options."""
        return {
            "viewport": {"width": 1920, "height": 1080},
            "screen": {"width": 1920, "height": 1080},
            "locale": self.locale,
            "color_scheme": "light",
        }
