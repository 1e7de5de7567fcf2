"""
Evasion: fix the user agent reported by headless Chromium.

Headless builds announce themselves as ``HeadlessChrome`` and, on servers,
as Linux. The override is applied through the DevTools protocol so it also
covers request headers and workers.
"""

import logging
import re
from typing import Any, Dict, Optional

from stealth_plugin.evasions.base import Evasion

logger = logging.getLogger(__name__)

WINDOWS_PLATFORM_TOKEN = "(Windows NT 10.0; Win64; x64)"


def clean_user_agent(user_agent: str, mask_linux: bool = True) -> str:
    """Remove headless markers, optionally presenting Linux as Windows."""
    user_agent = user_agent.replace("HeadlessChrome/", "Chrome/")
    if mask_linux and "Linux" in user_agent and "Android" not in user_agent:
        user_agent = re.sub(r"\([^)]*\)", WINDOWS_PLATFORM_TOKEN, user_agent, count=1)
    return user_agent


def platform_for(user_agent: str) -> str:
    """navigator.platform value matching a user agent."""
    if "Windows" in user_agent:
        return "Win32"
    if "Mac OS X" in user_agent:
        return "MacIntel"
    if "Android" in user_agent:
        return "Linux armv81"
    return "Linux x86_64"


class UserAgentOverrideEvasion(Evasion):
    name = "user-agent-override"
    defaults: Dict[str, Any] = {
        "user_agent": None,
        "locale": "en-US,en",
        "mask_linux": True,
    }

    def build_override(self, user_agent: str) -> Dict[str, str]:
        """Arguments for Network.setUserAgentOverride."""
        user_agent = clean_user_agent(user_agent, mask_linux=self.opts["mask_linux"])
        return {
            "userAgent": user_agent,
            "acceptLanguage": self.opts["locale"],
            "platform": platform_for(user_agent),
        }

    async def on_page_created(self, page):
        user_agent: Optional[str] = self.opts["user_agent"]
        if not user_agent:
            user_agent = await page.evaluate("() => navigator.userAgent")

        override = self.build_override(user_agent)
        session = await page.context.new_cdp_session(page)
        await session.send("Network.setUserAgentOverride", override)
        logger.debug(f"User agent override: {override['userAgent']}")
