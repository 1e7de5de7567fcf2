"""
Browser lifecycle management using Patchright.

Drives the stealth plugin hooks around the browser lifecycle:
before_launch / before_connect, on_browser, then on_page_created for every
page handed out.
"""

import asyncio
import logging
import uuid
from typing import Optional, Dict, Any
from contextlib import asynccontextmanager

from patchright.async_api import async_playwright, Browser, BrowserContext, Error, Page

from stealth_plugin.config import StealthConfig
from stealth_plugin.plugin import StealthPlugin

logger = logging.getLogger(__name__)

STEALTH_CHECK_SCRIPT = """
() => {
    return {
        webdriver: navigator.webdriver,
        plugins: navigator.plugins.length,
        languages: navigator.languages,
        platform: navigator.platform,
        userAgent: navigator.userAgent,
        hardwareConcurrency: navigator.hardwareConcurrency,
        chrome: typeof window.chrome !== 'undefined',
        chromeRuntime: !!(window.chrome && window.chrome.runtime),
        outerWidth: window.outerWidth,
        outerHeight: window.outerHeight,
        hasMimeTypes: navigator.mimeTypes.length > 0,
    };
}
"""


class BrowserManager:
    """Manages a patchright browser with the stealth plugin applied.

    Architecture:
    - Single browser process, launched or connected over CDP
    - Every page created through the manager gets on_page_created
    - Isolated contexts per request share the same browser
    """

    def __init__(
        self,
        plugin: Optional[StealthPlugin] = None,
        config: Optional[StealthConfig] = None,
    ):
        self.config = config or StealthConfig()
        if plugin is None and self.config.stealth_mode:
            plugin = StealthPlugin()
            plugin.enabled_evasions = self.config.resolve_enabled_evasions(
                plugin.available_evasions
            )
        self.plugin = plugin

        self.playwright = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

        self._lock = asyncio.Lock()
        self._active_contexts: Dict[str, BrowserContext] = {}

    async def start(self):
        """Start patchright and launch (or connect to) the browser."""
        logger.info("Starting browser...")
        if self.plugin:
            enabled = ", ".join(self.plugin.enabled_evasions)
            logger.info(f"Stealth evasions: {enabled or 'none'}")
        else:
            logger.info("Stealth mode disabled")

        self.playwright = await async_playwright().start()

        if self.config.cdp_endpoint:
            await self._connect_browser()
        else:
            await self._launch_browser()

        self.context = await self.browser.new_context(**self.config.get_context_options())
        logger.info("Browser started successfully")

    async def _launch_browser(self):
        """Launch a new browser process."""
        options = self.config.get_launch_options()
        if self.plugin:
            await self.plugin.before_launch(options)

        try:
            self.browser = await self.playwright.chromium.launch(**options)
            logger.info(f"Browser process started: {options.get('channel', 'chromium')}")
        except Error as e:
            if "channel" not in options:
                raise
            logger.warning(f"Failed to launch with {options['channel']} channel: {e}")
            logger.info("Falling back to standard Chromium...")
            options.pop("channel")
            self.browser = await self.playwright.chromium.launch(**options)

        await self._browser_ready()

    async def _connect_browser(self):
        """Attach to an already running browser over CDP."""
        options = self.config.get_connect_options()
        if self.plugin:
            await self.plugin.before_connect(options)

        logger.info(f"Connecting to browser at {options.get('endpoint_url')}")
        self.browser = await self.playwright.chromium.connect_over_cdp(**options)
        await self._browser_ready()

    async def _browser_ready(self):
        if self.plugin:
            await self.plugin.on_browser(self.browser)

    async def _setup_page(self, page: Page) -> Page:
        if self.plugin:
            await self.plugin.on_page_created(page)
        return page

    async def new_page(self) -> Page:
        """Create a new page in the default context with evasions applied."""
        if not self.context:
            raise RuntimeError("Browser not initialized")
        page = await self.context.new_page()
        try:
            return await self._setup_page(page)
        except BaseException:
            await self._close_page(page)
            raise

    async def _close_page(self, page: Page):
        try:
            await page.close()
        except Exception as e:
            logger.debug(f"Error closing page: {e}")

    @asynccontextmanager
    async def isolated_context(self):
        """Create an isolated browser context for a single request.

        Yields a page with evasions applied. The context is closed on exit.
        """
        context_id = str(uuid.uuid4())[:8]
        logger.info(f"Creating isolated context {context_id}")

        async with self._lock:
            if not self.browser:
                raise RuntimeError("Browser not initialized")

            context = await self.browser.new_context(**self.config.get_context_options())
            self._active_contexts[context_id] = context

        try:
            page = await self._setup_page(await context.new_page())
            yield page
        finally:
            logger.info(f"Closing isolated context {context_id}")
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Error closing context {context_id}: {e}")
            finally:
                self._active_contexts.pop(context_id, None)

    async def check_stealth(self, page: Optional[Page] = None) -> Dict[str, Any]:
        """Check the browser fingerprint as seen by a page.

        Args:
            page: Page to probe (a new page is opened if omitted)

        Returns:
            Dictionary with detection-relevant navigator/window values.
        """
        owns_page = page is None
        if owns_page:
            page = await self.new_page()

        try:
            result = await page.evaluate(STEALTH_CHECK_SCRIPT)
        finally:
            if owns_page:
                await self._close_page(page)
        result["stealth_mode"] = self.plugin is not None
        result["evasions"] = list(self.plugin.enabled_evasions) if self.plugin else []
        return result

    async def stop(self):
        """Stop browser and cleanup resources."""
        logger.info("Stopping browser...")

        for context_id, context in list(self._active_contexts.items()):
            try:
                await context.close()
            except Exception as e:
                logger.debug(f"Error closing context {context_id}: {e}")
        self._active_contexts.clear()

        if self.context:
            try:
                await self.context.close()
            except Exception as e:
                logger.debug(f"Error closing context: {e}")
            self.context = None

        if self.browser:
            try:
                await self.browser.close()
            except Exception as e:
                logger.debug(f"Error closing browser: {e}")
            self.browser = None

        if self.playwright:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.debug(f"Error stopping playwright: {e}")
            self.playwright = None

        logger.info("Browser stopped")
