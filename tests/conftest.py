"""pytest fixtures."""

from functools import partial
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from stealth_plugin.registry import EVASION_REGISTRY

HEADLESS_LINUX_UA = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) HeadlessChrome/120.0.0.0 Safari/537.36"
)

STEALTH_ENV_VARS = (
    "STEALTH_MODE",
    "HEADLESS",
    "BROWSER_CHANNEL",
    "BROWSER_CDP_ENDPOINT",
    "BROWSER_LOCALE",
    "STEALTH_EVASIONS",
    "STEALTH_DISABLED_EVASIONS",
)


class RecordingEvasion:
    """Evasion double that logs every hook call as (name, hook, arg).

    Errors listed in ``errors`` are raised by the matching hook after the
    call has been logged.
    """

    def __init__(self, name, log, errors=None):
        self.name = name
        self.log = log
        self.errors = errors or {}

    async def _record(self, hook, arg):
        self.log.append((self.name, hook, arg))
        error = self.errors.get(hook)
        if error is not None:
            raise error

    async def before_launch(self, options):
        await self._record("before_launch", options)

    async def before_connect(self, options):
        await self._record("before_connect", options)

    async def on_browser(self, browser):
        await self._record("on_browser", browser)

    async def on_page_created(self, page):
        await self._record("on_page_created", page)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of config-dependent tests."""
    for var in STEALTH_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def call_log():
    return []


@pytest.fixture
def fake_registry(call_log):
    """Swap the evasion registry for recording evasions "a", "b" and "c"."""
    registry = {name: partial(RecordingEvasion, name, call_log) for name in ("a", "b", "c")}
    with patch.dict(EVASION_REGISTRY, registry, clear=True):
        yield EVASION_REGISTRY


@pytest.fixture
def mock_page():
    """Page double covering what the bundled evasions touch."""
    page = MagicMock()
    page.add_init_script = AsyncMock()
    page.evaluate = AsyncMock(return_value=HEADLESS_LINUX_UA)
    page.goto = AsyncMock()
    page.screenshot = AsyncMock()
    page.close = AsyncMock()
    page.cdp_session = AsyncMock()
    page.context.new_cdp_session = AsyncMock(return_value=page.cdp_session)
    return page
