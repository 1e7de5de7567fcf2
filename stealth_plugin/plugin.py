"""
Stealth plugin: applies evasion modules to a patchright browser.

The plugin owns a fixed registry of evasions, lets the caller choose which
ones are enabled, and fans the browser lifecycle hooks out to every enabled
evasion in registry order.

Example:
    plugin = stealth()
    plugin.enabled_evasions.discard("chrome.app")

    options = {"headless": True}
    await plugin.before_launch(options)
    browser = await playwright.chromium.launch(**options)
    await plugin.on_browser(browser)
    page = await browser.new_page()
    await plugin.on_page_created(page)
"""

import inspect
import logging
from collections.abc import MutableSet
from typing import Any, Dict, Iterable, Iterator, List, Optional

from stealth_plugin.errors import is_target_closed_error
from stealth_plugin.registry import EVASION_REGISTRY

logger = logging.getLogger(__name__)


class EvasionSet(MutableSet):
    """Set of evasion names that keeps insertion order."""

    def __init__(self, names: Iterable[str] = ()):
        self._names: Dict[str, None] = dict.fromkeys(names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def add(self, name: str):
        self._names[name] = None

    def discard(self, name: str):
        self._names.pop(name, None)

    def __repr__(self) -> str:
        return f"EvasionSet({list(self._names)!r})"


class StealthPlugin:
    """Orchestrates the enabled evasions across the browser lifecycle.

    Evasions are instantiated lazily, once, on the first hook call. Changing
    ``enabled_evasions`` after that has no effect.

    Note:
        If an evasion factory raises during instantiation, the evasions
        created before it stay in the pool and the pool is considered
        populated from then on. The missing evasions are not retried.
    """

    name = "stealth"

    # Raised on the browser so our own listeners don't trip the
    # event emitter leak warning.
    MAX_LISTENERS = 30

    def __init__(self, enabled_evasions: Optional[Iterable[str]] = None):
        self._enabled_evasions = self.defaults["enabled_evasions"]
        if enabled_evasions is not None:
            self.enabled_evasions = enabled_evasions
        self._evasion_instances: List[Any] = []

    @property
    def defaults(self) -> Dict[str, EvasionSet]:
        available_evasions = EvasionSet(EVASION_REGISTRY)
        return {
            "available_evasions": available_evasions,
            # All available evasions are enabled by default
            "enabled_evasions": EvasionSet(available_evasions),
        }

    @property
    def dependencies(self) -> set:
        """Other plugins this one needs. Evasions are bundled, so none."""
        return set()

    @property
    def available_evasions(self) -> EvasionSet:
        """All evasions in the registry, in registry order."""
        return self.defaults["available_evasions"]

    @property
    def enabled_evasions(self) -> EvasionSet:
        """Evasions that will be instantiated on first use.

        Can be replaced wholesale or modified in place, e.g.
        ``plugin.enabled_evasions.discard("chrome.app")``. Assignment copies
        the given names into a new set, so later edits to the caller's own
        collection are not picked up; edit this property instead.
        """
        return self._enabled_evasions

    @enabled_evasions.setter
    def enabled_evasions(self, evasions: Iterable[str]):
        self._enabled_evasions = EvasionSet(evasions)

    def _ensure_evasions_instantiated(self):
        """Instantiate the enabled evasions unless already done."""
        if self._evasion_instances:
            return

        for name in self._enabled_evasions:
            factory = EVASION_REGISTRY.get(name)
            if factory is not None:
                self._evasion_instances.append(factory())

        logger.debug(f"Instantiated {len(self._evasion_instances)} evasions")

    async def _call_hook(self, evasion: Any, hook_name: str, arg: Any):
        hook = getattr(evasion, hook_name, None)
        if hook is None:
            return
        result = hook(arg)
        if inspect.isawaitable(result):
            await result

    async def _dispatch(self, hook_name: str, arg: Any):
        self._ensure_evasions_instantiated()
        for evasion in self._evasion_instances:
            await self._call_hook(evasion, hook_name, arg)

    async def before_launch(self, options: Dict[str, Any]):
        """Hook: before the browser process is launched.

        Args:
            options: Launch kwargs, modified in place by the evasions.
        """
        await self._dispatch("before_launch", options)

    async def before_connect(self, options: Dict[str, Any]):
        """Hook: before connecting to a running browser.

        Args:
            options: Connect kwargs, modified in place by the evasions.
        """
        await self._dispatch("before_connect", options)

    async def on_browser(self, browser: Any):
        """Hook: the browser process is available."""
        set_max_listeners = getattr(browser, "set_max_listeners", None)
        if callable(set_max_listeners):
            set_max_listeners(self.MAX_LISTENERS)
        await self._dispatch("on_browser", browser)

    async def on_page_created(self, page: Any):
        """Hook: a new page was created.

        If the page closes while evasions are being applied, the remaining
        evasions are skipped and no error is raised. Any other error is
        raised unchanged.
        """
        self._ensure_evasions_instantiated()
        for evasion in self._evasion_instances:
            try:
                await self._call_hook(evasion, "on_page_created", page)
            except Exception as e:
                if is_target_closed_error(e):
                    return
                raise


def stealth(**opts) -> StealthPlugin:
    """Create a StealthPlugin.

    Args:
        enabled_evasions: Names of the evasions to use (default: all)
    """
    return StealthPlugin(**opts)
