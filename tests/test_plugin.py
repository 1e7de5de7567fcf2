"""Tests for StealthPlugin configuration, instantiation and hook dispatch."""

from unittest.mock import MagicMock

import pytest

from stealth_plugin.errors import TargetCloseError
from stealth_plugin.plugin import EvasionSet, StealthPlugin, stealth
from stealth_plugin.registry import EVASION_REGISTRY

from tests.conftest import RecordingEvasion


class TestEvasionSet:
    """Tests for the ordered evasion name set."""

    def test_keeps_insertion_order(self):
        names = EvasionSet(["b", "c", "a"])
        assert list(names) == ["b", "c", "a"]

    def test_drops_duplicates(self):
        assert list(EvasionSet(["a", "b", "a"])) == ["a", "b"]

    def test_add_and_discard(self):
        names = EvasionSet(["a"])
        names.add("b")
        names.discard("a")
        names.discard("missing")
        assert list(names) == ["b"]
        assert "b" in names
        assert len(names) == 1

    def test_remove_missing_raises(self):
        with pytest.raises(KeyError):
            EvasionSet().remove("missing")

    def test_compares_as_set(self):
        assert EvasionSet(["a", "b"]) == {"b", "a"}


class TestConfiguration:
    """Tests for available/enabled evasion configuration."""

    def test_plugin_metadata(self):
        plugin = StealthPlugin()
        assert plugin.name == "stealth"
        assert plugin.dependencies == set()

    def test_available_evasions_match_registry_order(self):
        plugin = StealthPlugin(enabled_evasions=["sourceurl"])
        assert list(plugin.available_evasions) == list(EVASION_REGISTRY)

    def test_enabled_defaults_to_all_available(self):
        plugin = StealthPlugin()
        assert list(plugin.enabled_evasions) == list(plugin.available_evasions)

    def test_enabled_is_a_copy_of_available(self):
        plugin = StealthPlugin()
        plugin.enabled_evasions.discard("chrome.app")

        assert "chrome.app" not in plugin.enabled_evasions
        assert "chrome.app" in plugin.available_evasions

    def test_available_evasions_recomputed_on_access(self):
        plugin = StealthPlugin()
        plugin.available_evasions.discard("chrome.app")
        assert "chrome.app" in plugin.available_evasions

    def test_defaults(self):
        defaults = StealthPlugin().defaults
        assert list(defaults["available_evasions"]) == list(EVASION_REGISTRY)
        assert list(defaults["enabled_evasions"]) == list(EVASION_REGISTRY)

    def test_enabled_from_constructor(self):
        plugin = StealthPlugin(enabled_evasions=["webgl.vendor", "not-an-evasion"])
        assert list(plugin.enabled_evasions) == ["webgl.vendor", "not-an-evasion"]

    def test_enabled_setter_replaces_wholesale(self):
        plugin = StealthPlugin()
        plugin.enabled_evasions = {"sourceurl"}
        assert isinstance(plugin.enabled_evasions, EvasionSet)
        assert list(plugin.enabled_evasions) == ["sourceurl"]

    def test_enabled_setter_copies_given_names(self):
        names = {"sourceurl"}
        plugin = StealthPlugin()
        plugin.enabled_evasions = names
        names.add("chrome.app")

        assert list(plugin.enabled_evasions) == ["sourceurl"]

    def test_stealth_factory(self):
        plugin = stealth(enabled_evasions=["chrome.app"])
        assert isinstance(plugin, StealthPlugin)
        assert list(plugin.enabled_evasions) == ["chrome.app"]


@pytest.mark.asyncio
class TestInstantiation:
    """Tests for lazy, one-time evasion instantiation."""

    async def test_no_instances_before_first_hook(self, fake_registry):
        plugin = StealthPlugin()
        assert plugin._evasion_instances == []

    async def test_instances_follow_enabled_order(self, fake_registry):
        plugin = StealthPlugin(enabled_evasions=["c", "missing", "a"])
        await plugin.before_launch({})

        assert [e.name for e in plugin._evasion_instances] == ["c", "a"]

    async def test_unknown_names_are_ignored(self, fake_registry, call_log):
        plugin = StealthPlugin(enabled_evasions=["nope", "b"])
        await plugin.on_page_created("page")

        assert call_log == [("b", "on_page_created", "page")]

    async def test_mutation_after_dispatch_has_no_effect(self, fake_registry, call_log):
        plugin = StealthPlugin()
        await plugin.before_launch({})

        plugin.enabled_evasions.discard("a")
        plugin.enabled_evasions = ["c"]
        call_log.clear()
        await plugin.on_browser("browser")

        assert [name for name, _, _ in call_log] == ["a", "b", "c"]

    async def test_instances_are_reused(self, fake_registry):
        plugin = StealthPlugin()
        await plugin.on_page_created("page-1")
        first = list(plugin._evasion_instances)
        await plugin.on_page_created("page-2")

        assert len(plugin._evasion_instances) == 3
        assert all(a is b for a, b in zip(first, plugin._evasion_instances))

    async def test_same_hook_twice_reaches_same_instances(self, fake_registry, call_log):
        plugin = StealthPlugin(enabled_evasions=["a", "b"])
        await plugin.on_page_created("page-1")
        await plugin.on_page_created("page-2")

        assert call_log == [
            ("a", "on_page_created", "page-1"),
            ("b", "on_page_created", "page-1"),
            ("a", "on_page_created", "page-2"),
            ("b", "on_page_created", "page-2"),
        ]

    async def test_factory_error_leaves_pool_partial(self, fake_registry, call_log):
        def broken():
            raise ValueError("factory failed")

        fake_registry["b"] = broken
        plugin = StealthPlugin()

        with pytest.raises(ValueError, match="factory failed"):
            await plugin.before_launch({})

        # "a" made it into the pool, so the pool counts as populated
        await plugin.before_launch({})
        assert [e.name for e in plugin._evasion_instances] == ["a"]
        assert [name for name, _, _ in call_log] == ["a"]

    async def test_factory_error_on_first_entry_is_retried(self, fake_registry):
        calls = []

        def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise ValueError("first call fails")
            return RecordingEvasion("a", [])

        fake_registry["a"] = flaky
        plugin = StealthPlugin(enabled_evasions=["a"])

        with pytest.raises(ValueError):
            await plugin.before_launch({})
        await plugin.before_launch({})

        assert len(plugin._evasion_instances) == 1

    async def test_empty_enabled_set(self, fake_registry, call_log):
        plugin = StealthPlugin(enabled_evasions=[])
        await plugin.before_launch({})
        await plugin.on_page_created("page")

        assert plugin._evasion_instances == []
        assert call_log == []


@pytest.mark.asyncio
class TestHookDispatch:
    """Tests for sequential hook fan-out."""

    async def test_each_hook_reaches_every_evasion_in_order(self, fake_registry, call_log):
        plugin = StealthPlugin()
        launch_options = {}
        connect_options = {}
        await plugin.before_launch(launch_options)
        await plugin.before_connect(connect_options)

        assert call_log == [
            ("a", "before_launch", launch_options),
            ("b", "before_launch", launch_options),
            ("c", "before_launch", launch_options),
            ("a", "before_connect", connect_options),
            ("b", "before_connect", connect_options),
            ("c", "before_connect", connect_options),
        ]

    async def test_launch_option_changes_are_visible_to_later_evasions(self, fake_registry):
        seen = []

        class Writer:
            async def before_launch(self, options):
                options["headless"] = False

        class Reader:
            async def before_launch(self, options):
                seen.append(options["headless"])

        fake_registry.clear()
        fake_registry["writer"] = Writer
        fake_registry["reader"] = Reader

        options = {"headless": True}
        await StealthPlugin().before_launch(options)

        assert seen == [False]
        assert options == {"headless": False}

    async def test_evasion_without_hooks_is_skipped(self, fake_registry, call_log):
        class Inert:
            pass

        fake_registry["inert"] = Inert
        plugin = StealthPlugin(enabled_evasions=["inert", "a"])

        await plugin.before_launch({})
        await plugin.before_connect({})
        await plugin.on_browser(MagicMock(spec=[]))
        await plugin.on_page_created("page")

        assert [hook for _, hook, _ in call_log] == [
            "before_launch",
            "before_connect",
            "on_browser",
            "on_page_created",
        ]

    async def test_sync_hooks_are_supported(self, fake_registry):
        class SyncEvasion:
            def before_launch(self, options):
                options["touched"] = True

        fake_registry["sync"] = SyncEvasion
        options = {}
        await StealthPlugin(enabled_evasions=["sync"]).before_launch(options)

        assert options == {"touched": True}

    async def test_first_error_aborts_before_launch(self, fake_registry, call_log):
        fake_registry["b"] = lambda: RecordingEvasion(
            "b", call_log, errors={"before_launch": RuntimeError("boom")}
        )
        plugin = StealthPlugin()

        with pytest.raises(RuntimeError, match="boom"):
            await plugin.before_launch({})

        assert [name for name, _, _ in call_log] == ["a", "b"]

    async def test_target_closed_is_not_isolated_outside_page_creation(
        self, fake_registry, call_log
    ):
        error = TargetCloseError("Protocol error: Target closed.")
        fake_registry["b"] = lambda: RecordingEvasion(
            "b", call_log, errors={"before_connect": error, "on_browser": error}
        )
        plugin = StealthPlugin()

        with pytest.raises(TargetCloseError):
            await plugin.before_connect({})
        with pytest.raises(TargetCloseError):
            await plugin.on_browser(MagicMock(spec=[]))

        assert [name for name, _, _ in call_log] == ["a", "b", "a", "b"]


@pytest.mark.asyncio
class TestOnBrowser:
    """Tests for the browser hook."""

    async def test_raises_listener_limit(self, fake_registry):
        browser = MagicMock()
        await StealthPlugin().on_browser(browser)

        browser.set_max_listeners.assert_called_once_with(30)

    async def test_listener_limit_before_evasions(self, fake_registry, call_log):
        browser = MagicMock()
        browser.set_max_listeners.side_effect = lambda n: call_log.append(("limit", n))

        await StealthPlugin(enabled_evasions=["a"]).on_browser(browser)

        assert call_log == [("limit", 30), ("a", "on_browser", browser)]

    async def test_browser_without_listener_limit(self, fake_registry, call_log):
        browser = MagicMock(spec=["close"])
        await StealthPlugin(enabled_evasions=["a"]).on_browser(browser)

        assert call_log == [("a", "on_browser", browser)]

    async def test_browser_none(self, fake_registry, call_log):
        await StealthPlugin(enabled_evasions=["a"]).on_browser(None)
        assert call_log == [("a", "on_browser", None)]


@pytest.mark.asyncio
class TestOnPageCreatedIsolation:
    """Tests for target-closed handling during page setup."""

    def _fail_b_with(self, registry, call_log, error):
        registry["b"] = lambda: RecordingEvasion("b", call_log, errors={"on_page_created": error})

    async def test_target_closed_message_stops_quietly(self, fake_registry, call_log):
        self._fail_b_with(fake_registry, call_log, Exception("Protocol error: Target closed."))

        await StealthPlugin().on_page_created("page")

        assert [name for name, _, _ in call_log] == ["a", "b"]

    async def test_session_closed_message_stops_quietly(self, fake_registry, call_log):
        self._fail_b_with(
            fake_registry,
            call_log,
            Exception("Protocol error (Page.addScriptToEvaluateOnNewDocument): Session closed."),
        )

        await StealthPlugin().on_page_created("page")

        assert [name for name, _, _ in call_log] == ["a", "b"]

    async def test_tagged_error_stops_quietly(self, fake_registry, call_log):
        self._fail_b_with(fake_registry, call_log, TargetCloseError("page went away"))

        await StealthPlugin().on_page_created("page")

        assert [name for name, _, _ in call_log] == ["a", "b"]

    async def test_other_error_propagates(self, fake_registry, call_log):
        error = ValueError("boom")
        self._fail_b_with(fake_registry, call_log, error)

        with pytest.raises(ValueError) as exc_info:
            await StealthPlugin().on_page_created("page")

        assert exc_info.value is error
        assert [name for name, _, _ in call_log] == ["a", "b"]

    async def test_next_page_runs_all_evasions_again(self, fake_registry, call_log):
        closing = {"count": 0}

        class ClosesFirstPage:
            async def on_page_created(self, page):
                closing["count"] += 1
                if page == "page-1":
                    raise Exception("Target closed")

        fake_registry["b"] = ClosesFirstPage
        plugin = StealthPlugin()

        await plugin.on_page_created("page-1")
        await plugin.on_page_created("page-2")

        assert closing["count"] == 2
        assert call_log == [
            ("a", "on_page_created", "page-1"),
            ("a", "on_page_created", "page-2"),
            ("c", "on_page_created", "page-2"),
        ]
