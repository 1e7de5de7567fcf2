"""Evasion: report a common navigator.hardwareConcurrency value."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils, { hardwareConcurrency }) => {
  utils.replaceGetter(Object.getPrototypeOf(navigator), 'hardwareConcurrency', () => hardwareConcurrency);
}
"""


class NavigatorHardwareConcurrencyEvasion(Evasion):
    name = "navigator.hardwareConcurrency"
    defaults = {"hardware_concurrency": 4}

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(
            page, SCRIPT, {"hardwareConcurrency": self.opts["hardware_concurrency"]}
        )
