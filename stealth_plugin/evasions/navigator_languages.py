"""Evasion: set navigator.languages to a realistic list."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils, { languages }) => {
  const frozen = Object.freeze([...languages]);
  utils.replaceGetter(Object.getPrototypeOf(navigator), 'languages', () => frozen);
}
"""


class NavigatorLanguagesEvasion(Evasion):
    name = "navigator.languages"
    defaults = {"languages": ["en-US", "en"]}

    async def on_page_created(self, page):
        languages = list(self.opts["languages"])
        await self.evaluate_on_new_document(page, SCRIPT, {"languages": languages})
