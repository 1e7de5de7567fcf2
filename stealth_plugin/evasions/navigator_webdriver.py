"""Evasion: hide navigator.webdriver."""

from typing import Any, Dict

from stealth_plugin.evasions.base import Evasion

AUTOMATION_CONTROLLED_ARG = "--disable-blink-features=AutomationControlled"

SCRIPT = """
(utils) => {
  if (navigator.webdriver === false) {
    // Chromium with the blink feature disabled already reports false
    return;
  }
  const proto = Object.getPrototypeOf(navigator);
  delete proto.webdriver;
  utils.replaceGetter(proto, 'webdriver', () => false);
}
"""


class NavigatorWebdriverEvasion(Evasion):
    name = "navigator.webdriver"

    async def before_launch(self, options: Dict[str, Any]):
        args = list(options.get("args") or [])
        if AUTOMATION_CONTROLLED_ARG not in args:
            args.append(AUTOMATION_CONTROLLED_ARG)
        options["args"] = args

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT)
