"""Evasion: headless windows report 0 for outerWidth/outerHeight."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils, { windowFrame }) => {
  if (window.outerWidth && window.outerHeight) return;
  try {
    utils.replaceGetter(window, 'outerWidth', () => window.innerWidth);
    utils.replaceGetter(window, 'outerHeight', () => window.innerHeight + windowFrame);
  } catch (err) {}
}
"""


class WindowOuterDimensionsEvasion(Evasion):
    name = "window.outerdimensions"
    # Height of the browser chrome (tabs, address bar) in a default window
    defaults = {"window_frame": 85}

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT, {"windowFrame": self.opts["window_frame"]})
