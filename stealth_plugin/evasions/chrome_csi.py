"""Evasion: provide window.chrome.csi() timing data."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils) => {
  if (!window.chrome) {
    Object.defineProperty(window, 'chrome', { writable: true, enumerable: true, configurable: false, value: {} });
  }
  if ('csi' in window.chrome) return;
  if (!window.performance || !window.performance.timing) return;

  const { timing } = window.performance;
  window.chrome.csi = utils.patchToString(function csi() {
    return {
      onloadT: timing.domContentLoadedEventEnd,
      startE: timing.navigationStart,
      pageT: Date.now() - timing.navigationStart,
      tran: 15,
    };
  });
}
"""


class ChromeCsiEvasion(Evasion):
    name = "chrome.csi"

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT)
