"""Evasion: provide window.chrome.loadTimes() navigation data."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils) => {
  if (!window.chrome) {
    Object.defineProperty(window, 'chrome', { writable: true, enumerable: true, configurable: false, value: {} });
  }
  if ('loadTimes' in window.chrome) return;
  if (!window.performance || !window.performance.timing || !window.PerformancePaintTiming) return;

  const { performance } = window;
  const ntEntry = performance.getEntriesByType('navigation')[0] || { nextHopProtocol: 'h2', type: 'other' };
  const toFixed = (num, fixed) => {
    const re = new RegExp('^-?\\\\d+(?:.\\\\d{0,' + (fixed || -1) + '})?');
    return num.toString().match(re)[0];
  };
  const firstPaint = () => {
    const paint = performance.getEntriesByType('paint')[0];
    return paint ? (paint.startTime + performance.timeOrigin) / 1000 : 0;
  };

  window.chrome.loadTimes = utils.patchToString(function loadTimes() {
    const { timing } = performance;
    return {
      requestTime: timing.navigationStart / 1000,
      startLoadTime: timing.navigationStart / 1000,
      commitLoadTime: timing.responseStart / 1000,
      finishDocumentLoadTime: timing.domContentLoadedEventEnd / 1000,
      finishLoadTime: timing.loadEventEnd / 1000,
      firstPaintTime: Number(toFixed(firstPaint(), 3)),
      firstPaintAfterLoadTime: 0,
      navigationType: ntEntry.type,
      wasFetchedViaSpdy: ['h2', 'hq'].includes(ntEntry.nextHopProtocol),
      wasNpnNegotiated: ['h2', 'hq'].includes(ntEntry.nextHopProtocol),
      npnNegotiatedProtocol: ['h2', 'hq'].includes(ntEntry.nextHopProtocol) ? ntEntry.nextHopProtocol : 'unknown',
      wasAlternateProtocolAvailable: false,
      connectionInfo: ntEntry.nextHopProtocol,
    };
  });
}
"""


class ChromeLoadTimesEvasion(Evasion):
    name = "chrome.loadTimes"

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT)
