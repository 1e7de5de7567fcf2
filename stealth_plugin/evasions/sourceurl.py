"""Evasion: strip automation script names from stack traces."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils, { markers }) => {
  const descriptor = Object.getOwnPropertyDescriptor(Error, 'prepareStackTrace');
  const previous = descriptor ? descriptor.value : undefined;

  Error.prepareStackTrace = utils.patchToString(function prepareStackTrace(error, frames) {
    const kept = frames.filter(frame => {
      const file = String(frame.getFileName() || '');
      return !markers.some(marker => file.includes(marker));
    });
    if (typeof previous === 'function') return previous(error, kept);
    return [String(error), ...kept.map(frame => `    at ${frame}`)].join('\\n');
  });
}
"""


class SourceUrlEvasion(Evasion):
    name = "sourceurl"
    defaults = {
        "markers": ["__playwright_evaluation_script__", "__puppeteer_evaluation_script__"],
    }

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT, {"markers": list(self.opts["markers"])})
