"""Evasion: define window.chrome.app as in a regular Chrome window."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils) => {
  if (!window.chrome) {
    Object.defineProperty(window, 'chrome', { writable: true, enumerable: true, configurable: false, value: {} });
  }
  if ('app' in window.chrome) return;

  const makeError = {
    ErrorInInvocation: fn => new TypeError(`Error in invocation of app.${fn}()`),
  };

  const STATIC_DATA = {
    InstallState: { DISABLED: 'disabled', INSTALLED: 'installed', NOT_INSTALLED: 'not_installed' },
    RunningState: { CANNOT_RUN: 'cannot_run', READY_TO_RUN: 'ready_to_run', RUNNING: 'running' },
  };

  window.chrome.app = {
    ...STATIC_DATA,
    get isInstalled() { return false; },
    getDetails: utils.patchToString(function getDetails() {
      if (arguments.length) throw makeError.ErrorInInvocation('getDetails');
      return null;
    }),
    getIsInstalled: utils.patchToString(function getIsInstalled() {
      if (arguments.length) throw makeError.ErrorInInvocation('getIsInstalled');
      return false;
    }),
    runningState: utils.patchToString(function runningState() {
      if (arguments.length) throw makeError.ErrorInInvocation('runningState');
      return 'cannot_run';
    }),
  };
}
"""


class ChromeAppEvasion(Evasion):
    name = "chrome.app"

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT)
