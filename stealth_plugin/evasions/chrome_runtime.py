"""Evasion: mock window.chrome.runtime on secure origins."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils, { runOnInsecureOrigins }) => {
  if (!window.chrome) {
    Object.defineProperty(window, 'chrome', { writable: true, enumerable: true, configurable: false, value: {} });
  }
  if ('runtime' in window.chrome) return;
  const isSecure = document.location.protocol.startsWith('https');
  if (!isSecure && !runOnInsecureOrigins) return;

  const noExtensionError = fn => new TypeError(
    `Error in invocation of runtime.${fn}(optional string extensionId, any message, optional object options, optional function responseCallback): No matching signature.`
  );

  window.chrome.runtime = {
    OnInstalledReason: { CHROME_UPDATE: 'chrome_update', INSTALL: 'install', SHARED_MODULE_UPDATE: 'shared_module_update', UPDATE: 'update' },
    OnRestartRequiredReason: { APP_UPDATE: 'app_update', OS_UPDATE: 'os_update', PERIODIC: 'periodic' },
    PlatformArch: { ARM: 'arm', ARM64: 'arm64', MIPS: 'mips', MIPS64: 'mips64', X86_32: 'x86-32', X86_64: 'x86-64' },
    PlatformNaclArch: { ARM: 'arm', MIPS: 'mips', MIPS64: 'mips64', X86_32: 'x86-32', X86_64: 'x86-64' },
    PlatformOs: { ANDROID: 'android', CROS: 'cros', LINUX: 'linux', MAC: 'mac', OPENBSD: 'openbsd', WIN: 'win' },
    RequestUpdateCheckStatus: { NO_UPDATE: 'no_update', THROTTLED: 'throttled', UPDATE_AVAILABLE: 'update_available' },
    get id() { return undefined; },
    sendMessage: utils.patchToString(function sendMessage() {
      throw noExtensionError('sendMessage');
    }),
    connect: utils.patchToString(function connect() {
      throw noExtensionError('connect');
    }),
  };
}
"""


class ChromeRuntimeEvasion(Evasion):
    name = "chrome.runtime"
    defaults = {"run_on_insecure_origins": False}

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(
            page, SCRIPT, {"runOnInsecureOrigins": self.opts["run_on_insecure_origins"]}
        )
