"""Evasion: give srcdoc iframes a contentWindow that behaves like the real one."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils) => {
  const descriptor = Object.getOwnPropertyDescriptor(HTMLIFrameElement.prototype, 'contentWindow');
  if (!descriptor || !descriptor.get) return;
  const originalGetter = descriptor.get;

  // srcdoc frames created before they are attached have no window yet;
  // report the parent window instead of null, like a navigated frame would.
  utils.replaceGetter(HTMLIFrameElement.prototype, 'contentWindow', function () {
    const win = originalGetter.call(this);
    if (win || !this.srcdoc) return win;
    const frame = this;
    const proxy = new Proxy(window, {
      get(target, key) {
        if (key === 'self') return proxy;
        if (key === 'frameElement') return frame;
        if (key === 'chrome') return window.chrome;
        return Reflect.get(target, key);
      },
    });
    return proxy;
  });
}
"""


class IframeContentWindowEvasion(Evasion):
    name = "iframe.contentWindow"

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT)
