"""Evasion: report a common GPU vendor and renderer through WebGL."""

from stealth_plugin.evasions.base import Evasion

# UNMASKED_VENDOR_WEBGL / UNMASKED_RENDERER_WEBGL
SCRIPT = """
(utils, { vendor, renderer }) => {
  const handler = {
    apply(target, ctx, args) {
      const param = (args || [])[0];
      if (param === 37445) return vendor;
      if (param === 37446) return renderer;
      return Reflect.apply(target, ctx, args);
    },
  };
  utils.replaceWithProxy(WebGLRenderingContext.prototype, 'getParameter', handler);
  if (window.WebGL2RenderingContext) {
    utils.replaceWithProxy(WebGL2RenderingContext.prototype, 'getParameter', handler);
  }
}
"""


class WebglVendorEvasion(Evasion):
    name = "webgl.vendor"
    defaults = {"vendor": "Intel Inc.", "renderer": "Intel Iris OpenGL Engine"}

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(
            page, SCRIPT, {"vendor": self.opts["vendor"], "renderer": self.opts["renderer"]}
        )
