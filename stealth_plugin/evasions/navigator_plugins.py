"""Evasion: populate navigator.plugins and navigator.mimeTypes like desktop Chrome."""

from stealth_plugin.evasions.base import Evasion

PDF_MIME_TYPES = [
    {"type": "application/pdf", "suffixes": "pdf", "description": "Portable Document Format"},
    {"type": "text/pdf", "suffixes": "pdf", "description": "Portable Document Format"},
]

PDF_PLUGIN_NAMES = [
    "PDF Viewer",
    "Chrome PDF Viewer",
    "Chromium PDF Viewer",
    "Microsoft Edge PDF Viewer",
    "WebKit built-in PDF",
]

SCRIPT = """
(utils, { mimeTypes, pluginNames }) => {
  if (navigator.plugins && navigator.plugins.length) return;

  const makeArray = (items, proto, key) => {
    const arr = Object.create(proto);
    items.forEach((item, i) => {
      Object.defineProperty(arr, i, { value: item, enumerable: true });
      Object.defineProperty(arr, item[key], { value: item, enumerable: false });
    });
    Object.defineProperty(arr, 'length', { value: items.length });
    Object.defineProperty(arr, 'item', {
      value: utils.patchToString(function item(i) { return items[i] || null; }),
    });
    Object.defineProperty(arr, 'namedItem', {
      value: utils.patchToString(function namedItem(n) { return items.find(x => x[key] === n) || null; }),
    });
    arr[Symbol.iterator] = function* () { yield* items; };
    return arr;
  };

  const mimes = mimeTypes.map(data => {
    const mime = Object.create(MimeType.prototype);
    Object.defineProperties(mime, {
      type: { value: data.type },
      suffixes: { value: data.suffixes },
      description: { value: data.description },
    });
    return mime;
  });

  const plugins = pluginNames.map(name => {
    const plugin = Object.create(Plugin.prototype);
    mimes.forEach((mime, i) => Object.defineProperty(plugin, i, { value: mime }));
    Object.defineProperties(plugin, {
      name: { value: name },
      filename: { value: 'internal-pdf-viewer' },
      description: { value: 'Portable Document Format' },
      length: { value: mimes.length },
    });
    return plugin;
  });
  mimes.forEach(mime => Object.defineProperty(mime, 'enabledPlugin', { value: plugins[0] }));

  const pluginArray = makeArray(plugins, PluginArray.prototype, 'name');
  const mimeTypeArray = makeArray(mimes, MimeTypeArray.prototype, 'type');
  Object.defineProperty(pluginArray, 'refresh', { value: utils.patchToString(function refresh() {}) });

  const proto = Object.getPrototypeOf(navigator);
  utils.replaceGetter(proto, 'plugins', () => pluginArray);
  utils.replaceGetter(proto, 'mimeTypes', () => mimeTypeArray);
}
"""


class NavigatorPluginsEvasion(Evasion):
    name = "navigator.plugins"

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(
            page, SCRIPT, {"mimeTypes": PDF_MIME_TYPES, "pluginNames": PDF_PLUGIN_NAMES}
        )
