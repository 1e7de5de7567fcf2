"""
Base class and shared JavaScript helpers for evasion modules.
"""

import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Helpers injected ahead of every evasion script. Patched functions are
# registered so Function.prototype.toString keeps reporting native code.
UTILS_SCRIPT = """
const utils = {};

utils.nativeFns = new WeakMap();

utils.patchToString = (fn, name = fn.name) => {
  utils.nativeFns.set(fn, `function ${name}() { [native code] }`);
  return fn;
};

utils.installToStringProxy = () => {
  if (Function.prototype.toString.__stealthPatched) return;
  const original = Function.prototype.toString;
  const handler = {
    apply(target, ctx, args) {
      if (utils.nativeFns.has(ctx)) return utils.nativeFns.get(ctx);
      return Reflect.apply(target, ctx, args);
    },
  };
  const proxy = new Proxy(original, handler);
  utils.nativeFns.set(proxy, 'function toString() { [native code] }');
  Object.defineProperty(proxy, '__stealthPatched', { value: true });
  Object.defineProperty(Function.prototype, 'toString', {
    value: proxy,
    writable: true,
    configurable: true,
  });
};

utils.replaceGetter = (obj, prop, getter) => {
  const patched = utils.patchToString(getter, `get ${prop}`);
  Object.defineProperty(obj, prop, { get: patched, configurable: true, enumerable: true });
};

utils.replaceWithProxy = (obj, prop, handler) => {
  const original = obj[prop];
  const proxy = new Proxy(original, handler);
  utils.nativeFns.set(proxy, `function ${original.name}() { [native code] }`);
  Object.defineProperty(obj, prop, { value: proxy, writable: true, configurable: true });
};

utils.installToStringProxy();
"""


def build_init_script(script: str, *args: Any) -> str:
    """Wrap a JS function expression so it runs with utils and JSON args.

    Args:
        script: Function expression taking ``(utils, ...args)``
        *args: JSON-serialisable arguments

    Returns:
        Self-contained script source for ``page.add_init_script``.
    """
    call_args = ", ".join(["utils"] + [json.dumps(arg) for arg in args])
    return f"(() => {{\n{UTILS_SCRIPT}\n({script})({call_args});\n}})();"


class Evasion:
    """Base class for evasion modules.

    Subclasses set ``name``, optionally ``defaults``, and define any of the
    lifecycle hooks: ``before_launch``, ``before_connect``, ``on_browser``,
    ``on_page_created``. Hooks that are not defined are skipped.
    """

    name = ""
    defaults: Dict[str, Any] = {}

    def __init__(self, **opts):
        self.opts = {**self.defaults, **opts}

    async def evaluate_on_new_document(self, page, script: str, *args: Any):
        """Run a script in every document the page loads, before page scripts."""
        await page.add_init_script(build_init_script(script, *args))
        logger.debug(f"Registered init script for evasion {self.name}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
