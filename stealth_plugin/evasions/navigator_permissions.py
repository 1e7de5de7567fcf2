"""Evasion: keep the notifications permission query consistent with Notification.permission."""

from stealth_plugin.evasions.base import Evasion

SCRIPT = """
(utils) => {
  if (!window.Notification || !window.navigator.permissions) return;

  // Headless reports 'denied' here while the query API says 'prompt'
  Object.defineProperty(Notification, 'permission', {
    get: utils.patchToString(() => 'default', 'get permission'),
    configurable: true,
  });

  utils.replaceWithProxy(Object.getPrototypeOf(navigator.permissions), 'query', {
    apply(target, ctx, args) {
      const param = (args || [])[0];
      if (param && param.name === 'notifications') {
        const result = { state: 'prompt' };
        Object.setPrototypeOf(result, PermissionStatus.prototype);
        return Promise.resolve(result);
      }
      return Reflect.apply(target, ctx, args);
    },
  });
}
"""


class NavigatorPermissionsEvasion(Evasion):
    name = "navigator.permissions"

    async def on_page_created(self, page):
        await self.evaluate_on_new_document(page, SCRIPT)
