"""
Registry of the evasions bundled with the stealth plugin.

Evasions are imported statically. Order matters: hooks run in registry
order, so evasions that edit shared launch options compose in this order.
"""

from typing import Any, Callable, Dict

from stealth_plugin.evasions import (
    ChromeAppEvasion,
    ChromeCsiEvasion,
    ChromeLoadTimesEvasion,
    ChromeRuntimeEvasion,
    DefaultArgsEvasion,
    IframeContentWindowEvasion,
    MediaCodecsEvasion,
    NavigatorHardwareConcurrencyEvasion,
    NavigatorLanguagesEvasion,
    NavigatorPermissionsEvasion,
    NavigatorPluginsEvasion,
    NavigatorWebdriverEvasion,
    SourceUrlEvasion,
    UserAgentOverrideEvasion,
    WebglVendorEvasion,
    WindowOuterDimensionsEvasion,
)

# Evasion name -> zero-argument factory
EVASION_REGISTRY: Dict[str, Callable[[], Any]] = {
    "chrome.app": ChromeAppEvasion,
    "chrome.csi": ChromeCsiEvasion,
    "chrome.loadTimes": ChromeLoadTimesEvasion,
    "chrome.runtime": ChromeRuntimeEvasion,
    "defaultArgs": DefaultArgsEvasion,
    "iframe.contentWindow": IframeContentWindowEvasion,
    "media.codecs": MediaCodecsEvasion,
    "navigator.hardwareConcurrency": NavigatorHardwareConcurrencyEvasion,
    "navigator.languages": NavigatorLanguagesEvasion,
    "navigator.permissions": NavigatorPermissionsEvasion,
    "navigator.plugins": NavigatorPluginsEvasion,
    "navigator.webdriver": NavigatorWebdriverEvasion,
    "sourceurl": SourceUrlEvasion,
    "user-agent-override": UserAgentOverrideEvasion,
    "webgl.vendor": WebglVendorEvasion,
    "window.outerdimensions": WindowOuterDimensionsEvasion,
}
