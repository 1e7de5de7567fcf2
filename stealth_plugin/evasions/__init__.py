"""Evasion modules applied by the stealth plugin."""

from stealth_plugin.evasions.base import Evasion, build_init_script
from stealth_plugin.evasions.chrome_app import ChromeAppEvasion
from stealth_plugin.evasions.chrome_csi import ChromeCsiEvasion
from stealth_plugin.evasions.chrome_load_times import ChromeLoadTimesEvasion
from stealth_plugin.evasions.chrome_runtime import ChromeRuntimeEvasion
from stealth_plugin.evasions.default_args import DefaultArgsEvasion
from stealth_plugin.evasions.iframe_content_window import IframeContentWindowEvasion
from stealth_plugin.evasions.media_codecs import MediaCodecsEvasion
from stealth_plugin.evasions.navigator_hardware_concurrency import (
    NavigatorHardwareConcurrencyEvasion,
)
from stealth_plugin.evasions.navigator_languages import NavigatorLanguagesEvasion
from stealth_plugin.evasions.navigator_permissions import NavigatorPermissionsEvasion
from stealth_plugin.evasions.navigator_plugins import NavigatorPluginsEvasion
from stealth_plugin.evasions.navigator_webdriver import NavigatorWebdriverEvasion
from stealth_plugin.evasions.sourceurl import SourceUrlEvasion
from stealth_plugin.evasions.user_agent_override import UserAgentOverrideEvasion
from stealth_plugin.evasions.webgl_vendor import WebglVendorEvasion
from stealth_plugin.evasions.window_outerdimensions import WindowOuterDimensionsEvasion

__all__ = [
    "ChromeAppEvasion",
    "ChromeCsiEvasion",
    "ChromeLoadTimesEvasion",
    "ChromeRuntimeEvasion",
    "DefaultArgsEvasion",
    "Evasion",
    "IframeContentWindowEvasion",
    "MediaCodecsEvasion",
    "NavigatorHardwareConcurrencyEvasion",
    "NavigatorLanguagesEvasion",
    "NavigatorPermissionsEvasion",
    "NavigatorPluginsEvasion",
    "NavigatorWebdriverEvasion",
    "SourceUrlEvasion",
    "UserAgentOverrideEvasion",
    "WebglVendorEvasion",
    "WindowOuterDimensionsEvasion",
    "build_init_script",
]
