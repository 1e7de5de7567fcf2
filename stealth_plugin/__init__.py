"""Stealth plugin for patchright browser automation."""

from stealth_plugin.errors import TargetCloseError, is_target_closed_error
from stealth_plugin.plugin import EvasionSet, StealthPlugin, stealth
from stealth_plugin.registry import EVASION_REGISTRY

__all__ = [
    "EVASION_REGISTRY",
    "EvasionSet",
    "StealthPlugin",
    "TargetCloseError",
    "is_target_closed_error",
    "stealth",
]
