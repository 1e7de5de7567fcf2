"""
Error classification for evasion hooks.

A page can close while evasions are being applied to it. Those
failures are recognised here so page setup can stop quietly instead of
surfacing protocol noise to the caller.
"""

from typing import List

# Error kinds that mean the page, context or browser went away.
# TargetClosedError is what patchright raises.
TARGET_CLOSED_ERROR_NAMES = frozenset({"TargetCloseError", "TargetClosedError"})

TARGET_CLOSED_MESSAGES = ("Target closed", "Session closed")


class TargetCloseError(Exception):
    """Raised when the automation target disappeared mid-operation."""


def _error_messages(err: BaseException) -> List[str]:
    # patchright errors carry the protocol message on .message,
    # which can differ from str(err)
    messages = [str(err)]
    message = getattr(err, "message", None)
    if isinstance(message, str):
        messages.append(message)
    return messages


def is_target_closed_error(err: BaseException) -> bool:
    """Check whether an error means the page (or its session) is gone.

    Matches on the error kind first, then falls back to the error text.

    Args:
        err: The exception raised by an evasion hook.

    Returns:
        True if the error is a target-closed error.
    """
    if type(err).__name__ in TARGET_CLOSED_ERROR_NAMES:
        return True
    name = getattr(err, "name", None)
    if isinstance(name, str) and name in TARGET_CLOSED_ERROR_NAMES:
        return True

    return any(
        marker in message
        for message in _error_messages(err)
        for marker in TARGET_CLOSED_MESSAGES
    )
