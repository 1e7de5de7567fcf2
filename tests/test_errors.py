"""Tests for target-closed error classification."""

import pytest
from patchright.async_api import Error

from stealth_plugin.errors import TargetCloseError, is_target_closed_error


class TargetClosedError(Exception):
    """Stand-in with the same name as patchright's internal error class."""


class NamedError(Exception):
    def __init__(self, message, name):
        super().__init__(message)
        self.name = name


@pytest.mark.parametrize(
    "error",
    [
        TargetCloseError("anything"),
        TargetClosedError("Target page, context or browser has been closed"),
        NamedError("no marker here", "TargetCloseError"),
        Exception("Protocol error: Target closed."),
        Exception("Protocol error (Runtime.evaluate): Session closed. Most likely the page has been closed."),
        Error("Protocol error (Page.addScriptToEvaluateOnNewDocument): Target closed"),
    ],
)
def test_target_closed_errors(error):
    assert is_target_closed_error(error) is True


@pytest.mark.parametrize(
    "error",
    [
        Exception("boom"),
        ValueError("target closed"),
        RuntimeError("Session ended"),
        NamedError("boom", "ProtocolError"),
        NamedError("boom", None),
        Error("Timeout 30000ms exceeded."),
    ],
)
def test_other_errors(error):
    assert is_target_closed_error(error) is False


def test_message_attribute_is_checked():
    error = Exception("unrelated")
    error.message = "Protocol error: Session closed."
    assert is_target_closed_error(error) is True


def test_non_string_name_is_ignored():
    error = NamedError("boom", ["TargetCloseError"])
    assert is_target_closed_error(error) is False


def test_args_checked_when_message_attribute_differs():
    error = Exception("Protocol error: Target closed.")
    error.message = "evasion setup failed"
    assert is_target_closed_error(error) is True
