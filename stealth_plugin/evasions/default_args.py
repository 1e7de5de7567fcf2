"""Evasion: stop the browser from being launched with automation defaults."""

from typing import Any, Dict

from stealth_plugin.evasions.base import Evasion


class DefaultArgsEvasion(Evasion):
    """Adds tell-tale default switches to ``ignore_default_args``.

    ``--enable-automation`` shows the infobar and sets navigator.webdriver,
    ``--disable-extensions`` is something real users never run with.
    """

    name = "defaultArgs"
    defaults = {"args_to_ignore": ["--disable-extensions", "--enable-automation"]}

    async def before_launch(self, options: Dict[str, Any]):
        ignored = options.get("ignore_default_args")
        if ignored is True:
            # Already ignoring every default switch
            return
        ignored = list(ignored or [])
        for arg in self.opts["args_to_ignore"]:
            if arg not in ignored:
                ignored.append(arg)
        options["ignore_default_args"] = ignored
