from stealth_plugin.cli import run

run()
