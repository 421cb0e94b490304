"""
addonkit CLI package.

Debug commands for inspecting addon resolution and preset loading. Commands
are auto-discovered from ``addonkit.cli.commands``.
"""
from ._args import add_config_dir_flag, add_json_flag, add_standard_flags
from ._output import OutputFormatter

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_config_dir_flag",
    "add_standard_flags",
]
