"""
Auto-discovery CLI dispatcher for addonkit.

Scans ``addonkit.cli.commands`` for command modules and registers them.
Adding a new command = adding a .py file with SUMMARY, register_args and main.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Sequence


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Discover command modules under cli/commands.

    Returns:
        Dict mapping command name to command info dict
    """
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue

        cmd_name = item.stem
        try:
            module = importlib.import_module(f"addonkit.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def _get_version() -> str:
    """Get addonkit version string."""
    try:
        from addonkit import __version__
        return __version__
    except ImportError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with auto-discovered commands."""
    parser = argparse.ArgumentParser(
        prog="addonkit",
        description="addonkit - preset and addon composition engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level for addonkit messages (default: from config)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in sorted(discover_commands().items()):
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    from addonkit.core.config import AddonkitSettings
    from addonkit.core.stdlib_logging import configure_logging

    level = args.log_level
    if level is None:
        level = AddonkitSettings.load(getattr(args, "config_dir", None)).log_level
    configure_logging(level=level)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    func = getattr(args, "_func", None)
    if func is None:
        parser.print_help()
        return 1

    from addonkit.core.exceptions import AddonkitError

    try:
        _configure_logging(args)
        return int(func(args) or 0)
    except AddonkitError as exc:
        from addonkit.cli._output import OutputFormatter

        OutputFormatter(json_mode=getattr(args, "json", False)).error(exc, error_code=type(exc).__name__)
        return 2


__all__ = ["discover_commands", "build_parser", "main"]
