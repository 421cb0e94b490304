"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_config_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --config-dir flag; addon resolution starts from this directory."""
    parser.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="Configuration directory (default: current directory)",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add the flags every command accepts (--json, --config-dir)."""
    add_json_flag(parser)
    add_config_dir_flag(parser)


__all__ = ["add_json_flag", "add_config_dir_flag", "add_standard_flags"]
