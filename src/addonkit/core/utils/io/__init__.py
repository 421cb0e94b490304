"""I/O utilities for addonkit.

Read-only helpers: addonkit never writes to the filesystem while resolving
or loading presets.
"""
from __future__ import annotations

from .json import read_json, read_json_safe
from .yaml import iter_yaml_files, read_yaml

__all__ = [
    "read_json",
    "read_json_safe",
    "read_yaml",
    "iter_yaml_files",
]
