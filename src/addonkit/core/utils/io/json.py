"""JSON read helpers."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

_MISSING = object()  # Sentinel for unset default


def read_json(file_path: Path | str, *, default: Any = _MISSING) -> Any:
    """Read and parse a JSON file.

    Args:
        file_path: Path to JSON file
        default: Value to return if file doesn't exist (optional).
                 If not provided, FileNotFoundError is raised.

    Returns:
        Parsed JSON data, or ``default`` if file doesn't exist

    Raises:
        FileNotFoundError: If the file does not exist and no default is provided
    """
    path = Path(file_path)
    if not path.exists():
        if default is not _MISSING:
            return default
        raise FileNotFoundError(f"JSON file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def read_json_safe(file_path: Path | str, default: Any = None) -> Any:
    """Read JSON, returning ``default`` when the file is missing or invalid."""
    try:
        return read_json(file_path, default=default)
    except (OSError, ValueError):
        return default


__all__ = ["read_json", "read_json_safe"]
