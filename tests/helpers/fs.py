"""Builders for fake package trees on disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional


def write(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def make_package(
    root: Path,
    name: str,
    files: Optional[Dict[str, str]] = None,
    manifest: Optional[Dict[str, Any]] = None,
) -> Path:
    """Create ``root/node_modules/<name>`` with a package.json and files."""
    package_dir = root / "node_modules" / name
    package_dir.mkdir(parents=True, exist_ok=True)
    data = {"name": name, "version": "1.0.0", **(manifest or {})}
    write(package_dir / "package.json", json.dumps(data))
    for rel, content in (files or {}).items():
        write(package_dir / rel, content)
    return package_dir
