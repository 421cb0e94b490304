"""Resolution strategies.

A strategy bundles the three priority lists a resolver needs (file
extensions, package.json fields and export-map conditions) plus whether
symlinks are followed to their physical location.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

BROWSER = "browser"
NODE = "node"
GENERIC = "generic"


@dataclass(frozen=True)
class ResolveStrategy:
    """Priority lists for one resolution strategy."""

    name: str
    extensions: Tuple[str, ...]
    fields: Tuple[str, ...]
    conditions: Tuple[str, ...]
    follow_symlinks: bool = False

    @classmethod
    def from_mapping(cls, name: str, data: Mapping[str, Any]) -> "ResolveStrategy":
        return cls(
            name=name,
            extensions=tuple(str(e) for e in data.get("extensions") or ()),
            fields=tuple(str(f) for f in data.get("fields") or ()),
            conditions=tuple(str(c) for c in data.get("conditions") or ()),
            follow_symlinks=bool(data.get("followSymlinks", False)),
        )


__all__ = ["BROWSER", "NODE", "GENERIC", "ResolveStrategy"]
