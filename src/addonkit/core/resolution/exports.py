"""Package ``exports`` map lookup.

Implements the subset of the package export-map algorithm addonkit needs:

- sugar forms (a string, an array, or a conditions object standing for ``"."``)
- exact subpath keys and single-``*`` pattern keys (longest prefix wins)
- legacy folder keys ending in ``/``
- nested condition objects, evaluated in the map's own key order
- array fallbacks and ``null`` exclusions

Targets are returned as package-relative paths (``./dist/manager.js``).
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, Optional


def _normalize_subpath(subpath: str) -> str:
    if subpath in ("", "."):
        return "."
    if subpath.startswith("./"):
        return subpath
    return "./" + subpath.lstrip("/")


def _is_subpath_map(exports: Mapping[str, Any]) -> Optional[bool]:
    """True for subpath maps, False for condition maps, None when keys are mixed."""
    keys = [str(k) for k in exports.keys()]
    if not keys:
        return False
    dotted = [k.startswith(".") for k in keys]
    if all(dotted):
        return True
    if not any(dotted):
        return False
    return None


def _valid_target(target: str) -> bool:
    if not target.startswith("./"):
        return False
    segments = target[2:].split("/")
    return ".." not in segments and "node_modules" not in segments


def _resolve_target(target: Any, match: Optional[str], conditions: frozenset[str]) -> Optional[str]:
    if target is None:
        return None
    if isinstance(target, str):
        if match is not None:
            target = target.replace("*", match)
        return target if _valid_target(target) else None
    if isinstance(target, (list, tuple)):
        for item in target:
            resolved = _resolve_target(item, match, conditions)
            if resolved is not None:
                return resolved
        return None
    if isinstance(target, Mapping):
        for key, value in target.items():
            if key == "default" or key in conditions:
                resolved = _resolve_target(value, match, conditions)
                if resolved is not None:
                    return resolved
        return None
    return None


def _pattern_sort_key(key: str) -> tuple[int, int]:
    star = key.find("*")
    return (star if star >= 0 else len(key), len(key))


def resolve_exports(exports: Any, subpath: str, conditions: Iterable[str]) -> Optional[str]:
    """Return the first concrete target ``exports`` maps ``subpath`` to.

    Args:
        exports: The ``exports`` value of a package manifest
        subpath: Package-relative subpath (``"."``, ``"./manager"`` or ``"manager"``)
        conditions: Active condition names; ``default`` always matches

    Returns:
        Package-relative target path, or None when nothing matches

    Example:
        >>> resolve_exports({"./manager": {"import": "./dist/manager.mjs"}}, "./manager", ["import"])
        './dist/manager.mjs'
    """
    if exports is None:
        return None

    active = frozenset(conditions)
    wanted = _normalize_subpath(subpath)

    if isinstance(exports, Mapping):
        kind = _is_subpath_map(exports)
        if kind is None:
            return None
        subpaths: Mapping[str, Any] = exports if kind else {".": exports}
    else:
        subpaths = {".": exports}

    if wanted in subpaths and "*" not in wanted:
        return _resolve_target(subpaths[wanted], None, active)

    best_key: Optional[str] = None
    best_match: Optional[str] = None
    for key in subpaths:
        star = key.find("*")
        if star < 0 or key.find("*", star + 1) >= 0:
            continue
        prefix, suffix = key[:star], key[star + 1:]
        if wanted.startswith(prefix) and wanted != prefix and wanted.endswith(suffix):
            if len(wanted) < len(key):
                continue
            if best_key is None or _pattern_sort_key(key) > _pattern_sort_key(best_key):
                best_key = key
                best_match = wanted[len(prefix):len(wanted) - len(suffix)]
    if best_key is not None:
        return _resolve_target(subpaths[best_key], best_match, active)

    folders = sorted((k for k in subpaths if k.endswith("/")), key=len, reverse=True)
    for key in folders:
        if wanted.startswith(key):
            base = _resolve_target(subpaths[key], None, active)
            if base is not None and base.endswith("/"):
                return base + wanted[len(key):]

    return None


__all__ = ["resolve_exports"]
