"""Module resolver capability and its filesystem implementation.

``ModuleResolver`` is the primitive the adapter builds on: given priority
lists and a base directory, map a specifier to a file path or ``None``.
``FileSystemResolver`` implements it over ``node_modules`` trees.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Protocol, Sequence, Tuple

from addonkit.core.utils.io import read_json_safe

from .exports import resolve_exports

MANIFEST_NAME = "package.json"


class ModuleResolver(Protocol):
    """Resolve ``specifier`` from ``base_dir``; return an absolute path or None."""

    def resolve(
        self,
        conditions: Sequence[str],
        fields: Sequence[str],
        extensions: Sequence[str],
        base_dir: str,
        specifier: str,
        *,
        follow_symlinks: bool = False,
    ) -> Optional[str]: ...


def split_package_specifier(specifier: str) -> Tuple[str, str]:
    """Split a bare specifier into (package name, subpath).

    Example:
        >>> split_package_specifier("@scope/addon/manager")
        ('@scope/addon', 'manager')
        >>> split_package_specifier("addon")
        ('addon', '')
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return "/".join(parts[:2]), "/".join(parts[2:])
    return parts[0], "/".join(parts[1:])


def is_relative_or_absolute(specifier: str) -> bool:
    return (
        os.path.isabs(specifier)
        or specifier in (".", "..")
        or specifier.startswith(("./", "../", ".\\", "..\\"))
    )


class FileSystemResolver:
    """Resolve modules against files and ``node_modules`` directories on disk."""

    def resolve(
        self,
        conditions: Sequence[str],
        fields: Sequence[str],
        extensions: Sequence[str],
        base_dir: str,
        specifier: str,
        *,
        follow_symlinks: bool = False,
    ) -> Optional[str]:
        if not specifier:
            return None
        base = Path(base_dir)
        if is_relative_or_absolute(specifier):
            target = base / specifier
            found = self._load_as_file(target, extensions) or self._load_as_directory(
                target, fields, extensions
            )
        else:
            found = self._load_from_node_modules(base, specifier, conditions, fields, extensions)
        if found is None:
            return None
        if follow_symlinks:
            return str(found.resolve())
        return os.path.abspath(found)

    def _node_modules_dirs(self, base: Path) -> Iterator[Path]:
        for directory in (base, *base.parents):
            if directory.name == "node_modules":
                continue
            yield directory / "node_modules"

    def _read_manifest(self, package_dir: Path) -> Mapping[str, Any]:
        data = read_json_safe(package_dir / MANIFEST_NAME, default={})
        return data if isinstance(data, dict) else {}

    def _load_from_node_modules(
        self,
        base: Path,
        specifier: str,
        conditions: Sequence[str],
        fields: Sequence[str],
        extensions: Sequence[str],
    ) -> Optional[Path]:
        name, subpath = split_package_specifier(specifier)
        for modules_dir in self._node_modules_dirs(base):
            package_dir = modules_dir / name
            if not package_dir.is_dir():
                continue
            found = self._load_from_package(package_dir, subpath, conditions, fields, extensions)
            if found is not None:
                return found
        return None

    def _load_from_package(
        self,
        package_dir: Path,
        subpath: str,
        conditions: Sequence[str],
        fields: Sequence[str],
        extensions: Sequence[str],
    ) -> Optional[Path]:
        manifest = self._read_manifest(package_dir)
        exports = manifest.get("exports")
        if exports is not None:
            # An exports map is authoritative: unexported subpaths do not resolve.
            relative = resolve_exports(exports, subpath or ".", conditions)
            if relative is None:
                return None
            target = package_dir / relative
            return target if target.is_file() else None

        target = package_dir / subpath if subpath else package_dir
        return self._load_as_file(target, extensions) or self._load_as_directory(
            target, fields, extensions
        )

    def _load_as_file(self, path: Path, extensions: Sequence[str]) -> Optional[Path]:
        if path.is_file():
            return path
        if not path.name:
            return None
        for ext in extensions:
            candidate = path.with_name(path.name + ext)
            if candidate.is_file():
                return candidate
        return None

    def _load_index(self, directory: Path, extensions: Sequence[str]) -> Optional[Path]:
        for ext in extensions:
            candidate = directory / f"index{ext}"
            if candidate.is_file():
                return candidate
        return None

    def _load_as_directory(
        self, path: Path, fields: Sequence[str], extensions: Sequence[str]
    ) -> Optional[Path]:
        if not path.is_dir():
            return None
        manifest = self._read_manifest(path)
        for field in fields:
            value = manifest.get(field)
            # Object-form fields (e.g. browser replacement maps) are not entry points.
            if not isinstance(value, str) or not value:
                continue
            target = path / value
            found = self._load_as_file(target, extensions) or self._load_index(target, extensions)
            if found is not None:
                return found
        return self._load_index(path, extensions)


__all__ = [
    "MANIFEST_NAME",
    "ModuleResolver",
    "FileSystemResolver",
    "split_package_specifier",
    "is_relative_or_absolute",
]
