"""Preset and addon data model.

Specifiers arrive in four user-facing shapes (a name, a ``{name, options}``
mapping, a nested list, a factory callable) and two internal ones produced by
addon resolution. ``normalize_specifier`` turns every accepted shape into a
``PresetSpecifier`` and rejects everything else.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple, Union

from addonkit.core.exceptions import InvalidPresetError
from addonkit.core.utils.merge import is_mapping, is_sequence


class SpecifierKind(str, Enum):
    NAME = "name"
    NAMED = "named"
    INLINE = "inline"
    FACTORY = "factory"
    VIRTUAL = "virtual"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class PreviewAnnotation:
    """A preview entry: the bare specifier plus its physical location."""

    bare: str
    absolute: str

    def to_dict(self) -> Dict[str, str]:
        return {"bare": self.bare, "absolute": self.absolute}


PreviewEntry = Union[PreviewAnnotation, str]


@dataclass(frozen=True)
class VirtualAddon:
    """An addon made of direct entry files rather than a preset module."""

    kind: ClassVar[str] = "virtual"

    name: str
    manager_entries: Tuple[str, ...] = ()
    preview_annotations: Tuple[PreviewEntry, ...] = ()
    presets: Tuple[Mapping[str, Any], ...] = ()

    def contents(self) -> Dict[str, Any]:
        """The preset shape this addon contributes when loaded."""
        data: Dict[str, Any] = {}
        if self.manager_entries:
            data["manager_entries"] = list(self.manager_entries)
        if self.preview_annotations:
            data["preview_annotations"] = list(self.preview_annotations)
        if self.presets:
            data["presets"] = [dict(p) for p in self.presets]
        return data

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.kind, "name": self.name}
        if self.manager_entries:
            data["manager_entries"] = list(self.manager_entries)
        if self.preview_annotations:
            data["preview_annotations"] = [
                p.to_dict() if isinstance(p, PreviewAnnotation) else p for p in self.preview_annotations
            ]
        if self.presets:
            data["presets"] = [dict(p) for p in self.presets]
        return data


@dataclass(frozen=True)
class PresetsAddon:
    """An addon that is loaded as an ordinary preset module."""

    kind: ClassVar[str] = "presets"

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "name": self.name}


ResolvedAddon = Union[VirtualAddon, PresetsAddon]


@dataclass(frozen=True)
class PresetSpecifier:
    """Canonical form of every accepted specifier shape."""

    kind: SpecifierKind
    name: str
    options: Mapping[str, Any] = field(default_factory=dict)
    payload: Any = None
    raw: Any = None

    def describe(self) -> str:
        return describe_specifier(self.raw if self.raw is not None else self.name)


@dataclass(frozen=True)
class LoadedPreset:
    """One loaded preset. ``preset`` and ``options`` are read-only views."""

    name: str
    preset: Mapping[str, Any]
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, preset: Mapping[str, Any], options: Optional[Mapping[str, Any]] = None) -> "LoadedPreset":
        return cls(
            name=name,
            preset=MappingProxyType(dict(preset)),
            options=MappingProxyType(dict(options or {})),
        )

    def get(self, extension: str, default: Any = None) -> Any:
        return self.preset.get(extension, default)


def describe_specifier(raw: Any) -> str:
    """Render a specifier for log messages."""
    if isinstance(raw, PresetSpecifier):
        return raw.describe()
    if isinstance(raw, (VirtualAddon, PresetsAddon)):
        raw = raw.to_dict()
    if callable(raw):
        return f"<factory {getattr(raw, '__qualname__', repr(raw))}>"
    try:
        return json.dumps(raw, default=repr)
    except (TypeError, ValueError):
        return repr(raw)


def _callable_name(fn: Any) -> str:
    module = getattr(fn, "__module__", None)
    qualname = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
    return f"{module}.{qualname}" if module else qualname


def _options_of(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    options = raw.get("options")
    if options is None:
        return {}
    if not is_mapping(options):
        raise InvalidPresetError(
            f"{describe_specifier(raw)} has non-mapping options",
            context={"specifier": describe_specifier(raw)},
        )
    return options


def normalize_specifier(raw: Any) -> PresetSpecifier:
    """Normalize any accepted specifier shape.

    Raises:
        InvalidPresetError: when ``raw`` is none of the accepted shapes.
    """
    if isinstance(raw, PresetSpecifier):
        return raw
    if isinstance(raw, VirtualAddon):
        return PresetSpecifier(SpecifierKind.VIRTUAL, raw.name, {}, raw, raw)
    if isinstance(raw, PresetsAddon):
        return PresetSpecifier(SpecifierKind.RESOLVED, raw.name, {}, raw, raw)
    if isinstance(raw, str):
        if not raw.strip():
            raise InvalidPresetError("Preset name must not be empty")
        return PresetSpecifier(SpecifierKind.NAME, raw, {}, None, raw)
    if is_mapping(raw):
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            raise InvalidPresetError(
                f"{describe_specifier(raw)} is not a valid preset specifier: missing name",
                context={"specifier": describe_specifier(raw)},
            )
        return PresetSpecifier(SpecifierKind.NAMED, name, _options_of(raw), None, raw)
    if is_sequence(raw):
        return PresetSpecifier(SpecifierKind.INLINE, "<inline>", {}, list(raw), raw)
    if callable(raw):
        return PresetSpecifier(SpecifierKind.FACTORY, _callable_name(raw), {}, raw, raw)
    raise InvalidPresetError(
        f"{describe_specifier(raw)} is not a valid preset specifier",
        context={"specifier": describe_specifier(raw)},
    )


def with_options(addon: ResolvedAddon, options: Optional[Mapping[str, Any]]) -> PresetSpecifier:
    """Wrap a resolved addon as a specifier carrying the addon entry's options."""
    kind = SpecifierKind.VIRTUAL if isinstance(addon, VirtualAddon) else SpecifierKind.RESOLVED
    return PresetSpecifier(kind, addon.name, dict(options or {}), addon, addon)


def specifier_names(specifiers: List[Any]) -> List[Optional[str]]:
    """Names of string and ``{name}`` specifiers; None for other shapes."""
    names: List[Optional[str]] = []
    for raw in specifiers:
        if isinstance(raw, str):
            names.append(raw)
        elif is_mapping(raw) and isinstance(raw.get("name"), str):
            names.append(raw["name"])
        else:
            names.append(None)
    return names


__all__ = [
    "SpecifierKind",
    "PreviewAnnotation",
    "PreviewEntry",
    "VirtualAddon",
    "PresetsAddon",
    "ResolvedAddon",
    "PresetSpecifier",
    "LoadedPreset",
    "describe_specifier",
    "normalize_specifier",
    "with_options",
    "specifier_names",
]
