"""Preset loading and extension application.

Typical use::

    presets = await load_all_presets({"config_dir": ".addonkit"}, core_presets=[...])
    entries = await presets.manager_entries()
    webpack = await presets.apply("webpackFinal", base_config)
"""
from __future__ import annotations

from .addons import map_addon, resolve_addon_name
from .apply import ExtensionContext, apply_presets
from .engine import (
    MANAGER_ENTRIES,
    PREVIEW_ANNOTATIONS,
    Presets,
    filter_presets_config,
    get_presets,
    load_all_presets,
)
from .loader import PresetLoader, load_preset, load_presets
from .model import (
    LoadedPreset,
    PresetSpecifier,
    PresetsAddon,
    PreviewAnnotation,
    SpecifierKind,
    VirtualAddon,
    normalize_specifier,
)
from .modules import DefaultModuleLoader, ModuleLoader, interop_default

__all__ = [
    "resolve_addon_name",
    "map_addon",
    "ExtensionContext",
    "apply_presets",
    "MANAGER_ENTRIES",
    "PREVIEW_ANNOTATIONS",
    "Presets",
    "get_presets",
    "filter_presets_config",
    "load_all_presets",
    "PresetLoader",
    "load_preset",
    "load_presets",
    "LoadedPreset",
    "PresetSpecifier",
    "PresetsAddon",
    "PreviewAnnotation",
    "SpecifierKind",
    "VirtualAddon",
    "normalize_specifier",
    "DefaultModuleLoader",
    "ModuleLoader",
    "interop_default",
]
