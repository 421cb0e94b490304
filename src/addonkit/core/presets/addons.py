"""Addon name resolution.

Turns an addon entry into either a virtual addon (manager/preview entry
files, optionally with a companion preset) or a plain preset module.

Valid inputs:
- ``"some-addon/manager"``            => VirtualAddon with one manager entry
- ``"some-addon/preset"``             => PresetsAddon pointing at the preset file
- ``"some-addon"``                    => probed for manager/register/preview/preset
- ``{"name": "some-addon", "options": {...}}`` => as above, options kept
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from addonkit.core.exceptions import ResolutionError
from addonkit.core.resolution import BROWSER, NODE, PackageManifest, ResolutionAdapter
from addonkit.core.resolution.resolver import is_relative_or_absolute
from addonkit.core.utils.merge import is_mapping

from .model import (
    PresetSpecifier,
    PresetsAddon,
    PreviewAnnotation,
    PreviewEntry,
    ResolvedAddon,
    VirtualAddon,
    describe_specifier,
    with_options,
)

_logger = logging.getLogger(__name__)

INVALID_ADDON_MESSAGE = (
    "Addon value should end in /manager or /preview or /register "
    "OR it should be a valid preset\n%s"
)


class _EntryProber:
    """Probe one package for its canonical addon entries."""

    def __init__(
        self,
        adapter: ResolutionAdapter,
        name: str,
        manifest: PackageManifest,
        probe_base: Path,
    ) -> None:
        self.adapter = adapter
        self.name = name
        self.manifest = manifest
        self.probe_base = probe_base

    def direct(self, entry: str, strategy: str) -> Optional[str]:
        return self.adapter.resolve_for(strategy, f"{self.name}/{entry}", self.probe_base)

    def probe(self, entry: str, strategy: str) -> Optional[str]:
        return self.direct(entry, strategy) or self.adapter.resolve_export(
            self.manifest, f"./{entry}", strategy
        )


def resolve_addon_name(
    base_dir: Union[str, Path],
    name: Any,
    options: Optional[Mapping[str, Any]] = None,
    *,
    adapter: Optional[ResolutionAdapter] = None,
) -> Optional[ResolvedAddon]:
    """Resolve an addon name to a virtual addon or a preset module.

    Args:
        base_dir: Directory resolution starts from (usually the config dir)
        name: Addon specifier
        options: Options attached to the addon entry, forwarded to its preset

    Returns:
        The resolved addon, or None when nothing could be found

    Raises:
        ResolutionError: if ``name`` is not a non-empty string
    """
    if not isinstance(name, str) or not name.strip():
        raise ResolutionError(
            f"Addon name must be a non-empty string, got {describe_specifier(name)}",
            context={"name": describe_specifier(name)},
        )
    adapter = adapter or ResolutionAdapter()
    settings = adapter.settings

    resolved_browser = adapter.resolve_browser(name, base_dir)
    resolved_node = adapter.resolve_node(name, base_dir)
    resolved = resolved_browser or resolved_node or adapter.resolve_generic(name, base_dir)

    if resolved:
        if resolved_browser and settings.manager_pattern.search(resolved_browser):
            return VirtualAddon(name=name, manager_entries=(resolved_browser,))
        if resolved_node and settings.preset_pattern.search(resolved_node):
            return PresetsAddon(name=resolved_node)

    manifest = adapter.find_package(resolved or base_dir)
    if manifest is None:
        return None

    # Local (path) addons probe relative to the caller; packages probe from their own root.
    probe_base = Path(base_dir) if is_relative_or_absolute(name) else manifest.directory
    prober = _EntryProber(adapter, name, manifest, probe_base)

    manager_file = prober.probe("manager", BROWSER)
    register_file = prober.probe("register", BROWSER) or prober.probe("register-panel", BROWSER)
    preview_file = prober.probe("preview", BROWSER)
    preset_file = prober.probe("preset", NODE)

    if not (manager_file or preview_file) and preset_file:
        return PresetsAddon(name=preset_file)

    if manager_file or register_file or preview_file or preset_file:
        manager_entries: List[str] = []
        if manager_file:
            manager_entries.append(manager_file)
        # Legacy register entries only apply to addons without a preset.
        if not manager_file and register_file and not preset_file:
            manager_entries.append(register_file)

        preview_annotations: List[PreviewEntry] = []
        if preview_file:
            preview_annotations.append(PreviewAnnotation(bare=f"{name}/preview", absolute=preview_file))

        presets = ({"name": preset_file, "options": options},) if preset_file else ()
        return VirtualAddon(
            name=name,
            manager_entries=tuple(manager_entries),
            preview_annotations=tuple(preview_annotations),
            presets=presets,
        )

    if resolved:
        return PresetsAddon(name=resolved)

    return None


def map_addon(
    entry: Any,
    config_dir: Union[str, Path],
    *,
    adapter: Optional[ResolutionAdapter] = None,
    logger: Optional[logging.Logger] = None,
) -> Optional[PresetSpecifier]:
    """Resolve one addon entry into a loadable specifier, or None (logged)."""
    log = logger or _logger
    options = (entry.get("options") or None) if is_mapping(entry) else None
    name = entry.get("name") if is_mapping(entry) else entry

    try:
        resolved = resolve_addon_name(config_dir, name, options, adapter=adapter)
    except Exception:
        log.error(INVALID_ADDON_MESSAGE, describe_specifier(entry))
        return None

    if resolved is None:
        log.warning('Could not resolve addon "%s", skipping. Is it installed?', name)
        return None

    return with_options(resolved, options)


__all__ = ["resolve_addon_name", "map_addon", "INVALID_ADDON_MESSAGE"]
