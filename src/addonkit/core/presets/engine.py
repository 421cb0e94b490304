"""Preset engine entry points.

``get_presets`` runs one load pass and returns a ``Presets`` value the host
queries once per extension point. ``load_all_presets`` additionally wraps
the user's list with core defaults, custom presets and overrides, and drops
legacy presets that are no longer needed.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Pattern, Sequence, Tuple

from addonkit.core.config import AddonkitSettings
from addonkit.core.resolution import ResolutionAdapter

from .apply import apply_presets
from .loader import PresetLoader, resolve_awaitable
from .model import LoadedPreset, PreviewEntry, specifier_names
from .modules import ModuleLoader

_logger = logging.getLogger(__name__)

MANAGER_ENTRIES = "manager_entries"
PREVIEW_ANNOTATIONS = "preview_annotations"

CustomPresets = Callable[[Mapping[str, Any]], Any]


class Presets:
    """The loaded presets of one host pass."""

    def __init__(self, loaded: Sequence[LoadedPreset], options: Optional[Mapping[str, Any]] = None) -> None:
        self._loaded: Tuple[LoadedPreset, ...] = tuple(loaded)
        self._options = dict(options or {})

    @property
    def loaded(self) -> Tuple[LoadedPreset, ...]:
        return self._loaded

    def __len__(self) -> int:
        return len(self._loaded)

    async def apply(self, extension: str, config: Any = None, args: Optional[Mapping[str, Any]] = None) -> Any:
        """Fold ``extension`` over the loaded presets, starting from ``config``."""
        return await apply_presets(self._loaded, extension, config, args, self._options)

    async def manager_entries(self) -> List[str]:
        """Files to bundle into the manager UI."""
        return list(await self.apply(MANAGER_ENTRIES, []))

    async def preview_annotations(self) -> List[PreviewEntry]:
        """Entries to bundle into the preview runtime."""
        return list(await self.apply(PREVIEW_ANNOTATIONS, []))


async def get_presets(
    specifiers: Sequence[Any],
    options: Optional[Mapping[str, Any]] = None,
    *,
    adapter: Optional[ResolutionAdapter] = None,
    module_loader: Optional[ModuleLoader] = None,
    logger: Optional[logging.Logger] = None,
) -> Presets:
    """Load ``specifiers`` once and return the queryable result."""
    loader = PresetLoader(options, adapter=adapter, module_loader=module_loader, logger=logger)
    loaded = await loader.load_presets(list(specifiers), 0)
    return Presets(loaded, loader.options)


def filter_presets_config(specifiers: Iterable[Any], patterns: Sequence[Pattern[str]]) -> List[Any]:
    """Drop string/``{name}`` specifiers whose name matches a legacy pattern."""
    items = list(specifiers)
    kept: List[Any] = []
    for raw, name in zip(items, specifier_names(items)):
        if name is not None and any(p.search(name) for p in patterns):
            continue
        kept.append(raw)
    return kept


async def load_all_presets(
    options: Optional[Mapping[str, Any]] = None,
    *,
    core_presets: Sequence[Any] = (),
    override_presets: Sequence[Any] = (),
    custom_presets: Optional[CustomPresets] = None,
    settings: Optional[AddonkitSettings] = None,
    adapter: Optional[ResolutionAdapter] = None,
    module_loader: Optional[ModuleLoader] = None,
    logger: Optional[logging.Logger] = None,
) -> Presets:
    """Compose core, custom and override presets, then load them.

    Args:
        options: Host options (``config_dir`` anchors addon resolution)
        core_presets: Leading defaults supplied by the host
        override_presets: Trailing presets that apply last
        custom_presets: Discovery of user-authored presets; receives options
        settings: Loaded settings; read from ``config_dir`` when omitted
    """
    log = logger or _logger
    host_options = dict(options or {})
    if settings is None:
        settings = adapter.settings if adapter is not None else AddonkitSettings.load(host_options.get("config_dir"))

    custom: List[Any] = []
    if custom_presets is not None:
        custom = list(await resolve_awaitable(custom_presets(host_options)) or [])

    presets_config = [*core_presets, *custom, *override_presets]
    filtered = filter_presets_config(presets_config, settings.legacy_filters)
    if len(filtered) < len(presets_config) and settings.legacy_warning:
        log.warning(settings.legacy_warning)

    adapter = adapter or ResolutionAdapter(settings=settings, logger=log)
    return await get_presets(
        filtered,
        host_options,
        adapter=adapter,
        module_loader=module_loader,
        logger=log,
    )


__all__ = [
    "MANAGER_ENTRIES",
    "PREVIEW_ANNOTATIONS",
    "Presets",
    "get_presets",
    "filter_presets_config",
    "load_all_presets",
]
