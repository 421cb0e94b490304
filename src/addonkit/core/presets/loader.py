"""Recursive preset loading.

A specifier expands depth-first into a flat list of ``LoadedPreset``
records: nested presets first, then addons, then the specifier's own entry.
Each specifier fails on its own; siblings keep loading.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
import os
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Sequence, Union

from addonkit.core.config import AddonkitSettings
from addonkit.core.exceptions import InvalidPresetError
from addonkit.core.resolution import ResolutionAdapter
from addonkit.core.utils.merge import is_mapping, is_sequence

from .addons import map_addon
from .model import (
    LoadedPreset,
    PresetSpecifier,
    SpecifierKind,
    describe_specifier,
    normalize_specifier,
)
from .modules import DefaultModuleLoader, ModuleLoader

_logger = logging.getLogger(__name__)

NESTED_KEYS = ("presets", "addons")


async def resolve_awaitable(value: Union[Any, Awaitable[Any]]) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _accepts_argument(fn: Any) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return True
    for param in signature.parameters.values():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD, param.VAR_POSITIONAL):
            return True
    return False


class PresetLoader:
    """Expand specifiers into loaded presets for one host pass.

    Args:
        options: Host options, passed to preset functions and merged into
            every extension call. ``config_dir`` is the base directory for
            addon resolution (defaults to the working directory) and holds
            the project config the default adapter reads.
        adapter: Resolution adapter used for addon entries; built from the
            project settings when omitted
        module_loader: Capability returning a module's default export
        logger: Where load failures are reported
    """

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        adapter: Optional[ResolutionAdapter] = None,
        module_loader: Optional[ModuleLoader] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.options: Dict[str, Any] = dict(options or {})
        self.logger = logger or _logger
        self.adapter = adapter or ResolutionAdapter(
            settings=AddonkitSettings.load(self.options.get("config_dir")), logger=self.logger
        )
        self.module_loader: ModuleLoader = module_loader or DefaultModuleLoader()

    @property
    def config_dir(self) -> str:
        return str(self.options.get("config_dir") or os.getcwd())

    async def load_presets(self, specifiers: Any, level: int = 0) -> List[LoadedPreset]:
        """Load sibling specifiers concurrently; results keep input order."""
        if not specifiers or not is_sequence(specifiers):
            return []
        groups = await asyncio.gather(*(self.load_preset(s, level) for s in specifiers))
        return [preset for group in groups for preset in group]

    async def load_preset(self, specifier: Any, level: int = 0) -> List[LoadedPreset]:
        """Load one specifier; any failure is logged and yields no presets."""
        try:
            return await self._load(specifier, level)
        except Exception as exc:
            described = describe_specifier(specifier)
            if level > 0:
                self.logger.warning("  Failed to load preset: %s on level %d", described, level)
            else:
                self.logger.warning("  Failed to load preset: %s", described)
            self.logger.error("%s", exc, exc_info=exc)
            return []

    async def _load(self, specifier: Any, level: int) -> List[LoadedPreset]:
        spec = normalize_specifier(specifier)
        preset_options: Dict[str, Any] = dict(spec.options)

        contents = await self._contents(spec)

        if callable(contents):
            # A preset may export a function of (host options, preset options).
            contents = await resolve_awaitable(contents(self.options, preset_options))

        if is_sequence(contents):
            return await self.load_presets(list(contents), level + 1)

        if is_mapping(contents):
            rest = {key: value for key, value in contents.items() if key not in NESTED_KEYS}
            sub_presets = await self._expand(contents.get("presets"), preset_options)
            sub_addons = await self._expand(contents.get("addons"), preset_options)
            mapped = [
                resolved
                for resolved in (
                    map_addon(addon, self.config_dir, adapter=self.adapter, logger=self.logger)
                    for addon in sub_addons
                )
                if resolved is not None
            ]
            return [
                *(await self.load_presets(sub_presets, level + 1)),
                *(await self.load_presets(mapped, level + 1)),
                LoadedPreset.create(spec.name, rest, preset_options),
            ]

        raise InvalidPresetError(
            f"{spec.describe()} is not a valid preset",
            context={"specifier": spec.describe(), "level": level},
        )

    async def _contents(self, spec: PresetSpecifier) -> Any:
        if spec.kind is SpecifierKind.VIRTUAL:
            return spec.payload.contents()
        if spec.kind is SpecifierKind.INLINE:
            return spec.payload
        if spec.kind is SpecifierKind.FACTORY:
            factory = spec.payload
            produced = factory(self.options) if _accepts_argument(factory) else factory()
            return await resolve_awaitable(produced)
        if spec.kind is SpecifierKind.RESOLVED:
            return await resolve_awaitable(self.module_loader.import_default(spec.payload.name))
        return await resolve_awaitable(self.module_loader.import_default(spec.name))

    async def _expand(self, value: Any, preset_options: Mapping[str, Any]) -> List[Any]:
        """Nested ``presets``/``addons`` may be a list or a function returning one."""
        if callable(value):
            value = await resolve_awaitable(value({**self.options, **preset_options}))
        if is_sequence(value):
            return list(value)
        return []


async def load_presets(
    specifiers: Sequence[Any],
    level: int = 0,
    options: Optional[Mapping[str, Any]] = None,
    **collaborators: Any,
) -> List[LoadedPreset]:
    """Load ``specifiers`` into a flat, ordered list of presets."""
    return await PresetLoader(options, **collaborators).load_presets(specifiers, level)


async def load_preset(
    specifier: Any,
    level: int = 0,
    options: Optional[Mapping[str, Any]] = None,
    **collaborators: Any,
) -> List[LoadedPreset]:
    """Load one specifier; nested presets precede its own entry."""
    return await PresetLoader(options, **collaborators).load_preset(specifier, level)


__all__ = [
    "NESTED_KEYS",
    "PresetLoader",
    "load_presets",
    "load_preset",
    "resolve_awaitable",
]
