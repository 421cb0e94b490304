"""Resolution adapter: named strategies over a ``ModuleResolver``.

The adapter is what the addon resolver talks to. It never raises for a
specifier that cannot be resolved; it returns ``None`` so callers can try
their fallbacks.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from addonkit.core.utils.io import read_json_safe

from .exports import resolve_exports
from .resolver import MANIFEST_NAME, FileSystemResolver, ModuleResolver
from .strategies import BROWSER, GENERIC, NODE, ResolveStrategy

if TYPE_CHECKING:
    from addonkit.core.config import AddonkitSettings

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PackageManifest:
    """A parsed ``package.json`` and where it was found."""

    path: Path
    data: Mapping[str, Any] = field(default_factory=dict)

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def exports(self) -> Any:
        return self.data.get("exports")


class ResolutionAdapter:
    """Resolve specifiers with the ``browser``, ``node`` or ``generic`` strategy."""

    def __init__(
        self,
        resolver: Optional[ModuleResolver] = None,
        settings: Optional["AddonkitSettings"] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.resolver: ModuleResolver = resolver or FileSystemResolver()
        self._settings = settings
        self.logger = logger or _logger

    @property
    def settings(self) -> "AddonkitSettings":
        if self._settings is None:
            # Lazy import to avoid a config <-> resolution import cycle.
            from addonkit.core.config import AddonkitSettings

            self._settings = AddonkitSettings.load()
        return self._settings

    def strategy(self, strategy: Union[str, ResolveStrategy]) -> ResolveStrategy:
        if isinstance(strategy, ResolveStrategy):
            return strategy
        return self.settings.strategy(strategy)

    def resolve_for(
        self,
        strategy: Union[str, ResolveStrategy],
        specifier: str,
        base_dir: Union[str, Path],
    ) -> Optional[str]:
        """Resolve ``specifier`` from ``base_dir``; None when it does not resolve."""
        strat = self.strategy(strategy)
        try:
            return self.resolver.resolve(
                strat.conditions,
                strat.fields,
                strat.extensions,
                str(base_dir),
                specifier,
                follow_symlinks=strat.follow_symlinks,
            )
        except Exception as exc:
            self.logger.debug("%s resolution of %r from %s failed: %s", strat.name, specifier, base_dir, exc)
            return None

    def resolve_browser(self, specifier: str, base_dir: Union[str, Path]) -> Optional[str]:
        return self.resolve_for(BROWSER, specifier, base_dir)

    def resolve_node(self, specifier: str, base_dir: Union[str, Path]) -> Optional[str]:
        return self.resolve_for(NODE, specifier, base_dir)

    def resolve_generic(self, specifier: str, base_dir: Union[str, Path]) -> Optional[str]:
        """Fallback resolution; absolute paths resolve independently of ``base_dir``."""
        if os.path.isabs(specifier):
            return self.resolve_for(GENERIC, specifier, os.path.dirname(specifier))
        return self.resolve_for(GENERIC, specifier, base_dir)

    def find_package(self, start: Union[str, Path]) -> Optional[PackageManifest]:
        """Return the nearest ``package.json`` enclosing ``start``."""
        current = Path(start)
        if current.is_file():
            current = current.parent
        for directory in (current, *current.parents):
            candidate = directory / MANIFEST_NAME
            if not candidate.is_file():
                continue
            data = read_json_safe(candidate, default=None)
            if isinstance(data, dict):
                return PackageManifest(path=candidate, data=data)
        return None

    def resolve_export(
        self,
        manifest: PackageManifest,
        subpath: str,
        strategy: Union[str, ResolveStrategy],
    ) -> Optional[str]:
        """Look ``subpath`` up in the manifest's exports map using the strategy's conditions."""
        strat = self.strategy(strategy)
        relative = resolve_exports(manifest.exports, subpath, strat.conditions)
        if relative is None:
            return None
        target = manifest.directory / relative
        if not target.is_file():
            return None
        return str(target.resolve()) if strat.follow_symlinks else os.path.abspath(target)


__all__ = ["PackageManifest", "ResolutionAdapter"]
