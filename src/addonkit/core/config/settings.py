"""Typed accessors over the merged addonkit configuration."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Pattern, Tuple

from addonkit.core.exceptions import ConfigError
from addonkit.core.resolution.strategies import BROWSER, GENERIC, NODE, ResolveStrategy

from .manager import ConfigManager


def _compile(pattern: str, key: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid regular expression for {key}: {exc}", context={"key": key}) from exc


@dataclass(frozen=True)
class AddonkitSettings:
    """Resolved settings consumed by the resolver, loader and engine."""

    strategies: Mapping[str, ResolveStrategy]
    manager_pattern: Pattern[str]
    preset_pattern: Pattern[str]
    legacy_filters: Tuple[Pattern[str], ...] = ()
    legacy_warning: str = ""
    log_level: str = "WARNING"

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> "AddonkitSettings":
        resolution = cfg.get("resolution") or {}
        raw_strategies = resolution.get("strategies") or {}
        strategies: Dict[str, ResolveStrategy] = {
            name: ResolveStrategy.from_mapping(name, data) for name, data in raw_strategies.items()
        }
        for required in (BROWSER, NODE, GENERIC):
            if required not in strategies:
                raise ConfigError(f"resolution.strategies.{required} is not configured")

        addons = cfg.get("addons") or {}
        legacy = cfg.get("legacy") or {}
        return cls(
            strategies=strategies,
            manager_pattern=_compile(str(addons.get("managerPattern", "")), "addons.managerPattern"),
            preset_pattern=_compile(str(addons.get("presetPattern", "")), "addons.presetPattern"),
            legacy_filters=tuple(
                _compile(str(p), "legacy.filteredPresets") for p in legacy.get("filteredPresets") or []
            ),
            legacy_warning=str(legacy.get("warning") or "").strip(),
            log_level=str((cfg.get("logging") or {}).get("level") or "WARNING"),
        )

    @classmethod
    def load(cls, config_dir: Optional[Path] = None, *, validate: bool = True) -> "AddonkitSettings":
        """Load bundled defaults, project config and env overrides."""
        return cls.from_config(ConfigManager(config_dir).load_config(validate=validate))

    def strategy(self, name: str) -> ResolveStrategy:
        try:
            return self.strategies[name]
        except KeyError:
            raise ConfigError(f"Unknown resolution strategy '{name}'", context={"strategy": name}) from None


__all__ = ["AddonkitSettings"]
