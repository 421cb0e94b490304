"""In-memory stand-ins for the resolver and module loader capabilities."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

from addonkit.core.exceptions import PresetLoadError


class FakeResolver:
    """Resolve from a table keyed by (first condition, specifier).

    The first condition identifies the strategy: ``browser`` or ``node``
    (``require`` for the generic fallback).
    """

    def __init__(self, table: Optional[Dict[Tuple[str, str], str]] = None) -> None:
        self.table = dict(table or {})
        self.calls: List[Tuple[str, str, str]] = []

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
        key = conditions[0] if conditions else ""
        self.calls.append((key, specifier, base_dir))
        return self.table.get((key, specifier))


class FakeModuleLoader:
    """Return canned preset contents by name; unknown names fail to load."""

    def __init__(self, modules: Optional[Dict[str, Any]] = None, *, delays: Optional[Dict[str, float]] = None) -> None:
        self.modules = dict(modules or {})
        self.delays = dict(delays or {})
        self.requested: List[str] = []

    async def import_default(self, specifier: str) -> Any:
        self.requested.append(specifier)
        delay = self.delays.get(specifier)
        if delay:
            await asyncio.sleep(delay)
        if specifier not in self.modules:
            raise PresetLoadError(f"Cannot find preset module '{specifier}'")
        return self.modules[specifier]
