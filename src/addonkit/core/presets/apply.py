"""Extension application: fold preset contributions for one extension point."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from addonkit.core.utils.merge import merge_contribution

from .loader import resolve_awaitable
from .model import LoadedPreset


class ExtensionContext:
    """Handed to extension functions as ``options["presets"]``.

    ``apply`` folds another extension point over the same preset list, so one
    extension can build on another's fully folded result.
    """

    def __init__(self, presets: Sequence[LoadedPreset], options: Optional[Mapping[str, Any]] = None) -> None:
        self._presets: Tuple[LoadedPreset, ...] = tuple(presets)
        self._options: Dict[str, Any] = dict(options or {})

    @property
    def presets_list(self) -> Tuple[LoadedPreset, ...]:
        return self._presets

    async def apply(self, extension: str, config: Any = None, args: Optional[Mapping[str, Any]] = None) -> Any:
        return await apply_presets(self._presets, extension, config, args, self._options)


def combined_options(
    preset: LoadedPreset,
    context: ExtensionContext,
    args: Optional[Mapping[str, Any]],
    options: Mapping[str, Any],
) -> Dict[str, Any]:
    """Options passed to an extension function; later sources win."""
    return {
        **options,
        **(args or {}),
        **preset.options,
        "presets_list": context.presets_list,
        "presets": context,
    }


async def apply_presets(
    presets: Sequence[LoadedPreset],
    extension: str,
    config: Any = None,
    args: Optional[Mapping[str, Any]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Any:
    """Fold every preset's ``extension`` contribution over ``config``.

    - missing or None: accumulator unchanged
    - callable: ``fn(accumulator, combined_options)``, awaited when needed
    - list + list: concatenated
    - mapping + mapping: shallow merge, contribution wins
    - anything else: replaces the accumulator

    Errors raised by extension functions propagate to the caller.
    """
    if not presets:
        return config

    host_options: Dict[str, Any] = dict(options or {})
    context = ExtensionContext(presets, host_options)
    accumulator = config

    for preset in context.presets_list:
        change = preset.get(extension)
        if change is None:
            continue
        if callable(change):
            result = change(accumulator, combined_options(preset, context, args, host_options))
            accumulator = await resolve_awaitable(result)
            continue
        accumulator = merge_contribution(accumulator, change)

    return accumulator


__all__ = ["ExtensionContext", "combined_options", "apply_presets"]
