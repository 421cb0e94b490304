"""Canonical merge utilities.

Two families of merging live here:

- ``deep_merge`` / ``merge_arrays``: recursive merging used for layered
  configuration files. Arrays are replaced unless the override starts with
  the ``"+"`` append marker.
- ``merge_contribution``: the single-step merge used when folding preset
  contributions to an extension point (concatenate sequences, shallow-merge
  mappings, otherwise replace).
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List


def is_sequence(value: Any) -> bool:
    """True for list/tuple values (strings and bytes are not sequences here)."""
    return isinstance(value, (list, tuple))


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries without mutating inputs.

    Args:
        base: Base dictionary (lower priority)
        override: Override dictionary (higher priority)

    Returns:
        New merged dictionary

    Example:
        >>> base = {"a": 1, "b": {"c": 2}}
        >>> override = {"b": {"d": 3}}
        >>> deep_merge(base, override)
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                result[key] = merge_arrays(result[key], value)
            else:
                result[key] = value
        else:
            result[key] = value
    return result


def merge_arrays(base: List[Any], override: List[Any]) -> List[Any]:
    """Merge arrays with override semantics.

    Supports special prefixes in the first element:
    - "+" : Append override items (excluding prefix) to base
    - "=" : Replace base with override items (excluding prefix)
    - No prefix: Replace base entirely with override

    Example:
        >>> merge_arrays([1, 2], [3, 4])
        [3, 4]
        >>> merge_arrays([1, 2], ["+", 3, 4])
        [1, 2, 3, 4]
    """
    if not override:
        return base
    first = override[0]
    if isinstance(first, str):
        if first == "+":
            return [*base, *override[1:]]
        if first == "=":
            return list(override[1:])
    return list(override)


def merge_contribution(accumulator: Any, contribution: Any) -> Any:
    """Merge one non-callable preset contribution into the accumulator.

    Example:
        >>> merge_contribution([1], [2])
        [1, 2]
        >>> merge_contribution({"a": 1}, {"a": 2, "b": 3})
        {'a': 2, 'b': 3}
        >>> merge_contribution({"a": 1}, "replaced")
        'replaced'

    The result never aliases ``contribution``: a replacing list or mapping
    is copied so later mutation of the accumulator leaves the preset intact.
    """
    if is_sequence(accumulator) and is_sequence(contribution):
        return [*accumulator, *contribution]
    if is_mapping(accumulator) and is_mapping(contribution):
        return {**accumulator, **contribution}
    if is_sequence(contribution):
        return list(contribution)
    if is_mapping(contribution):
        return dict(contribution)
    return contribution


__all__ = [
    "is_sequence",
    "is_mapping",
    "deep_merge",
    "merge_arrays",
    "merge_contribution",
]
