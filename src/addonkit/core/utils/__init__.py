"""Shared utilities for addonkit."""
from __future__ import annotations

from .merge import deep_merge, is_mapping, is_sequence, merge_arrays, merge_contribution

__all__ = [
    "deep_merge",
    "is_mapping",
    "is_sequence",
    "merge_arrays",
    "merge_contribution",
]
