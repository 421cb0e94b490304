"""Module resolution adapter.

Two strategies (``browser`` and ``node``) plus a ``generic`` fallback are
layered over a ``ModuleResolver`` capability. ``FileSystemResolver`` is the
default capability; tests and hosts may inject their own.
"""
from __future__ import annotations

from .adapter import PackageManifest, ResolutionAdapter
from .exports import resolve_exports
from .resolver import FileSystemResolver, ModuleResolver, split_package_specifier
from .strategies import BROWSER, GENERIC, NODE, ResolveStrategy

__all__ = [
    "BROWSER",
    "NODE",
    "GENERIC",
    "ResolveStrategy",
    "ModuleResolver",
    "FileSystemResolver",
    "split_package_specifier",
    "resolve_exports",
    "PackageManifest",
    "ResolutionAdapter",
]
