"""Preset module loading.

``ModuleLoader`` is the capability the preset loader uses to turn a name
into the preset's exported value. ``DefaultModuleLoader`` handles Python
files and modules plus JSON/YAML data presets.
"""
from __future__ import annotations

import hashlib
import importlib
import importlib.util
import inspect
from pathlib import Path
from types import ModuleType
from typing import Any, Awaitable, Dict, Protocol, Union

from addonkit.core.exceptions import PresetLoadError
from addonkit.core.utils.io import read_json, read_yaml

DYNAMIC_NAMESPACE = "addonkit.dynamic"


class ModuleLoader(Protocol):
    """Return the default export of ``specifier`` (may return an awaitable)."""

    def import_default(self, specifier: str) -> Union[Any, Awaitable[Any]]: ...


def interop_default(module: ModuleType) -> Any:
    """Return what a module exports as its preset.

    Precedence:
    1. the module's ``default`` attribute
    2. the names listed in ``__all__``
    3. public attributes defined by the module itself
    """
    if hasattr(module, "default"):
        return getattr(module, "default")

    names = getattr(module, "__all__", None)
    if names is not None:
        return {name: getattr(module, name) for name in names}

    exported: Dict[str, Any] = {}
    for name, value in vars(module).items():
        if name.startswith("_") or isinstance(value, ModuleType):
            continue
        owner = getattr(value, "__module__", None)
        if (inspect.isfunction(value) or inspect.isclass(value)) and owner != module.__name__:
            continue
        exported[name] = value
    return exported


def load_module_from_path(path: Path, namespace: str = DYNAMIC_NAMESPACE) -> ModuleType:
    """Load a Python module from a file without adding it to sys.modules.

    Raises:
        PresetLoadError: if no import spec can be built for ``path``
    """
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:10]
    module_name = f"{namespace}.{path.stem.replace('-', '_')}_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise PresetLoadError(f"Cannot import preset module {path}", context={"path": str(path)})
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class DefaultModuleLoader:
    """Load presets from Python files/modules and JSON or YAML documents."""

    def __init__(self, namespace: str = DYNAMIC_NAMESPACE) -> None:
        self.namespace = namespace

    def import_default(self, specifier: str) -> Any:
        path = Path(specifier)
        if path.is_file():
            return self._load_file(path)
        try:
            module = importlib.import_module(specifier)
        except ImportError as exc:
            raise PresetLoadError(
                f"Cannot find preset module '{specifier}'", context={"specifier": specifier}
            ) from exc
        return interop_default(module)

    def _load_file(self, path: Path) -> Any:
        suffix = path.suffix.lower()
        if suffix == ".py":
            return interop_default(load_module_from_path(path, self.namespace))
        if suffix == ".json":
            return read_json(path)
        if suffix in (".yaml", ".yml"):
            return read_yaml(path, default={}, raise_on_error=True)
        raise PresetLoadError(
            f"Unsupported preset module type '{suffix or path.name}': {path}",
            context={"path": str(path)},
        )


__all__ = [
    "DYNAMIC_NAMESPACE",
    "ModuleLoader",
    "DefaultModuleLoader",
    "interop_default",
    "load_module_from_path",
]
