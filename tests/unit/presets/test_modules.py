from __future__ import annotations

import json
from pathlib import Path

import pytest

from addonkit.core.exceptions import PresetLoadError
from addonkit.core.presets import DefaultModuleLoader
from helpers.fs import write


def test_python_file_default_export(tmp_path: Path) -> None:
    path = write(tmp_path / "preset.py", "default = {'babel': {'plugins': ['a']}}\n")
    assert DefaultModuleLoader().import_default(str(path)) == {"babel": {"plugins": ["a"]}}


def test_python_file_all_names(tmp_path: Path) -> None:
    path = write(
        tmp_path / "preset.py",
        "__all__ = ['manager_entries']\nmanager_entries = ['/x/manager.js']\nhidden = 1\n",
    )
    assert DefaultModuleLoader().import_default(str(path)) == {"manager_entries": ["/x/manager.js"]}


def test_python_file_public_attributes(tmp_path: Path) -> None:
    path = write(
        tmp_path / "preset.py",
        "import os\n"
        "from os.path import join\n"
        "_private = 1\n"
        "def webpack_final(config, options):\n"
        "    return config\n",
    )
    exported = DefaultModuleLoader().import_default(str(path))
    assert set(exported) == {"webpack_final"}
    assert callable(exported["webpack_final"])


def test_json_and_yaml_presets(tmp_path: Path) -> None:
    json_path = write(tmp_path / "preset.json", json.dumps({"entries": [1]}))
    yaml_path = write(tmp_path / "preset.yaml", "entries:\n  - 2\n")
    loader = DefaultModuleLoader()
    assert loader.import_default(str(json_path)) == {"entries": [1]}
    assert loader.import_default(str(yaml_path)) == {"entries": [2]}


def test_unsupported_file_type(tmp_path: Path) -> None:
    path = write(tmp_path / "preset.js", "module.exports = {}\n")
    with pytest.raises(PresetLoadError, match="Unsupported preset module type"):
        DefaultModuleLoader().import_default(str(path))


def test_importable_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    write(tmp_path / "addonkit_sample_preset_mod.py", "default = {'port': 6006}\n")
    monkeypatch.syspath_prepend(str(tmp_path))
    assert DefaultModuleLoader().import_default("addonkit_sample_preset_mod") == {"port": 6006}


def test_missing_module() -> None:
    with pytest.raises(PresetLoadError, match="Cannot find preset module"):
        DefaultModuleLoader().import_default("addonkit_no_such_preset_module")
