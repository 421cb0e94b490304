from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

from addonkit.core.exceptions import ResolutionError
from addonkit.core.presets import PresetsAddon, PreviewAnnotation, SpecifierKind, VirtualAddon, resolve_addon_name
from addonkit.core.presets.addons import map_addon
from addonkit.core.resolution import ResolutionAdapter
from helpers.fakes import FakeResolver
from helpers.fs import make_package, write


def _real(path: Path) -> str:
    return os.path.realpath(path)


@pytest.fixture
def host(project: Path) -> Path:
    write(project / "package.json", json.dumps({"name": "host"}))
    return project


def test_manager_entry_is_a_virtual_addon_without_presets(host: Path) -> None:
    pkg = make_package(host, "addon-m", {"manager.js": ""})
    addon = resolve_addon_name(host, "addon-m/manager")
    assert addon == VirtualAddon(name="addon-m/manager", manager_entries=(_real(pkg / "manager.js"),))
    assert addon.presets == ()


def test_register_entry_is_a_manager_entry(host: Path) -> None:
    pkg = make_package(host, "addon-r", {"register.js": ""})
    addon = resolve_addon_name(host, "addon-r/register")
    assert isinstance(addon, VirtualAddon)
    assert addon.manager_entries == (_real(pkg / "register.js"),)


def test_preset_entry_is_a_presets_addon(host: Path) -> None:
    pkg = make_package(host, "addon-p", {"preset.js": ""})
    addon = resolve_addon_name(host, "addon-p/preset")
    assert addon == PresetsAddon(name=os.path.abspath(pkg / "preset.js"))


def test_bare_name_probes_every_entry(host: Path) -> None:
    pkg = make_package(
        host,
        "addon-full",
        {"index.js": "", "manager.js": "", "preview.js": "", "preset.js": "", "register.js": ""},
    )
    addon = resolve_addon_name(host, "addon-full", {"flavor": "x"})

    assert isinstance(addon, VirtualAddon)
    assert addon.manager_entries == (_real(pkg / "manager.js"),)
    assert addon.preview_annotations == (
        PreviewAnnotation(bare="addon-full/preview", absolute=_real(pkg / "preview.js")),
    )
    assert addon.presets == ({"name": os.path.abspath(pkg / "preset.js"), "options": {"flavor": "x"}},)


def test_register_only_addon(host: Path) -> None:
    pkg = make_package(host, "addon-legacy", {"index.js": "", "register.js": ""})
    addon = resolve_addon_name(host, "addon-legacy")
    assert addon == VirtualAddon(name="addon-legacy", manager_entries=(_real(pkg / "register.js"),))


def test_register_panel_fallback(host: Path) -> None:
    pkg = make_package(host, "addon-panel", {"index.js": "", "register-panel.js": ""})
    addon = resolve_addon_name(host, "addon-panel")
    assert addon.manager_entries == (_real(pkg / "register-panel.js"),)


def test_register_and_preset_resolve_to_the_preset(host: Path) -> None:
    pkg = make_package(host, "addon-rp", {"index.js": "", "register.js": "", "preset.js": ""})
    assert resolve_addon_name(host, "addon-rp") == PresetsAddon(name=os.path.abspath(pkg / "preset.js"))


def test_register_is_dropped_when_preset_and_preview_exist(host: Path) -> None:
    pkg = make_package(host, "addon-rpp", {"index.js": "", "register.js": "", "preview.js": "", "preset.js": ""})
    addon = resolve_addon_name(host, "addon-rpp")
    assert isinstance(addon, VirtualAddon)
    assert addon.manager_entries == ()
    assert len(addon.preview_annotations) == 1
    assert addon.presets[0]["name"] == os.path.abspath(pkg / "preset.js")


def test_python_preset_in_addon_package(host: Path) -> None:
    pkg = make_package(host, "addon-py", {"index.js": "", "manager.js": "", "preset.py": "default = {}\n"})
    addon = resolve_addon_name(host, "addon-py")
    assert addon.presets[0]["name"] == os.path.abspath(pkg / "preset.py")


def test_entries_found_through_exports_map(host: Path) -> None:
    pkg = make_package(
        host,
        "addon-exp",
        {"dist/index.js": "", "dist/manager.mjs": "", "dist/preset.cjs": ""},
        {
            "exports": {
                ".": "./dist/index.js",
                "./manager": {"import": "./dist/manager.mjs"},
                "./preset": {"require": "./dist/preset.cjs"},
            }
        },
    )
    addon = resolve_addon_name(host, "addon-exp")
    assert addon.manager_entries == (_real(pkg / "dist" / "manager.mjs"),)
    assert addon.presets[0]["name"] == os.path.abspath(pkg / "dist" / "preset.cjs")


def test_preview_found_through_exports_keeps_bare_specifier(host: Path) -> None:
    pkg = make_package(
        host,
        "addon-e",
        {"index.js": "", "dist/preview.mjs": ""},
        {"exports": {".": "./index.js", "./preview": "./dist/preview.mjs"}},
    )
    # Only the package root resolves directly; entries must come from the exports map.
    adapter = ResolutionAdapter(FakeResolver({("browser", "addon-e"): str(pkg / "index.js")}))
    addon = resolve_addon_name(host, "addon-e", adapter=adapter)
    assert addon == VirtualAddon(
        name="addon-e",
        preview_annotations=(
            PreviewAnnotation(bare="addon-e/preview", absolute=_real(pkg / "dist" / "preview.mjs")),
        ),
    )


def test_local_path_addon(host: Path) -> None:
    manager = write(host / "local-addon" / "manager.js")
    addon = resolve_addon_name(host, "./local-addon")
    assert addon == VirtualAddon(name="./local-addon", manager_entries=(_real(manager),))


def test_package_without_entries_falls_back_to_its_main(host: Path) -> None:
    pkg = make_package(host, "plain", {"index.js": ""})
    assert resolve_addon_name(host, "plain") == PresetsAddon(name=_real(pkg / "index.js"))


def test_unresolvable_addon(host: Path) -> None:
    assert resolve_addon_name(host, "missing-addon") is None


@pytest.mark.parametrize("name", ["", "  ", 42, None, {"name": "x"}])
def test_malformed_name_raises(host: Path, name) -> None:
    with pytest.raises(ResolutionError):
        resolve_addon_name(host, name)


def test_map_addon_keeps_entry_options(host: Path) -> None:
    make_package(host, "addon-m", {"manager.js": ""})
    spec = map_addon({"name": "addon-m/manager", "options": {"x": 1}}, host)
    assert spec is not None
    assert spec.kind is SpecifierKind.VIRTUAL
    assert dict(spec.options) == {"x": 1}


def test_map_addon_warns_when_not_installed(host: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert map_addon("not-installed", host) is None
    assert 'Could not resolve addon "not-installed", skipping. Is it installed?' in caplog.text


def test_map_addon_reports_malformed_entries(host: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        assert map_addon({"name": 7}, host) is None
    assert "Addon value should end in /manager or /preview or /register" in caplog.text
