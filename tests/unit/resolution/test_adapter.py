from __future__ import annotations

import os
from pathlib import Path

import pytest

from addonkit.core.exceptions import ConfigError
from addonkit.core.resolution import BROWSER, NODE, ResolutionAdapter
from helpers.fakes import FakeResolver
from helpers.fs import make_package, write


class _ExplodingResolver:
    def resolve(self, *args, **kwargs):
        raise RuntimeError("boom")


def test_strategies_pass_their_priority_lists() -> None:
    resolver = FakeResolver({("browser", "addon/manager"): "/b/manager.js", ("node", "addon/preset"): "/n/preset.js"})
    adapter = ResolutionAdapter(resolver)

    assert adapter.resolve_browser("addon/manager", "/proj") == "/b/manager.js"
    assert adapter.resolve_node("addon/preset", "/proj") == "/n/preset.js"
    assert adapter.resolve_node("addon/manager", "/proj") is None
    assert resolver.calls[0] == ("browser", "addon/manager", "/proj")


def test_resolution_failures_become_none() -> None:
    adapter = ResolutionAdapter(_ExplodingResolver())
    assert adapter.resolve_browser("addon", "/proj") is None


def test_unknown_strategy_is_a_config_error() -> None:
    with pytest.raises(ConfigError):
        ResolutionAdapter(FakeResolver()).resolve_for("deno", "addon", "/proj")


def test_generic_resolution_of_absolute_path(tmp_path: Path) -> None:
    preset = write(tmp_path / "presets" / "local.yaml", "managerEntries: []\n")
    adapter = ResolutionAdapter()
    assert adapter.resolve_generic(str(preset), "/somewhere/else") == os.path.abspath(preset)


def test_find_package_walks_up_from_file(project: Path) -> None:
    pkg = make_package(project, "addon-a", {"dist/manager.js": ""})
    manifest = ResolutionAdapter().find_package(pkg / "dist" / "manager.js")
    assert manifest is not None
    assert manifest.data["name"] == "addon-a"
    assert manifest.directory == pkg


def test_find_package_skips_unparseable_manifest(project: Path) -> None:
    write(project / "package.json", '{"name": "host"}')
    inner = project / "broken"
    write(inner / "package.json", "{not json")
    manifest = ResolutionAdapter().find_package(inner)
    assert manifest is not None
    assert manifest.data["name"] == "host"


def test_resolve_export_uses_strategy_conditions(project: Path) -> None:
    pkg = make_package(
        project,
        "addon-a",
        {"dist/preview.mjs": "", "dist/preview.cjs": ""},
        {"exports": {"./preview": {"import": "./dist/preview.mjs", "require": "./dist/preview.cjs"}}},
    )
    adapter = ResolutionAdapter()
    manifest = adapter.find_package(pkg)

    assert os.path.realpath(adapter.resolve_export(manifest, "./preview", BROWSER)) == os.path.realpath(
        pkg / "dist" / "preview.mjs"
    )
    assert adapter.resolve_export(manifest, "./preview", NODE) == os.path.abspath(pkg / "dist" / "preview.cjs")
    assert adapter.resolve_export(manifest, "./manager", BROWSER) is None


def test_resolve_export_requires_existing_file(project: Path) -> None:
    pkg = make_package(project, "addon-a", {}, {"exports": {"./preview": "./dist/preview.js"}})
    adapter = ResolutionAdapter()
    assert adapter.resolve_export(adapter.find_package(pkg), "./preview", BROWSER) is None
