from __future__ import annotations

from addonkit.core.utils.merge import deep_merge, merge_arrays, merge_contribution


def test_merge_arrays_replaces_by_default() -> None:
    assert merge_arrays([1, 2], [3]) == [3]


def test_merge_arrays_append_marker() -> None:
    assert merge_arrays([1, 2], ["+", 3]) == [1, 2, 3]


def test_merge_arrays_explicit_replace() -> None:
    assert merge_arrays([1, 2], ["=", 9]) == [9]


def test_deep_merge_nested_without_mutation() -> None:
    base = {"a": {"x": 1, "y": [1]}, "b": 1}
    override = {"a": {"y": ["+", 2]}, "c": 3}
    merged = deep_merge(base, override)

    assert merged == {"a": {"x": 1, "y": [1, 2]}, "b": 1, "c": 3}
    assert base == {"a": {"x": 1, "y": [1]}, "b": 1}


def test_merge_contribution_rules() -> None:
    assert merge_contribution([1], (2,)) == [1, 2]
    assert merge_contribution({"a": 1, "b": 1}, {"a": 2}) == {"a": 2, "b": 1}
    assert merge_contribution([1], {"a": 1}) == {"a": 1}
    assert merge_contribution(None, [1]) == [1]
    assert merge_contribution("x", "y") == "y"


def test_merge_contribution_copies_replacing_containers() -> None:
    items = [1]
    mapping = {"a": 1}
    assert merge_contribution(None, items) is not items
    assert merge_contribution("x", mapping) is not mapping
    assert merge_contribution(None, (1, 2)) == [1, 2]
