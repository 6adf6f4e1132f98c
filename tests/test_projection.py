from __future__ import annotations

from tabsync.projection import exclude_paths, project_paths


def test_project_paths_keeps_only_requested_subtree() -> None:
    tree = {"a": {"x": 1}, "b": 2, "c": [3]}
    projected = project_paths(tree, ["a"])
    assert projected == {"a": {"x": 1}}
    assert projected["a"] is not tree["a"]


def test_project_paths_skips_absent_paths() -> None:
    tree = {"a": {"b": 1}}
    assert project_paths(tree, ["a.c", "z"]) == {}


def test_project_paths_builds_nested_structure() -> None:
    tree = {"user": {"profile": {"name": "ann", "age": 3}, "token": "t"}, "ui": {"theme": "dark"}}
    projected = project_paths(tree, ["user.profile.name", "ui.theme"])
    assert projected == {"user": {"profile": {"name": "ann"}}, "ui": {"theme": "dark"}}


def test_project_paths_later_path_overwrites_overlap() -> None:
    tree = {"a": {"b": 1, "c": 2}}
    assert project_paths(tree, ["a.b", "a"]) == {"a": {"b": 1, "c": 2}}


def test_project_paths_keeps_explicit_none() -> None:
    assert project_paths({"a": None}, ["a"]) == {"a": None}


def test_exclude_paths_removes_listed_subtrees() -> None:
    tree = {"a": 1, "b": {"c": 2, "d": 3}, "e": {"f": 4}}
    excluded = exclude_paths(tree, ["b.c", "e"])
    assert excluded == {"a": 1, "b": {"d": 3}}
    assert tree == {"a": 1, "b": {"c": 2, "d": 3}, "e": {"f": 4}}


def test_exclude_paths_ignores_missing_paths() -> None:
    tree = {"a": 1}
    assert exclude_paths(tree, ["x.y", "a.b"]) == {"a": 1}


def test_exclude_paths_is_complement_of_project_for_top_level_keys() -> None:
    tree = {"a": 1, "b": {"c": 2}, "d": [1, 2]}
    kept = project_paths(tree, ["a"])
    rest = exclude_paths(tree, ["a"])
    assert {**kept, **rest} == tree
    assert set(kept).isdisjoint(rest)
