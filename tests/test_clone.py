from __future__ import annotations

from tabsync.clone import clone_tree


def test_clone_tree_shares_no_containers() -> None:
    original = {"a": {"b": [1, {"c": 2}]}, "d": None, "e": "text"}
    cloned = clone_tree(original)

    assert cloned == original
    assert cloned is not original
    assert cloned["a"] is not original["a"]
    assert cloned["a"]["b"] is not original["a"]["b"]
    assert cloned["a"]["b"][1] is not original["a"]["b"][1]

    cloned["a"]["b"][1]["c"] = 99
    cloned["a"]["b"].append(3)
    assert original == {"a": {"b": [1, {"c": 2}]}, "d": None, "e": "text"}


def test_clone_tree_returns_scalars_as_is() -> None:
    assert clone_tree(5) == 5
    assert clone_tree(None) is None
    assert clone_tree("x") == "x"


def test_clone_tree_turns_tuples_into_lists() -> None:
    assert clone_tree({"t": (1, (2, 3))}) == {"t": [1, [2, 3]]}
