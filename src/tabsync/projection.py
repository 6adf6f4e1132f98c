"""Path projections used to decide what part of a state tree gets published."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from tabsync._paths import MISSING, get_path, remove_path, set_path
from tabsync.clone import clone_tree


def project_paths(tree: Mapping[str, Any], paths: Iterable[str]) -> dict[str, Any]:
    """Build a new tree holding only the subtrees addressed by *paths*.

    Paths are applied in order; a path with nothing behind it contributes no
    entry. When paths overlap, a later one overwrites structure written by an
    earlier one.
    """
    result: dict[str, Any] = {}
    for path in paths:
        value = get_path(tree, path)
        if value is MISSING:
            continue
        set_path(result, path, clone_tree(value))
    return result


def exclude_paths(tree: Mapping[str, Any], paths: Iterable[str]) -> dict[str, Any]:
    """Build a deep copy of *tree* with every subtree addressed by *paths* removed.

    Missing paths are ignored. Removing a list entry re-indexes the list, so
    later paths into the same list see the shifted positions.
    """
    result: dict[str, Any] = clone_tree(tree)
    for path in paths:
        remove_path(result, path)
    return result
