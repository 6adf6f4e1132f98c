"""Reconciliation of a local state tree with a tree received from another tab.

This is the only component that decides what the next local state is when a
remote update arrives.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from tabsync._paths import MISSING, get_path, remove_path, set_path
from tabsync.clone import clone_tree


def reconcile_state(
    old_state: Mapping[str, Any],
    incoming: Mapping[str, Any],
    include_paths: Sequence[str],
) -> dict[str, Any]:
    """Combine *old_state* with *incoming* along *include_paths*.

    Semantics:
    - No paths configured: the incoming tree replaces the old one entirely
      (a shallow copy of *incoming* is returned).
    - Otherwise, each configured path is replaced wholesale by the incoming
      subtree, or removed when the incoming tree has nothing there (the other
      side deleted it). Everything not reachable through a configured path is
      kept from *old_state*.

    Neither input is mutated and the result is always a new tree, so applying
    the same *incoming* twice yields the same state.
    """

    if not include_paths:
        return dict(incoming)

    merged: dict[str, Any] = clone_tree(old_state)
    for path in include_paths:
        value = get_path(incoming, path)
        if value is MISSING:
            remove_path(merged, path)
        else:
            set_path(merged, path, clone_tree(value))
    return merged
