"""Deep copy of state trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def clone_tree(node: Any) -> Any:
    """Return an independent deep copy of *node*.

    Mappings are copied into new ``dict`` objects and sequences (lists and
    tuples) into new lists, each child cloned in turn. Scalars and ``None``
    are returned as-is since they are immutable.

    Nothing in the result shares identity with a container of the input, so
    mutating the clone never affects the original.

    The input must be acyclic; cycles are not detected.
    """
    if isinstance(node, (list, tuple)):
        return [clone_tree(item) for item in node]
    if isinstance(node, Mapping):
        return {key: clone_tree(value) for key, value in node.items()}
    return node
