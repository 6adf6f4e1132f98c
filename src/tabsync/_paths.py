"""Dot-delimited path helpers for nested state trees.

A path such as ``"user.profile.name"`` addresses a node by walking mapping
keys. When a segment meets a list it is read as a non-negative integer index
(``"todos.0.title"``); any other segment on a list is simply absent.

Lookups never raise on missing segments: they return :data:`MISSING`, which
keeps "absent" distinct from an explicit ``None`` value.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any, Final


class _MissingType(enum.Enum):
    MISSING = enum.auto()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _MissingType.MISSING
"""Sentinel returned by :func:`get_path` when nothing lives at a path."""


def split_path(path: str) -> tuple[str, ...]:
    return tuple(path.split("."))


def _as_index(segment: str) -> int | None:
    if segment.isascii() and segment.isdigit():
        return int(segment)
    return None


def _child(node: Any, segment: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(segment, MISSING)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
        index = _as_index(segment)
        if index is None or index >= len(node):
            return MISSING
        return node[index]
    return MISSING


def _is_container_for(node: Any, segment: str) -> bool:
    """Whether *segment* can be written into *node* in place."""
    if isinstance(node, MutableMapping):
        return True
    return isinstance(node, list) and _as_index(segment) is not None


def _assign(node: Any, segment: str, value: Any) -> None:
    if isinstance(node, MutableMapping):
        node[segment] = value
        return
    index = _as_index(segment)
    if not isinstance(node, list) or index is None:
        raise TypeError(f"cannot assign segment {segment!r} on {type(node).__name__}")
    if index >= len(node):
        node.extend([None] * (index + 1 - len(node)))
    node[index] = value


def get_path(tree: Any, path: str) -> Any:
    """Read the value at *path*, or :data:`MISSING` if any segment is absent."""
    node = tree
    for segment in split_path(path):
        node = _child(node, segment)
        if node is MISSING:
            return MISSING
    return node


def set_path(tree: Any, path: str, value: Any) -> None:
    """Write *value* at *path* inside *tree*, in place.

    Missing intermediate levels are created as mappings. An intermediate node
    that cannot hold the next segment (a scalar, or a list addressed by a
    non-numeric segment) is replaced by a fresh mapping. Writing past the end
    of a list pads it with ``None``.
    """
    segments = split_path(path)
    node = tree
    for segment, next_segment in zip(segments, segments[1:]):
        child = _child(node, segment)
        if isinstance(child, tuple):
            child = list(child)
            _assign(node, segment, child)
        elif not _is_container_for(child, next_segment):
            child = {}
            _assign(node, segment, child)
        node = child
    _assign(node, segments[-1], value)


def remove_path(tree: Any, path: str) -> bool:
    """Delete the node at *path* from *tree*, in place.

    List entries are removed and the list re-indexed. Returns whether
    anything was removed; a missing path is a no-op.
    """
    segments = split_path(path)
    parent = tree
    for segment in segments[:-1]:
        parent = _child(parent, segment)
        if parent is MISSING:
            return False

    last = segments[-1]
    if isinstance(parent, MutableMapping):
        return parent.pop(last, MISSING) is not MISSING
    if isinstance(parent, list):
        index = _as_index(last)
        if index is not None and index < len(parent):
            del parent[index]
            return True
    return False
