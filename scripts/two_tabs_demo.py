#!/usr/bin/env python3
"""Simulate two tabs sharing one storage and show how state flows.

Usage
-----
    python scripts/two_tabs_demo.py
    python scripts/two_tabs_demo.py --path todos --verbose
    python scripts/two_tabs_demo.py --storage-dir /tmp/tabsync
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from tabsync import FileStorage, MemoryStorage, StateStore, StorageTransport, SyncConfig, create_plugin

LOG = logging.getLogger("two_tabs_demo")


def _add_todo(state: dict[str, Any], title: str) -> None:
    state.setdefault("todos", []).append(title)


def _set_theme(state: dict[str, Any], theme: str) -> None:
    state.setdefault("ui", {})["theme"] = theme


def _make_store(name: str) -> StateStore:
    return StateStore(
        {"todos": [], "ui": {"theme": "light", "tab": name}},
        mutations={"add_todo": _add_todo, "set_theme": _set_theme},
    )


def _show(label: str, left: StateStore, right: StateStore) -> None:
    print(f"-- {label}")
    print(f"   left : {json.dumps(left.state, sort_keys=True)}")
    print(f"   right: {json.dumps(right.state, sort_keys=True)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Two-tab state sync demo.")
    parser.add_argument("--key", default="tabsync-demo", help="Storage key")
    parser.add_argument("--path", action="append", default=[], help="Dot path to sync (repeatable)")
    parser.add_argument("--storage-dir", type=Path, help="Use a FileStorage directory instead of memory")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = SyncConfig(key=args.key, states_paths=tuple(args.path))
    left, right = _make_store("left"), _make_store("right")

    if args.storage_dir:
        left_area = FileStorage(args.storage_dir, name="left")
        right_area = FileStorage(args.storage_dir, name="right")
    else:
        shared = MemoryStorage()
        left_area, right_area = shared.area("left"), shared.area("right")

    create_plugin(config, transport=StorageTransport(left_area))(left)
    create_plugin(config, transport=StorageTransport(right_area))(right)
    LOG.debug("Syncing paths %s", config.states_paths or "<whole tree>")

    _show("initial", left, right)

    left.commit("add_todo", "write docs")
    if isinstance(right_area, FileStorage):
        right_area.poll()
    _show("left added a todo", left, right)

    right.commit("set_theme", "dark")
    if isinstance(left_area, FileStorage):
        left_area.poll()
    _show("right switched theme", left, right)


if __name__ == "__main__":
    main()
