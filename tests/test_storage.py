from __future__ import annotations

from pathlib import Path

import pytest

from tabsync.events import StorageEvent
from tabsync.exceptions import StorageError
from tabsync.storage import FileStorage, MemoryStorage


def test_memory_write_notifies_other_areas_only() -> None:
    shared = MemoryStorage()
    left, right = shared.area("left"), shared.area("right")
    seen_left: list[StorageEvent] = []
    seen_right: list[StorageEvent] = []
    left.add_listener(seen_left.append)
    right.add_listener(seen_right.append)

    left.set_item("k", "v1")

    assert not seen_left
    assert len(seen_right) == 1
    event = seen_right[0]
    assert (event.key, event.old_value, event.new_value, event.origin) == ("k", None, "v1", "left")
    assert right.get_item("k") == "v1"


def test_memory_unchanged_value_does_not_notify() -> None:
    shared = MemoryStorage()
    left, right = shared.area(), shared.area()
    seen: list[StorageEvent] = []
    right.add_listener(seen.append)

    left.set_item("k", "v")
    left.set_item("k", "v")

    assert len(seen) == 1


def test_memory_remove_and_unsubscribe() -> None:
    shared = MemoryStorage()
    left, right = shared.area(), shared.area()
    seen: list[StorageEvent] = []
    unsubscribe = right.add_listener(seen.append)

    left.set_item("k", "v")
    left.remove_item("k")
    assert seen[-1].new_value is None
    assert shared.snapshot() == {}

    unsubscribe()
    left.set_item("k", "again")
    assert len(seen) == 2


def test_file_storage_round_trips_values(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "slot")
    assert storage.get_item("app/state") is None
    storage.set_item("app/state", '{"a":1}')
    assert storage.get_item("app/state") == '{"a":1}'
    storage.remove_item("app/state")
    assert storage.get_item("app/state") is None


def test_file_storage_poll_reports_other_writers_only(tmp_path: Path) -> None:
    writer = FileStorage(tmp_path, name="writer")
    reader = FileStorage(tmp_path, name="reader")
    seen: list[StorageEvent] = []
    reader.add_listener(seen.append)
    writer_seen: list[StorageEvent] = []
    writer.add_listener(writer_seen.append)

    writer.set_item("k", "v1")
    assert reader.poll()[0].new_value == "v1"
    assert writer.poll() == []
    assert [e.new_value for e in seen] == ["v1"]
    assert not writer_seen

    writer.remove_item("k")
    reader.poll()
    assert seen[-1].new_value is None
    assert seen[-1].old_value == "v1"


def test_file_storage_existing_values_are_not_reported(tmp_path: Path) -> None:
    FileStorage(tmp_path).set_item("k", "v")
    late = FileStorage(tmp_path)
    assert late.poll() == []
    assert late.get_item("k") == "v"


def test_file_storage_write_failure_raises_storage_error(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path / "slot")
    (tmp_path / "slot").rmdir()
    (tmp_path / "slot").write_text("not a directory")

    with pytest.raises(StorageError) as excinfo:
        storage.set_item("k", "v")
    assert excinfo.value.key == "k"
