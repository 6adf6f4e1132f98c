"""Shared key/value storage areas with change notification.

A storage area is one tab's view of the shared slot: it reads and writes
string values by key and notifies listeners when *another* area changes a
key. Writes never notify the area that performed them, which keeps a tab
from re-applying its own updates.
"""

from __future__ import annotations

import contextlib
import logging
import os
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Protocol
from urllib.parse import quote, unquote

from tabsync.events import StorageEvent
from tabsync.exceptions import StorageError

_logger = logging.getLogger(__name__)

StorageListener = Callable[[StorageEvent], None]
Unsubscribe = Callable[[], None]

_ITEM_SUFFIX = ".item"


class StorageArea(Protocol):
    """Structural interface of a storage area used by :class:`StorageTransport`."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...

    def add_listener(self, listener: StorageListener) -> Unsubscribe: ...


class _ListenerMixin:
    def __init__(self) -> None:
        self._listeners: list[StorageListener] = []

    def add_listener(self, listener: StorageListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class MemoryStorage:
    """In-process shared storage backend.

    Each tab obtains its own area via :meth:`area`. A write through one area
    synchronously notifies every other area, and only when the stored value
    actually changed.

    Example::

        shared = MemoryStorage()
        left, right = shared.area("left"), shared.area("right")
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._areas: list[MemoryArea] = []

    def area(self, name: str | None = None) -> MemoryArea:
        area = MemoryArea(self, name or uuid.uuid4().hex[:12])
        self._areas.append(area)
        return area

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)

    def _write(self, origin: MemoryArea, key: str, value: str | None) -> None:
        old_value = self._data.get(key)
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value
        if old_value == value:
            return

        event = StorageEvent(key=key, old_value=old_value, new_value=value, origin=origin.name)
        for area in list(self._areas):
            if area is not origin:
                area._dispatch(event)  # noqa: SLF001


class MemoryArea(_ListenerMixin):
    """One tab's view of a :class:`MemoryStorage`."""

    def __init__(self, backend: MemoryStorage, name: str) -> None:
        super().__init__()
        self._backend = backend
        self.name = name

    def get_item(self, key: str) -> str | None:
        return self._backend._data.get(key)  # noqa: SLF001

    def set_item(self, key: str, value: str) -> None:
        self._backend._write(self, key, value)  # noqa: SLF001

    def remove_item(self, key: str) -> None:
        self._backend._write(self, key, None)  # noqa: SLF001


class FileStorage(_ListenerMixin):
    """Directory-backed storage area shared between processes.

    Each key is stored in its own file, written atomically. Changes made by
    other processes are discovered by :meth:`poll`, which dispatches one
    :class:`StorageEvent` per changed key. Values written by this instance
    are remembered so polling never reports them back.

    Parameters
    ----------
    directory : Path
        Shared directory. Created if missing.
    name : str or None
        Name reported as the event origin for writes by this instance.
    """

    def __init__(self, directory: Path | str, name: str | None = None) -> None:
        super().__init__()
        self._dir = Path(directory)
        self.name = name or uuid.uuid4().hex[:12]
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create storage directory {self._dir}: {exc}") from exc
        self._seen: dict[str, str] = self._read_all()

    @property
    def directory(self) -> Path:
        return self._dir

    def _item_path(self, key: str) -> Path:
        return self._dir / f"{quote(key, safe='')}{_ITEM_SUFFIX}"

    def _read_all(self) -> dict[str, str]:
        items: dict[str, str] = {}
        for path in self._dir.glob(f"*{_ITEM_SUFFIX}"):
            key = unquote(path.name[: -len(_ITEM_SUFFIX)])
            value = self.get_item(key)
            if value is not None:
                items[key] = value
        return items

    def get_item(self, key: str) -> str | None:
        try:
            return self._item_path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Cannot read {key!r}: {exc}", key=key) from exc

    def set_item(self, key: str, value: str) -> None:
        target = self._item_path(key)
        tmp = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, target)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError(f"Cannot write {key!r}: {exc}", key=key) from exc
        self._seen[key] = value

    def remove_item(self, key: str) -> None:
        try:
            self._item_path(key).unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot remove {key!r}: {exc}", key=key) from exc
        self._seen.pop(key, None)

    def poll(self) -> list[StorageEvent]:
        """Dispatch change events for keys modified since the last poll."""
        current = self._read_all()
        events: list[StorageEvent] = []
        for key in sorted(set(self._seen) | set(current)):
            old_value = self._seen.get(key)
            new_value = current.get(key)
            if old_value != new_value:
                events.append(StorageEvent(key=key, old_value=old_value, new_value=new_value))
        self._seen = current

        if events:
            _logger.debug("Polled %d change(s) in %s", len(events), self._dir)
        for event in events:
            self._dispatch(event)
        return events
