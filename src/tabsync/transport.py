"""Transport between a coordinator and the shared storage.

The coordinator only relies on the structural :class:`Transport` protocol;
:class:`StorageTransport` is the concrete implementation on top of any
:class:`~tabsync.storage.StorageArea`, encoding state trees as JSON.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, Protocol

from tabsync.events import StorageEvent
from tabsync.exceptions import PayloadDecodeError, StorageError
from tabsync.storage import StorageArea, Unsubscribe

_logger = logging.getLogger(__name__)

StateCallback = Callable[[Any], None]

_PROBE_KEY = "__tabsync_probe__"


class Transport(Protocol):
    """Structural transport interface used by the coordinator.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`StorageTransport`) concrete.
    """

    def is_available(self) -> bool: ...

    def load_initial(self, key: str, callback: StateCallback) -> None: ...

    def on_update(self, key: str, callback: StateCallback) -> Unsubscribe: ...

    def save(self, key: str, state: Any) -> None: ...


def encode_state(state: Any) -> str:
    return json.dumps(state, separators=(",", ":"))


def decode_state(text: str, *, key: str = "") -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(f"Stored value for {key!r} is not JSON: {text[:64]}", key=key) from exc


class StorageTransport:
    """Transport that persists state trees in a storage area."""

    def __init__(self, storage: StorageArea) -> None:
        self._storage = storage

    @property
    def storage(self) -> StorageArea:
        return self._storage

    def is_available(self) -> bool:
        """Probe the storage with a throwaway write."""
        try:
            self._storage.set_item(_PROBE_KEY, _PROBE_KEY)
            self._storage.remove_item(_PROBE_KEY)
        except StorageError:
            _logger.debug("Storage probe failed", exc_info=True)
            return False
        return True

    def _decode_or_drop(self, key: str, text: str) -> tuple[bool, Any]:
        try:
            return True, decode_state(text, key=key)
        except PayloadDecodeError:
            _logger.warning("Dropping undecodable payload for %r", key, exc_info=True)
            return False, None

    def load_initial(self, key: str, callback: StateCallback) -> None:
        """Deliver the currently stored tree for *key*, if there is one."""
        text = self._storage.get_item(key)
        if text is None:
            _logger.debug("Nothing stored under %r yet", key)
            return
        ok, state = self._decode_or_drop(key, text)
        if ok:
            callback(state)

    def on_update(self, key: str, callback: StateCallback) -> Unsubscribe:
        """Deliver every tree written to *key* by another tab.

        Removals of the key are not forwarded.
        """

        def listener(event: StorageEvent) -> None:
            if event.key != key or event.new_value is None:
                return
            ok, state = self._decode_or_drop(key, event.new_value)
            if ok:
                callback(state)

        return self._storage.add_listener(listener)

    def save(self, key: str, state: Any) -> None:
        self._storage.set_item(key, encode_state(state))
