"""Cross-tab state synchronisation.

:class:`TabSync` wires a host store to a transport:

- inbound: every tree the transport delivers (the stored one at install
  time, then each update written by another tab) goes through
  ``on_before_replace`` and is reconciled into the store;
- outbound: every committed mutation publishes the selected part of the
  post-mutation state through ``on_before_save``.

Both directions run to completion synchronously. Hook errors propagate to
whoever triggered the event.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from tabsync._redact import redact_for_log
from tabsync.config import SyncConfig
from tabsync.events import Mutation
from tabsync.exceptions import StorageUnavailableError, TabSyncError
from tabsync.projection import exclude_paths, project_paths
from tabsync.reconcile import reconcile_state
from tabsync.store import HostStore
from tabsync.transport import Transport

_logger = logging.getLogger(__name__)


def _suppressed(value: Any) -> bool:
    # Empty containers are still trees; any other falsy result drops the update.
    return value is None or (not isinstance(value, (Mapping, list)) and not value)


class TabSync:
    """Keeps one host store in sync with the shared storage.

    Raises
    ------
    StorageUnavailableError
        If the transport reports itself unavailable. Nothing is wired up.
    """

    def __init__(self, config: SyncConfig | None = None, *, transport: Transport) -> None:
        self._config = config or SyncConfig()
        self._transport = transport
        self._detach: list[Callable[[], None]] = []
        self._store: HostStore | None = None

        if not transport.is_available():
            raise StorageUnavailableError("Storage is not available", key=self._config.key)

    @property
    def config(self) -> SyncConfig:
        return self._config

    def __call__(self, store: HostStore) -> None:
        self.install(store)

    def install(self, store: HostStore) -> None:
        """Load the stored state into *store* and start syncing both ways."""
        if self._store is not None:
            raise TabSyncError("TabSync is already installed on a store")
        self._store = store
        key = self._config.key

        try:
            self._transport.load_initial(key, lambda state: self.replace_state(store, state))
            self._detach.append(self._transport.on_update(key, lambda state: self.replace_state(store, state)))
            self._detach.append(store.subscribe(self._on_mutation))
        except BaseException:
            self.uninstall()
            raise
        _logger.debug("Installed tab sync on key %r", key)

    def uninstall(self) -> None:
        """Stop listening to the transport and the store."""
        while self._detach:
            self._detach.pop()()
        self._store = None

    def replace_state(self, store: HostStore, incoming: Any) -> None:
        """Reconcile an incoming tree into *store*."""
        adjusted = self._config.on_before_replace(incoming)
        if _suppressed(adjusted):
            _logger.debug("Incoming state on %r suppressed by on_before_replace", self._config.key)
            return

        if not isinstance(adjusted, Mapping):
            _logger.warning(
                "Dropping incoming state on %r: expected a mapping, got %s",
                self._config.key,
                type(adjusted).__name__,
            )
            return

        merged = reconcile_state(store.state, adjusted, self._config.states_paths)
        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("Replacing state from %r: %s", self._config.key, redact_for_log(adjusted))
        store.replace_state(merged)

    def state_to_save(self, state: dict[str, Any]) -> Any:
        """Return the tree to publish for *state*, or a falsy non-container value to skip."""
        to_save: Any = state
        if not self._config.syncs_whole_tree:
            to_save = project_paths(state, self._config.states_paths)
        elif self._config.states_remove:
            to_save = exclude_paths(state, self._config.states_remove)
        return self._config.on_before_save(to_save)

    def _on_mutation(self, mutation: Mutation, state: dict[str, Any]) -> None:
        to_save = self.state_to_save(state)
        if _suppressed(to_save):
            _logger.debug("Publish after %s suppressed by on_before_save", mutation.type)
            return

        if _logger.isEnabledFor(logging.DEBUG):
            _logger.debug("Publishing after %s to %r: %s", mutation.type, self._config.key, redact_for_log(to_save))
        self._transport.save(self._config.key, to_save)


def create_plugin(config: SyncConfig | None = None, *, transport: Transport) -> Callable[[HostStore], None]:
    """Build a store plugin: a callable that installs tab sync on a store.

    The transport is checked immediately, so an unavailable storage fails
    here rather than when the plugin is applied.
    """
    return TabSync(config, transport=transport).install
