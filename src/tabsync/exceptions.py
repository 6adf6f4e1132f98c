"""Custom exception hierarchy for tabsync."""

from __future__ import annotations


class TabSyncError(Exception):
    """Base exception for all tabsync errors."""


class TabSyncConfigError(TabSyncError):
    """Invalid or missing configuration."""


class StorageError(TabSyncError):
    """Storage-level failure (read/write of the shared key/value slot)."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """The shared storage cannot be used at all.

    Raised once at setup time, before any event wiring happens. There is
    no degraded mode: a coordinator without storage has nothing to sync.
    """


class PayloadDecodeError(StorageError):
    """A stored value could not be decoded into a state tree."""


class UnknownMutationError(TabSyncError):
    """A mutation was committed that the store has no handler for."""
