"""tabsync - keep a state tree in sync across tabs sharing one storage."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tabsync")
except PackageNotFoundError:
    __version__ = "0+local"
from tabsync._paths import MISSING, get_path, remove_path, set_path
from tabsync.clone import clone_tree
from tabsync.config import DEFAULT_KEY, SyncConfig
from tabsync.coordinator import TabSync, create_plugin
from tabsync.events import Mutation, StorageEvent
from tabsync.exceptions import (
    PayloadDecodeError,
    StorageError,
    StorageUnavailableError,
    TabSyncConfigError,
    TabSyncError,
    UnknownMutationError,
)
from tabsync.projection import exclude_paths, project_paths
from tabsync.reconcile import reconcile_state
from tabsync.storage import FileStorage, MemoryArea, MemoryStorage, StorageArea
from tabsync.store import HostStore, StateStore
from tabsync.transport import StorageTransport, Transport

__all__ = [
    "__version__",
    "DEFAULT_KEY",
    "FileStorage",
    "HostStore",
    "MISSING",
    "MemoryArea",
    "MemoryStorage",
    "Mutation",
    "PayloadDecodeError",
    "StateStore",
    "StorageArea",
    "StorageError",
    "StorageEvent",
    "StorageTransport",
    "StorageUnavailableError",
    "SyncConfig",
    "TabSync",
    "TabSyncConfigError",
    "TabSyncError",
    "Transport",
    "UnknownMutationError",
    "clone_tree",
    "create_plugin",
    "exclude_paths",
    "get_path",
    "project_paths",
    "reconcile_state",
    "remove_path",
    "set_path",
]
