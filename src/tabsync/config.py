"""Coordinator configuration for tabsync."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable, Iterable
from typing import Any

from tabsync.exceptions import TabSyncConfigError

DEFAULT_KEY = "vuex-multi-tab"

StateHook = Callable[[Any], Any]


def _identity(state: Any) -> Any:
    return state


def _env_list(value: str | None) -> tuple[str, ...] | None:
    if value is None:
        return None
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _freeze_paths(name: str, paths: Iterable[str]) -> tuple[str, ...]:
    if isinstance(paths, str):
        raise TabSyncConfigError(f"{name} must be a sequence of paths, not a single string")
    frozen = tuple(paths)
    for path in frozen:
        if not isinstance(path, str) or not path:
            raise TabSyncConfigError(f"{name} entries must be non-empty strings, got {path!r}")
    return frozen


@dataclasses.dataclass(frozen=True)
class SyncConfig:
    """Coordinator configuration.

    Parameters
    ----------
    key : str
        Storage key (channel namespace) the state tree is published under.
    states_paths : tuple of str
        Dot paths to sync. Empty means the whole tree is published and
        incoming trees replace local state entirely.
    states_remove : tuple of str
        Dot paths left out of published trees. Only used when
        ``states_paths`` is empty, and never when merging incoming trees.
    on_before_replace : callable
        Adjusts an incoming tree before it is merged. Returning ``None``
        or another falsy non-container value (``False``, ``0``, ``""``)
        drops the update. Results that are not mappings are dropped too.
    on_before_save : callable
        Adjusts the tree about to be published. Returning ``None`` or
        another falsy non-container value skips the publish.
    """

    key: str = DEFAULT_KEY
    states_paths: tuple[str, ...] = ()
    states_remove: tuple[str, ...] = ()
    on_before_replace: StateHook = _identity
    on_before_save: StateHook = _identity

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not self.key.strip():
            raise TabSyncConfigError("key must be a non-empty string")
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "states_paths", _freeze_paths("states_paths", self.states_paths))
        object.__setattr__(self, "states_remove", _freeze_paths("states_remove", self.states_remove))
        for hook_name in ("on_before_replace", "on_before_save"):
            hook = getattr(self, hook_name)
            if hook is None:
                object.__setattr__(self, hook_name, _identity)
            elif not callable(hook):
                raise TabSyncConfigError(f"{hook_name} must be callable")

    @property
    def syncs_whole_tree(self) -> bool:
        return not self.states_paths

    @classmethod
    def from_env(cls, **overrides: Any) -> SyncConfig:
        """Create configuration from environment variables.

        Reads ``TABSYNC_KEY``, ``TABSYNC_STATES_PATHS`` and
        ``TABSYNC_STATES_REMOVE`` (comma-separated). Explicit keyword
        arguments override environment values. Hooks can only be passed
        as overrides.

        Returns
        -------
        SyncConfig
            Populated configuration.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        key = env.get("TABSYNC_KEY")
        if key is not None:
            config_kwargs["key"] = key

        _ENV_LIST_MAP = {
            "TABSYNC_STATES_PATHS": "states_paths",
            "TABSYNC_STATES_REMOVE": "states_remove",
        }
        for env_key, field_name in _ENV_LIST_MAP.items():
            paths = _env_list(env.get(env_key))
            if paths is not None:
                config_kwargs[field_name] = paths

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
