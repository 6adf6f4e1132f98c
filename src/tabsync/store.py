"""Host state store contract and a minimal in-memory implementation."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from tabsync.events import Mutation
from tabsync.exceptions import UnknownMutationError

_logger = logging.getLogger(__name__)

MutationCallback = Callable[[Mutation, dict[str, Any]], None]
MutationHandler = Callable[[dict[str, Any], Any], None]


class HostStore(Protocol):
    """What the coordinator needs from the application's state store."""

    @property
    def state(self) -> dict[str, Any]: ...

    def replace_state(self, state: dict[str, Any]) -> None: ...

    def subscribe(self, callback: MutationCallback) -> Callable[[], None]: ...


class StateStore:
    """In-memory store with named mutations and subscribers.

    Mutations are the only way local code changes state: ``commit`` runs the
    registered handler against the current tree, then notifies subscribers
    with the post-mutation state. ``replace_state`` swaps the whole tree and
    deliberately notifies nobody, so installing a remote update never gets
    published again.
    """

    def __init__(
        self,
        state: dict[str, Any] | None = None,
        *,
        mutations: Mapping[str, MutationHandler] | None = None,
    ) -> None:
        self._state: dict[str, Any] = state if state is not None else {}
        self._mutations: dict[str, MutationHandler] = dict(mutations or {})
        self._subscribers: list[MutationCallback] = []

    @property
    def state(self) -> dict[str, Any]:
        return self._state

    def replace_state(self, state: dict[str, Any]) -> None:
        self._state = state

    def subscribe(self, callback: MutationCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def register(self, name: str, handler: MutationHandler) -> None:
        self._mutations[name] = handler

    def commit(self, mutation_type: str, payload: Any = None) -> None:
        handler = self._mutations.get(mutation_type)
        if handler is None:
            raise UnknownMutationError(f"Unknown mutation type: {mutation_type!r}")

        handler(self._state, payload)
        mutation = Mutation(type=mutation_type, payload=payload)
        _logger.debug("Committed %s", mutation.type)
        for callback in list(self._subscribers):
            callback(mutation, self._state)
