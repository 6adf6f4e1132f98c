from __future__ import annotations

from typing import Any

import pytest

from tabsync.events import Mutation
from tabsync.exceptions import UnknownMutationError
from tabsync.store import StateStore


def _increment(state: dict[str, Any], payload: Any) -> None:
    state["count"] = state.get("count", 0) + (payload or 1)


def test_commit_runs_handler_and_notifies_subscribers() -> None:
    store = StateStore({"count": 0}, mutations={"increment": _increment})
    seen: list[tuple[Mutation, dict[str, Any]]] = []
    store.subscribe(lambda mutation, state: seen.append((mutation, dict(state))))

    store.commit("increment", 5)

    assert store.state == {"count": 5}
    assert seen == [(Mutation(type="increment", payload=5), {"count": 5})]


def test_replace_state_does_not_notify() -> None:
    store = StateStore({"count": 0})
    seen: list[Any] = []
    store.subscribe(lambda mutation, state: seen.append(mutation))

    store.replace_state({"count": 10})

    assert store.state == {"count": 10}
    assert seen == []


def test_unknown_mutation_raises() -> None:
    store = StateStore()
    with pytest.raises(UnknownMutationError):
        store.commit("nope")


def test_unsubscribe_stops_notifications() -> None:
    store = StateStore()
    store.register("increment", _increment)
    seen: list[Any] = []
    unsubscribe = store.subscribe(lambda mutation, state: seen.append(mutation))
    unsubscribe()
    store.commit("increment")
    assert seen == []
    assert store.state == {"count": 1}


def test_mutation_type_must_be_non_empty() -> None:
    with pytest.raises(ValueError):
        Mutation(type="  ")
