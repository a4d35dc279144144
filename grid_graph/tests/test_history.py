"""
grid_graph/tests/test_history.py — Tests for the Edit History.

Tests verify:
- Undo after an add removes exactly that edge and restores prior neighbor state.
- Redo after undo restores the edge with its original weight.
- Any new add after an undo clears the redo stack.
- Undo/redo on empty stacks are no-ops.
- Replaying the undo stack reconstructs the store's edge set.
"""

import random

from grid_graph.graph.history import EditHistory
from grid_graph.graph.store import GraphStore


def _add(store: GraphStore, history: EditHistory, a: str, b: str, w: float) -> None:
    previous = store.weight(a, b)
    history.record_add(store.add_or_update_edge(a, b, w), previous)


def _edge_set(store: GraphStore) -> set[tuple[frozenset, float]]:
    return {(e.key, e.weight) for e in store.all_edges()}


# ── Empty history ────────────────────────────────────────────────────────────

def test_undo_empty_is_noop():
    store, history = GraphStore.from_grid(1, 2), EditHistory()
    assert history.undo(store) is False
    assert history.redo(store) is False
    assert not history.can_undo and not history.can_redo


# ── Undo / redo ──────────────────────────────────────────────────────────────

def test_undo_removes_exactly_last_edge():
    store, history = GraphStore.from_grid(1, 3), EditHistory()
    _add(store, history, "0-0", "0-1", 1)
    _add(store, history, "0-1", "0-2", 2)

    assert history.undo(store) is True
    assert store.has_edge("0-0", "0-1")
    assert not store.has_edge("0-1", "0-2")
    assert store.neighbors_of("0-1") == {"0-0": 1}
    assert store.neighbors_of("0-2") == {}


def test_redo_restores_original_weight():
    store, history = GraphStore.from_grid(1, 2), EditHistory()
    _add(store, history, "0-0", "0-1", 4.5)
    history.undo(store)
    assert history.redo(store) is True
    assert store.weight("0-1", "0-0") == 4.5
    assert history.undo_depth == 1
    assert history.redo_depth == 0


def test_new_add_clears_redo():
    store, history = GraphStore.from_grid(1, 3), EditHistory()
    _add(store, history, "0-0", "0-1", 1)
    history.undo(store)
    assert history.can_redo
    _add(store, history, "0-1", "0-2", 2)
    assert not history.can_redo
    assert history.redo(store) is False
    assert not store.has_edge("0-0", "0-1")


def test_undo_of_overwrite_restores_previous_weight():
    store, history = GraphStore.from_grid(1, 2), EditHistory()
    _add(store, history, "0-0", "0-1", 1)
    _add(store, history, "0-1", "0-0", 8)
    assert store.weight("0-0", "0-1") == 8

    history.undo(store)
    assert store.weight("0-0", "0-1") == 1
    history.undo(store)
    assert not store.has_edge("0-0", "0-1")

    history.redo(store)
    history.redo(store)
    assert store.weight("0-0", "0-1") == 8
    assert store.edge_count == 1


def test_undo_redo_round_trip_random_sequence():
    """undo then redo (and redo then undo) leave the edge set unchanged."""
    rng = random.Random(41)
    store, history = GraphStore.from_grid(3, 3), EditHistory()
    ids = store.node_ids()
    for step in range(60):
        op = rng.random()
        if op < 0.6:
            a, b = rng.sample(ids, 2)
            _add(store, history, a, b, rng.randint(0, 5))
        elif op < 0.8:
            history.undo(store)
        else:
            history.redo(store)

        before = _edge_set(store)
        if history.undo(store):
            history.redo(store)
            assert _edge_set(store) == before
        if history.redo(store):
            history.undo(store)
            assert _edge_set(store) == before


def test_replaying_undo_stack_reconstructs_store():
    store, history = GraphStore.from_grid(2, 2), EditHistory()
    _add(store, history, "0-0", "0-1", 1)
    _add(store, history, "0-1", "1-1", 2)
    _add(store, history, "0-0", "0-1", 3)
    _add(store, history, "1-0", "1-1", 4)
    history.undo(store)

    replay = GraphStore.from_grid(2, 2)
    for action in history.actions():
        replay.add_or_update_edge(action.edge.n1, action.edge.n2, action.edge.weight)
    assert _edge_set(replay) == _edge_set(store)


def test_clear_empties_both_stacks():
    store, history = GraphStore.from_grid(1, 3), EditHistory()
    _add(store, history, "0-0", "0-1", 1)
    _add(store, history, "0-1", "0-2", 1)
    history.undo(store)
    history.clear()
    assert history.undo_depth == 0
    assert history.redo_depth == 0
