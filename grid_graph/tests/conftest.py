"""
grid_graph/tests/conftest.py — Shared pytest fixtures for the grid_graph test suite.

Random graphs are seeded (SEED) so every run sees the same topologies.

Fixtures:
    line_store        — 1x3 grid: 0-0 —1— 0-1 —2— 0-2.
    triangle_store    — line_store plus 0-0 —10— 0-2.
    forest_store      — 3x4 grid with a cycle component and a tree component.
    random_stores     — List of seeded random GraphStores for oracle checks.
    session           — GridSession on a 3x3 grid with a zero reveal delay.
"""

import dataclasses
import random

import pytest

from grid_graph.config import DEFAULT_CONFIG
from grid_graph.graph.store import GraphStore
from grid_graph.session import GridSession

SEED = 41


def make_random_store(rng: random.Random, rows: int, cols: int, edge_count: int) -> GraphStore:
    """Random grid graph with integer weights in [0, 9]; pairs may repeat (overwrite)."""
    store = GraphStore.from_grid(rows, cols)
    ids = store.node_ids()
    for _ in range(edge_count):
        a, b = rng.sample(ids, 2)
        store.add_or_update_edge(a, b, rng.randint(0, 9))
    return store


@pytest.fixture
def line_store() -> GraphStore:
    store = GraphStore.from_grid(1, 3)
    store.add_or_update_edge("0-0", "0-1", 1)
    store.add_or_update_edge("0-1", "0-2", 2)
    return store


@pytest.fixture
def triangle_store(line_store) -> GraphStore:
    line_store.add_or_update_edge("0-0", "0-2", 10)
    return line_store


@pytest.fixture
def forest_store() -> GraphStore:
    """
    Two components plus isolated nodes on a 3x4 grid.

        Cycle:  0-0 — 0-1 — 1-1 — 1-0 — 0-0     (no bridges)
        Tree:   0-3 — 1-3 — 2-3, 1-3 — 1-2      (3 bridges)
        Others: 0-2, 2-0, 2-1, 2-2 isolated
    """
    store = GraphStore.from_grid(3, 4)
    for a, b in [("0-0", "0-1"), ("0-1", "1-1"), ("1-1", "1-0"), ("1-0", "0-0")]:
        store.add_or_update_edge(a, b, 1)
    for a, b in [("0-3", "1-3"), ("1-3", "2-3"), ("1-3", "1-2")]:
        store.add_or_update_edge(a, b, 2)
    return store


@pytest.fixture(scope="session")
def random_stores() -> list[GraphStore]:
    rng = random.Random(SEED)
    stores = []
    for _ in range(25):
        rows, cols = rng.randint(1, 6), rng.randint(2, 6)
        n = rows * cols
        stores.append(make_random_store(rng, rows, cols, rng.randint(0, n + n // 2)))
    return stores


@pytest.fixture
def session() -> GridSession:
    config = dataclasses.replace(DEFAULT_CONFIG, reveal_delay_seconds=0.0)
    return GridSession(3, 3, config=config)
