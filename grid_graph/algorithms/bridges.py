"""
grid_graph/algorithms/bridges.py — Bridge Edge Detection (cut-edges).

A bridge is an edge whose removal increases the number of connected
components of the graph. On a drawn grid these are the single links holding
two clusters together.

Bridge detection uses Tarjan's discovery-time / low-link sweep (O(V + E)).
The depth-first traversal is iterative: each stack frame carries
(node, parent, neighbor iterator), so a large grid cannot exhaust the
interpreter's recursion limit. A fresh traversal is started from every node
not yet discovered, in row-major order, so every component is covered.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator

from grid_graph.graph.store import GraphStore, pair_key

logger = logging.getLogger(__name__)


@dataclass
class BridgeResult:
    """
    Bridges found by find_bridges().

    Fields:
        bridges: (u, v) tuples in discovery order, u being the endpoint
                 discovered first. (u, v) and (v, u) name the same edge.
    """

    bridges: list[tuple[str, str]] = field(default_factory=list)

    @property
    def pairs(self) -> set[frozenset]:
        """Order-independent view of the bridges."""
        return {pair_key(u, v) for u, v in self.bridges}

    @property
    def count(self) -> int:
        return len(self.bridges)

    def is_bridge(self, a: str, b: str) -> bool:
        return pair_key(a, b) in self.pairs


def find_bridges(store: GraphStore) -> BridgeResult:
    """
    Find every bridge edge across all components of the store.

    Algorithm (Tarjan's bridge-finding):
        1. Assign each node a discovery time tin on first visit, and
           low = tin.
        2. Tree edge u → v: after v's subtree is finished,
           low[u] = min(low[u], low[v]); the edge is a bridge iff
           low[v] > tin[u].
        3. Edge to an already-discovered v other than u's parent:
           low[u] = min(low[u], tin[v]).

    Args:
        store: GraphStore to read. Never mutated.

    Returns:
        result: BridgeResult. Empty for an edgeless or fully cycle-covered
                graph.

    Notes:
        - Parent exclusion compares node identity. That skips exactly the
          tree edge just taken because the store keeps at most one edge per
          unordered pair.
    """
    tin: dict[str, int] = {}
    low: dict[str, int] = {}
    bridges: list[tuple[str, str]] = []
    timer = 0

    for root in store.node_ids():
        if root in tin:
            continue

        tin[root] = low[root] = timer
        timer += 1
        stack: list[tuple[str, str | None, Iterator[str]]] = [
            (root, None, iter(store.neighbors_of(root)))
        ]

        while stack:
            u, parent, neighbors = stack[-1]
            advanced = False
            for v in neighbors:
                if v == parent:
                    continue
                if v in tin:
                    low[u] = min(low[u], tin[v])
                    continue
                tin[v] = low[v] = timer
                timer += 1
                stack.append((v, u, iter(store.neighbors_of(v))))
                advanced = True
                break

            if advanced:
                continue

            # u's neighbors are exhausted; fold its low-link into the parent.
            stack.pop()
            if parent is not None:
                low[parent] = min(low[parent], low[u])
                if low[u] > tin[parent]:
                    bridges.append((parent, u))

    logger.debug(
        "Bridge detection complete: %d bridges found in %d-node grid (%d edges).",
        len(bridges),
        len(store),
        store.edge_count,
    )
    return BridgeResult(bridges)
