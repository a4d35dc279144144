"""
grid_graph/algorithms/shortest_path.py — Single-pair shortest path (Dijkstra).

Every node starts in the frontier at distance +∞ except the start (0). The
frontier member with the smallest tentative distance is finalized next; ties
go to the node earliest in row-major grid order so results are reproducible.
The search stops as soon as the end node is finalized.

Extraction uses a binary heap with lazy deletion (stale heap entries are
skipped), which finalizes nodes in exactly the order an O(V²) scan of the
frontier would.

"No path" is a first-class result, not an error: distance stays infinite and
the path is empty.
"""

import heapq
import logging
import math
from dataclasses import dataclass, field

from grid_graph.graph.store import GraphStore, InvalidInputError

logger = logging.getLogger(__name__)


@dataclass
class ShortestPathResult:
    """
    Outcome of one shortest_path() call.

    Fields:
        start, end: Query endpoints.
        distance:   Total weight of the path, or math.inf when unreachable.
        path:       Node ids from start to end inclusive; [] when unreachable.
    """

    start: str
    end: str
    distance: float
    path: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return not math.isinf(self.distance)


def shortest_path(store: GraphStore, start: str, end: str) -> ShortestPathResult:
    """
    Compute the minimum-weight path from start to end.

    Args:
        store: GraphStore to read. Never mutated.
        start: Existing node id.
        end:   Existing node id (may equal start).

    Returns:
        result: ShortestPathResult. For start == end the path is [start]
                with distance 0.

    Raises:
        InvalidInputError: start or end is not a node of the store.
    """
    for endpoint in (start, end):
        if not store.has_node(endpoint):
            raise InvalidInputError(f"Unknown node {endpoint!r}.")

    dist: dict[str, float] = {n: math.inf for n in store.node_ids()}
    prev: dict[str, str | None] = {n: None for n in dist}
    dist[start] = 0.0

    frontier = set(dist)
    heap: list[tuple[float, int, str]] = [(0.0, store.order(start), start)]

    while heap:
        d, _, u = heapq.heappop(heap)
        if u not in frontier or d > dist[u]:
            continue
        frontier.discard(u)
        if u == end:
            break
        for v, w in store.neighbors_of(u).items():
            if v not in frontier:
                continue
            alt = dist[u] + w
            if alt < dist[v]:
                dist[v] = alt
                prev[v] = u
                heapq.heappush(heap, (alt, store.order(v), v))

    if math.isinf(dist[end]):
        logger.debug("No path from %s to %s.", start, end)
        return ShortestPathResult(start, end, math.inf, [])

    path: list[str] = []
    cur: str | None = end
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()

    logger.debug(
        "Shortest path %s → %s: distance %s over %d nodes.",
        start, end, dist[end], len(path),
    )
    return ShortestPathResult(start, end, dist[end], path)


def path_weight(store: GraphStore, path: list[str]) -> float:
    """
    Sum of edge weights along consecutive path nodes.

    Raises:
        InvalidInputError: Two consecutive nodes are not connected.
    """
    total = 0.0
    for a, b in zip(path, path[1:]):
        w = store.weight(a, b)
        if w is None:
            raise InvalidInputError(f"No edge between {a} and {b}.")
        total += w
    return total
