"""
grid_graph/graph/store.py — The Graph Store.

Owns the grid's node set and its weighted undirected edges. Adjacency lives
in a NetworkX Graph (one adjacency entry per unordered pair, so parallel
edges cannot exist); a separate insertion-ordered edge index keeps
all_edges() stable so repeated rendering is idempotent.

Node ids are "{row}-{col}" strings, created in bulk when the grid is built
and never added or removed individually.
"""

import logging
import math
from dataclasses import dataclass, field
from numbers import Real

import networkx as nx
import pandas as pd

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Rejected user input: bad weight, self-loop, unknown node or query."""


def node_id(row: int, col: int) -> str:
    return f"{row}-{col}"


def pair_key(a: str, b: str) -> frozenset:
    return frozenset((a, b))


@dataclass(frozen=True)
class Node:
    """
    Read-only view of a grid node.

    Fields:
        id:        "{row}-{col}".
        row, col:  Grid coordinates.
        neighbors: Copy of the neighbor id → weight mapping at read time.
    """

    id: str
    row: int
    col: int
    neighbors: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Edge:
    """An undirected weighted edge. (n1, n2) and (n2, n1) are the same edge."""

    n1: str
    n2: str
    weight: float

    @property
    def key(self) -> frozenset:
        return pair_key(self.n1, self.n2)

    def other(self, node: str) -> str:
        return self.n2 if node == self.n1 else self.n1


def format_number(value: float) -> str:
    """Exact display text for a weight or distance: "3" for 3.0, "0.1" for 0.1."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def validate_weight(weight) -> float:
    """Return weight as a float, or raise InvalidInputError if unusable."""
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidInputError(f"Edge weight must be a number, got {weight!r}.")
    value = float(weight)
    if not math.isfinite(value):
        raise InvalidInputError(f"Edge weight must be finite, got {weight!r}.")
    if value < 0:
        raise InvalidInputError(f"Edge weight must be non-negative, got {weight!r}.")
    return value


class GraphStore:
    """
    Nodes and weighted undirected edges of one grid instance.

    The store is the only mutable shared resource of a session. Every
    mutation is all-or-nothing: add_or_update_edge either updates both
    neighbor entries and the edge index, or raises before touching anything.
    """

    def __init__(self, rows: int = 0, cols: int = 0) -> None:
        self._graph = nx.Graph()
        self._edges: dict[frozenset, Edge] = {}
        self.rows = 0
        self.cols = 0
        self.build(rows, cols)

    @classmethod
    def from_grid(cls, rows: int, cols: int) -> "GraphStore":
        return cls(rows, cols)

    # ── Grid construction ─────────────────────────────────────────────────────

    def build(self, rows: int, cols: int) -> None:
        """(Re)create the row-major node set, dropping every edge."""
        if rows < 0 or cols < 0:
            raise InvalidInputError(f"Grid dimensions must be non-negative, got {rows}x{cols}.")
        self._graph = nx.Graph()
        self._edges = {}
        self.rows = rows
        self.cols = cols
        for r in range(rows):
            for c in range(cols):
                self._graph.add_node(node_id(r, c), row=r, col=c, order=r * cols + c)
        logger.debug("Grid built: %d rows x %d cols (%d nodes).", rows, cols, rows * cols)

    # ── Edge mutation ─────────────────────────────────────────────────────────

    def add_or_update_edge(self, a: str, b: str, weight) -> Edge:
        """
        Connect a and b with the given weight, overwriting any existing edge.

        Args:
            a, b:   Existing node ids, a != b.
            weight: Finite, non-negative real number.

        Returns:
            edge: The Edge now stored for the pair. An overwritten pair keeps
                  its position in all_edges().

        Raises:
            InvalidInputError: Self-loop, unknown node, or unusable weight.
                               The store is left unchanged.
        """
        self._require_node(a)
        self._require_node(b)
        if a == b:
            raise InvalidInputError(f"Self-loop on {a} is not allowed.")
        value = validate_weight(weight)

        edge = Edge(a, b, value)
        self._graph.add_edge(a, b, weight=value)
        self._edges[edge.key] = edge
        logger.debug("Edge set: %s — %s (w=%s).", a, b, value)
        return edge

    def remove_edge(self, a: str, b: str) -> None:
        """Remove the a–b edge if present. Absent pairs are ignored."""
        if not self._graph.has_edge(a, b):
            return
        self._graph.remove_edge(a, b)
        del self._edges[pair_key(a, b)]
        logger.debug("Edge removed: %s — %s.", a, b)

    # ── Reads ─────────────────────────────────────────────────────────────────

    def neighbors_of(self, node: str) -> dict[str, float]:
        """Neighbor id → weight for node (a copy; empty if isolated)."""
        self._require_node(node)
        return {v: d["weight"] for v, d in self._graph.adj[node].items()}

    def all_edges(self) -> list[Edge]:
        """Current edges in insertion order."""
        return list(self._edges.values())

    def node_ids(self) -> list[str]:
        """All node ids in row-major grid order."""
        return list(self._graph.nodes)

    def node(self, node: str) -> Node:
        self._require_node(node)
        attrs = self._graph.nodes[node]
        return Node(node, attrs["row"], attrs["col"], self.neighbors_of(node))

    def order(self, node: str) -> int:
        """Row-major position of node, used to break ties deterministically."""
        return self._graph.nodes[node]["order"]

    def has_node(self, node: str) -> bool:
        return node in self._graph

    def has_edge(self, a: str, b: str) -> bool:
        return self._graph.has_edge(a, b)

    def weight(self, a: str, b: str) -> float | None:
        data = self._graph.get_edge_data(a, b)
        return None if data is None else data["weight"]

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def incident_nodes(self) -> set[str]:
        """Ids of nodes that touch at least one edge."""
        return {n for n, degree in self._graph.degree() if degree > 0}

    def to_frame(self) -> pd.DataFrame:
        """Edge table with columns n1, n2, weight (insertion order)."""
        return pd.DataFrame(
            [(e.n1, e.n2, e.weight) for e in self._edges.values()],
            columns=["n1", "n2", "weight"],
        )

    def as_networkx(self) -> nx.Graph:
        """Independent copy of the adjacency, safe to hand to other code."""
        return self._graph.copy()

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node: object) -> bool:
        return node in self._graph

    def __repr__(self) -> str:
        return f"GraphStore(rows={self.rows}, cols={self.cols}, edges={self.edge_count})"

    def _require_node(self, node: str) -> None:
        if node not in self._graph:
            raise InvalidInputError(f"Unknown node {node!r}.")
