"""
grid_graph.graph — Graph Store and Edit History.

Modules:
    store    — GraphStore: grid nodes + weighted undirected edges (NetworkX-backed).
    history  — EditHistory: linear undo/redo of edge edits.

Node ids are "{row}-{col}" strings. Edges are undirected, non-negatively
weighted, and unique per unordered pair.
"""

from grid_graph.graph.history import Action, EditHistory
from grid_graph.graph.store import Edge, GraphStore, InvalidInputError, Node

__all__ = ["Action", "EditHistory", "Edge", "GraphStore", "InvalidInputError", "Node"]
