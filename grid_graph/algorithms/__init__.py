"""
grid_graph.algorithms — Analyses run over a GraphStore.

Modules:
    shortest_path  — Dijkstra single-pair shortest path (non-negative weights).
    bridges        — Tarjan bridge (cut-edge) detection across all components.

Neither module mutates the store; each call returns a fresh result value.
"""

from grid_graph.algorithms.bridges import BridgeResult, find_bridges
from grid_graph.algorithms.shortest_path import ShortestPathResult, path_weight, shortest_path

__all__ = ["BridgeResult", "ShortestPathResult", "find_bridges", "path_weight", "shortest_path"]
