"""
grid_graph — Weighted grid graphs with shortest-path and bridge analysis.

A user draws an undirected weighted graph on a rectangular grid of nodes,
then asks for the cheapest route between two nodes (Dijkstra) or for the
edges whose loss would split the drawing apart (Tarjan bridges).

Subpackages:
    graph       — GraphStore (nodes + edges) and EditHistory (undo/redo).
    algorithms  — shortest_path and find_bridges.
    viz         — matplotlib rendering of a grid.

Entry points:
    grid_graph.session.GridSession  — one interactive grid, no globals.
    grid_graph.cli                  — `python -m grid_graph` / `grid-graph`.
"""

__version__ = "0.1.0"
