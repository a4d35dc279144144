"""
grid_graph.viz — Rendering of a grid session.

Modules:
    grid_figure  — Static matplotlib figure: nodes, weighted edges, bridges, path.
"""
