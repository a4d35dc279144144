"""
grid_graph/viz/grid_figure.py — Static matplotlib rendering of a grid.

Visual encoding:
    - Node:        Labelled square cell at its (row, col) position.
    - Node fill:   Tinted when the node touches an edge; amber when on the
                   revealed shortest path.
    - Edge:        Black line with its weight printed just above the midpoint.
    - Bridge:      Red, thicker line (drawn over the plain edge).

Usage:
    from grid_graph.viz.grid_figure import render_grid
    path = render_grid(session.store, bridges=result, output_path="grid.png")
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import matplotlib
try:
    matplotlib.use("Agg")
except Exception:
    pass  # backend already set

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import numpy as np

from grid_graph.config import DEFAULT_CONFIG, GridGraphConfig
from grid_graph.graph.store import format_number

if TYPE_CHECKING:
    from grid_graph.algorithms.bridges import BridgeResult
    from grid_graph.graph.store import GraphStore

logger = logging.getLogger(__name__)

_CELL = 0.8
# Side of a node square in data units (one grid step = 1.0).


def node_centers(store: "GraphStore") -> dict[str, np.ndarray]:
    """Node id → (x, y) centre. Row 0 is drawn at the top."""
    centers: dict[str, np.ndarray] = {}
    for n in store.node_ids():
        node = store.node(n)
        centers[n] = np.array([float(node.col), float(-node.row)])
    return centers


def build_grid_figure(
    store: "GraphStore",
    path: list[str] | None = None,
    bridges: "BridgeResult | None" = None,
    title: str | None = None,
    config: GridGraphConfig = DEFAULT_CONFIG,
):
    """
    Draw the grid, its edges, bridges and path onto a new figure.

    Args:
        store:   GraphStore to draw.
        path:    Node ids already revealed on the shortest path.
        bridges: BridgeResult to emphasise, if the bridge finder ran.
        title:   Figure title.
        config:  Colours, widths and sizing.

    Returns:
        fig: matplotlib Figure (caller owns it and must close it).
    """
    centers = node_centers(store)
    path_nodes = set(path or [])
    incident = store.incident_nodes()
    bridge_pairs = bridges.pairs if bridges is not None else set()

    width = max(store.cols, 1) * config.cell_inches + 1.0
    height = max(store.rows, 1) * config.cell_inches + 1.0
    fig, ax = plt.subplots(figsize=(width, height))

    for n, (x, y) in centers.items():
        if n in path_nodes:
            fill = config.path_node_color
        elif n in incident:
            fill = config.edge_node_color
        else:
            fill = config.node_color
        ax.add_patch(mpatches.Rectangle(
            (x - _CELL / 2, y - _CELL / 2), _CELL, _CELL,
            facecolor=fill, edgecolor=config.label_color, linewidth=0.5, zorder=1,
        ))
        ax.text(x, y, n, ha="center", va="center", fontsize=6,
                color=config.label_color, zorder=4)

    for edge in store.all_edges():
        p1, p2 = centers[edge.n1], centers[edge.n2]
        is_bridge = edge.key in bridge_pairs
        ax.plot(
            [p1[0], p2[0]], [p1[1], p2[1]],
            color=config.bridge_color if is_bridge else config.edge_color,
            linewidth=config.bridge_width if is_bridge else config.edge_width,
            zorder=2,
        )
        mid = (p1 + p2) / 2
        ax.text(mid[0], mid[1] + 0.12, format_number(edge.weight), ha="center", va="bottom",
                fontsize=7, color=config.label_color, zorder=5)

    ax.set_xlim(-0.6, max(store.cols - 1, 0) + 0.6)
    ax.set_ylim(-max(store.rows - 1, 0) - 0.6, 0.6)
    ax.set_aspect("equal")
    ax.axis("off")
    if title:
        ax.set_title(title, fontsize=11, fontweight="bold", pad=8)

    if bridge_pairs:
        ax.legend(
            handles=[
                plt.Line2D([0], [0], color=config.edge_color,
                           linewidth=config.edge_width, label="edge"),
                plt.Line2D([0], [0], color=config.bridge_color,
                           linewidth=config.bridge_width, label="bridge"),
            ],
            fontsize=8, loc="upper right", bbox_to_anchor=(1.0, 1.12), ncol=2,
        )

    fig.tight_layout()
    return fig


def render_grid(
    store: "GraphStore",
    path: list[str] | None = None,
    bridges: "BridgeResult | None" = None,
    title: str | None = None,
    output_path: str | None = None,
    config: GridGraphConfig = DEFAULT_CONFIG,
):
    """
    Render the grid, saving to output_path when given.

    Returns:
        The absolute PNG path when output_path is set, otherwise the open
        matplotlib Figure.
    """
    fig = build_grid_figure(store, path=path, bridges=bridges, title=title, config=config)
    if output_path is None:
        return fig

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fig.savefig(output_path, dpi=config.figure_dpi, bbox_inches="tight")
    plt.close(fig)
    logger.info("Grid figure saved: %s", output_path)
    return os.path.abspath(output_path)
