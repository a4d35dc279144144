"""
grid_graph/config.py — All tunable parameters for grid_graph.

No layout constant, pacing delay, or colour should be hardcoded in a module.
Every presentation tunable lives here so that a visual or timing change is a
single-file diff.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GridGraphConfig:
    """
    Immutable configuration for a grid session and its renderers.

    Override by constructing a new GridGraphConfig with the desired values.
    """

    # ── Grid layout ───────────────────────────────────────────────────────────
    cell_size_px: int = 42
    # Viewport pixels per grid cell. A viewport of W×H pixels yields
    # floor(H / 42) rows and floor(W / 42) columns.

    default_rows: int = 8
    default_cols: int = 12
    # Grid size used when neither explicit dimensions nor a viewport is given.

    # ── Input ─────────────────────────────────────────────────────────────────
    default_weight: str = "1"
    # Weight offered to the user when they are asked for a new edge's weight.

    # ── Pacing ────────────────────────────────────────────────────────────────
    reveal_delay_seconds: float = 1.0
    # Pause before each node of a shortest path is revealed.

    resize_debounce_seconds: float = 0.3
    # Quiet period after the last viewport resize before the grid is rebuilt.

    # ── Rendering ─────────────────────────────────────────────────────────────
    figure_dpi: int = 150
    cell_inches: float = 0.6
    # Figure size scales with the grid: cols × cell_inches wide.

    node_color: str = "#E8EFF5"
    edge_node_color: str = "#B7D3E6"
    # Nodes touching at least one edge.

    path_node_color: str = "#F2B134"
    edge_color: str = "black"
    edge_width: float = 1.0
    bridge_color: str = "red"
    bridge_width: float = 2.0
    label_color: str = "#1A2B3C"


# Singleton default: import this everywhere instead of constructing anew.
DEFAULT_CONFIG = GridGraphConfig()
