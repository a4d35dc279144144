"""
grid_graph/session.py — Grid session: the seam between a front end and the core.

A GridSession owns everything a front end would otherwise keep in globals:
the Graph Store, the Edit History, edge mode, the current node selection,
the displayed path cost and bridge count, and a generation counter that
invalidates in-flight path reveals whenever the grid is rebuilt.

Front ends collect raw strings (clicked ids, typed weights, "start,end"
queries) and hand them to the session; the session validates them before
anything reaches the store or an engine.

Usage:
    session = GridSession.from_viewport(640, 420)
    session.toggle_edge_mode()
    session.click_node("0-0")
    pair = session.click_node("0-1")            # ("0-0", "0-1")
    session.request_edge(*pair, "2.5")
    result = session.run_shortest_path("0-0,0-1")
    for node in session.reveal(result.path):
        highlight(node)
"""

import logging
import math
import time
from typing import Callable, Iterator

from grid_graph.algorithms.bridges import BridgeResult, find_bridges
from grid_graph.algorithms.shortest_path import ShortestPathResult, shortest_path
from grid_graph.config import DEFAULT_CONFIG, GridGraphConfig
from grid_graph.graph.history import EditHistory
from grid_graph.graph.store import Edge, GraphStore, InvalidInputError, format_number, validate_weight

logger = logging.getLogger(__name__)

CLEARED = "–"
INFINITY_LABEL = "∞"


# ── Input parsing ─────────────────────────────────────────────────────────────

def parse_weight(text: str) -> float:
    """
    Parse a typed edge weight.

    Raises:
        InvalidInputError: Empty, non-numeric, non-finite or negative input.
    """
    stripped = (text or "").strip()
    try:
        value = float(stripped)
    except ValueError:
        raise InvalidInputError(f"Edge weight must be a number, got {text!r}.") from None
    return validate_weight(value)


def parse_endpoints(text: str) -> tuple[str, str]:
    """Parse a "start,end" query such as "0-0,3-4"."""
    parts = [p.strip() for p in (text or "").split(",")]
    if len(parts) != 2 or not all(parts):
        raise InvalidInputError(f"Expected 'start,end' (e.g. 0-0,3-4), got {text!r}.")
    return parts[0], parts[1]


def grid_dimensions(
    width_px: int,
    height_px: int,
    config: GridGraphConfig = DEFAULT_CONFIG,
) -> tuple[int, int]:
    """(rows, cols) that fit a viewport of the given pixel size."""
    return height_px // config.cell_size_px, width_px // config.cell_size_px


def format_cost(distance: float) -> str:
    if math.isinf(distance):
        return INFINITY_LABEL
    return format_number(distance)


# ── Session ───────────────────────────────────────────────────────────────────

class GridSession:
    def __init__(
        self,
        rows: int | None = None,
        cols: int | None = None,
        config: GridGraphConfig = DEFAULT_CONFIG,
    ) -> None:
        self.config = config
        self.store = GraphStore()
        self.history = EditHistory()
        self.edge_mode = False
        self.selected: list[str] = []
        self.path_cost = CLEARED
        self.bridge_count = CLEARED
        self.generation = 0
        self.build_grid(
            config.default_rows if rows is None else rows,
            config.default_cols if cols is None else cols,
        )

    @classmethod
    def from_viewport(
        cls,
        width_px: int,
        height_px: int,
        config: GridGraphConfig = DEFAULT_CONFIG,
    ) -> "GridSession":
        rows, cols = grid_dimensions(width_px, height_px, config)
        return cls(rows, cols, config)

    # ── Grid lifecycle ────────────────────────────────────────────────────────

    def build_grid(self, rows: int, cols: int) -> None:
        """Rebuild the grid from scratch. Edges, history and selection are dropped."""
        self.store.build(rows, cols)
        self.history.clear()
        self.selected = []
        self.path_cost = CLEARED
        self.bridge_count = CLEARED
        self.generation += 1
        logger.info("Grid ready: %d x %d (generation %d).", rows, cols, self.generation)

    def reset(self) -> None:
        self.build_grid(self.store.rows, self.store.cols)

    def resize(self, width_px: int, height_px: int) -> bool:
        """Rebuild for a new viewport. Returns False if the grid size is unchanged."""
        rows, cols = grid_dimensions(width_px, height_px, self.config)
        if (rows, cols) == (self.store.rows, self.store.cols):
            return False
        self.build_grid(rows, cols)
        return True

    # ── Editing ───────────────────────────────────────────────────────────────

    def toggle_edge_mode(self) -> bool:
        self.edge_mode = not self.edge_mode
        if not self.edge_mode:
            self.selected = []
        return self.edge_mode

    def click_node(self, node: str) -> tuple[str, str] | None:
        """
        Select a node while in edge mode.

        Returns:
            pair: The two selected ids once a second distinct node is picked
                  (the selection is then cleared), otherwise None. Clicking
                  an already selected node deselects it.
        """
        if not self.edge_mode:
            return None
        if not self.store.has_node(node):
            raise InvalidInputError(f"Unknown node {node!r}.")
        if node in self.selected:
            self.selected.remove(node)
            return None
        self.selected.append(node)
        if len(self.selected) == 2:
            a, b = self.selected
            self.selected = []
            return a, b
        return None

    def request_edge(self, a: str, b: str, weight_input: str | None) -> Edge | None:
        """
        Add or reweight the a–b edge from a typed weight and record it for undo.

        Args:
            weight_input: Raw text, or None when the prompt was cancelled.

        Returns:
            edge: The stored Edge, or None for a cancelled prompt.

        Raises:
            InvalidInputError: Bad weight, self-loop or unknown node; the
                               store and history are unchanged.
        """
        if weight_input is None:
            logger.debug("Edge request %s — %s cancelled.", a, b)
            return None
        try:
            weight = parse_weight(weight_input)
            previous = self.store.weight(a, b)
            edge = self.store.add_or_update_edge(a, b, weight)
        except InvalidInputError as exc:
            logger.warning("Edge %s — %s rejected: %s", a, b, exc)
            raise
        self.history.record_add(edge, previous)
        return edge

    def undo(self) -> bool:
        return self.history.undo(self.store)

    def redo(self) -> bool:
        return self.history.redo(self.store)

    # ── Analyses ──────────────────────────────────────────────────────────────

    def run_shortest_path(self, query: str) -> ShortestPathResult:
        """Parse "start,end", run Dijkstra and update the displayed path cost."""
        self.path_cost = CLEARED
        self.bridge_count = CLEARED
        start, end = parse_endpoints(query)
        for endpoint in (start, end):
            if not self.store.has_node(endpoint):
                logger.warning("Shortest path rejected: unknown node %r.", endpoint)
                raise InvalidInputError(f"Invalid node {endpoint!r}.")
        result = shortest_path(self.store, start, end)
        self.path_cost = format_cost(result.distance)
        return result

    def run_bridges(self) -> BridgeResult:
        self.path_cost = CLEARED
        result = find_bridges(self.store)
        self.bridge_count = str(result.count)
        return result

    def reveal(
        self,
        path: list[str],
        sleep: Callable[[float], None] = time.sleep,
    ) -> Iterator[str]:
        """
        Yield path nodes one at a time, pausing reveal_delay_seconds before each.

        The reveal is bound to the generation it started in: once the grid is
        rebuilt it stops without yielding further nodes.
        """
        generation = self.generation
        for node in path:
            sleep(self.config.reveal_delay_seconds)
            if self.generation != generation:
                logger.debug("Path reveal cancelled by grid rebuild.")
                return
            yield node


class ResizeDebouncer:
    """
    Collapse bursts of viewport resize events into a single grid rebuild.

    notify() records the latest size; poll() applies it once
    resize_debounce_seconds have passed without another notify().
    """

    def __init__(
        self,
        session: GridSession,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session = session
        self.clock = clock
        self._pending: tuple[int, int] | None = None
        self._deadline = 0.0

    def notify(self, width_px: int, height_px: int) -> None:
        self._pending = (width_px, height_px)
        self._deadline = self.clock() + self.session.config.resize_debounce_seconds

    def poll(self) -> bool:
        """Apply a settled resize. Returns True if the grid was rebuilt."""
        if self._pending is None or self.clock() < self._deadline:
            return False
        width_px, height_px = self._pending
        self._pending = None
        return self.session.resize(width_px, height_px)

    @property
    def pending(self) -> bool:
        return self._pending is not None
