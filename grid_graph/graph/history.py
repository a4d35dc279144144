"""
grid_graph/graph/history.py — Edit History (undo / redo over the Graph Store).

A linear timeline: recording a new edit discards whatever was undone before
it. Actions hold edge descriptors (ids and weights), never live node objects,
so they can be replayed against the store at any time.

Invariant:
    Replaying the undo stack bottom-to-top onto an empty grid reproduces the
    store's current edge set. The redo stack holds exactly the actions most
    recently undone, newest undo on top.
"""

import logging
from dataclasses import dataclass

from grid_graph.graph.store import Edge, GraphStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """
    One undoable edit.

    Fields:
        kind:            Always 'add' (the only user edit on a grid).
        edge:            The edge as it was set by the edit.
        previous_weight: Weight the pair carried before the edit, or None if
                         the pair was unconnected. Undo restores it.
    """

    kind: str
    edge: Edge
    previous_weight: float | None = None


class EditHistory:
    def __init__(self) -> None:
        self._undo: list[Action] = []
        self._redo: list[Action] = []

    def record_add(self, edge: Edge, previous_weight: float | None = None) -> Action:
        """Push an add action and invalidate the redo lineage."""
        action = Action("add", edge, previous_weight)
        self._undo.append(action)
        self._redo.clear()
        return action

    def undo(self, store: GraphStore) -> bool:
        """Invert the most recent edit. Returns False when there is nothing to undo."""
        if not self._undo:
            return False
        action = self._undo.pop()
        if action.kind == "add":
            e = action.edge
            if action.previous_weight is None:
                store.remove_edge(e.n1, e.n2)
            else:
                store.add_or_update_edge(e.n1, e.n2, action.previous_weight)
        self._redo.append(action)
        logger.debug("Undo %s %s — %s.", action.kind, action.edge.n1, action.edge.n2)
        return True

    def redo(self, store: GraphStore) -> bool:
        """Re-apply the most recently undone edit. Returns False when there is none."""
        if not self._redo:
            return False
        action = self._redo.pop()
        if action.kind == "add":
            e = action.edge
            store.add_or_update_edge(e.n1, e.n2, e.weight)
        self._undo.append(action)
        logger.debug("Redo %s %s — %s.", action.kind, action.edge.n1, action.edge.n2)
        return True

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def actions(self) -> list[Action]:
        """Undo stack, oldest first."""
        return list(self._undo)
