"""Undo/redo history for the drag-and-drop canvas.

The canvas is a list of nodes and a list of edges. Every mutation pushes the
current snapshot onto the undo stack and clears the redo stack; undo and redo
move snapshots between the two stacks.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sitebuilder.domain.errors import NotFoundError, ValidationError

NODE_REQUIRED_KEYS = ("id", "type")
EDGE_REQUIRED_KEYS = ("id", "source", "target")


def _check_shape(item: Any, required: tuple, kind: str) -> None:
    if not isinstance(item, dict):
        raise ValidationError(f"Canvas {kind} must be an object, got {type(item).__name__}")
    missing = [key for key in required if key not in item]
    if missing:
        raise ValidationError(f"Canvas {kind} is missing {', '.join(missing)}")


@dataclass(frozen=True)
class Snapshot:
    """An immutable copy of the canvas: its nodes and edges."""

    nodes: List[Dict[str, Any]] = field(default_factory=list)
    edges: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def of(cls, nodes: Optional[List[Dict[str, Any]]] = None,
           edges: Optional[List[Dict[str, Any]]] = None) -> Snapshot:
        """Validate shapes and deep-copy the lists so later edits cannot leak in."""
        nodes = nodes or []
        edges = edges or []
        for node in nodes:
            _check_shape(node, NODE_REQUIRED_KEYS, "node")
        for edge in edges:
            _check_shape(edge, EDGE_REQUIRED_KEYS, "edge")
        return cls(nodes=copy.deepcopy(nodes), edges=copy.deepcopy(edges))

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {"nodes": copy.deepcopy(self.nodes), "edges": copy.deepcopy(self.edges)}


class CanvasHistory:
    """
    State machine over {undo_stack, redo_stack, current}.

    mutate(new): undo_stack.push(current); redo_stack = []; current = new
    undo():      if undo_stack: redo_stack.push(current); current = undo_stack.pop()
    redo():      if redo_stack: undo_stack.push(current); current = redo_stack.pop()
    """

    def __init__(self, initial: Optional[Snapshot] = None, max_depth: Optional[int] = None) -> None:
        if max_depth is not None and max_depth < 1:
            raise ValidationError("max_depth must be at least 1")
        self.current: Snapshot = initial or Snapshot()
        self.undo_stack: List[Snapshot] = []
        self.redo_stack: List[Snapshot] = []
        self.max_depth = max_depth

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def mutate(self, new: Snapshot) -> Snapshot:
        self.undo_stack.append(self.current)
        if self.max_depth is not None and len(self.undo_stack) > self.max_depth:
            del self.undo_stack[0]
        self.redo_stack = []
        self.current = new
        return self.current

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        self.redo_stack.append(self.current)
        self.current = self.undo_stack.pop()
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        self.undo_stack.append(self.current)
        self.current = self.redo_stack.pop()
        return True

    # Canvas edits, each recorded as one mutation

    def add_node(self, node: Dict[str, Any]) -> Snapshot:
        _check_shape(node, NODE_REQUIRED_KEYS, "node")
        if any(n["id"] == node["id"] for n in self.current.nodes):
            raise ValidationError(f"Canvas already has a node with id {node['id']}")
        return self.mutate(Snapshot.of(self.current.nodes + [node], self.current.edges))

    def remove_node(self, node_id: str) -> Snapshot:
        """Remove a node together with every edge attached to it."""
        self._require_node(node_id)
        nodes = [n for n in self.current.nodes if n["id"] != node_id]
        edges = [e for e in self.current.edges if node_id not in (e["source"], e["target"])]
        return self.mutate(Snapshot.of(nodes, edges))

    def move_node(self, node_id: str, x: float, y: float) -> Snapshot:
        self._require_node(node_id)
        nodes = copy.deepcopy(self.current.nodes)
        for node in nodes:
            if node["id"] == node_id:
                node["position"] = {"x": x, "y": y}
        return self.mutate(Snapshot.of(nodes, self.current.edges))

    def add_edge(self, edge: Dict[str, Any]) -> Snapshot:
        _check_shape(edge, EDGE_REQUIRED_KEYS, "edge")
        self._require_node(edge["source"])
        self._require_node(edge["target"])
        return self.mutate(Snapshot.of(self.current.nodes, self.current.edges + [edge]))

    def remove_edge(self, edge_id: str) -> Snapshot:
        if not any(e["id"] == edge_id for e in self.current.edges):
            raise NotFoundError(f"Canvas edge not found: {edge_id}")
        edges = [e for e in self.current.edges if e["id"] != edge_id]
        return self.mutate(Snapshot.of(self.current.nodes, edges))

    def clear(self) -> Snapshot:
        return self.mutate(Snapshot())

    def _require_node(self, node_id: str) -> None:
        if not any(n["id"] == node_id for n in self.current.nodes):
            raise NotFoundError(f"Canvas node not found: {node_id}")
