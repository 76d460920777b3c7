from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from sitebuilder.canvas.history import Snapshot
from sitebuilder.domain.errors import ValidationError

logger = logging.getLogger(__name__)

NODES_KEY = "canvas-nodes"
EDGES_KEY = "canvas-edges"


class CanvasStore:
    """JSON-file key/value store holding the canvas the way the browser's local storage does.

    Each key maps to a JSON-encoded string, so the file can be exchanged with
    a client's ``localStorage`` dump as is.
    """

    def __init__(self, storage_file: Path) -> None:
        self.storage_file = Path(storage_file)
        self.storage_file.parent.mkdir(parents=True, exist_ok=True)

    def _load_items(self) -> Dict[str, Any]:
        if self.storage_file.exists():
            try:
                with self.storage_file.open("r", encoding="utf-8") as handle:
                    raw = json.load(handle)
                if isinstance(raw, dict):
                    return raw
            except json.JSONDecodeError:
                logger.warning("Ignoring unreadable canvas storage file %s", self.storage_file)
        return {}

    def _save_items(self, items: Dict[str, Any]) -> None:
        with self.storage_file.open("w", encoding="utf-8") as handle:
            json.dump(items, handle, indent=2)

    def save(self, snapshot: Snapshot) -> None:
        items = self._load_items()
        items[NODES_KEY] = json.dumps(snapshot.nodes)
        items[EDGES_KEY] = json.dumps(snapshot.edges)
        self._save_items(items)

    def load(self) -> Snapshot:
        """Saved canvas, or an empty one when nothing usable is stored."""
        items = self._load_items()
        try:
            nodes = json.loads(items.get(NODES_KEY) or "[]")
            edges = json.loads(items.get(EDGES_KEY) or "[]")
            if not isinstance(nodes, list) or not isinstance(edges, list):
                raise ValidationError("canvas entries are not lists")
            return Snapshot.of(nodes, edges)
        except (TypeError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Discarding stored canvas: %s", exc)
            return Snapshot()

    def clear(self) -> None:
        items = self._load_items()
        items.pop(NODES_KEY, None)
        items.pop(EDGES_KEY, None)
        self._save_items(items)
