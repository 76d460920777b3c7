from sitebuilder.canvas.history import CanvasHistory, Snapshot
from sitebuilder.canvas.store import CanvasStore

__all__ = ["CanvasHistory", "Snapshot", "CanvasStore"]
