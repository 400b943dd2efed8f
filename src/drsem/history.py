from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

Snapshot = Dict[str, List[Dict[str, Any]]]

HISTORY_LIMIT = 20


class HistoryStack:
    """Bounded linear undo/redo over graph snapshots.

    ``cursor`` always points at the entry matching the live graph. Pushing from
    behind the tail drops the redo entries; pushing at capacity evicts entry 0.
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1.")
        self.limit = limit
        self.entries: List[Snapshot] = []
        self.cursor = -1

    def __len__(self) -> int:
        return len(self.entries)

    def push(self, nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> None:
        self.entries = self.entries[: self.cursor + 1]
        if len(self.entries) >= self.limit:
            self.entries.pop(0)
        self.entries.append(_freeze(nodes, links))
        self.cursor = len(self.entries) - 1

    def undo(self) -> Optional[Snapshot]:
        if not self.can_undo():
            return None
        self.cursor -= 1
        return deepcopy(self.entries[self.cursor])

    def redo(self) -> Optional[Snapshot]:
        if not self.can_redo():
            return None
        self.cursor += 1
        return deepcopy(self.entries[self.cursor])

    def can_undo(self) -> bool:
        return self.cursor > 0

    def can_redo(self) -> bool:
        return 0 <= self.cursor < len(self.entries) - 1

    def reset(self, nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> None:
        self.entries = [_freeze(nodes, links)]
        self.cursor = 0

    def initialize(self, nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> bool:
        if self.entries or not (nodes or links):
            return False
        self.reset(nodes, links)
        return True

    def current(self) -> Optional[Snapshot]:
        if self.cursor < 0:
            return None
        return deepcopy(self.entries[self.cursor])

    def matches_current(self, nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> bool:
        if self.cursor < 0:
            return False
        entry = self.entries[self.cursor]
        return entry["nodes"] == nodes and entry["links"] == links

    def position(self) -> Tuple[int, int]:
        return self.cursor, len(self.entries)


def _freeze(nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> Snapshot:
    return {"nodes": deepcopy(list(nodes)), "links": deepcopy(list(links))}
