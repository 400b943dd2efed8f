import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from .history import HISTORY_LIMIT, HistoryStack
from .jamovi_syntax import graph_to_lavaan
from .model_file import dump_model_document, parse_model_document
from .sem_graph import LINK_KINDS, SemGraph, build_default_model
from .sem_layout import auto_layout
from .sem_mermaid import graph_to_mermaid

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[str], bool]
Point = Tuple[float, float]

EDIT_MODES = ("move", "link")

NODE_SIZES = {
    "latent": (100.0, 50.0),
    "observed": (120.0, 50.0),
    "error": (30.0, 30.0),
}


class DiagramEditor:
    """Edit-mode state machine over one ``SemGraph``.

    Every committed mutation pushes exactly one history snapshot and saves the
    ``nodes``/``links`` slices. Restoring a snapshot (undo/redo) never pushes.
    ``revision`` grows on every change to the graph so callers can tell
    whether positions they hold were read from the current graph.
    """

    def __init__(
        self,
        graph: Optional[SemGraph] = None,
        store: Any = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self.graph = graph or SemGraph()
        self.store = store
        self.history = HistoryStack(limit=history_limit)
        self.history.initialize(self.graph.nodes, self.graph.links)

        self.mode = "move"
        self.link_kind = "directed"
        self.pending_source: Optional[str] = None
        self.selected_node_id: Optional[str] = None
        self.selected_link_index: Optional[int] = None
        self.revision = 0
        self._restoring = False

    @classmethod
    def from_store(cls, store: Any, history_limit: int = HISTORY_LIMIT) -> "DiagramEditor":
        default = build_default_model()
        nodes = store.load("nodes", default["nodes"])
        links = store.load("links", default["links"])
        return cls(graph=SemGraph(nodes, links), store=store, history_limit=history_limit)

    @property
    def nodes(self) -> List[Dict[str, Any]]:
        return self.graph.nodes

    @property
    def links(self) -> List[Dict[str, str]]:
        return self.graph.links

    # Interaction state

    def set_mode(self, mode: str) -> None:
        if mode not in EDIT_MODES:
            raise ValueError(f"Unknown edit mode: {mode}")
        self.mode = mode
        self._cancel_pending_link()

    def set_link_kind(self, kind: str) -> None:
        if kind not in LINK_KINDS:
            raise ValueError(f"Unknown link kind: {kind}")
        self.link_kind = kind

    def click_node(self, node_id: str) -> None:
        if not self.graph.has_node(node_id):
            return
        if self.mode == "move":
            self.selected_node_id = node_id
            self.selected_link_index = None
            return

        if self.pending_source is None:
            self.pending_source = node_id
            return
        if self.pending_source == node_id:
            self._cancel_pending_link()
            return

        source = self.pending_source
        self._cancel_pending_link()
        self.connect(source, node_id)

    def click_canvas(self) -> None:
        self.clear_selection()

    def select_link(self, index: int) -> None:
        if 0 <= index < len(self.graph.links):
            self.selected_link_index = index
            self.selected_node_id = None

    def clear_selection(self) -> None:
        self.selected_node_id = None
        self.selected_link_index = None

    # Committed mutations

    def add_node(self, label: str, kind: str) -> Optional[Dict[str, Any]]:
        node = self.graph.add_node(label, kind)
        if node is not None:
            self._commit("add node")
        return node

    def connect(self, source: str, target: str, kind: Optional[str] = None) -> bool:
        if not self.graph.add_link(source, target, kind or self.link_kind):
            return False
        self._commit("add link")
        return True

    def finish_drag(self, node_id: str, x: float, y: float) -> bool:
        if self.mode != "move":
            return False
        node = self.graph.get_node(node_id)
        if node is None or (node["x"], node["y"]) == (float(x), float(y)):
            return False
        self.graph.move_node(node_id, x, y)
        self._commit("move node")
        return True

    def sync_positions(self, positions: Dict[str, Point], revision: Optional[int] = None) -> bool:
        """Apply the positions reported by the canvas after a drag as one commit.

        Positions read from an older ``revision`` are ignored.
        """
        if self.mode != "move":
            return False
        if revision is not None and revision != self.revision:
            logger.debug("Ignored canvas positions from revision %d (current %d)", revision, self.revision)
            return False
        moved = False
        for node in self.graph.nodes:
            if node["id"] not in positions:
                continue
            x, y = positions[node["id"]]
            if (node["x"], node["y"]) != (float(x), float(y)):
                self.graph.move_node(node["id"], x, y)
                moved = True
        if moved:
            self._commit("move nodes")
        return moved

    def delete_selected(self, confirm: ConfirmFn) -> bool:
        if self.selected_node_id is not None:
            node = self.graph.get_node(self.selected_node_id)
            if node is None:
                self.selected_node_id = None
                return False
            if not confirm(f'Delete variable "{node["label"]}"?'):
                return False
            self.graph.delete_node(node["id"])
            if self.pending_source == node["id"]:
                self._cancel_pending_link()
            self.selected_node_id = None
            self._commit("delete node")
            return True

        if self.selected_link_index is not None:
            if not confirm("Delete this link?"):
                return False
            deleted = self.graph.delete_link(self.selected_link_index)
            self.selected_link_index = None
            if deleted:
                self._commit("delete link")
            return deleted
        return False

    def apply_auto_layout(self) -> bool:
        if not any(node["type"] in ("latent", "observed") for node in self.graph.nodes):
            return False
        placed = auto_layout(self.graph.nodes, self.graph.links)
        self.graph.replace_all(placed, self.graph.links)
        self._commit("auto layout")
        return True

    def undo(self) -> bool:
        return self._restore(self.history.undo())

    def redo(self) -> bool:
        return self._restore(self.history.redo())

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # Whole-model operations

    def import_model(self, raw: Any, confirm: ConfirmFn) -> bool:
        nodes, links = parse_model_document(raw)
        if not confirm("Importing a file will replace your current canvas. Continue?"):
            return False
        self._reset_to(nodes, links)
        logger.info("Imported model with %d node(s) and %d link(s)", len(nodes), len(links))
        return True

    def new_model(self, confirm: ConfirmFn) -> bool:
        if not confirm("Start a new model? Unsaved changes will be lost."):
            return False
        self._reset_to([], [])
        return True

    def export_model(self) -> str:
        return dump_model_document(self.graph.nodes, self.graph.links)

    def to_mermaid(self, color_mode: str = "light") -> str:
        return graph_to_mermaid(self.graph.nodes, self.graph.links, color_mode)

    def to_lavaan(self) -> str:
        return graph_to_lavaan(self.graph.nodes, self.graph.links)

    def _reset_to(self, nodes: List[Dict[str, Any]], links: List[Dict[str, str]]) -> None:
        self.graph.replace_all(nodes, links)
        self.history.reset(self.graph.nodes, self.graph.links)
        self._cancel_pending_link()
        self.clear_selection()
        self.revision += 1
        self._save()

    def _restore(self, snapshot: Optional[Dict[str, Any]]) -> bool:
        if snapshot is None:
            return False
        self._restoring = True
        try:
            self.graph.replace_all(snapshot["nodes"], snapshot["links"])
            self.clear_selection()
            if self.pending_source is not None and not self.graph.has_node(self.pending_source):
                self._cancel_pending_link()
            self._commit("restore")
        finally:
            self._restoring = False
        return True

    def _commit(self, action: str) -> None:
        self.revision += 1
        if not self._restoring:
            self.history.push(self.graph.nodes, self.graph.links)
            logger.debug("Committed %s (history %d/%d)", action, *self.history.position())
        self._save()

    def _save(self) -> None:
        if self.store is None:
            return
        self.store.save("nodes", self.graph.nodes)
        self.store.save("links", self.graph.links)

    def _cancel_pending_link(self) -> None:
        self.pending_source = None

