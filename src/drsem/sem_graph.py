import random
import time
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

NodeData = Dict[str, Any]
LinkData = Dict[str, str]

NODE_KINDS = ("latent", "observed", "error")
LINK_KINDS = ("directed", "covariance")

NEW_NODE_ORIGIN = 100.0
NEW_NODE_JITTER = 50.0


class SemGraph:
    """Canonical node/link collections of one structural model.

    Links never reference a missing node: deleting a node cascades to its links
    and ``add_link`` rejects unknown endpoints.
    """

    def __init__(
        self,
        nodes: Optional[List[NodeData]] = None,
        links: Optional[List[LinkData]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._id_counter = 0
        self.nodes: List[NodeData] = []
        self.links: List[LinkData] = []
        self.replace_all(nodes or [], links or [])

    def get_node(self, node_id: str) -> Optional[NodeData]:
        for node in self.nodes:
            if node["id"] == node_id:
                return node
        return None

    def has_node(self, node_id: str) -> bool:
        return self.get_node(node_id) is not None

    def add_node(self, label: str, kind: str) -> Optional[NodeData]:
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown node kind: {kind}")

        text = (label or "").strip()
        if kind == "error" and not text:
            existing_errors = sum(1 for node in self.nodes if node["type"] == "error")
            text = f"e{existing_errors + 1}"
        if not text:
            return None

        node = {
            "id": self._new_node_id(),
            "label": text,
            "type": kind,
            "x": NEW_NODE_ORIGIN + self._rng.random() * NEW_NODE_JITTER,
            "y": NEW_NODE_ORIGIN + self._rng.random() * NEW_NODE_JITTER,
        }
        self.nodes.append(node)
        return node

    def delete_node(self, node_id: str) -> bool:
        if not self.has_node(node_id):
            return False
        self.nodes = [node for node in self.nodes if node["id"] != node_id]
        self.links = [
            link for link in self.links if link["source"] != node_id and link["target"] != node_id
        ]
        return True

    def delete_link(self, index: int) -> bool:
        if index < 0 or index >= len(self.links):
            return False
        del self.links[index]
        return True

    def add_link(self, source_id: str, target_id: str, kind: str = "directed") -> bool:
        if kind not in LINK_KINDS:
            raise ValueError(f"Unknown link kind: {kind}")
        if source_id == target_id:
            return False
        if not self.has_node(source_id) or not self.has_node(target_id):
            return False
        if self.find_duplicate_link(source_id, target_id, kind) is not None:
            return False
        self.links.append({"source": source_id, "target": target_id, "type": kind})
        return True

    def find_duplicate_link(self, source_id: str, target_id: str, kind: str) -> Optional[int]:
        for index, link in enumerate(self.links):
            if link["source"] == source_id and link["target"] == target_id and link["type"] == kind:
                return index
            if (
                kind == "covariance"
                and link["type"] == "covariance"
                and {link["source"], link["target"]} == {source_id, target_id}
            ):
                return index
        return None

    def move_node(self, node_id: str, x: float, y: float) -> bool:
        node = self.get_node(node_id)
        if node is None:
            return False
        node["x"] = float(x)
        node["y"] = float(y)
        return True

    def replace_all(self, nodes: List[NodeData], links: List[LinkData]) -> None:
        self.nodes = deepcopy(list(nodes))
        self.links = deepcopy(list(links))

    def snapshot(self) -> Tuple[List[NodeData], List[LinkData]]:
        return deepcopy(self.nodes), deepcopy(self.links)

    def dangling_links(self) -> List[LinkData]:
        node_ids = {node["id"] for node in self.nodes}
        return [
            link
            for link in self.links
            if link["source"] not in node_ids or link["target"] not in node_ids
        ]

    def _new_node_id(self) -> str:
        existing = {node["id"] for node in self.nodes}
        while True:
            self._id_counter += 1
            candidate = f"n{int(time.time() * 1000)}_{self._id_counter}"
            if candidate not in existing:
                return candidate


def build_default_model() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "nodes": [
            {"id": "1", "label": "Leadership", "type": "latent", "x": 50.0, "y": 50.0},
            {"id": "2", "label": "Quality", "type": "latent", "x": 250.0, "y": 50.0},
            {"id": "3", "label": "Success", "type": "latent", "x": 150.0, "y": 200.0},
        ],
        "links": [
            {"source": "1", "target": "3", "type": "directed"},
            {"source": "2", "target": "3", "type": "directed"},
        ],
    }
