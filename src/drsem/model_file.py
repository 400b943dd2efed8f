import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple, Union

from .sem_graph import LINK_KINDS, NODE_KINDS, SemGraph

logger = logging.getLogger(__name__)

MODEL_FILE_VERSION = "1.0"


class ModelFileError(ValueError):
    pass


def build_model_document(nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "version": MODEL_FILE_VERSION,
        "timestamp": _now_utc_iso(),
        "nodes": nodes,
        "links": links,
    }


def dump_model_document(nodes: List[Dict[str, Any]], links: List[Dict[str, Any]]) -> str:
    return json.dumps(build_model_document(nodes, links), ensure_ascii=False, indent=2)


def get_export_filename(now: datetime = None) -> str:
    stamp = now or datetime.now(tz=timezone.utc)
    return f"dr_sem_model_{int(stamp.timestamp() * 1000)}.json"


def parse_model_document(raw: Union[str, bytes]) -> Tuple[List[Dict[str, Any]], List[Dict[str, str]]]:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8-sig", errors="replace")
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Model file is not valid JSON: %s", exc)
        raise ModelFileError("Failed to parse file.") from exc

    if not isinstance(document, dict):
        raise ModelFileError("Invalid file format.")
    raw_nodes = document.get("nodes")
    raw_links = document.get("links")
    if not isinstance(raw_nodes, list) or not isinstance(raw_links, list):
        raise ModelFileError("Invalid file format.")

    return sanitize_model(raw_nodes, raw_links)


def sanitize_model(
    raw_nodes: List[Any], raw_links: List[Any]
) -> Tuple[List[Dict[str, Any]], List[Dict[str, str]]]:
    nodes: List[Dict[str, Any]] = []
    node_ids = set()
    for raw in raw_nodes:
        if not isinstance(raw, dict):
            continue
        node_id = str(raw.get("id", "")).strip()
        if not node_id or node_id in node_ids:
            continue
        kind = str(raw.get("type", "observed")).strip().lower()
        if kind not in NODE_KINDS:
            kind = "observed"
        node_ids.add(node_id)
        nodes.append(
            {
                "id": node_id,
                "label": str(raw.get("label", node_id)),
                "type": kind,
                "x": _to_float(raw.get("x")),
                "y": _to_float(raw.get("y")),
            }
        )

    # add_link rejects dangling, self and duplicate links
    graph = SemGraph(nodes, [])
    for raw in raw_links:
        if not isinstance(raw, dict):
            continue
        source = str(raw.get("source", "")).strip()
        target = str(raw.get("target", "")).strip()
        kind = str(raw.get("type", "directed") or "directed").strip().lower()
        if kind not in LINK_KINDS:
            kind = "directed"
        graph.add_link(source, target, kind)
    links = graph.links

    dropped = len(raw_links) - len(links)
    if dropped:
        logger.info("Dropped %d invalid link(s) during import", dropped)
    return nodes, links


def _to_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _now_utc_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat().replace("+00:00", "Z")
