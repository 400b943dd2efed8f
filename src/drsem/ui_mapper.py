from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .diagram_editor import NODE_SIZES
from .theme import ThemeStyle, get_theme_style

NodeData = Dict[str, Any]
LinkData = Dict[str, str]

LINK_ID_PREFIX = "link-"


def to_flow_node_specs(
    nodes_data: List[NodeData], theme: str = "light", highlight_id: Optional[str] = None
) -> List[Dict[str, Any]]:
    style = get_theme_style(theme)
    specs: List[Dict[str, Any]] = []
    for node in nodes_data:
        css = node_style(node.get("type", "observed"), style)
        if node["id"] == highlight_id:
            css["border"] = f"3px solid {style.accent}"
        specs.append(
            {
                "id": node["id"],
                "pos": (float(node.get("x", 0.0)), float(node.get("y", 0.0))),
                "data": {"content": node.get("label", "")},
                "node_type": "default",
                "source_position": "right",
                "target_position": "left",
                "draggable": True,
                "selectable": True,
                "style": css,
            }
        )
    return specs


def to_flow_edge_specs(links_data: List[LinkData], theme: str = "light") -> List[Dict[str, Any]]:
    style = get_theme_style(theme)
    specs: List[Dict[str, Any]] = []
    for index, link in enumerate(links_data):
        covariance = link.get("type", "directed") == "covariance"
        spec = {
            "id": f"{LINK_ID_PREFIX}{index}",
            "source": link["source"],
            "target": link["target"],
            "edge_type": "straight" if not covariance else "default",
            "animated": False,
            "selectable": True,
            "marker_end": {"type": "arrowclosed"},
            "style": {"stroke": style.link_color, "strokeWidth": 2},
        }
        if covariance:
            spec["marker_start"] = {"type": "arrowclosed"}
            spec["style"]["strokeDasharray"] = "5 5"
        specs.append(spec)
    return specs


def node_style(kind: str, style: ThemeStyle) -> Dict[str, Any]:
    width, height = NODE_SIZES.get(kind, NODE_SIZES["observed"])
    fills = {
        "latent": style.latent_fill,
        "observed": style.observed_fill,
        "error": style.error_fill,
    }
    css = {
        "width": width,
        "height": height,
        "background": fills.get(kind, style.observed_fill),
        "border": f"2px solid {style.node_border}",
        "color": style.text,
        "display": "flex",
        "alignItems": "center",
        "justifyContent": "center",
        "padding": 0,
        "fontSize": 12,
    }
    if kind in ("latent", "error"):
        css["borderRadius"] = "50%"
    else:
        css["borderRadius"] = 4
    return css


def _get_item_value(item: Any, key: str, default: Any = None) -> Any:
    if isinstance(item, Mapping):
        return item.get(key, default)
    return getattr(item, key, default)


def flow_positions(flow_nodes: Sequence[Any]) -> Dict[str, Tuple[float, float]]:
    positions: Dict[str, Tuple[float, float]] = {}
    for node in flow_nodes:
        node_id = str(_get_item_value(node, "id", "") or "")
        if not node_id:
            continue
        pos = _get_item_value(node, "pos", None)
        if pos is None:
            pos = _get_item_value(node, "position", None)
        if isinstance(pos, Mapping):
            positions[node_id] = (float(pos.get("x", 0.0)), float(pos.get("y", 0.0)))
        elif pos is not None and len(pos) >= 2:
            positions[node_id] = (float(pos[0]), float(pos[1]))
    return positions


def parse_link_id(element_id: Optional[str]) -> Optional[int]:
    """Map a canvas edge id back to its index in the link list."""
    if not element_id or not str(element_id).startswith(LINK_ID_PREFIX):
        return None
    suffix = str(element_id)[len(LINK_ID_PREFIX):]
    if not suffix.isdigit():
        return None
    return int(suffix)
