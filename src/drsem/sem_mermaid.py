import re
from typing import Any, Dict, List

NodeData = Dict[str, Any]
LinkData = Dict[str, str]

COLOR_MODES = ("light", "dark")

CLASS_STYLES: Dict[str, Dict[str, str]] = {
    "light": {
        "latent": "fill:#fff,stroke:#333,stroke-width:2px,rx:50,ry:50",
        "observed": "fill:#f0f9ff,stroke:#0891b2,stroke-width:1px,rx:0,ry:0",
        "error": "fill:#f1f5f9,stroke:#64748b,stroke-width:1px,rx:50,ry:50",
    },
    "dark": {
        "latent": "fill:#1e293b,stroke:#e2e8f0,stroke-width:2px,rx:50,ry:50,color:#fff",
        "observed": "fill:#0f172a,stroke:#06b6d4,stroke-width:1px,rx:0,ry:0,color:#fff",
        "error": "fill:#334155,stroke:#94a3b8,stroke-width:1px,rx:50,ry:50,color:#fff",
    },
}

NODE_SHAPES = {
    "latent": ("((", "))"),
    "error": ("((", "))"),
    "observed": ("[", "]"),
}

LINK_ARROWS = {
    "directed": "-->",
    "covariance": "<-->",
}


def graph_to_mermaid(
    nodes_data: List[NodeData], links_data: List[LinkData], color_mode: str = "light"
) -> str:
    palette = CLASS_STYLES.get(color_mode, CLASS_STYLES["light"])
    lines = ["graph LR"]
    for kind, style in palette.items():
        lines.append(f"classDef {kind} {style};")

    identifiers = _node_identifiers(nodes_data)
    for node in nodes_data:
        kind = node.get("type", "observed")
        opening, closing = NODE_SHAPES.get(kind, NODE_SHAPES["observed"])
        display = _display_label(node)
        lines.append(f"{identifiers[node['id']]}{opening}\"{display}\"{closing}:::{kind}")

    for link in links_data:
        source = identifiers.get(link["source"])
        target = identifiers.get(link["target"])
        if source is None or target is None:
            continue
        arrow = LINK_ARROWS.get(link.get("type", "directed"), LINK_ARROWS["directed"])
        lines.append(f"{source} {arrow} {target}")
    return "\n".join(lines) + "\n"


def safe_identifier(value: str) -> str:
    raw = re.sub(r"[^A-Za-z0-9]", "_", str(value or ""))
    return raw or "node"


def _node_identifiers(nodes_data: List[NodeData]) -> Dict[str, str]:
    identifiers: Dict[str, str] = {}
    used = set()
    for node in nodes_data:
        base = safe_identifier(node["id"])
        candidate = base
        suffix = 2
        while candidate in used:
            candidate = f"{base}_{suffix}"
            suffix += 1
        used.add(candidate)
        identifiers[node["id"]] = candidate
    return identifiers


def _display_label(node: NodeData) -> str:
    label = str(node.get("label", "") or node["id"])
    return label.replace('"', "#quot;")
