import re
from typing import Any, Dict, List

NodeData = Dict[str, Any]
LinkData = Dict[str, str]

EXAMPLE_SYNTAX = """# Example Jamovi SEM Syntax (SEMLj)
jmv::sem(
    data = data,
    model = '
        # Measurement Model
        Leadership =~ L1 + L2 + L3
        Quality    =~ Q1 + Q2 + Q3
        Success    =~ S1 + S2 + S3

        # Structural Model
        Success ~ Leadership + Quality
    ',
    estMethod = 'standard'
)"""

SNIPPETS = {
    "cfa_block": "\n# New CFA Block\nFactor1 =~ item1 + item2 + item3",
    "path": "\n# New Regression Path\nEndogenous ~ Exogenous1 + Exogenous2",
}


def graph_to_lavaan(nodes_data: List[NodeData], links_data: List[LinkData]) -> str:
    """Model syntax for the diagram: ``=~`` loadings, ``~`` paths, ``~~`` covariances.

    A directed link between a latent and an observed node is read as a loading
    whichever way it was drawn. Error terms carry no syntax of their own.
    """
    names = {node["id"]: variable_name(node.get("label", "") or node["id"]) for node in nodes_data}
    kinds = {node["id"]: node.get("type", "observed") for node in nodes_data}

    measurement: Dict[str, List[str]] = {}
    regressions: Dict[str, List[str]] = {}
    covariances: List[str] = []

    for link in links_data:
        source = link["source"]
        target = link["target"]
        if source not in names or target not in names:
            continue
        if kinds[source] == "error" or kinds[target] == "error":
            continue
        if link.get("type", "directed") == "covariance":
            covariances.append(f"{names[source]} ~~ {names[target]}")
            continue
        if kinds[source] == "latent" and kinds[target] == "observed":
            _append_unique(measurement.setdefault(names[source], []), names[target])
        elif kinds[source] == "observed" and kinds[target] == "latent":
            _append_unique(measurement.setdefault(names[target], []), names[source])
        else:
            _append_unique(regressions.setdefault(names[target], []), names[source])

    lines: List[str] = []
    if measurement:
        lines.append("# Measurement Model")
        width = max(len(name) for name in measurement)
        for latent, indicators in measurement.items():
            lines.append(f"{latent.ljust(width)} =~ {' + '.join(indicators)}")
    if regressions:
        if lines:
            lines.append("")
        lines.append("# Structural Model")
        for outcome, predictors in regressions.items():
            lines.append(f"{outcome} ~ {' + '.join(predictors)}")
    if covariances:
        if lines:
            lines.append("")
        lines.append("# Covariances")
        lines.extend(covariances)
    return "\n".join(lines)


def wrap_jmv_sem(model_syntax: str, data_name: str = "data") -> str:
    body = "\n".join(f"        {line}" if line else "" for line in model_syntax.splitlines())
    return (
        "jmv::sem(\n"
        f"    data = {data_name},\n"
        "    model = '\n"
        f"{body}\n"
        "    ',\n"
        "    estMethod = 'standard'\n"
        ")"
    )


def append_snippet(syntax: str, snippet_id: str) -> str:
    if snippet_id not in SNIPPETS:
        raise ValueError(f"Unknown snippet: {snippet_id}")
    return syntax + SNIPPETS[snippet_id]


def variable_name(label: str) -> str:
    raw = re.sub(r"[^A-Za-z0-9_.]+", "_", str(label or "").strip()).strip("_")
    if not raw:
        return "var"
    if not re.match(r"^[A-Za-z.]", raw):
        raw = "v_" + raw
    return raw


def _append_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)
