from copy import deepcopy
from typing import Any, Dict, List, Tuple

import networkx as nx

NodeData = Dict[str, Any]
LinkData = Dict[str, str]
PositionMap = Dict[str, Tuple[float, float]]

CANVAS_PADDING = 100.0
LAYER_GAP = 350.0
LATENT_GAP = 180.0
INDICATOR_GAP = 100.0
INDICATOR_DROP = 120.0
ERROR_OFFSET = 50.0


def auto_layout(nodes_data: List[NodeData], links_data: List[LinkData]) -> List[NodeData]:
    """Return a re-placed copy of ``nodes_data``; links are only read."""
    positions = calculate_sem_positions(nodes_data, links_data)
    placed = deepcopy(nodes_data)
    for node in placed:
        if node["id"] in positions:
            node["x"], node["y"] = positions[node["id"]]
    return placed


def calculate_sem_positions(nodes_data: List[NodeData], links_data: List[LinkData]) -> PositionMap:
    kinds = {node["id"]: node.get("type", "observed") for node in nodes_data}
    latent_ids = [node["id"] for node in nodes_data if kinds[node["id"]] == "latent"]
    observed_ids = {node["id"] for node in nodes_data if kinds[node["id"]] == "observed"}

    positions: PositionMap = {
        node["id"]: (float(node.get("x", 0.0)), float(node.get("y", 0.0))) for node in nodes_data
    }
    if not latent_ids and not observed_ids:
        return positions

    exogenous, endogenous = split_latent_roles(nodes_data, links_data)
    positions.update(_place_latent_columns(exogenous, endogenous))

    indicator_graph = _build_indicator_graph(nodes_data, links_data)
    for latent_id in latent_ids:
        indicators = _connected_indicators(indicator_graph, latent_id, observed_ids)
        positions.update(_place_indicators(indicators, positions[latent_id]))

    positions.update(_place_error_terms(nodes_data, links_data, positions))
    return positions


def split_latent_roles(
    nodes_data: List[NodeData], links_data: List[LinkData]
) -> Tuple[List[str], List[str]]:
    latent_ids = [node["id"] for node in nodes_data if node.get("type") == "latent"]
    structural = nx.DiGraph()
    structural.add_nodes_from(latent_ids)
    for link in links_data:
        if link.get("type", "directed") != "directed":
            continue
        source = link["source"]
        target = link["target"]
        if source in structural and target in structural and source != target:
            structural.add_edge(source, target)

    exogenous = [node_id for node_id in latent_ids if structural.in_degree(node_id) == 0]
    endogenous = [node_id for node_id in latent_ids if structural.in_degree(node_id) > 0]
    return exogenous, endogenous


def _place_latent_columns(exogenous: List[str], endogenous: List[str]) -> PositionMap:
    positions: PositionMap = {}

    current_y = CANVAS_PADDING
    for node_id in exogenous:
        positions[node_id] = (CANVAS_PADDING, current_y)
        current_y += LATENT_GAP

    endo_start_y = CANVAS_PADDING
    if len(endogenous) < len(exogenous):
        # Center the shorter endogenous column against the exogenous one.
        endo_start_y += (len(exogenous) - len(endogenous)) * LATENT_GAP / 2.0

    for index, node_id in enumerate(endogenous):
        positions[node_id] = (CANVAS_PADDING + LAYER_GAP, endo_start_y + index * LATENT_GAP)
    return positions


def _build_indicator_graph(nodes_data: List[NodeData], links_data: List[LinkData]) -> nx.MultiGraph:
    graph = nx.MultiGraph()
    graph.add_nodes_from(node["id"] for node in nodes_data)
    for link in links_data:
        if link["source"] in graph and link["target"] in graph:
            graph.add_edge(link["source"], link["target"])
    return graph


def _connected_indicators(graph: nx.MultiGraph, latent_id: str, observed_ids: set) -> List[str]:
    indicators: List[str] = []
    # Edge order keeps the indicators in the order they were linked.
    for _, neighbor in graph.edges(latent_id):
        if neighbor in observed_ids and neighbor not in indicators:
            indicators.append(neighbor)
    return indicators


def _place_indicators(indicators: List[str], anchor: Tuple[float, float]) -> PositionMap:
    if not indicators:
        return {}
    anchor_x, anchor_y = anchor
    total_width = (len(indicators) - 1) * INDICATOR_GAP
    start_x = anchor_x - total_width / 2.0
    return {
        node_id: (start_x + index * INDICATOR_GAP, anchor_y + INDICATOR_DROP)
        for index, node_id in enumerate(indicators)
    }


def _place_error_terms(
    nodes_data: List[NodeData], links_data: List[LinkData], positions: PositionMap
) -> PositionMap:
    placed: PositionMap = {}
    for node in nodes_data:
        if node.get("type") != "error":
            continue
        target_id = next(
            (link["target"] for link in links_data if link["source"] == node["id"]),
            None,
        )
        if target_id is None or target_id not in positions:
            continue
        target_x, target_y = positions[target_id]
        placed[node["id"]] = (target_x - ERROR_OFFSET, target_y)
    return placed
