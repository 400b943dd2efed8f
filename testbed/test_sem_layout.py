from copy import deepcopy

from src.drsem.sem_layout import auto_layout, calculate_sem_positions, split_latent_roles


def _node(node_id, kind, x=0.0, y=0.0):
    return {"id": node_id, "label": node_id, "type": kind, "x": x, "y": y}


def test_exogenous_latent_is_left_of_endogenous_and_links_untouched():
    nodes = [_node("endo", "latent", 10, 10), _node("exo", "latent", 500, 500)]
    links = [{"source": "exo", "target": "endo", "type": "directed"}]
    original_links = deepcopy(links)

    placed = {node["id"]: node for node in auto_layout(nodes, links)}

    assert placed["exo"]["x"] < placed["endo"]["x"]
    assert links == original_links


def test_auto_layout_returns_copy():
    nodes = [_node("a", "latent", 7, 7)]
    auto_layout(nodes, [])
    assert nodes[0]["x"] == 7


def test_split_latent_roles_ignores_covariances_and_indicators():
    nodes = [_node("F1", "latent"), _node("F2", "latent"), _node("x1", "observed")]
    links = [
        {"source": "F1", "target": "F2", "type": "covariance"},
        {"source": "x1", "target": "F1", "type": "directed"},
    ]
    exogenous, endogenous = split_latent_roles(nodes, links)
    assert exogenous == ["F1", "F2"]
    assert endogenous == []


def test_shorter_endogenous_column_is_centered():
    nodes = [_node(name, "latent") for name in ("A", "B", "C", "D")]
    links = [{"source": name, "target": "D", "type": "directed"} for name in ("A", "B", "C")]

    positions = calculate_sem_positions(nodes, links)

    assert positions["A"] == (100.0, 100.0)
    assert positions["B"] == (100.0, 280.0)
    assert positions["C"] == (100.0, 460.0)
    assert positions["D"] == (450.0, 280.0)


def test_indicators_spread_below_latent_and_error_sits_left_of_target():
    nodes = [
        _node("F", "latent"),
        _node("x1", "observed"),
        _node("x2", "observed"),
        _node("e1", "error"),
    ]
    links = [
        {"source": "F", "target": "x1", "type": "directed"},
        {"source": "x2", "target": "F", "type": "directed"},
        {"source": "e1", "target": "x1", "type": "directed"},
    ]

    positions = calculate_sem_positions(nodes, links)

    assert positions["F"] == (100.0, 100.0)
    assert positions["x1"] == (50.0, 220.0)
    assert positions["x2"] == (150.0, 220.0)
    assert positions["e1"] == (0.0, 220.0)


def test_graph_without_latent_or_observed_keeps_positions():
    nodes = [_node("e1", "error", 33, 44)]
    assert calculate_sem_positions(nodes, []) == {"e1": (33.0, 44.0)}
