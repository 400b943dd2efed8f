from types import SimpleNamespace

from src.drsem.theme import THEME_STYLES
from src.drsem.ui_mapper import (
    flow_positions,
    parse_link_id,
    to_flow_edge_specs,
    to_flow_node_specs,
)


def test_node_specs_carry_position_label_and_shape():
    nodes = [
        {"id": "F", "label": "Factor", "type": "latent", "x": 10, "y": 20},
        {"id": "x1", "label": "Item", "type": "observed", "x": 0, "y": 0},
    ]
    specs = to_flow_node_specs(nodes, theme="dark")

    assert specs[0]["id"] == "F"
    assert specs[0]["pos"] == (10.0, 20.0)
    assert specs[0]["data"]["content"] == "Factor"
    assert specs[0]["style"]["borderRadius"] == "50%"
    assert specs[0]["style"]["background"] == THEME_STYLES["dark"].latent_fill
    assert specs[1]["style"]["width"] == 120
    assert specs[1]["style"]["borderRadius"] == 4


def test_edge_specs_use_link_index_ids_and_markers():
    links = [
        {"source": "a", "target": "b", "type": "directed"},
        {"source": "b", "target": "c", "type": "covariance"},
    ]
    specs = to_flow_edge_specs(links)

    assert [spec["id"] for spec in specs] == ["link-0", "link-1"]
    assert specs[0]["marker_end"] == {"type": "arrowclosed"}
    assert "marker_start" not in specs[0]
    assert specs[1]["marker_start"] == {"type": "arrowclosed"}


def test_flow_positions_accepts_objects_and_dicts():
    flow_nodes = [
        SimpleNamespace(id="a", pos=(1.5, 2.5)),
        {"id": "b", "position": {"x": 3, "y": 4}},
        {"id": "", "pos": (9, 9)},
    ]
    assert flow_positions(flow_nodes) == {"a": (1.5, 2.5), "b": (3.0, 4.0)}


def test_parse_link_id():
    assert parse_link_id("link-3") == 3
    assert parse_link_id("n1") is None
    assert parse_link_id("link-x") is None
    assert parse_link_id(None) is None


def test_pending_link_source_is_highlighted():
    nodes = [
        {"id": "F", "label": "Factor", "type": "latent", "x": 0, "y": 0},
        {"id": "G", "label": "Other", "type": "latent", "x": 0, "y": 0},
    ]
    specs = to_flow_node_specs(nodes, theme="light", highlight_id="F")

    assert specs[0]["style"]["border"] == f"3px solid {THEME_STYLES['light'].accent}"
    assert specs[1]["style"]["border"] == f"2px solid {THEME_STYLES['light'].node_border}"
