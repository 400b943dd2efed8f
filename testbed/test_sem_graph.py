import random

import pytest

from src.drsem.sem_graph import SemGraph, build_default_model


def _abc_graph():
    nodes = [
        {"id": "A", "label": "A", "type": "latent", "x": 0.0, "y": 0.0},
        {"id": "B", "label": "B", "type": "latent", "x": 0.0, "y": 0.0},
        {"id": "C", "label": "C", "type": "latent", "x": 0.0, "y": 0.0},
    ]
    links = [
        {"source": "A", "target": "B", "type": "directed"},
        {"source": "B", "target": "C", "type": "directed"},
        {"source": "A", "target": "C", "type": "directed"},
    ]
    return SemGraph(nodes, links)


def test_delete_node_removes_only_incident_links():
    graph = _abc_graph()

    assert graph.delete_node("B") is True

    assert [node["id"] for node in graph.nodes] == ["A", "C"]
    assert graph.links == [{"source": "A", "target": "C", "type": "directed"}]


def test_delete_missing_node_is_noop():
    graph = _abc_graph()
    assert graph.delete_node("Z") is False
    assert len(graph.links) == 3


def test_add_node_places_near_origin_and_rejects_blank_label():
    graph = SemGraph(rng=random.Random(7))

    node = graph.add_node("  Trust ", "latent")

    assert node["label"] == "Trust"
    assert node["type"] == "latent"
    assert 100.0 <= node["x"] <= 150.0
    assert 100.0 <= node["y"] <= 150.0
    assert graph.add_node("   ", "observed") is None
    assert len(graph.nodes) == 1


def test_error_terms_get_sequential_default_labels():
    graph = SemGraph()
    first = graph.add_node("", "error")
    second = graph.add_node("", "error")
    assert (first["label"], second["label"]) == ("e1", "e2")
    assert first["id"] != second["id"]


def test_add_node_rejects_unknown_kind():
    with pytest.raises(ValueError):
        SemGraph().add_node("X", "moderator")


def test_add_link_rejects_self_missing_and_duplicates():
    graph = _abc_graph()

    assert graph.add_link("A", "A") is False
    assert graph.add_link("A", "Z") is False
    assert graph.add_link("A", "B") is False
    assert len(graph.links) == 3


def test_reverse_directed_link_is_allowed_but_reverse_covariance_is_not():
    graph = _abc_graph()

    assert graph.add_link("B", "A", "directed") is True
    assert graph.add_link("A", "B", "covariance") is True
    assert graph.add_link("B", "A", "covariance") is False
    assert graph.find_duplicate_link("B", "A", "covariance") == 4


def test_links_never_dangle_after_mixed_mutations():
    graph = SemGraph(rng=random.Random(1))
    ids = [graph.add_node(label, "observed")["id"] for label in ("x1", "x2", "x3", "x4")]
    graph.add_link(ids[0], ids[1])
    graph.add_link(ids[1], ids[2])
    graph.add_link(ids[2], ids[3], "covariance")
    graph.delete_node(ids[1])
    graph.add_link(ids[0], ids[3])
    graph.delete_link(0)
    graph.delete_node(ids[3])

    assert graph.dangling_links() == []


def test_replace_all_and_snapshot_copy_their_input():
    model = build_default_model()
    graph = SemGraph(model["nodes"], model["links"])

    model["nodes"][0]["label"] = "Changed"
    nodes, _ = graph.snapshot()
    nodes[1]["label"] = "Also changed"

    assert graph.nodes[0]["label"] == "Leadership"
    assert graph.nodes[1]["label"] == "Quality"


def test_move_node_and_delete_link_bounds():
    graph = _abc_graph()
    assert graph.move_node("A", 10, 20) is True
    assert graph.get_node("A")["x"] == 10.0
    assert graph.move_node("Z", 1, 1) is False
    assert graph.delete_link(5) is False
    assert graph.delete_link(-1) is False


def test_default_model_links_both_exogenous_factors_to_success():
    model = build_default_model()
    assert [node["label"] for node in model["nodes"]] == ["Leadership", "Quality", "Success"]
    assert {(link["source"], link["target"]) for link in model["links"]} == {("1", "3"), ("2", "3")}
