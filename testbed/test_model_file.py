import json
from datetime import datetime, timezone

import pytest

from src.drsem.model_file import (
    MODEL_FILE_VERSION,
    ModelFileError,
    dump_model_document,
    get_export_filename,
    parse_model_document,
)
from src.drsem.sem_graph import build_default_model


def test_dump_then_parse_keeps_graph():
    model = build_default_model()
    document = json.loads(dump_model_document(model["nodes"], model["links"]))

    assert document["version"] == MODEL_FILE_VERSION
    assert document["timestamp"].endswith("Z")

    nodes, links = parse_model_document(json.dumps(document).encode("utf-8"))
    assert nodes == model["nodes"]
    assert links == model["links"]


def test_missing_links_is_rejected():
    with pytest.raises(ModelFileError, match="Invalid file format."):
        parse_model_document(json.dumps({"nodes": []}))


def test_non_json_is_rejected():
    with pytest.raises(ModelFileError, match="Failed to parse file."):
        parse_model_document("nodes: []")


def test_invalid_entries_are_dropped_and_defaults_applied():
    raw = json.dumps(
        {
            "nodes": [
                {"id": "a", "label": "A", "type": "latent", "x": "12", "y": None},
                {"id": "a", "label": "Duplicate"},
                {"id": "b", "label": "B", "type": "weird"},
                "garbage",
            ],
            "links": [
                {"source": "a", "target": "b"},
                {"source": "a", "target": "missing"},
                {"source": "a", "target": "a"},
            ],
        }
    )

    nodes, links = parse_model_document(raw)

    assert nodes == [
        {"id": "a", "label": "A", "type": "latent", "x": 12.0, "y": 0.0},
        {"id": "b", "label": "B", "type": "observed", "x": 0.0, "y": 0.0},
    ]
    assert links == [{"source": "a", "target": "b", "type": "directed"}]


def test_export_filename_uses_epoch_millis():
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert get_export_filename(stamp) == "dr_sem_model_1704067200000.json"


def test_duplicate_links_are_dropped():
    raw = json.dumps(
        {
            "nodes": [
                {"id": "a", "label": "A", "type": "latent", "x": 0, "y": 0},
                {"id": "b", "label": "B", "type": "latent", "x": 0, "y": 0},
            ],
            "links": [
                {"source": "a", "target": "b", "type": "covariance"},
                {"source": "b", "target": "a", "type": "covariance"},
                {"source": "a", "target": "b", "type": "directed"},
                {"source": "a", "target": "b", "type": "directed"},
            ],
        }
    )
    _, links = parse_model_document(raw)

    assert links == [
        {"source": "a", "target": "b", "type": "covariance"},
        {"source": "a", "target": "b", "type": "directed"},
    ]


def test_non_finite_coordinates_fall_back_to_zero():
    raw = '{"nodes": [{"id": "a", "type": "latent", "x": NaN, "y": Infinity}], "links": []}'
    nodes, _ = parse_model_document(raw)
    assert (nodes[0]["x"], nodes[0]["y"]) == (0.0, 0.0)
