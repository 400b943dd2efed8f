from src.drsem.sem_graph import build_default_model
from src.drsem.sem_mermaid import graph_to_mermaid, safe_identifier


def test_default_model_renders_latents_and_paths():
    model = build_default_model()
    code = graph_to_mermaid(model["nodes"], model["links"])
    lines = code.splitlines()

    assert lines[0] == "graph LR"
    assert any(line.startswith("classDef latent ") for line in lines)
    assert '1(("Leadership")):::latent' in lines
    assert "1 --> 3" in lines
    assert "2 --> 3" in lines


def test_observed_and_covariance_shapes():
    nodes = [
        {"id": "x1", "label": "Item 1", "type": "observed", "x": 0, "y": 0},
        {"id": "x2", "label": "Item 2", "type": "observed", "x": 0, "y": 0},
    ]
    links = [{"source": "x1", "target": "x2", "type": "covariance"}]

    code = graph_to_mermaid(nodes, links)

    assert 'x1["Item 1"]:::observed' in code
    assert "x1 <--> x2" in code


def test_dark_mode_uses_light_text():
    code = graph_to_mermaid([], [], "dark")
    assert "color:#fff" in code


def test_identifiers_are_sanitized_and_unique():
    nodes = [
        {"id": "a-b", "label": 'Say "hi"', "type": "latent", "x": 0, "y": 0},
        {"id": "a_b", "label": "Other", "type": "latent", "x": 0, "y": 0},
    ]
    links = [{"source": "a-b", "target": "a_b", "type": "directed"}]

    code = graph_to_mermaid(nodes, links)

    assert 'a_b(("Say #quot;hi#quot;")):::latent' in code
    assert 'a_b_2(("Other")):::latent' in code
    assert "a_b --> a_b_2" in code
    assert safe_identifier("") == "node"
