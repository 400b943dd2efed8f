import pytest

from src.drsem.validity import add_loading, compute_validity, remove_loading, update_loading


def test_validity_example_loadings():
    result = compute_validity([0.75, 0.80, 0.85])

    assert result["ave"] == pytest.approx(0.6417, abs=1e-4)
    assert result["cr"] == pytest.approx(5.76 / 6.835)
    assert result["cr"] == pytest.approx(0.8427, abs=1e-4)
    assert result["ave_pass"] is True
    assert result["cr_pass"] is True


def test_weak_loadings_fail_validity():
    result = compute_validity([0.5, 0.5, 0.5])
    assert result["ave"] == pytest.approx(0.25)
    assert result["ave_pass"] is False
    assert result["cr_pass"] is False


def test_validity_rejects_empty_or_out_of_range():
    with pytest.raises(ValueError):
        compute_validity([])
    with pytest.raises(ValueError):
        compute_validity([0.7, 1.2])


def test_loading_list_helpers():
    loadings = [0.7, 0.8]
    assert update_loading(loadings, 0, 0.9) == [0.9, 0.8]
    assert update_loading(loadings, 0, 1.5) == [0.7, 0.8]
    assert add_loading(loadings) == [0.7, 0.8, 0.7]
    assert remove_loading(loadings, 0) == [0.8]
    assert loadings == [0.7, 0.8]


def test_non_finite_loadings_are_rejected():
    with pytest.raises(ValueError):
        compute_validity([0.7, float("nan")])
    with pytest.raises(ValueError):
        compute_validity([float("inf")])
    assert update_loading([0.7], 0, float("nan")) == [0.7]
