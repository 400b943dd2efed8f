import pytest

from src.drsem.fit_indices import DEFAULT_FIT_INPUTS, analyze_fit, overall_pass


def _by_name(results):
    return {result["name"]: result for result in results}


def test_default_fit_inputs_are_mostly_poor():
    results = _by_name(analyze_fit(**DEFAULT_FIT_INPUTS))

    assert results["CFI"]["status"] == "poor"
    assert results["TLI"]["pass"] is False
    assert results["RMSEA"]["message"] == "Poor fit (> 0.08)"
    assert results["SRMR"]["status"] == "poor"
    assert results["Chi-Square/df"]["value"] == pytest.approx(120.5 / 60)
    assert results["Chi-Square/df"]["status"] == "good"
    assert overall_pass(list(results.values())) is False


def test_fit_thresholds_are_inclusive():
    results = _by_name(analyze_fit(cfi=0.95, tli=0.90, rmsea=0.06, srmr=0.08, chisq=30, df=10))

    assert results["CFI"]["status"] == "good"
    assert results["TLI"]["status"] == "acceptable"
    assert results["TLI"]["pass"] is True
    assert results["RMSEA"]["status"] == "good"
    assert results["SRMR"]["status"] == "good"
    assert results["Chi-Square/df"]["status"] == "poor"
    assert results["CFI"]["tooltip"].startswith("Comparative Fit Index")


def test_acceptable_rmsea_band():
    results = _by_name(analyze_fit(cfi=0.97, tli=0.96, rmsea=0.07, srmr=0.05, chisq=20, df=10))
    assert results["RMSEA"]["status"] == "acceptable"
    assert overall_pass(list(results.values())) is True


def test_fit_rejects_bad_numbers():
    with pytest.raises(ValueError):
        analyze_fit(cfi=0.9, tli=0.9, rmsea=0.05, srmr=0.05, chisq=10, df=0)
    with pytest.raises(ValueError):
        analyze_fit(cfi=-0.1, tli=0.9, rmsea=0.05, srmr=0.05, chisq=10, df=5)
