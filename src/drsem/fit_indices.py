from typing import Dict, List

FIT_TOOLTIPS = {
    "CFI": (
        "Comparative Fit Index (CFI): Values > 0.95 are excellent; 0.90-0.95 are acceptable. "
        "Values < 0.90 indicate poor fit. (Kline, 2023; Hair et al., 2022)."
    ),
    "TLI": (
        "Tucker-Lewis Index (TLI): Values > 0.95 are excellent; 0.90-0.95 are acceptable. "
        "Penalizes for model complexity. (Kline, 2023)."
    ),
    "RMSEA": (
        "Root Mean Square Error of Approximation (RMSEA): < 0.06 is good; 0.06-0.08 is acceptable; "
        "> 0.08 is poor. (Hair et al., 2022)."
    ),
    "SRMR": "Standardized Root Mean Square Residual (SRMR): Values < 0.08 indicate good fit. (Hu & Bentler, 1999; Kline, 2023).",
    "Chi-Square": (
        "Chi-Square Test of Model Fit: Should ideally be non-significant (p > .05), "
        "but is highly sensitive to large sample sizes (N > 200)."
    ),
    "df": (
        "Degrees of Freedom (df): Used to calculate the Normed Chi-Square (Chi-Square/df), "
        "which should ideally be < 3.0 or < 5.0."
    ),
}

DEFAULT_FIT_INPUTS = {
    "cfi": 0.85,
    "tli": 0.82,
    "rmsea": 0.09,
    "srmr": 0.09,
    "chisq": 120.5,
    "df": 60,
}

STATUS_COLORS = {"good": "#10b981", "acceptable": "#f59e0b", "poor": "#ef4444"}

NORMED_CHI_SQUARE_LIMIT = 3.0

FitResult = Dict[str, object]


def analyze_fit(
    cfi: float,
    tli: float,
    rmsea: float,
    srmr: float,
    chisq: float,
    df: float,
) -> List[FitResult]:
    """Grade fit indices against Kline (2023) and Hair et al. (2022) cut-offs.

    Returns one record per index plus the normed chi-square, in display order.
    """
    values = {"CFI": cfi, "TLI": tli, "RMSEA": rmsea, "SRMR": srmr, "Chi-Square": chisq}
    for name, value in values.items():
        if value is None or float(value) < 0:
            raise ValueError(f"{name} must be a non-negative number.")
    if df is None or float(df) <= 0:
        raise ValueError("df must be greater than zero.")

    results = [
        _incremental_result("CFI", float(cfi)),
        _incremental_result("TLI", float(tli)),
        _rmsea_result(float(rmsea)),
        _srmr_result(float(srmr)),
        _normed_chi_square_result(float(chisq), float(df)),
    ]
    return results


def overall_pass(results: List[FitResult]) -> bool:
    return bool(results) and all(result["pass"] for result in results)


def _incremental_result(name: str, value: float) -> FitResult:
    if value >= 0.95:
        status, message = "good", "Excellent fit (> 0.95)"
    elif value >= 0.90:
        status, message = "acceptable", "Acceptable (> 0.90)"
    else:
        status, message = "poor", "Poor fit (< 0.90)"
    return _result(name, value, status, message)


def _rmsea_result(value: float) -> FitResult:
    if value <= 0.06:
        status, message = "good", "Good fit (< 0.06)"
    elif value <= 0.08:
        status, message = "acceptable", "Acceptable (< 0.08)"
    else:
        status, message = "poor", "Poor fit (> 0.08)"
    return _result("RMSEA", value, status, message)


def _srmr_result(value: float) -> FitResult:
    if value <= 0.08:
        return _result("SRMR", value, "good", "Good fit (< 0.08)")
    return _result("SRMR", value, "poor", "Poor fit (> 0.08)")


def _normed_chi_square_result(chisq: float, df: float) -> FitResult:
    ratio = chisq / df
    if ratio < NORMED_CHI_SQUARE_LIMIT:
        result = _result("Chi-Square/df", ratio, "good", "Good (< 3)")
    else:
        result = _result("Chi-Square/df", ratio, "poor", "High (>= 3)")
    result["tooltip"] = FIT_TOOLTIPS["df"]
    return result


def _result(name: str, value: float, status: str, message: str) -> FitResult:
    return {
        "name": name,
        "value": value,
        "status": status,
        "pass": status != "poor",
        "message": message,
        "color": STATUS_COLORS[status],
        "tooltip": FIT_TOOLTIPS.get(name, ""),
    }
