import math
from typing import Dict, Sequence

AVE_THRESHOLD = 0.50
CR_THRESHOLD = 0.70

DEFAULT_LOADINGS = [0.75, 0.80, 0.85]
RESET_LOADINGS = [0.70, 0.70, 0.70]
NEW_LOADING = 0.70


def validate_loadings(loadings: Sequence[float]) -> list:
    values = [float(value) for value in loadings]
    if not values:
        raise ValueError("At least one factor loading is required.")
    for value in values:
        if not math.isfinite(value) or value < 0 or value > 1:
            raise ValueError(f"Factor loading {value} is outside the range 0-1.")
    return values


def compute_validity(loadings: Sequence[float]) -> Dict[str, object]:
    """AVE = mean of squared loadings; CR = (sum)^2 / ((sum)^2 + sum of error variances)."""
    values = validate_loadings(loadings)
    squared = [value * value for value in values]
    ave = sum(squared) / len(values)
    total = sum(values)
    error_variance = sum(1 - value for value in squared)
    denominator = total * total + error_variance
    cr = (total * total) / denominator if denominator else 0.0
    return {
        "ave": ave,
        "cr": cr,
        "ave_pass": ave >= AVE_THRESHOLD,
        "cr_pass": cr >= CR_THRESHOLD,
        "count": len(values),
    }


def update_loading(loadings: Sequence[float], index: int, value: float) -> list:
    """Return a copy with one loading replaced; out-of-range values leave the list unchanged."""
    updated = list(loadings)
    if math.isfinite(float(value)) and 0 <= float(value) <= 1 and 0 <= index < len(updated):
        updated[index] = float(value)
    return updated


def add_loading(loadings: Sequence[float]) -> list:
    return list(loadings) + [NEW_LOADING]


def remove_loading(loadings: Sequence[float], index: int) -> list:
    return [value for position, value in enumerate(loadings) if position != index]
