import math
from typing import Dict, Optional

KLINE_MINIMUM = 200
DEFAULT_ERROR_MARGIN = 0.05


def yamane(population: int, error_margin: float = DEFAULT_ERROR_MARGIN) -> int:
    if population <= 0:
        raise ValueError("Population must be greater than zero.")
    if not 0 < error_margin < 1:
        raise ValueError("Error margin must be between 0 and 1.")
    return math.ceil(population / (1 + population * error_margin * error_margin))


def estimate_sample_size(
    observed_vars: int,
    latent_vars: int,
    population: Optional[int] = None,
    error_margin: float = DEFAULT_ERROR_MARGIN,
) -> Dict[str, Optional[int]]:
    """Rules of thumb: 10-20 cases per observed variable (Schumacker & Lomax, 2016),
    an absolute floor of 200 (Kline, 2023) and Yamane's formula when N is known."""
    if observed_vars < 0 or latent_vars < 0:
        raise ValueError("Variable counts must not be negative.")
    rule_10x = int(observed_vars) * 10
    rule_20x = int(observed_vars) * 20
    return {
        "observed_vars": int(observed_vars),
        "latent_vars": int(latent_vars),
        "rule_10x": rule_10x,
        "rule_20x": rule_20x,
        "kline_minimum": KLINE_MINIMUM,
        "recommended": max(rule_10x, KLINE_MINIMUM),
        "yamane": yamane(int(population), error_margin) if population else None,
    }


def parse_population(raw: str) -> Optional[int]:
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value > 0 else None
