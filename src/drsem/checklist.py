import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

SEM_SECTIONS: List[Dict[str, Any]] = [
    {
        "id": "phase1",
        "title": "Phase 1: Conceptualization",
        "items": [
            {"id": "1.1", "label": "Literature Review Completed", "description": "Theoretical framework is solidly based on existing literature."},
            {"id": "1.2", "label": "Hypotheses Defined", "description": "Directional relationships between Latent variables are clearly stated."},
            {"id": "1.3", "label": "Model Specification", "description": "Distinction between Exogenous and Endogenous variables is clear."},
        ],
    },
    {
        "id": "phase2",
        "title": "Phase 2: Data Preparation",
        "items": [
            {"id": "2.1", "label": "Instrument Validity (IOC)", "description": "Item-Objective Congruence checked by experts."},
            {"id": "2.2", "label": "Pilot Test Reliability", "description": "Cronbach's Alpha > 0.70 for all scales."},
            {"id": "2.3", "label": "Sample Size Sufficiency", "description": "N > 200 or 10-20x parameters (Kline, 2023)."},
            {"id": "2.4", "label": "Normality Check", "description": "Skewness/Kurtosis within range (+-3)."},
            {"id": "2.5", "label": "Outliers & Missing Data", "description": "Mahalanobis distance check and imputation handled."},
        ],
    },
    {
        "id": "phase3",
        "title": "Phase 3: Measurement Model (CFA)",
        "items": [
            {"id": "3.1", "label": "Factor Loadings > 0.50", "description": "Ideally > 0.70 for strong indicators."},
            {"id": "3.2", "label": "Model Fit Indices Acceptable", "description": "CFI/TLI > 0.90, RMSEA < 0.08, SRMR < 0.08."},
            {"id": "3.3", "label": "Convergent Validity (AVE/CR)", "description": "AVE > 0.50 and CR > 0.70."},
            {"id": "3.4", "label": "Discriminant Validity", "description": "Fornell-Larcker criterion or HTMT < 0.85."},
        ],
    },
    {
        "id": "phase4",
        "title": "Phase 4: Structural Model",
        "items": [
            {"id": "4.1", "label": "Structural Path Significance", "description": "P-values < 0.05 for hypothesized paths."},
            {"id": "4.2", "label": "R-Squared (R²)", "description": "Variance explained for endogenous variables reported."},
            {"id": "4.3", "label": "Mediation/Moderation Analysis", "description": "Indirect effects tested (if applicable)."},
        ],
    },
    {
        "id": "phase5",
        "title": "Phase 5: Reporting",
        "items": [
            {"id": "5.1", "label": "APA Style Tables", "description": "Format tables according to APA 7th edition."},
            {"id": "5.2", "label": "Discussion of Findings", "description": "Results tied back to literature and theory."},
            {"id": "5.3", "label": "Limitations & Suggestions", "description": "Acknowledged constraints and future research."},
        ],
    },
]

ITEM_IDS = [item["id"] for section in SEM_SECTIONS for item in section["items"]]


class SemChecklist:
    def __init__(self, store: Any = None, checked: Optional[Dict[str, bool]] = None) -> None:
        self.store = store
        if checked is None and store is not None:
            checked = store.load("checklist", {})
        self.checked: Dict[str, bool] = {}
        for item_id, value in (checked or {}).items():
            if item_id in ITEM_IDS:
                self.checked[item_id] = bool(value)
            else:
                logger.debug("Ignoring unknown checklist item %s", item_id)

    def is_checked(self, item_id: str) -> bool:
        return bool(self.checked.get(item_id))

    def toggle(self, item_id: str) -> bool:
        if item_id not in ITEM_IDS:
            raise KeyError(f"Unknown checklist item: {item_id}")
        self.checked[item_id] = not self.checked.get(item_id, False)
        self._save()
        return self.checked[item_id]

    def completed(self) -> int:
        return sum(1 for value in self.checked.values() if value)

    def progress(self) -> int:
        return round(self.completed() / len(ITEM_IDS) * 100)

    def section_progress(self, section_id: str) -> Dict[str, int]:
        for section in SEM_SECTIONS:
            if section["id"] == section_id:
                done = sum(1 for item in section["items"] if self.is_checked(item["id"]))
                return {"done": done, "total": len(section["items"])}
        raise KeyError(f"Unknown checklist section: {section_id}")

    def reset(self, confirm: Callable[[str], bool]) -> bool:
        if not confirm("Reset all progress?"):
            return False
        self.checked = {}
        self._save()
        return True

    def _save(self) -> None:
        if self.store is not None:
            self.store.save("checklist", self.checked)
