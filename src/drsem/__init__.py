from importlib import import_module
from typing import Any

__all__ = [
    "DiagramEditor",
    "SemGraph",
    "HistoryStack",
    "ChatSession",
    "GeminiJSONClient",
    "LocalStore",
    "analyze_fit",
    "compute_validity",
    "estimate_sample_size",
]

_EXPORTS = {
    "DiagramEditor": ".diagram_editor",
    "SemGraph": ".sem_graph",
    "HistoryStack": ".history",
    "ChatSession": ".chat_session",
    "GeminiJSONClient": ".llm_client",
    "LocalStore": ".local_store",
    "analyze_fit": ".fit_indices",
    "compute_validity": ".validity",
    "estimate_sample_size": ".sample_size",
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module = import_module(_EXPORTS[name], __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
