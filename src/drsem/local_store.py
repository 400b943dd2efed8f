import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

STORE_SLICES = ("messages", "nodes", "links", "theme", "checklist")


class LocalStore:
    """One JSON document per named slice, each read and written independently."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def load(self, slice_name: str, default: Any = None) -> Any:
        path = self._slice_path(slice_name)
        if not path.exists():
            return deepcopy(default)
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable %s slice at %s: %s", slice_name, path, exc)
            return deepcopy(default)

    def save(self, slice_name: str, value: Any) -> None:
        path = self._slice_path(slice_name)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(value, handle, ensure_ascii=False, indent=2)
        logger.debug("Saved %s slice", slice_name)

    def _slice_path(self, slice_name: str) -> Path:
        _check_slice(slice_name)
        return self.base_dir / f"drsem_{slice_name}.json"


class MemoryStore:
    def __init__(self, initial: Dict[str, Any] = None) -> None:
        self._data: Dict[str, Any] = {}
        for slice_name, value in (initial or {}).items():
            self.save(slice_name, value)

    def load(self, slice_name: str, default: Any = None) -> Any:
        _check_slice(slice_name)
        if slice_name not in self._data:
            return deepcopy(default)
        return deepcopy(self._data[slice_name])

    def save(self, slice_name: str, value: Any) -> None:
        _check_slice(slice_name)
        self._data[slice_name] = deepcopy(value)


def _check_slice(slice_name: str) -> None:
    if slice_name not in STORE_SLICES:
        raise ValueError(f"Unknown store slice: {slice_name}")
