import pytest

from src.drsem.local_store import LocalStore, MemoryStore


def test_local_store_round_trip(tmp_path):
    store = LocalStore(tmp_path / "data")
    store.save("theme", "dark")
    store.save("checklist", {"1.1": True})

    reopened = LocalStore(tmp_path / "data")

    assert reopened.load("theme") == "dark"
    assert reopened.load("checklist") == {"1.1": True}
    assert (tmp_path / "data" / "drsem_theme.json").exists()


def test_missing_slice_returns_copy_of_default(tmp_path):
    store = LocalStore(tmp_path)
    default = {"nodes": []}
    loaded = store.load("nodes", default)
    loaded["nodes"].append(1)
    assert default == {"nodes": []}


def test_unreadable_slice_falls_back_to_default(tmp_path):
    store = LocalStore(tmp_path)
    (tmp_path / "drsem_messages.json").write_text("{not json", encoding="utf-8")
    assert store.load("messages", []) == []


def test_unknown_slice_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        LocalStore(tmp_path).save("settings", {})
    with pytest.raises(ValueError):
        MemoryStore().load("settings")


def test_memory_store_isolates_saved_values():
    store = MemoryStore({"links": []})
    links = [{"source": "a", "target": "b", "type": "directed"}]
    store.save("links", links)
    links.clear()
    assert len(store.load("links")) == 1
