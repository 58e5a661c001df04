from __future__ import annotations

import pytest

from schema_testing.harness import PropertyStore, StatePath, as_path, flatten_data


def test_state_path_renders_and_extends() -> None:
    path = StatePath.of("mountedActions", 0, "data")
    assert str(path) == "mountedActions.0.data"
    assert str(path.child("name")) == "mountedActions.0.data.name"
    assert path.parent == StatePath.of("mountedActions", 0)
    assert path.last == "data"
    assert path.child("x").startswith(path)
    assert as_path("form.email") == StatePath.of("form", "email")
    assert as_path(path) is path


def test_flatten_data_prefixes_leaves() -> None:
    prefix = StatePath.of("mountedActions", 1, "data")
    flattened = flatten_data({"name": "Dan", "address": {"city": "Oslo", "zip": "0150"}, "tags": {}}, prefix)
    assert {str(key): value for key, value in flattened.items()} == {
        "mountedActions.1.data.name": "Dan",
        "mountedActions.1.data.address.city": "Oslo",
        "mountedActions.1.data.address.zip": "0150",
        "mountedActions.1.data.tags": {},
    }


def test_store_set_creates_intermediate_mappings() -> None:
    store = PropertyStore()
    store.set("form.address.city", "Oslo")
    assert store.get("form.address") == {"city": "Oslo"}
    assert store.has(StatePath.of("form", "address", "city"))
    assert store.get("form.missing", "fallback") == "fallback"


def test_store_walks_lists_by_index() -> None:
    store = PropertyStore({"mountedActions": [{"name": "edit", "data": {}}]})
    store.set(StatePath.of("mountedActions", 0, "data", "label"), "Work")
    store.set(StatePath.of("mountedActions", 1), {"name": "editNested"})
    assert store.get("mountedActions.0.data.label") == "Work"
    assert store.get("mountedActions.1.name") == "editNested"
    assert store.has("mountedActions.2") is False

    store.forget("mountedActions.1")
    assert len(store.get("mountedActions")) == 1


def test_store_keeps_dotted_segments_whole() -> None:
    store = PropertyStore()
    store.set(StatePath.of("data", "a.b"), 1)
    assert store.snapshot() == {"data": {"a.b": 1}}
    assert store.get("data.a.b") is None


def test_store_rejects_sparse_list_assignment() -> None:
    store = PropertyStore({"items": []})
    with pytest.raises(KeyError):
        store.set("items.3", "x")


def test_store_rejects_negative_list_indices() -> None:
    store = PropertyStore({"mountedActions": [{"name": "edit", "data": {}}]})
    with pytest.raises(KeyError):
        store.set("mountedActions.-1.data.label", "x")
    with pytest.raises(KeyError):
        store.set("mountedActions.-1", {})
    assert store.get("mountedActions.-1") is None
    assert store.has("mountedActions.-1.name") is False
    assert store.get("mountedActions") == [{"name": "edit", "data": {}}]
