"""Tests for the key/value stores and persistence adapters."""

import json

from tracker.models import ChecklistItem, CustomerUpdate, FieldDefinition
from tracker.services.workspace import Workspace
from tracker.store import MemoryKeyValueStore, PersistedCollection, PersistedValue, SQLKeyValueStore


class TestSQLKeyValueStore:
    def test_set_get_overwrite_delete(self, store: SQLKeyValueStore):
        assert store.get("missing") is None

        store.set("greeting", "hello")
        store.set("greeting", "hello again")
        assert store.get("greeting") == "hello again"

        store.delete("greeting")
        assert store.get("greeting") is None
        store.delete("greeting")

    def test_keys(self, store: SQLKeyValueStore):
        store.set("b", "1")
        store.set("a", "2")
        assert store.keys() == ["a", "b"]


class TestMemoryKeyValueStore:
    def test_roundtrip(self):
        store = MemoryKeyValueStore({"x": "1"})
        store.set("y", "2")
        store.delete("x")
        assert store.keys() == ["y"]
        assert store.get("y") == "2"


class TestPersistedCollection:
    def test_missing_key_uses_and_persists_default(self):
        store = MemoryKeyValueStore()
        collection = PersistedCollection(
            store, "fields", FieldDefinition, lambda: [FieldDefinition(id="f1", name="name")]
        )

        assert [f.name for f in collection] == ["name"]
        assert json.loads(store.get("fields"))[0]["id"] == "f1"

    def test_every_change_rewrites_the_key(self):
        store = MemoryKeyValueStore()
        collection = PersistedCollection(store, "items", ChecklistItem)

        collection.append(ChecklistItem(id="a", text="one"))
        collection.append(ChecklistItem(id="b", text="two", completed=True))
        assert json.loads(store.get("items")) == [
            {"id": "a", "text": "one", "completed": False},
            {"id": "b", "text": "two", "completed": True},
        ]

        collection.replace(item for item in collection if item.id == "b")
        assert [item["id"] for item in json.loads(store.get("items"))] == ["b"]

    def test_items_is_a_snapshot(self):
        collection = PersistedCollection(MemoryKeyValueStore(), "items", ChecklistItem)
        snapshot = collection.items
        collection.append(ChecklistItem(text="later"))
        assert snapshot == ()
        assert len(collection) == 1

    def test_existing_key_is_loaded(self):
        store = MemoryKeyValueStore({"items": '[{"id": "z", "text": "saved", "completed": true}]'})
        collection = PersistedCollection(store, "items", ChecklistItem)
        assert collection.items == (ChecklistItem(id="z", text="saved", completed=True),)


class TestPersistedValue:
    def test_scalar_value(self):
        store = MemoryKeyValueStore()
        flag = PersistedValue(store, "showJoinId", bool, lambda: False)
        flag.set(True)

        assert store.get("showJoinId") == "true"
        assert PersistedValue(store, "showJoinId", bool, lambda: False).value is True


class TestRoundTrip:
    def test_reload_yields_identical_state(self, store, workspace: Workspace, make_customer):
        """Order, every attribute and nested checklist items survive a reload."""
        first = workspace.customers.create(
            make_customer(
                checklist=[ChecklistItem(text="Measure"), ChecklistItem(text="Quote", completed=True)],
                checklist_title="Site visit",
                amount="1200",
                priority="high",
            )
        )
        workspace.customers.create(make_customer("Ben", "ben@example.com", "2", paid=True))
        workspace.customers.update(first.id, CustomerUpdate(values={"note": "gate code 12", "floors": 3}))

        reloaded = Workspace(store)

        assert reloaded.customers.customers == workspace.customers.customers
        assert reloaded.fields.fields == workspace.fields.fields
        assert reloaded.templates.templates == workspace.templates.templates

    def test_stored_records_use_camel_case_keys(self, store, workspace: Workspace, make_customer):
        workspace.customers.create(make_customer(checklist_title="Visit"))

        record = json.loads(store.get("customers"))[0]

        assert {"id", "joinId", "createdAt", "entryDate", "dateAdded", "checklistTitle"} <= set(record)
        assert record["values"]["name"] == "Asha"
