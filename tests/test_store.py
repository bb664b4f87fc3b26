"""Unit tests for SQLiteDocumentStore and merge semantics."""

import sqlite3
from unittest.mock import patch

import pytest

from metaforge_sync.errors import StoreWriteError
from metaforge_sync.store import SQLiteDocumentStore, merge_document


class TestMergeDocument:
    """Tests for merge_document."""

    def test_keeps_fields_not_in_update(self) -> None:
        assert merge_document({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_maps_merge(self) -> None:
        existing = {"sources": {"maps": ["Dam"], "traders": ["Celeste"]}}
        update = {"sources": {"maps": ["Spaceport"]}}
        assert merge_document(existing, update) == {
            "sources": {"maps": ["Spaceport"], "traders": ["Celeste"]}
        }

    def test_lists_replace(self) -> None:
        """Lists are overwritten, never appended."""
        assert merge_document({"drops": [1, 2]}, {"drops": [3]}) == {"drops": [3]}

    def test_does_not_mutate_inputs(self) -> None:
        existing = {"a": {"b": 1}}
        merge_document(existing, {"a": {"c": 2}})
        assert existing == {"a": {"b": 1}}


class TestSQLiteDocumentStore:
    """Tests for commit_batch and reads."""

    def test_commit_and_get(self, store: SQLiteDocumentStore) -> None:
        store.commit_batch("mfItems", [("x1", {"name": "Widget"}), ("x2", {"name": "Gear"})])
        assert store.get("mfItems", "x1") == {"name": "Widget"}
        assert store.count("mfItems") == 2
        assert store.get("mfItems", "missing") is None

    def test_collections_are_disjoint(self, store: SQLiteDocumentStore) -> None:
        """The same id in two collections are two documents."""
        store.commit_batch("mfItems", [("a", {"kind": "item"})])
        store.commit_batch("mfQuests", [("a", {"kind": "quest"})])
        assert store.get("mfItems", "a") == {"kind": "item"}
        assert store.get("mfQuests", "a") == {"kind": "quest"}

    def test_merge_upsert(self, store: SQLiteDocumentStore) -> None:
        """A later write merges into the stored document without removing fields."""
        store.commit_batch("mfItems", [("x1", {"name": "Widget", "favorite": True})])
        store.commit_batch("mfItems", [("x1", {"name": "Widget Mk2"})])
        assert store.get("mfItems", "x1") == {"name": "Widget Mk2", "favorite": True}

    def test_idempotent(self, store: SQLiteDocumentStore) -> None:
        docs = [("x1", {"name": "Widget", "sources": {"maps": ["Dam"]}})]
        store.commit_batch("mfItems", docs)
        first = store.list_documents("mfItems")
        store.commit_batch("mfItems", docs)
        assert store.list_documents("mfItems") == first

    def test_list_documents_ordered_by_id(self, store: SQLiteDocumentStore) -> None:
        store.commit_batch("mfMaps", [("b", {}), ("a", {})])
        assert [doc_id for doc_id, _ in store.list_documents("mfMaps")] == ["a", "b"]

    def test_failed_batch_rolls_back(self, store: SQLiteDocumentStore) -> None:
        """A serialization failure mid-batch leaves nothing from that batch."""
        store.commit_batch("mfItems", [("keep", {"v": 1})])
        with patch(
            "metaforge_sync.store.sqlite_store.merge_document",
            side_effect=sqlite3.OperationalError("disk I/O error"),
        ):
            with pytest.raises(StoreWriteError, match="disk I/O error"):
                store.commit_batch("mfItems", [("new", {"v": 2}), ("keep", {"v": 3})])
        assert store.get("mfItems", "new") is None
        assert store.get("mfItems", "keep") == {"v": 1}
