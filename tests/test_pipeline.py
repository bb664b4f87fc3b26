"""Tests for the sync orchestrator."""

import logging

import pytest

from metaforge_sync.config import SyncSettings
from metaforge_sync.errors import MissingIdentifierError, SourceRequestError, SyncFailedError
from metaforge_sync.kinds import default_kinds
from metaforge_sync.pipeline import KindState, RunStatus, run_sync
from metaforge_sync.store import BatchUpsertWriter, SQLiteDocumentStore

API = "/api/arc-raiders"
MAP_URL = "https://metaforge.test/api/game-map-data"


@pytest.fixture
def kinds():
    return default_kinds(SyncSettings(game_map_url=MAP_URL))


@pytest.fixture
def routes() -> dict:
    """A healthy API with one record per kind."""
    return {
        f"{API}/items?page=1": {"items": [{"id": "x1", "name": "Widget"}]},
        f"{API}/quests?page=1": {"data": {"quests": [{"id": "q1", "requiredItems": [{"itemId": "x1"}]}]}},
        f"{API}/arcs?page=1": [{"id": "wasp"}],
        f"{API}/traders?page=1": {"traders": [{"id": "celeste", "location": "Speranza"}]},
        "/api/game-map-data?page=1": {"maps": [{"id": "dam"}]},
    }


class TestRunSync:
    """Tests for run_sync."""

    def test_all_kinds_complete(self, connector_factory, store: SQLiteDocumentStore, kinds, routes) -> None:
        connector, calls = connector_factory(routes)
        report = run_sync(kinds, connector=connector, writer=BatchUpsertWriter(store))

        assert report.status == RunStatus.COMPLETED
        assert [r.kind for r in report.results] == ["items", "quests", "arcs", "traders", "maps"]
        assert all(r.state == KindState.DONE for r in report.results)
        assert all(r.fetched == 1 and r.written == 1 for r in report.results)
        assert store.get("mfItems", "x1")["name"] == "Widget"
        assert store.get("mfQuests", "q1")["requiredItems"] == [{"itemId": "x1", "quantity": 1}]
        assert store.get("mfTraders", "celeste")["locationMap"] == "Speranza"
        assert store.get("mfMaps", "dam")["slug"] == "dam"
        assert report.finished_at is not None

    def test_optional_kind_failure_is_isolated(
        self,
        connector_factory,
        store: SQLiteDocumentStore,
        kinds,
        routes,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Trader transport error: run completes, items/quests written, no traders, warning logged."""
        routes[f"{API}/traders?page=1"] = 503
        connector, _ = connector_factory(routes)

        with caplog.at_level(logging.WARNING):
            report = run_sync(kinds, connector=connector, writer=BatchUpsertWriter(store))

        assert report.status == RunStatus.COMPLETED
        assert report.failed_kinds == ["traders"]
        traders = report.result("traders")
        assert traders.failed_during == KindState.FETCHING
        assert "SourceRequestError" in traders.error
        assert store.count("mfItems") == 1
        assert store.count("mfQuests") == 1
        assert store.count("mfTraders") == 0
        # later optional kinds still run
        assert store.count("mfMaps") == 1
        assert any(
            r.levelno == logging.WARNING and "traders" in r.getMessage() for r in caplog.records
        )

    def test_required_kind_failure_aborts(self, connector_factory, store: SQLiteDocumentStore, kinds, routes) -> None:
        """A quest fetch error aborts before any optional kind runs."""
        routes[f"{API}/quests?page=1"] = 500
        connector, calls = connector_factory(routes)

        with pytest.raises(SyncFailedError) as exc:
            run_sync(kinds, connector=connector, writer=BatchUpsertWriter(store))

        assert exc.value.kind == "quests"
        assert isinstance(exc.value.__cause__, SourceRequestError)
        report = exc.value.report
        assert report.status == RunStatus.FAILED
        assert [r.kind for r in report.results] == ["items", "quests"]
        assert store.count("mfItems") == 1
        assert store.count("mfArcs") == 0
        assert not any("/arcs" in c for c in calls)

    def test_missing_identifier_in_required_kind(self, connector_factory, store: SQLiteDocumentStore, kinds, routes) -> None:
        """One id-less item poisons the items batch: nothing written, run fails."""
        routes[f"{API}/items?page=1"] = {"items": [{"id": "ok"}, {"name": "no id"}]}
        connector, _ = connector_factory(routes)

        with pytest.raises(SyncFailedError) as exc:
            run_sync(kinds, connector=connector, writer=BatchUpsertWriter(store))

        assert isinstance(exc.value.__cause__, MissingIdentifierError)
        assert exc.value.report.result("items").failed_during == KindState.MAPPING
        assert store.count("mfItems") == 0

    def test_optional_mapping_failure(self, connector_factory, store: SQLiteDocumentStore, kinds, routes) -> None:
        routes[f"{API}/arcs?page=1"] = [{"description": "anonymous"}]
        connector, _ = connector_factory(routes)
        report = run_sync(kinds, connector=connector, writer=BatchUpsertWriter(store))
        assert report.failed_kinds == ["arcs"]
        assert report.result("arcs").failed_during == KindState.MAPPING

    def test_rerun_is_idempotent(self, connector_factory, store: SQLiteDocumentStore, kinds, routes) -> None:
        connector, _ = connector_factory(routes)
        writer = BatchUpsertWriter(store)
        run_sync(kinds, connector=connector, writer=writer)
        before = {c: store.list_documents(c) for c in ("mfItems", "mfQuests", "mfArcs")}
        run_sync(kinds, connector=connector, writer=writer)
        assert {c: store.list_documents(c) for c in before} == before
