"""Pytest fixtures for metaforge-sync tests."""

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from metaforge_sync.connectors.metaforge import MetaForgeConnector
from metaforge_sync.store import SQLiteDocumentStore

BASE_URL = "https://metaforge.test/api/arc-raiders"


def make_client(routes: dict[str, Any], calls: list[str] | None = None) -> httpx.Client:
    """
    httpx client answering from a {path?query: payload} table.
    A payload that is an int is returned as that HTTP status with no body.
    Every requested URL is appended to calls.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        key = request.url.path
        if request.url.query:
            key += "?" + request.url.query.decode()
        if calls is not None:
            calls.append(key)
        if key not in routes:
            return httpx.Response(404, json={"error": "not found"})
        payload = routes[key]
        if isinstance(payload, int):
            return httpx.Response(payload)
        return httpx.Response(200, json=payload)

    return httpx.Client(transport=httpx.MockTransport(handler))


@pytest.fixture
def connector_factory() -> Callable[..., tuple[MetaForgeConnector, list[str]]]:
    """Build a connector over a fake API; returns (connector, requested URLs)."""

    def _factory(routes: dict[str, Any]) -> tuple[MetaForgeConnector, list[str]]:
        calls: list[str] = []
        return MetaForgeConnector(BASE_URL, client=make_client(routes, calls)), calls

    return _factory


@pytest.fixture
def store(tmp_path: Path) -> SQLiteDocumentStore:
    """SQLite document store in a temporary directory."""
    return SQLiteDocumentStore(tmp_path / "metaforge.db")


@pytest.fixture
def sample_item() -> dict[str, Any]:
    """MetaForge item with nested sources and aliases."""
    return {
        "id": "ferro-rifle",
        "name": "Ferro",
        "rarity": "Rare",
        "itemType": "Weapon",
        "slug": "ferro",
        "sources": {"maps": ["Dam", None, ""], "traders": "Celeste"},
        "dropsFrom": ["Wasp", "Hornet"],
    }


@pytest.fixture
def sample_quest() -> dict[str, Any]:
    """MetaForge quest using alias keys."""
    return {
        "questId": 42,
        "title": "Clearer Skies",
        "questline": "Shani",
        "summary": "Bring parts",
        "inputs": [
            {"itemId": "arc-alloy", "quantity": 3},
            {"slug": "wires"},
            {"quantity": 2},
        ],
        "outputs": [{"itemId": "coins", "quantity": 500}],
    }
