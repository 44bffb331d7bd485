"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from caloriex.api.app import create_app
from tests.conftest import FakeClock

HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/health").status_code == 401
    assert (
        client.get("/admin/health", headers={"X-Admin-Token": "wrong"}).status_code
        == 401
    )
    assert client.get("/admin/health", headers=HEADERS).json() == {"status": "ok"}


def test_admin_cache_stats_and_clear(container) -> None:
    client = TestClient(create_app(container))
    client.get("/api/food-search", params={"action": "search", "query": "rice"})

    stats = client.get("/admin/cache", headers=HEADERS)
    cleared = client.delete("/admin/cache", headers=HEADERS)

    assert stats.json() == {"entries": 1}
    assert cleared.json() == {"cleared": 1}
    assert len(container.proxy_cache) == 0


def test_admin_cache_evicts_expired(container, clock: FakeClock) -> None:
    client = TestClient(create_app(container))
    client.get("/api/food-search", params={"action": "search", "query": "rice"})
    clock.advance(3601)

    response = client.post("/admin/cache/evict", headers=HEADERS)

    assert response.json() == {"evicted": 1}


def test_admin_deletes_single_cache_entry(container) -> None:
    client = TestClient(create_app(container))
    client.get("/api/food-search", params={"action": "search", "query": "rice"})

    deleted = client.delete("/admin/cache/search-rice", headers=HEADERS)
    missing = client.delete("/admin/cache/search-rice", headers=HEADERS)

    assert deleted.json() == {"deleted": "search-rice"}
    assert missing.status_code == 404
    assert len(container.proxy_cache) == 0
