"""End-to-end tests through create_app() with a real diskcache store.

The lifespan wires the store, repositories and use cases; requests then go
through the HTTP surface only.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from embedarr.domain.entities import RecordStoreError
from embedarr.infrastructure.config import AdminConfig, AppConfig, StoreConfig
from embedarr.interfaces.app import create_app

pytestmark = pytest.mark.integration

_ADMIN = {"X-Forwarded-Email": "admin@example.com"}
_USER = {"X-Forwarded-Email": "viewer@example.com"}


def _config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        environment="test",
        store=StoreConfig(dir=str(tmp_path / "store")),
        admin=AdminConfig(emails=["admin@example.com"]),
    )


@pytest.fixture()
def client(tmp_path: Path) -> TestClient:
    with TestClient(create_app(_config(tmp_path))) as c:
        yield c


class TestServerLifecycle:
    def test_healthz_counts_builtins(self, client: TestClient) -> None:
        resp = client.get("/api/v1/healthz")
        assert resp.json() == {"status": "ok", "servers": 2}

    def test_create_then_play(self, client: TestClient) -> None:
        created = client.post(
            "/api/v1/servers",
            json={
                "name": "Jupiter",
                "movie_url_template": "https://player.example.com/movie/{imdbId}",
                "tv_url_template": (
                    "https://player.example.com/tv/{imdbId}/{season}/{episode}"
                ),
            },
            headers=_ADMIN,
        )
        assert created.status_code == 201
        server_id = created.json()["id"]

        resp = client.get(
            f"/api/v1/play/series/tt0944947/{server_id}?season=3&episode=9"
        )
        assert resp.json()["url"] == "https://player.example.com/tv/tt0944947/3/9"

        listing = client.get("/api/v1/play/movie/tt11389872").json()
        assert [s["server_name"] for s in listing["sources"]] == [
            "Mercury",
            "Venus",
            "Jupiter",
        ]

        resp = client.delete(f"/api/v1/servers/{server_id}", headers=_ADMIN)
        assert resp.status_code == 204
        assert client.get("/api/v1/healthz").json()["servers"] == 2

    def test_servers_survive_restart(self, tmp_path: Path) -> None:
        body = {
            "name": "Saturn",
            "movie_url_template": "https://s.example.com/{imdbId}",
            "tv_url_template": "https://s.example.com/{imdbId}/{season}/{episode}",
        }
        with TestClient(create_app(_config(tmp_path))) as first:
            resp = first.post("/api/v1/servers", json=body, headers=_ADMIN)
            assert resp.status_code == 201

        with TestClient(create_app(_config(tmp_path))) as second:
            names = [s["name"] for s in second.get("/api/v1/servers").json()["servers"]]
        assert names[-1] == "Saturn"

    def test_store_outage_is_503(self, client: TestClient) -> None:
        broken = AsyncMock()
        broken.get = AsyncMock(side_effect=RecordStoreError("reading failed"))
        client.app.state.server_repo.store = broken

        resp = client.post(
            "/api/v1/servers",
            json={
                "name": "Neptune",
                "movie_url_template": "https://n.example.com/{imdbId}",
                "tv_url_template": "https://n.example.com/{imdbId}/{season}/{episode}",
            },
            headers=_ADMIN,
        )

        assert resp.status_code == 503
        assert resp.json()["error"]["kind"] == "store_unavailable"
        broken.set.assert_not_awaited()


class TestUserFeatures:
    def test_wishlist_round(self, client: TestClient) -> None:
        item = {"content_id": "tt0111161", "content_type": "movie", "title": "Shawshank"}

        assert client.post("/api/v1/wishlist", json=item, headers=_USER).is_success
        again = client.post("/api/v1/wishlist", json=item, headers=_USER)
        assert again.status_code == 409
        assert client.get("/api/v1/wishlist", headers=_ADMIN).json() == {"items": []}

        resp = client.delete("/api/v1/wishlist/tt0111161", headers=_USER)
        assert resp.status_code == 204
        assert client.get("/api/v1/wishlist", headers=_USER).json() == {"items": []}

    def test_changelog_newest_first(self, client: TestClient) -> None:
        for version in ("1.0.0", "1.1.0"):
            resp = client.post(
                "/api/v1/changelog",
                json={
                    "version": version,
                    "title": "Release",
                    "description": "Notes",
                    "changes": ["Something"],
                },
                headers=_ADMIN,
            )
            assert resp.status_code == 201

        entries = client.get("/api/v1/changelog").json()["entries"]
        assert [e["version"] for e in entries] == ["1.1.0", "1.0.0"]

    def test_catalog_without_tmdb_key(self, client: TestClient) -> None:
        assert client.get("/api/v1/catalog/trending/movie").json() == {"items": []}
