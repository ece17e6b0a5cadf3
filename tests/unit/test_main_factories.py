"""Unit tests for the wiring in src/main.py.

Builds the real component graph with test settings; nothing here talks
to the network.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.config.loader import load_config
from src.main import _build_all, build_services, create_app
from src.models.playlist import Platform
from src.services.artist_search_service import ArtistSearchService
from src.services.playlist_service import PlaylistService
from src.services.setlist_service import SetlistService
from tests.conftest import make_settings


class TestBuildAll:
    @pytest.mark.asyncio
    async def test_components(self) -> None:
        components = _build_all(
            make_settings(setlistfm_api_key="k"),
            {"setlist": {"average_show_count": 12, "max_songs": 15}},
        )
        try:
            assert set(components) == {
                "http_client",
                "apple_token_signer",
                "artist_search",
                "setlist_service",
                "playlist_service",
                "provider_registry",
            }
            assert isinstance(components["artist_search"], ArtistSearchService)
            assert isinstance(components["setlist_service"], SetlistService)
            assert isinstance(components["playlist_service"], PlaylistService)
            assert components["setlist_service"]._average_show_count == 12
            assert components["setlist_service"]._max_songs == 15
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_provider_registry_reflects_configuration(self) -> None:
        components = _build_all(make_settings(setlistfm_api_key=""))
        try:
            registry = components["provider_registry"]
            assert registry["curated"] is True
            assert registry["musicbrainz"] is True
            assert registry["setlistfm"] is False
            assert registry["apple_music"] is False
            assert registry["setlist:setlistfm"] is False
            assert registry["apple_music_token"] is False
            assert registry["playlist:spotify"] is True
            assert registry["playlist:apple_music"] is False
            assert components["playlist_service"].available_platforms() == [Platform.SPOTIFY]
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_yaml_tunables_reach_components(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "search:\n  debounce_seconds: 0.5\n  min_query_length: 3\n"
            "cache:\n  search_ttl: 120\n  setlist_ttl: 900\n"
            "rate_limits:\n  musicbrainz: 2\n"
        )
        settings = make_settings()

        components = _build_all(settings, load_config(str(config_file), settings=settings))
        try:
            artist_search = components["artist_search"]
            assert artist_search._debounce_seconds == 0.5
            assert artist_search._min_query_length == 3
            assert artist_search._cache_ttl == 120
            assert components["setlist_service"]._cache_ttl == 900
            musicbrainz = components["setlist_service"]._artist_resolver
            assert musicbrainz._min_request_interval == 0.5
        finally:
            await components["http_client"].aclose()

    @pytest.mark.asyncio
    async def test_build_services_with_custom_settings(self) -> None:
        components = build_services(make_settings(setlistfm_api_key="k"))
        try:
            assert components["provider_registry"]["setlist:setlistfm"] is True
        finally:
            await components["http_client"].aclose()


class TestCreateApp:
    def test_index_and_health(self) -> None:
        with TestClient(create_app()) as client:
            index = client.get("/")
            health = client.get("/health")

        assert index.json()["service"] == "concert-recap"
        body = health.json()
        assert health.status_code == 200
        assert body["status"] == "ok"
        assert body["providers"]["curated"] is True
        assert "playlist:spotify" in body["providers"]

    def test_routes_registered(self) -> None:
        paths = {getattr(route, "path", None) for route in create_app().routes}

        assert {
            "/api/artist/search",
            "/api/artists/search",
            "/api/setlist/search",
            "/api/setlist/average",
            "/api/playlist/create",
            "/api/apple-music/playlist/create",
            "/api/apple-music/developer-token",
            "/api/apple-music/status",
            "/health",
        } <= paths
