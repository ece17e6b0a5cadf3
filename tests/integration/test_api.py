"""Integration tests for FastAPI API endpoints using TestClient."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.routing import BaseRoute, Match

from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from src.api.routes import router as api_router
from src.interfaces.artist_search_provider import IArtistSearchProvider
from src.interfaces.playlist_provider import IPlaylistProvider
from src.interfaces.setlist_provider import ISetlistProvider
from src.models.artist import ArtistRecord, ArtistSource
from src.models.playlist import CreatedPlaylist, Platform
from src.models.setlist import Setlist
from src.providers.artist_search.curated_provider import CuratedArtistProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.artist_search_service import ArtistSearchService
from src.services.playlist_service import PlaylistService
from src.services.setlist_service import SetlistService
from src.utils.errors import AuthorizationError, SetlistError
from tests.conftest import make_record, setlist_payload


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _search_source(
    name: str, records: list[ArtistRecord], *, verified: bool = False
) -> MagicMock:
    provider = MagicMock(spec=IArtistSearchProvider)
    provider.get_provider_name.return_value = name
    provider.is_available.return_value = True
    provider.is_verified_source.return_value = verified
    provider.search = AsyncMock(return_value=records)
    return provider


def _playlist_provider(available: bool = True) -> MagicMock:
    provider = MagicMock(spec=IPlaylistProvider)
    provider.is_available.return_value = available
    provider.find_track = AsyncMock(side_effect=lambda token, song, artist: f"track:{song}")
    provider.create_playlist = AsyncMock(
        return_value=CreatedPlaylist(
            id="pl-1",
            name="Radiohead - Madison Square Garden (14-07-2024)",
            external_urls={"spotify": "https://open.spotify.com/playlist/pl-1"},
        )
    )
    return provider


class _Harness:
    """App plus the mocks behind it, so tests can tweak upstream behaviour."""

    def __init__(self) -> None:
        self.setlistfm_search = _search_source(
            "setlistfm",
            [
                make_record(
                    "Radiohead",
                    ArtistSource.SETLISTFM,
                    verified=True,
                    score=0.9,
                    identifier="a74b1b7f-71a5-4011-9441-d0b5e4122711",
                )
            ],
            verified=True,
        )
        self.musicbrainz_search = _search_source(
            "musicbrainz",
            [make_record("Radiohead", score=1.0), make_record("Radio Moscow", score=0.6)],
        )
        self.setlist_provider = MagicMock(spec=ISetlistProvider)
        self.setlist_provider.is_available.return_value = True
        self.setlist_provider.search_setlists = AsyncMock(
            return_value=[
                Setlist.model_validate(setlist_payload(["Airbag", "Creep"], setlist_id="1")),
                Setlist.model_validate(
                    setlist_payload(["Airbag", "Lucky"], setlist_id="2", event_date="16-07-2024")
                ),
            ]
        )
        self.spotify = _playlist_provider()
        self.apple = _playlist_provider()
        self.signer = MagicMock()
        self.signer.is_available.return_value = True
        self.signer.get_token.return_value = "signed.jwt.token"

        app = FastAPI()
        app.add_middleware(ErrorHandlingMiddleware)
        app.add_middleware(RequestLoggingMiddleware)
        app.include_router(api_router)

        app.state.artist_search = ArtistSearchService(
            curated=CuratedArtistProvider(),
            network_providers=[self.setlistfm_search, self.musicbrainz_search],
            cache=MemoryCacheProvider(),
        )
        app.state.setlist_service = SetlistService(self.setlist_provider, MemoryCacheProvider())
        app.state.playlist_service = PlaylistService(
            {Platform.SPOTIFY: self.spotify, Platform.APPLE_MUSIC: self.apple}
        )
        app.state.apple_token_signer = self.signer
        self.client = TestClient(app)


@pytest.fixture
def harness() -> _Harness:
    return _Harness()


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


class TestIndex:
    def test_lists_endpoints(self, harness: _Harness) -> None:
        response = harness.client.get("/api")

        assert response.status_code == 200
        endpoints = response.json()["endpoints"]
        assert "/api/artists/search" in endpoints
        assert "/api/playlist/create" in endpoints

    def test_routes_without_a_path_are_skipped(self, harness: _Harness) -> None:
        class _PathlessRoute(BaseRoute):
            def matches(self, scope):
                return Match.NONE, {}

        harness.client.app.router.routes.append(_PathlessRoute())

        response = harness.client.get("/api")

        assert response.status_code == 200
        assert all(path.startswith("/api/") for path in response.json()["endpoints"])


# ---------------------------------------------------------------------------
# Artist search
# ---------------------------------------------------------------------------


class TestArtistSearch:
    def test_verified_search(self, harness: _Harness) -> None:
        response = harness.client.get("/api/artist/search", params={"q": "radiohead"})

        assert response.status_code == 200
        assert response.json() == [
            {
                "id": "a74b1b7f-71a5-4011-9441-d0b5e4122711",
                "name": "Radiohead",
                "disambiguation": None,
                "sortName": "Radiohead",
            }
        ]
        harness.musicbrainz_search.search.assert_not_called()

    @pytest.mark.parametrize("params", [{}, {"q": "   "}])
    def test_missing_query(self, harness: _Harness, params: dict) -> None:
        response = harness.client.get("/api/artist/search", params=params)

        assert response.status_code == 400
        assert response.json() == {
            "error": "InvalidRequestError",
            "detail": "Query parameter 'q' is required",
        }


class TestHybridSearch:
    def test_merged_results(self, harness: _Harness) -> None:
        response = harness.client.get("/api/artists/search", params={"q": "radio"})

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "hybrid"
        assert body["hasMore"] is False
        assert [(a["name"], a["verified"], a["source"]) for a in body["artists"]] == [
            ("Radiohead", True, "setlistfm"),
            ("Radio Moscow", False, "musicbrainz"),
        ]

    def test_second_request_served_from_cache(self, harness: _Harness) -> None:
        harness.client.get("/api/artists/search", params={"q": "radio"})
        response = harness.client.get("/api/artists/search", params={"q": "radio"})

        assert response.json()["source"] == "cache"
        harness.musicbrainz_search.search.assert_awaited_once()

    def test_short_query_uses_curated(self, harness: _Harness) -> None:
        response = harness.client.get("/api/artists/search", params={"q": "ta"})

        body = response.json()
        assert body["source"] == "curated"
        assert any(a["name"] == "Taylor Swift" for a in body["artists"])

    def test_empty_query_returns_recently_played(self, harness: _Harness) -> None:
        response = harness.client.get("/api/artists/search")

        body = response.json()
        assert body["source"] == "recent"
        assert body["artists"]

    def test_limit_validated(self, harness: _Harness) -> None:
        response = harness.client.get("/api/artists/search", params={"q": "radio", "limit": 0})
        assert response.status_code == 422


# ---------------------------------------------------------------------------
# Setlists
# ---------------------------------------------------------------------------


class TestSetlists:
    def test_search(self, harness: _Harness) -> None:
        response = harness.client.get(
            "/api/setlist/search", params={"artist": "Radiohead", "limit": 2}
        )

        assert response.status_code == 200
        body = response.json()
        assert [s["eventDate"] for s in body] == ["14-07-2024", "16-07-2024"]
        assert body[0]["sets"]["set"][0]["song"][0]["name"] == "Airbag"
        assert "tour" not in body[0]
        harness.setlist_provider.search_setlists.assert_awaited_once_with("Radiohead", limit=2)

    def test_search_requires_artist(self, harness: _Harness) -> None:
        response = harness.client.get("/api/setlist/search")

        assert response.status_code == 400
        assert response.json()["detail"] == "Artist name is required"

    def test_upstream_failure(self, harness: _Harness) -> None:
        harness.setlist_provider.search_setlists.side_effect = SetlistError(
            "Setlist.fm returned HTTP 503", provider_name="setlistfm"
        )

        response = harness.client.get("/api/setlist/search", params={"artist": "Radiohead"})

        assert response.status_code == 502
        assert response.json()["error"] == "SetlistError"

    def test_average(self, harness: _Harness) -> None:
        response = harness.client.get(
            "/api/setlist/average", params={"artist": "Radiohead", "mbid": "mbid-1"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["artistName"] == "Radiohead"
        assert body["showCount"] == 2
        assert body["songs"][0] == {
            "name": "Airbag",
            "frequency": 100,
            "playedIn": "2/2 shows",
            "duration": None,
        }
        assert body["context"] == "Based on 2 shows from 2024-07-14 to 2024-07-16"
        assert body["confidence"] == "low"


# ---------------------------------------------------------------------------
# Playlists
# ---------------------------------------------------------------------------


class TestPlaylists:
    def test_create_spotify_playlist(self, harness: _Harness) -> None:
        setlist = setlist_payload([["Airbag", "Creep"], ["Karma Police"]])

        response = harness.client.post(
            "/api/playlist/create", json={"accessToken": "tok", "setlist": setlist}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["tracksAdded"] == 3
        assert body["totalSongs"] == 3
        assert body["notFoundSongs"] == []
        assert body["playlist"]["id"] == "pl-1"
        harness.apple.find_track.assert_not_called()

    def test_missing_token(self, harness: _Harness) -> None:
        response = harness.client.post(
            "/api/playlist/create", json={"setlist": setlist_payload(["Creep"])}
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Access token and setlist are required"

    def test_expired_token(self, harness: _Harness) -> None:
        harness.spotify.find_track.side_effect = AuthorizationError(provider_name="spotify")

        response = harness.client.post(
            "/api/playlist/create",
            json={"accessToken": "old", "setlist": setlist_payload(["Creep"])},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "AuthorizationError"

    def test_create_apple_music_playlist(self, harness: _Harness) -> None:
        response = harness.client.post(
            "/api/apple-music/playlist/create",
            json={"userToken": "music-user", "setlist": setlist_payload(["Creep"])},
        )

        assert response.status_code == 200
        harness.apple.create_playlist.assert_awaited_once()
        assert harness.apple.create_playlist.call_args.args[0] == "music-user"

    def test_apple_music_unconfigured(self, harness: _Harness) -> None:
        harness.apple.is_available.return_value = False

        response = harness.client.post(
            "/api/apple-music/playlist/create",
            json={"userToken": "music-user", "setlist": setlist_payload(["Creep"])},
        )

        assert response.status_code == 503


# ---------------------------------------------------------------------------
# Apple Music token
# ---------------------------------------------------------------------------


class TestAppleMusicToken:
    def test_developer_token(self, harness: _Harness) -> None:
        response = harness.client.get("/api/apple-music/developer-token")

        assert response.status_code == 200
        assert response.json() == {"developerToken": "signed.jwt.token"}

    def test_developer_token_unconfigured(self, harness: _Harness) -> None:
        harness.signer.is_available.return_value = False

        response = harness.client.get("/api/apple-music/developer-token")

        assert response.status_code == 503
        harness.signer.get_token.assert_not_called()

    @pytest.mark.parametrize("available", [True, False])
    def test_status(self, harness: _Harness, available: bool) -> None:
        harness.signer.is_available.return_value = available

        response = harness.client.get("/api/apple-music/status")

        assert response.json() == {"available": available}
