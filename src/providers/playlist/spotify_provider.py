"""Spotify Web API playlist provider.

The user's OAuth access token arrives with each request (the OAuth flow
itself happens in the browser), so the provider holds no per-user state
and one instance serves every request.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.playlist_provider import IPlaylistProvider
from src.models.playlist import CreatedPlaylist
from src.utils.errors import AuthorizationError, PlaylistCreationError, RateLimitError
from src.utils.logging import get_logger

# Spotify accepts at most 100 URIs per "add items" call.
_TRACKS_PER_REQUEST = 100


class SpotifyPlaylistProvider(IPlaylistProvider):
    """Create private Spotify playlists on behalf of the token's owner."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._base_url = settings.spotify_api_base_url.rstrip("/")
        self._logger = get_logger(__name__)

    async def _request(
        self, method: str, path: str, access_token: str, **kwargs: Any
    ) -> dict[str, Any]:
        """Send an authorized request and return the decoded JSON body."""
        try:
            response = await self._http.request(
                method,
                f"{self._base_url}{path}",
                headers={"Authorization": f"Bearer {access_token}"},
                **kwargs,
            )
        except httpx.HTTPError as exc:
            raise PlaylistCreationError(
                message=f"Spotify request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code == 401:
            raise AuthorizationError(
                message="Spotify authorization expired. Please log in again.",
                provider_name=self.get_provider_name(),
            )
        if response.status_code == 429:
            raise RateLimitError(
                message="Spotify rate limit exceeded",
                provider_name=self.get_provider_name(),
            )
        if response.status_code >= 400:
            raise PlaylistCreationError(
                message=f"Spotify {method} {path} returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )
        return response.json() if response.content else {}

    async def get_user_id(self, access_token: str) -> str:
        profile = await self._request("GET", "/me", access_token)
        return profile["id"]

    async def _search_first_uri(self, access_token: str, query: str) -> str | None:
        data = await self._request(
            "GET",
            "/search",
            access_token,
            params={"q": query, "type": "track", "limit": 1},
        )
        items = data.get("tracks", {}).get("items", [])
        return items[0]["uri"] if items else None

    # -- IPlaylistProvider implementation ---------------------------------

    async def find_track(self, user_token: str, song_name: str, artist_name: str) -> str | None:
        """Field-qualified search first, then a broad keyword search."""
        uri = await self._search_first_uri(
            user_token, f'track:"{song_name}" artist:"{artist_name}"'
        )
        if uri is None:
            uri = await self._search_first_uri(user_token, f"{song_name} {artist_name}")
        return uri

    async def create_playlist(
        self,
        user_token: str,
        name: str,
        description: str,
        track_ids: list[str],
    ) -> CreatedPlaylist:
        user_id = await self.get_user_id(user_token)
        playlist = await self._request(
            "POST",
            f"/users/{user_id}/playlists",
            user_token,
            json={"name": name, "description": description, "public": False},
        )

        for start in range(0, len(track_ids), _TRACKS_PER_REQUEST):
            await self._request(
                "POST",
                f"/playlists/{playlist['id']}/tracks",
                user_token,
                json={"uris": track_ids[start : start + _TRACKS_PER_REQUEST]},
            )

        self._logger.info(
            "spotify_playlist_created",
            playlist_id=playlist["id"],
            track_count=len(track_ids),
        )
        return CreatedPlaylist(
            id=playlist["id"],
            name=playlist.get("name", name),
            external_urls=playlist.get("external_urls", {}),
        )

    def get_provider_name(self) -> str:
        return "spotify"

    def is_available(self) -> bool:
        """Spotify needs only the per-request user token."""
        return True
