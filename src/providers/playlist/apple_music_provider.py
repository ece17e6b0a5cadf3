"""Apple Music playlist provider.

Requests carry two credentials: the server-signed developer token and
the user's Music-User-Token obtained by MusicKit in the browser.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.playlist_provider import IPlaylistProvider
from src.models.playlist import CreatedPlaylist
from src.providers.auth.apple_developer_token import AppleDeveloperTokenSigner
from src.utils.errors import AuthorizationError, PlaylistCreationError, RateLimitError
from src.utils.logging import get_logger

_SONG_SEARCH_LIMIT = 5


class AppleMusicPlaylistProvider(IPlaylistProvider):
    """Create playlists in the user's Apple Music library."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        token_signer: AppleDeveloperTokenSigner,
    ) -> None:
        self._http = http_client
        self._signer = token_signer
        self._base_url = settings.apple_music_api_base_url.rstrip("/")
        self._storefront = settings.apple_music_storefront
        self._logger = get_logger(__name__)

    async def _request(
        self, method: str, path: str, user_token: str, **kwargs: Any
    ) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._signer.get_token()}",
            "Music-User-Token": user_token,
        }
        try:
            response = await self._http.request(
                method, f"{self._base_url}{path}", headers=headers, **kwargs
            )
        except httpx.HTTPError as exc:
            raise PlaylistCreationError(
                message=f"Apple Music request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code in (401, 403):
            raise AuthorizationError(
                message="Apple Music authorization expired. Please log in again.",
                provider_name=self.get_provider_name(),
            )
        if response.status_code == 429:
            raise RateLimitError(
                message="Apple Music rate limit exceeded",
                provider_name=self.get_provider_name(),
            )
        if response.status_code >= 400:
            raise PlaylistCreationError(
                message=f"Apple Music {method} {path} returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )
        return response.json() if response.content else {}

    # -- IPlaylistProvider implementation ---------------------------------

    async def find_track(self, user_token: str, song_name: str, artist_name: str) -> str | None:
        data = await self._request(
            "GET",
            f"/catalog/{self._storefront}/search",
            user_token,
            params={
                "term": f"{song_name} {artist_name}",
                "types": "songs",
                "limit": _SONG_SEARCH_LIMIT,
            },
        )
        songs = data.get("results", {}).get("songs", {}).get("data", [])
        return str(songs[0]["id"]) if songs else None

    async def create_playlist(
        self,
        user_token: str,
        name: str,
        description: str,
        track_ids: list[str],
    ) -> CreatedPlaylist:
        if not track_ids:
            raise PlaylistCreationError(
                message="No tracks to add to playlist",
                provider_name=self.get_provider_name(),
            )

        body = {
            "attributes": {"name": name, "description": description},
            "relationships": {
                "tracks": {"data": [{"id": track_id, "type": "songs"} for track_id in track_ids]}
            },
        }
        data = await self._request("POST", "/me/library/playlists", user_token, json=body)

        created = (data.get("data") or [{}])[0]
        playlist_id = str(created.get("id", ""))
        self._logger.info(
            "apple_music_playlist_created",
            playlist_id=playlist_id,
            track_count=len(track_ids),
        )
        return CreatedPlaylist(
            id=playlist_id,
            name=created.get("attributes", {}).get("name", name),
            external_urls=(
                {"apple_music": f"https://music.apple.com/library/playlist/{playlist_id}"}
                if playlist_id
                else {}
            ),
        )

    def get_provider_name(self) -> str:
        return "apple_music"

    def is_available(self) -> bool:
        return self._signer.is_available()
