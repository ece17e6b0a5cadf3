"""Apple Music catalog artist search.

Queries the public catalog with a server-signed developer token (no user
token needed).  Apple has no setlist data, so records are unverified,
and its search returns no score, so one is computed with rapidfuzz.
"""

from __future__ import annotations

import httpx

from src.config.settings import Settings
from src.models.artist import ArtistRecord, ArtistSource
from src.providers.artist_search.base import BaseArtistSearchProvider
from src.providers.auth.apple_developer_token import AppleDeveloperTokenSigner
from src.utils.errors import ConfigurationError
from src.utils.text_normalizer import name_similarity

_SEARCH_LIMIT = 8


class AppleMusicArtistProvider(BaseArtistSearchProvider):
    """Artist-search adapter for the Apple Music catalog API."""

    _RECOVERABLE_ERRORS = (
        *BaseArtistSearchProvider._RECOVERABLE_ERRORS,
        ConfigurationError,
    )

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: Settings,
        token_signer: AppleDeveloperTokenSigner,
    ) -> None:
        super().__init__()
        self._http = http_client
        self._signer = token_signer
        self._base_url = settings.apple_music_api_base_url.rstrip("/")
        self._storefront = settings.apple_music_storefront

    async def _fetch(self, query: str) -> list[ArtistRecord]:
        if not self._signer.is_available():
            return []

        response = await self._http.get(
            f"{self._base_url}/catalog/{self._storefront}/search",
            params={"term": query, "types": "artists", "limit": _SEARCH_LIMIT},
            headers={"Authorization": f"Bearer {self._signer.get_token()}"},
        )
        response.raise_for_status()

        artists = response.json().get("results", {}).get("artists", {}).get("data", [])
        records: list[ArtistRecord] = []
        for artist in artists:
            attributes = artist.get("attributes", {})
            name = attributes.get("name", "")
            if not name:
                continue
            genres = attributes.get("genreNames") or []
            records.append(
                ArtistRecord(
                    identifier=str(artist["id"]),
                    display_name=name,
                    sort_name=name,
                    disambiguation=", ".join(genres[:2]) or None,
                    source=ArtistSource.APPLE,
                    verified=False,
                    relevance_score=name_similarity(query, name),
                )
            )
        return records

    def get_provider_name(self) -> str:
        return "apple_music"

    def is_available(self) -> bool:
        return self._signer.is_available()
