"""Setlist.fm artist search.

Setlist.fm is the only network source that indexes setlists, so every
artist it returns is marked verified: choosing one is guaranteed to lead
to setlist data.  Its search endpoint returns no relevance score, so one
is computed with rapidfuzz against the query.
"""

from __future__ import annotations

import httpx

from src.config.settings import Settings
from src.models.artist import ArtistRecord, ArtistSource
from src.providers.artist_search.base import BaseArtistSearchProvider
from src.utils.text_normalizer import name_similarity

_USER_AGENT = "ConcertRecap/0.1.0"


class SetlistFmArtistProvider(BaseArtistSearchProvider):
    """Artist-search adapter for the Setlist.fm REST API.

    The ``httpx.AsyncClient`` is injected for testability.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        super().__init__()
        self._http = http_client
        self._api_key = settings.setlistfm_api_key
        self._base_url = settings.setlistfm_base_url.rstrip("/")

    async def _fetch(self, query: str) -> list[ArtistRecord]:
        if not self._api_key:
            self._logger.debug("setlistfm_not_configured", query=query)
            return []

        response = await self._http.get(
            f"{self._base_url}/search/artists",
            params={"artistName": query, "p": 1, "sort": "relevance"},
            headers={
                "x-api-key": self._api_key,
                "Accept": "application/json",
                "User-Agent": _USER_AGENT,
            },
        )
        # Setlist.fm answers "no matches" with a 404.
        if response.status_code == 404:
            return []
        response.raise_for_status()

        records: list[ArtistRecord] = []
        for artist in response.json().get("artist", []):
            name = artist.get("name", "")
            if not name:
                continue
            records.append(
                ArtistRecord(
                    identifier=artist.get("mbid") or name,
                    display_name=name,
                    sort_name=artist.get("sortName") or name,
                    disambiguation=artist.get("disambiguation") or None,
                    source=ArtistSource.SETLISTFM,
                    verified=True,
                    relevance_score=name_similarity(query, name),
                )
            )
        return records

    def get_provider_name(self) -> str:
        return "setlistfm"

    def is_available(self) -> bool:
        return bool(self._api_key)

    def is_verified_source(self) -> bool:
        return True
