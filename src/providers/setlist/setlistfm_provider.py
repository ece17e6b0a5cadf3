"""Setlist.fm setlist search implementing ISetlistProvider.

Unlike the artist-search adapter, failures here are raised: the user
asked for a specific artist's shows and needs to know the fetch failed,
rather than see an empty setlist.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from src.config.settings import Settings
from src.interfaces.setlist_provider import ISetlistProvider
from src.models.setlist import Setlist
from src.utils.errors import ConfigurationError, RateLimitError, SetlistError
from src.utils.logging import get_logger

_USER_AGENT = "ConcertRecap/0.1.0"
_MAX_PAGES = 3


class SetlistFmSetlistProvider(ISetlistProvider):
    """Fetch recent setlists from ``/search/setlists``.

    Searches by MusicBrainz id when one is known (exact), otherwise by
    artist name.  Pages are followed until *limit* setlists are collected,
    the results run out, or three pages have been read.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._api_key = settings.setlistfm_api_key
        self._base_url = settings.setlistfm_base_url.rstrip("/")
        self._logger = get_logger(__name__)

    async def _fetch_page(self, params: dict[str, str | int]) -> dict:
        try:
            response = await self._http.get(
                f"{self._base_url}/search/setlists",
                params=params,
                headers={
                    "x-api-key": self._api_key,
                    "Accept": "application/json",
                    "User-Agent": _USER_AGENT,
                },
            )
        except httpx.HTTPError as exc:
            raise SetlistError(
                message=f"Setlist.fm request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if response.status_code == 404:
            return {}
        if response.status_code == 429:
            raise RateLimitError(
                message="Setlist.fm rate limit exceeded, try again shortly",
                provider_name=self.get_provider_name(),
            )
        if response.status_code >= 400:
            raise SetlistError(
                message=f"Setlist.fm returned HTTP {response.status_code}",
                provider_name=self.get_provider_name(),
            )
        try:
            return response.json()
        except ValueError as exc:
            raise SetlistError(
                message="Setlist.fm returned a malformed response",
                provider_name=self.get_provider_name(),
            ) from exc

    async def search_setlists(
        self, artist_name: str, limit: int = 10, mbid: str | None = None
    ) -> list[Setlist]:
        if not self._api_key:
            raise ConfigurationError(
                message="SETLISTFM_API_KEY is not configured",
                provider_name=self.get_provider_name(),
            )

        params: dict[str, str | int] = {"artistMbid": mbid} if mbid else {"artistName": artist_name}
        setlists: list[Setlist] = []

        for page in range(1, _MAX_PAGES + 1):
            data = await self._fetch_page({**params, "p": page})
            raw_setlists = data.get("setlist", [])
            for raw in raw_setlists:
                try:
                    setlists.append(Setlist.model_validate(raw))
                except ValidationError as exc:
                    self._logger.warning(
                        "setlistfm_setlist_skipped",
                        setlist_id=raw.get("id") if isinstance(raw, dict) else None,
                        error=str(exc),
                    )

            total = int(data.get("total", 0))
            per_page = int(data.get("itemsPerPage", len(raw_setlists) or 1))
            if len(setlists) >= limit or not raw_setlists or page * per_page >= total:
                break

        self._logger.info(
            "setlistfm_setlist_search",
            artist=artist_name,
            mbid=mbid,
            result_count=min(len(setlists), limit),
        )
        return setlists[:limit]

    def get_provider_name(self) -> str:
        return "setlistfm"

    def is_available(self) -> bool:
        return bool(self._api_key)
