"""Shared behaviour for artist-search adapters.

Every adapter answers the same way at its edges: short queries return
nothing, repeated queries come from the instance cache, and upstream
failures become an empty list plus a warning.  Subclasses only implement
``_fetch`` (query construction and payload mapping).
"""

from __future__ import annotations

from abc import abstractmethod

import httpx
import structlog

from src.interfaces.artist_search_provider import MIN_QUERY_LENGTH, IArtistSearchProvider
from src.models.artist import ArtistRecord
from src.utils.logging import get_logger
from src.utils.text_normalizer import normalize_artist_name


class BaseArtistSearchProvider(IArtistSearchProvider):
    """Template for :class:`IArtistSearchProvider` implementations.

    Attributes
    ----------
    _RECOVERABLE_ERRORS:
        Exception types that are logged and turned into ``[]``.  Anything
        else is a programming error and propagates.
    """

    _RECOVERABLE_ERRORS: tuple[type[BaseException], ...] = (
        httpx.HTTPError,
        ValueError,
        KeyError,
        TypeError,
    )

    def __init__(self) -> None:
        self._cache: dict[str, list[ArtistRecord]] = {}
        self._logger: structlog.BoundLogger = get_logger(type(self).__module__)

    @abstractmethod
    async def _fetch(self, query: str) -> list[ArtistRecord]:
        """Query the upstream source and map its payload to records."""

    async def search(self, query: str) -> list[ArtistRecord]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        cache_key = normalize_artist_name(query)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            records = await self._fetch(query)
        except self._RECOVERABLE_ERRORS as exc:
            self._logger.warning(
                "artist_search_failed",
                provider=self.get_provider_name(),
                query=query,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return []

        self._cache[cache_key] = records
        self._logger.debug(
            "artist_search_complete",
            provider=self.get_provider_name(),
            query=query,
            result_count=len(records),
        )
        return records

    def is_verified_source(self) -> bool:
        return False

    def clear_cache(self) -> None:
        self._cache.clear()
