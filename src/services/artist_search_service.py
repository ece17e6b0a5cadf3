"""Hybrid artist search: the routing and caching policy in front of the adapters.

Query routing by length
-----------------------
    < 2 characters   nothing is searched; empty result
    < 3 characters   curated list only (instant, no network)
    otherwise        every configured network source concurrently, merged

When every network source comes back empty (or fails), the curated list
is tried as a fallback so the user still sees something for popular
artists when the network is down.

Caching
-------
Each adapter caches its own raw results for its lifetime.  On top of
that this service caches the merged result per normalized query for a
short TTL, so repeated keystrokes over the same prefix skip the merge
entirely; a cache hit is reported with origin ``cache``.  Empty results
are never cached: a transient outage must not stick.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from src.interfaces.artist_search_provider import MIN_QUERY_LENGTH, IArtistSearchProvider
from src.interfaces.cache_provider import ICacheProvider
from src.models.artist import ArtistRecord
from src.models.search import ArtistSearchResult, ResultOrigin
from src.providers.artist_search.curated_provider import CuratedArtistProvider
from src.services.artist_merger import merge_artist_results
from src.services.search_session import (
    DEFAULT_DEBOUNCE_SECONDS,
    ChangeListener,
    SearchSession,
)
from src.utils.concurrency import gather_by_source
from src.utils.logging import get_logger
from src.utils.text_normalizer import normalize_artist_name

_CACHE_PREFIX = "artist_search"


class ArtistSearchService:
    """Route a query to the right sources, merge, rank and cache the results.

    Parameters
    ----------
    curated:
        The embedded artist list; used for short queries and as fallback.
    network_providers:
        Network adapters in trust order (verified source first).  The order
        decides which record survives a name collision between two
        unverified sources.
    cache:
        Store for merged results.
    cache_ttl:
        Seconds a merged result stays cached.
    local_query_length:
        Queries shorter than this use the curated list only.
    max_results:
        Default suggestion count.
    verified_max_results:
        Default result count of :meth:`search_verified`.
    min_query_length:
        Shorter queries search nothing.
    debounce_seconds:
        Quiet period of the sessions opened by :meth:`open_session`.
    """

    def __init__(
        self,
        curated: CuratedArtistProvider,
        network_providers: Sequence[IArtistSearchProvider],
        cache: ICacheProvider,
        cache_ttl: float = 300,
        local_query_length: int = 3,
        max_results: int = 8,
        verified_max_results: int = 10,
        min_query_length: int = MIN_QUERY_LENGTH,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._curated = curated
        self._network_providers = list(network_providers)
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._local_query_length = local_query_length
        self._max_results = max_results
        self._verified_max_results = verified_max_results
        self._min_query_length = min_query_length
        self._debounce_seconds = debounce_seconds
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def search(self, query: str, max_results: int | None = None) -> ArtistSearchResult:
        """Return ranked suggestions for *query*.

        Never raises for upstream failures: a failed source contributes
        nothing, and an all-empty network round falls back to the curated
        list.
        """
        query = (query or "").strip()
        limit = self._max_results if max_results is None else max_results

        if len(query) < self._min_query_length:
            return ArtistSearchResult(query=query, origin=ResultOrigin.NONE)

        if len(query) < self._local_query_length:
            return await self._curated_result(query, limit, ResultOrigin.CURATED)

        cache_key = f"{_CACHE_PREFIX}:{limit}:{normalize_artist_name(query)}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached.model_copy(update={"query": query, "origin": ResultOrigin.CACHE})

        available = [p for p in self._network_providers if p.is_available()]
        by_source = await gather_by_source(
            {provider.get_provider_name(): provider.search(query) for provider in available},
            logger=self._logger,
            error_msg="artist_source_failed",
        )

        # One extra record tells us whether more results exist.
        merged = merge_artist_results(by_source.values(), limit + 1)
        if not merged:
            self._logger.info("artist_search_fallback", query=query, sources=list(by_source))
            return await self._curated_result(query, limit, ResultOrigin.FALLBACK)

        result = ArtistSearchResult(
            query=query,
            origin=ResultOrigin.HYBRID,
            artists=merged[:limit],
            has_more=len(merged) > limit,
        )
        await self._cache.set(cache_key, result, ttl=self._cache_ttl)

        self._logger.info(
            "artist_search_complete",
            query=query,
            source_counts={name: len(records) for name, records in by_source.items()},
            result_count=len(result.artists),
        )
        return result

    async def search_verified(self, query: str, limit: int | None = None) -> list[ArtistRecord]:
        """Return artists from verified network sources only (the setlist-backed ones)."""
        if limit is None:
            limit = self._verified_max_results
        verified = [
            p for p in self._network_providers if p.is_verified_source() and p.is_available()
        ]
        by_source = await gather_by_source(
            {provider.get_provider_name(): provider.search(query) for provider in verified},
            logger=self._logger,
            error_msg="verified_source_failed",
        )
        return [record for records in by_source.values() for record in records][:limit]

    def open_session(self, on_change: ChangeListener | None = None) -> SearchSession:
        """Start a search-as-you-type session backed by :meth:`search`."""
        return SearchSession(
            self.search,
            debounce_seconds=self._debounce_seconds,
            min_query_length=self._min_query_length,
            on_change=on_change,
        )

    def recently_played(self) -> list[ArtistRecord]:
        """Artists to suggest before the user has typed anything."""
        return self._curated.recently_played()

    def source_status(self) -> dict[str, bool]:
        """Availability of every search source, for the health endpoint."""
        status = {self._curated.get_provider_name(): True}
        status.update({p.get_provider_name(): p.is_available() for p in self._network_providers})
        return status

    async def clear_caches(self) -> None:
        """Drop merged results and every adapter's own cache."""
        await self._cache.clear()
        self._curated.clear_cache()
        for provider in self._network_providers:
            provider.clear_cache()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _curated_result(
        self, query: str, limit: int, origin: ResultOrigin
    ) -> ArtistSearchResult:
        records = await self._curated.search(query)
        return ArtistSearchResult(
            query=query,
            origin=origin,
            artists=records[:limit],
            has_more=len(records) > limit,
        )
