"""MusicBrainz artist search via the musicbrainzngs client.

Uses a fuzzy Lucene query (``<cleaned query>~``) so near-miss spellings
still match.  MusicBrainz identifies artists by MBID, which Setlist.fm
also uses, so a MusicBrainz hit can be handed straight to the setlist
step.  Records are unverified: an MBID does not mean the artist has
setlists.

The client library is blocking, so calls run in a worker thread, and the
1 request/second rate limit is enforced with a monotonic-clock throttle.
"""

from __future__ import annotations

import asyncio
import re
import time

import musicbrainzngs

from src.config.settings import Settings
from src.models.artist import ArtistMatch, ArtistRecord, ArtistSource, MatchConfidence
from src.providers.artist_search.base import BaseArtistSearchProvider
from src.utils.text_normalizer import normalize_artist_name

_NON_QUERY_CHARS_RE = re.compile(r"[^a-zA-Z0-9\s]")
_SEARCH_LIMIT = 10
_MAX_RESULTS = 8


class MusicBrainzArtistProvider(BaseArtistSearchProvider):
    """MusicBrainz artist-search adapter with built-in rate limiting.

    Attributes
    ----------
    _settings : Settings
        Application settings containing MusicBrainz user-agent details.
    _last_request_time : float
        Monotonic timestamp of the most recent API call, used for throttling.
    _min_request_interval : float
        Seconds between requests, derived from *requests_per_second*.
    """

    _RECOVERABLE_ERRORS = (
        *BaseArtistSearchProvider._RECOVERABLE_ERRORS,
        musicbrainzngs.MusicBrainzError,
    )

    def __init__(self, settings: Settings, requests_per_second: float = 1.0) -> None:
        super().__init__()
        self._settings = settings
        self._min_request_interval = 1.0 / requests_per_second if requests_per_second > 0 else 0.0
        self._last_request_time: float = 0.0
        self._throttle_lock = asyncio.Lock()

        musicbrainzngs.set_useragent(
            settings.musicbrainz_app_name,
            settings.musicbrainz_app_version,
            settings.musicbrainz_contact or None,
        )
        self._logger.info(
            "musicbrainz_provider_initialized",
            app_name=settings.musicbrainz_app_name,
            app_version=settings.musicbrainz_app_version,
            requests_per_second=requests_per_second,
        )

    # ------------------------------------------------------------------
    # Rate-limiting helper
    # ------------------------------------------------------------------

    async def _throttle(self) -> None:
        """Keep requests at least ``_min_request_interval`` seconds apart."""
        async with self._throttle_lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._min_request_interval:
                await asyncio.sleep(self._min_request_interval - elapsed)
            self._last_request_time = time.monotonic()

    # ------------------------------------------------------------------
    # IArtistSearchProvider implementation
    # ------------------------------------------------------------------

    async def _fetch(self, query: str) -> list[ArtistRecord]:
        clean_query = _NON_QUERY_CHARS_RE.sub("", query).strip()
        if not clean_query:
            return []

        await self._throttle()
        response = await asyncio.to_thread(
            musicbrainzngs.search_artists,
            query=f"{clean_query}~",
            limit=_SEARCH_LIMIT,
        )

        records: list[ArtistRecord] = []
        for artist in response.get("artist-list", [])[:_MAX_RESULTS]:
            # musicbrainzngs reports the Lucene score as a string, 0-100.
            score = int(artist.get("ext:score", 100))
            records.append(
                ArtistRecord(
                    identifier=artist["id"],
                    display_name=artist.get("name", ""),
                    sort_name=artist.get("sort-name", artist.get("name", "")),
                    disambiguation=artist.get("disambiguation") or None,
                    source=ArtistSource.MUSICBRAINZ,
                    verified=False,
                    relevance_score=min(max(score, 0), 100) / 100.0,
                )
            )
        return records

    def get_provider_name(self) -> str:
        return "musicbrainz"

    def is_available(self) -> bool:
        """MusicBrainz is always available (no API key required)."""
        return True

    # ------------------------------------------------------------------
    # Name -> MBID resolution
    # ------------------------------------------------------------------

    async def resolve_artist(self, name: str) -> ArtistMatch | None:
        """Map a typed artist name to its most likely MusicBrainz entry.

        An exact normalized-name match wins over a higher search score;
        otherwise the top-scored candidate is taken.  Returns ``None``
        when MusicBrainz has no candidates (or is unreachable).
        """
        candidates = await self.search(name)
        if not candidates:
            return None

        wanted = normalize_artist_name(name)
        exact = [c for c in candidates if normalize_artist_name(c.display_name) == wanted]
        best = max(exact or candidates, key=lambda c: c.effective_score)

        return ArtistMatch(
            artist=best,
            confidence=MatchConfidence.from_score(best.effective_score),
            candidates=candidates,
        )
