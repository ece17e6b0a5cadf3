"""Setlist lookup and the "average setlist" built from recent shows.

The average setlist answers "what will this artist probably play?": every
song is counted once per show it appears in, and songs are ranked by how
many shows played them.  Shows without any named song (announced but not
yet filled in on Setlist.fm) are ignored so they do not dilute the
frequencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import structlog

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.setlist_provider import ISetlistProvider
from src.models.artist import MatchConfidence
from src.models.setlist import AverageSetlistSong, Setlist, SetlistConfidence, SetlistData
from src.providers.artist_search.musicbrainz_provider import MusicBrainzArtistProvider
from src.utils.errors import InvalidRequestError
from src.utils.logging import get_logger
from src.utils.text_normalizer import normalize_artist_name

_CACHE_PREFIX = "average_setlist"
_EVENT_DATE_FORMAT = "%d-%m-%Y"

MAX_AVERAGE_SONGS = 20
HIGH_CONFIDENCE_SHOWS = 15
MEDIUM_CONFIDENCE_SHOWS = 5


def _confidence_for(show_count: int) -> SetlistConfidence:
    if show_count >= HIGH_CONFIDENCE_SHOWS:
        return SetlistConfidence.HIGH
    if show_count >= MEDIUM_CONFIDENCE_SHOWS:
        return SetlistConfidence.MEDIUM
    return SetlistConfidence.LOW


def _percent(count: int, total: int) -> int:
    """Integer percentage rounded half up (17/40 -> 43, not banker's 42)."""
    return (200 * count + total) // (2 * total)


def _date_range(setlists: Sequence[Setlist]) -> str:
    dates = []
    for setlist in setlists:
        try:
            dates.append(datetime.strptime(setlist.event_date, _EVENT_DATE_FORMAT).date())
        except ValueError:
            continue
    if not dates:
        return ""
    first, last = min(dates), max(dates)
    if first == last:
        return f" on {first.isoformat()}"
    return f" from {first.isoformat()} to {last.isoformat()}"


def aggregate_setlists(
    artist_name: str,
    setlists: Sequence[Setlist],
    max_songs: int = MAX_AVERAGE_SONGS,
) -> SetlistData:
    """Fold individual shows into one average setlist.

    Parameters
    ----------
    artist_name:
        Name reported on the result.
    setlists:
        Shows to aggregate, in any order.
    max_songs:
        Maximum number of songs kept.

    Returns
    -------
    SetlistData
        Songs ordered by the number of shows they were played in, ties
        broken by first appearance.  With no usable show the song list is
        empty and confidence is ``LOW``.
    """
    counts: dict[str, int] = {}
    display_names: dict[str, str] = {}
    shows: list[Setlist] = []

    for setlist in setlists:
        names = setlist.song_names()
        if not names:
            continue
        shows.append(setlist)
        seen_in_show: set[str] = set()
        for name in names:
            key = name.strip().lower()
            if key in seen_in_show:
                continue
            seen_in_show.add(key)
            if key not in counts:
                # dicts keep insertion order, which is first appearance
                counts[key] = 0
                display_names[key] = name.strip()
            counts[key] += 1

    show_count = len(shows)
    if show_count == 0:
        return SetlistData(
            artist_name=artist_name,
            context="No recent setlists found",
            confidence=SetlistConfidence.LOW,
            show_count=0,
        )

    ranked = sorted(counts.items(), key=lambda item: -item[1])[:max_songs]
    songs = [
        AverageSetlistSong(
            name=display_names[key],
            frequency=_percent(count, show_count),
            played_in=f"{count}/{show_count} shows",
        )
        for key, count in ranked
    ]
    noun = "show" if show_count == 1 else "shows"
    return SetlistData(
        artist_name=artist_name,
        songs=songs,
        context=f"Based on {show_count} {noun}{_date_range(shows)}",
        confidence=_confidence_for(show_count),
        show_count=show_count,
    )


class SetlistService:
    """Fetch recent setlists and derive average setlists from them.

    Parameters
    ----------
    provider:
        Source of individual setlists.
    cache:
        Store for average setlists.
    cache_ttl:
        Seconds an average setlist stays cached.
    artist_resolver:
        Optional MusicBrainz adapter used to pin a typed name to an MBID
        before fetching, so namesakes do not mix into the average.
    average_show_count:
        How many recent shows feed one average setlist.
    """

    def __init__(
        self,
        provider: ISetlistProvider,
        cache: ICacheProvider,
        cache_ttl: float = 3600,
        artist_resolver: MusicBrainzArtistProvider | None = None,
        average_show_count: int = 20,
        max_songs: int = MAX_AVERAGE_SONGS,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._cache_ttl = cache_ttl
        self._artist_resolver = artist_resolver
        self._average_show_count = average_show_count
        self._max_songs = max_songs
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def is_available(self) -> bool:
        return self._provider.is_available()

    async def search_setlists(self, artist_name: str, limit: int = 10) -> list[Setlist]:
        """Return up to *limit* recent shows for *artist_name*.

        Raises
        ------
        InvalidRequestError
            If *artist_name* is blank.
        """
        artist_name = (artist_name or "").strip()
        if not artist_name:
            raise InvalidRequestError("Artist name is required")
        return await self._provider.search_setlists(artist_name, limit=limit)

    async def build_average_setlist(
        self,
        artist_name: str,
        mbid: str | None = None,
        limit: int | None = None,
    ) -> SetlistData:
        """Return the average setlist for an artist, cached per artist."""
        artist_name = (artist_name or "").strip()
        if not artist_name and not mbid:
            raise InvalidRequestError("Artist name or MBID is required")

        show_count = self._average_show_count if limit is None else limit
        cache_key = f"{_CACHE_PREFIX}:{show_count}:{mbid or normalize_artist_name(artist_name)}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        if mbid is None and self._artist_resolver is not None:
            mbid = await self._resolve_mbid(artist_name)

        setlists = await self._provider.search_setlists(artist_name, limit=show_count, mbid=mbid)
        display_name = artist_name or (setlists[0].artist.name if setlists else "")
        data = aggregate_setlists(display_name, setlists, max_songs=self._max_songs)
        await self._cache.set(cache_key, data, ttl=self._cache_ttl)

        self._logger.info(
            "average_setlist_built",
            artist=display_name,
            mbid=mbid,
            shows=data.show_count,
            songs=len(data.songs),
            confidence=data.confidence.value,
        )
        return data

    async def clear_cache(self) -> None:
        await self._cache.clear()

    async def _resolve_mbid(self, artist_name: str) -> str | None:
        match = await self._artist_resolver.resolve_artist(artist_name)  # type: ignore[union-attr]
        if match is None or match.confidence == MatchConfidence.LOW:
            return None
        self._logger.debug(
            "artist_mbid_resolved",
            artist=artist_name,
            mbid=match.artist.identifier,
            confidence=match.confidence.value,
        )
        return match.artist.identifier
