"""Curated-list artist search.

Answers from the embedded hand-checked artist list with the tiered fuzzy
matcher.  No I/O, so it is always available and is the only source
consulted for very short queries.
"""

from __future__ import annotations

from src.config.curated_artists import POPULAR_ARTISTS, RECENTLY_PLAYED_NAMES
from src.models.artist import ArtistRecord, ArtistSource
from src.providers.artist_search.base import BaseArtistSearchProvider
from src.utils.text_normalizer import (
    DEFAULT_RELEVANCE_THRESHOLD,
    fuzzy_search_artists,
)

_MAX_RESULTS = 8


class CuratedArtistProvider(BaseArtistSearchProvider):
    """Fuzzy search over a fixed list of verified artists.

    Parameters
    ----------
    artists:
        ``(identifier, display name, sort name)`` tuples.  Defaults to the
        bundled popular-artists list.
    relevance_threshold:
        Matches scoring at or below this are dropped.
    max_results:
        Maximum number of suggestions returned.
    """

    def __init__(
        self,
        artists: tuple[tuple[str, str, str], ...] = POPULAR_ARTISTS,
        relevance_threshold: float = DEFAULT_RELEVANCE_THRESHOLD,
        max_results: int = _MAX_RESULTS,
    ) -> None:
        super().__init__()
        self._artists = [
            ArtistRecord(
                identifier=mbid,
                display_name=name,
                sort_name=sort_name,
                source=ArtistSource.CURATED,
                verified=True,
            )
            for mbid, name, sort_name in artists
        ]
        self._threshold = relevance_threshold
        self._max_results = max_results

    async def _fetch(self, query: str) -> list[ArtistRecord]:
        ranked = fuzzy_search_artists(
            query,
            self._artists,
            key=lambda artist: artist.display_name,
            threshold=self._threshold,
            limit=self._max_results,
        )
        return [
            artist.model_copy(update={"relevance_score": score}) for artist, score in ranked
        ]

    def recently_played(self) -> list[ArtistRecord]:
        """Return the recently-played shortlist in display order."""
        by_name = {artist.display_name: artist for artist in self._artists}
        return [by_name[name] for name in RECENTLY_PLAYED_NAMES if name in by_name]

    def get_provider_name(self) -> str:
        return "curated"

    def is_available(self) -> bool:
        return True

    def is_verified_source(self) -> bool:
        return True
