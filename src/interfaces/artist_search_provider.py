"""Abstract base class for artist-search sources.

Each source (curated list, MusicBrainz, Setlist.fm, Apple Music) is an
adapter behind this interface.  The hybrid search service only ever talks
to ``IArtistSearchProvider`` and never sees a provider's payload format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.artist import ArtistRecord

MIN_QUERY_LENGTH = 2


class IArtistSearchProvider(ABC):
    """Contract for artist-search adapters.

    Adapters must honour three rules:

    - queries shorter than :data:`MIN_QUERY_LENGTH` characters return ``[]``
      without touching the network;
    - any upstream failure (transport error, non-2xx, malformed payload) is
      logged and yields ``[]``.  ``search`` never raises;
    - results are cached per normalized query for the adapter's lifetime,
      until :meth:`clear_cache` is called.
    """

    @abstractmethod
    async def search(self, query: str) -> list[ArtistRecord]:
        """Search the source for artists matching *query*.

        Parameters
        ----------
        query:
            Raw user input.

        Returns
        -------
        list[ArtistRecord]
            Candidates in the source's own relevance order; possibly empty.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the source identifier, e.g. ``"setlistfm"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the adapter is configured (API keys present)."""

    @abstractmethod
    def is_verified_source(self) -> bool:
        """Return ``True`` if records from this source are marked verified."""

    @abstractmethod
    def clear_cache(self) -> None:
        """Drop every cached result."""
