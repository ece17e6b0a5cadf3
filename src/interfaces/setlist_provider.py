"""Abstract base class for setlist sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.setlist import Setlist


class ISetlistProvider(ABC):
    """Contract for services that return past concert setlists."""

    @abstractmethod
    async def search_setlists(
        self, artist_name: str, limit: int = 10, mbid: str | None = None
    ) -> list[Setlist]:
        """Return up to *limit* recent setlists for an artist.

        Parameters
        ----------
        artist_name:
            Display name to search by when no *mbid* is known.
        limit:
            Maximum number of setlists to return.
        mbid:
            MusicBrainz identifier; searched by instead of the name when given.

        Raises
        ------
        src.utils.errors.SetlistError
            If the upstream request fails.
        src.utils.errors.ConfigurationError
            If the provider has no API key.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the provider identifier."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured."""
