"""Abstract base class for streaming platforms that can host playlists."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.playlist import CreatedPlaylist


class IPlaylistProvider(ABC):
    """Contract for creating a playlist from a list of song names.

    ``user_token`` is the platform credential of the end user (a Spotify
    OAuth access token or an Apple Music user token).  It is passed per
    call and never stored on the provider.
    """

    @abstractmethod
    async def find_track(self, user_token: str, song_name: str, artist_name: str) -> str | None:
        """Return the platform's identifier for the best matching track, or ``None``.

        Raises
        ------
        src.utils.errors.AuthorizationError
            If the platform rejects *user_token*.
        """

    @abstractmethod
    async def create_playlist(
        self,
        user_token: str,
        name: str,
        description: str,
        track_ids: list[str],
    ) -> CreatedPlaylist:
        """Create a private playlist containing *track_ids*.

        Raises
        ------
        src.utils.errors.AuthorizationError
            If the platform rejects *user_token*.
        src.utils.errors.PlaylistCreationError
            If the platform refuses to create the playlist.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the platform identifier, e.g. ``"spotify"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the server is configured for this platform."""
