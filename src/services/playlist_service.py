"""Turn a setlist into a playlist on the user's streaming platform.

# ─── FLOW ──────────────────────────────────────────────────────────────
#
#   1. Validate the token and setlist (no network on bad input).
#   2. Look every song up on the platform concurrently, throttled by a
#      semaphore created for the request.  A song whose lookup fails or finds
#      nothing is reported in ``not_found_songs``; an expired token
#      aborts the whole request.
#   3. Create the playlist with the matched tracks in setlist order.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

import structlog

from src.interfaces.playlist_provider import IPlaylistProvider
from src.models.playlist import Platform, PlaylistResult
from src.models.setlist import Setlist
from src.utils.concurrency import throttled_gather
from src.utils.errors import AuthorizationError, InvalidRequestError, ProviderUnavailableError
from src.utils.logging import get_logger


def playlist_name(setlist: Setlist) -> str:
    return f"{setlist.artist.name} - {setlist.venue.name} ({setlist.event_date})"


def playlist_description(setlist: Setlist) -> str:
    return (
        f"Setlist from {setlist.venue.name}, {setlist.venue.city.name} "
        f"on {setlist.event_date}. Generated by Concert Recap."
    )


class PlaylistService:
    """Create playlists from setlists on any configured platform.

    Parameters
    ----------
    providers:
        Platform -> playlist provider.
    max_concurrency:
        Track lookups allowed in flight at once for one playlist.
    """

    def __init__(
        self,
        providers: Mapping[Platform, IPlaylistProvider],
        max_concurrency: int = 5,
    ) -> None:
        self._providers = dict(providers)
        self._max_concurrency = max_concurrency
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def available_platforms(self) -> list[Platform]:
        return [platform for platform, p in self._providers.items() if p.is_available()]

    def _provider_for(self, platform: Platform) -> IPlaylistProvider:
        provider = self._providers.get(platform)
        if provider is None or not provider.is_available():
            raise ProviderUnavailableError(
                message=f"{platform.value} playlists are not configured on this server",
                provider_name=platform.value,
            )
        return provider

    async def create_from_setlist(
        self,
        platform: Platform,
        user_token: str | None,
        setlist: Setlist | None,
    ) -> PlaylistResult:
        """Create a playlist containing every song of *setlist* that the platform has.

        Raises
        ------
        InvalidRequestError
            If the token or setlist is missing.
        ProviderUnavailableError
            If *platform* is not configured.
        AuthorizationError
            If the platform rejects *user_token*.
        PlaylistCreationError
            If the platform refuses to create the playlist.
        """
        if not user_token or setlist is None:
            raise InvalidRequestError("Access token and setlist are required")

        provider = self._provider_for(platform)
        songs = setlist.song_names()
        artist_name = setlist.artist.name

        # Created per call: a semaphore binds to the loop that first waits on it.
        lookups = await throttled_gather(
            [provider.find_track(user_token, song, artist_name) for song in songs],
            semaphore=asyncio.Semaphore(self._max_concurrency),
        )

        track_ids: list[str] = []
        not_found: list[str] = []
        for song, outcome in zip(songs, lookups):
            if isinstance(outcome, AuthorizationError):
                raise outcome
            if isinstance(outcome, BaseException):
                self._logger.warning(
                    "track_lookup_failed",
                    platform=platform.value,
                    song=song,
                    error=str(outcome),
                )
                not_found.append(song)
            elif outcome:
                track_ids.append(outcome)
            else:
                not_found.append(song)

        playlist = await provider.create_playlist(
            user_token,
            playlist_name(setlist),
            playlist_description(setlist),
            track_ids,
        )

        self._logger.info(
            "playlist_created",
            platform=platform.value,
            playlist_id=playlist.id,
            tracks_added=len(track_ids),
            total_songs=len(songs),
            not_found=len(not_found),
        )
        return PlaylistResult(
            playlist=playlist,
            tracks_added=len(track_ids),
            total_songs=len(songs),
            not_found_songs=not_found,
        )
