"""Playlist creation models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):  # noqa: UP042
    """Streaming platforms a playlist can be created on."""

    SPOTIFY = "spotify"
    APPLE_MUSIC = "apple_music"


class CreatedPlaylist(BaseModel):
    """The playlist as reported back by the platform."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    external_urls: dict[str, str] = Field(default_factory=dict)


class PlaylistResult(BaseModel):
    """Outcome of creating a playlist from a setlist.

    Songs that could not be matched on the platform are listed in
    ``not_found_songs``; the playlist is still created with the rest.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    playlist: CreatedPlaylist
    tracks_added: int = Field(alias="tracksAdded")
    total_songs: int = Field(alias="totalSongs")
    not_found_songs: list[str] = Field(default_factory=list, alias="notFoundSongs")
