"""Concert Recap domain models: re-exports all public model classes.

Submodules by concern:
    - artist.py    : ArtistRecord, the one shape every search source maps into
    - search.py    : search state machine vocabulary and ranked results
    - setlist.py   : Setlist.fm wire models and the derived average setlist
    - playlist.py  : playlist creation results
"""

from __future__ import annotations

from src.models.artist import ArtistMatch, ArtistRecord, ArtistSource, MatchConfidence
from src.models.playlist import CreatedPlaylist, Platform, PlaylistResult
from src.models.search import (
    ArtistSearchResult,
    ResultOrigin,
    SearchOutcome,
    SearchSnapshot,
    SearchState,
)
from src.models.setlist import (
    AverageSetlistSong,
    City,
    Country,
    Setlist,
    SetlistArtist,
    SetlistConfidence,
    SetlistData,
    SetlistSet,
    SetlistSets,
    SetlistSong,
    Tour,
    Venue,
)

__all__ = [
    "ArtistMatch",
    "ArtistRecord",
    "ArtistSearchResult",
    "ArtistSource",
    "AverageSetlistSong",
    "City",
    "Country",
    "CreatedPlaylist",
    "MatchConfidence",
    "Platform",
    "PlaylistResult",
    "ResultOrigin",
    "SearchOutcome",
    "SearchSnapshot",
    "SearchState",
    "Setlist",
    "SetlistArtist",
    "SetlistConfidence",
    "SetlistData",
    "SetlistSet",
    "SetlistSets",
    "SetlistSong",
    "Tour",
    "Venue",
]
