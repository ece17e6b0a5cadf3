"""Setlist models.

Two groups live here:

- **Wire models** (``Setlist`` and its nested parts) mirror the Setlist.fm
  JSON payload.  Field aliases keep the camelCase names, so a setlist
  fetched from ``/api/setlist/search`` can be posted straight back to
  ``/api/playlist/create`` unchanged.  Unknown keys are kept
  (``extra="allow"``) and round-trip untouched.

- **SetlistData** is the "average setlist" derived from many shows: each
  song with how often it was played and a coarse confidence tier.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="allow")


# ---------------------------------------------------------------------------
# Setlist.fm wire models
# ---------------------------------------------------------------------------


class SetlistSong(BaseModel):
    """A single song entry inside a set."""

    model_config = _WIRE_CONFIG

    name: str = ""
    tape: bool = False  # played from tape, not performed live
    info: str | None = None


class SetlistSet(BaseModel):
    """One set (main set, encore) of a show."""

    model_config = _WIRE_CONFIG

    name: str | None = None
    encore: int | None = None
    songs: list[SetlistSong] = Field(default_factory=list, alias="song")


class SetlistSets(BaseModel):
    model_config = _WIRE_CONFIG

    sets: list[SetlistSet] = Field(default_factory=list, alias="set")


class SetlistArtist(BaseModel):
    model_config = _WIRE_CONFIG

    name: str
    mbid: str | None = None
    sort_name: str | None = Field(default=None, alias="sortName")
    disambiguation: str | None = None


class Country(BaseModel):
    model_config = _WIRE_CONFIG

    code: str | None = None
    name: str | None = None


class City(BaseModel):
    model_config = _WIRE_CONFIG

    name: str = ""
    state: str | None = None
    country: Country | None = None


class Venue(BaseModel):
    model_config = _WIRE_CONFIG

    id: str | None = None
    name: str = ""
    city: City = Field(default_factory=City)


class Tour(BaseModel):
    model_config = _WIRE_CONFIG

    name: str


class Setlist(BaseModel):
    """A single concert as reported by Setlist.fm.

    ``event_date`` stays in Setlist.fm's ``dd-MM-yyyy`` text form; it is
    only ever displayed and embedded in playlist names.
    """

    model_config = _WIRE_CONFIG

    id: str | None = None
    event_date: str = Field(default="", alias="eventDate")
    artist: SetlistArtist
    venue: Venue = Field(default_factory=Venue)
    sets: SetlistSets = Field(default_factory=SetlistSets)
    tour: Tour | None = None
    url: str | None = None

    def song_names(self) -> list[str]:
        """Return every named song across all sets, in performance order."""
        return [
            song.name
            for setlist_set in self.sets.sets
            for song in setlist_set.songs
            if song.name.strip()
        ]


# ---------------------------------------------------------------------------
# Average setlist
# ---------------------------------------------------------------------------


class SetlistConfidence(str, Enum):  # noqa: UP042
    """How much to trust an average setlist, by number of shows it is based on."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AverageSetlistSong(BaseModel):
    """One song of an average setlist."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    frequency: int = Field(ge=0, le=100)  # percent of shows the song was played in
    played_in: str = Field(alias="playedIn")  # e.g. "17/20 shows"
    duration: str | None = None


class SetlistData(BaseModel):
    """A typical setlist for an artist derived from recent shows."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    artist_name: str = Field(alias="artistName")
    songs: list[AverageSetlistSong] = Field(default_factory=list)
    context: str = ""
    confidence: SetlistConfidence = SetlistConfidence.LOW
    show_count: int = Field(default=0, alias="showCount")
