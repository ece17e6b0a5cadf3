"""Search orchestration models: the state machine vocabulary and its results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.models.artist import ArtistRecord


class SearchState(str, Enum):  # noqa: UP042
    """Lifecycle of one search-as-you-type session.

    ``IDLE -> DEBOUNCING -> IN_FLIGHT -> SETTLED``; a keystroke in any
    state goes back to ``DEBOUNCING``, selecting a suggestion goes to
    ``IDLE``.
    """

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    IN_FLIGHT = "in_flight"
    SETTLED = "settled"


class SearchOutcome(str, Enum):  # noqa: UP042
    """How a settled search ended."""

    SUCCESS = "success"
    EMPTY = "empty"
    ERROR = "error"


class ResultOrigin(str, Enum):  # noqa: UP042
    """Which path produced a result list."""

    NONE = "none"            # query too short, nothing searched
    CURATED = "curated"      # short query, curated list only
    HYBRID = "hybrid"        # merged network sources
    FALLBACK = "fallback"    # network came back empty, curated list used
    CACHE = "cache"


class ArtistSearchResult(BaseModel):
    """Ranked suggestions for one query."""

    model_config = ConfigDict(frozen=True)

    query: str
    origin: ResultOrigin
    artists: list[ArtistRecord] = Field(default_factory=list)
    has_more: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.artists


class SearchSnapshot(BaseModel):
    """Observable state of a search session at one instant."""

    model_config = ConfigDict(frozen=True)

    state: SearchState = SearchState.IDLE
    outcome: SearchOutcome | None = None
    query: str = ""
    suggestions: list[ArtistRecord] = Field(default_factory=list)
    selected: ArtistRecord | None = None
    error: str | None = None
