"""Pydantic request/response schemas for the Concert Recap API.

Defines the public JSON contract of every REST endpoint: artist search,
setlist lookup, playlist creation, the Apple Music token, and health.

# ─── WIRE NAMING ──────────────────────────────────────────────────────
#
# The browser client speaks camelCase (``sortName``, ``accessToken``,
# ``hasMore``).  Schemas keep snake_case attributes in Python and map
# them with ``Field(alias=...)``; ``populate_by_name`` lets tests and
# services build them with either name.  Routes return these models with
# ``response_model_by_alias`` left at its default (True), so the aliases
# are what goes over the wire.
#
# Convention: request schemas end with "Request", response schemas end
# with "Response".
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.artist import ArtistRecord
from src.models.setlist import Setlist

_CAMEL = ConfigDict(populate_by_name=True)


class ArtistSummary(BaseModel):
    """One artist as shown in the autocomplete dropdown."""

    model_config = _CAMEL

    id: str
    name: str
    disambiguation: str | None = None
    sort_name: str = Field(default="", alias="sortName")

    @classmethod
    def from_record(cls, record: ArtistRecord) -> ArtistSummary:
        return cls(
            id=record.identifier,
            name=record.display_name,
            disambiguation=record.disambiguation,
            sort_name=record.sort_name or record.display_name,
        )


class HybridArtistResult(ArtistSummary):
    """An artist from the hybrid search, with provenance."""

    source: str
    verified: bool = False
    score: float | None = None

    @classmethod
    def from_record(cls, record: ArtistRecord) -> HybridArtistResult:
        return cls(
            id=record.identifier,
            name=record.display_name,
            disambiguation=record.disambiguation,
            sort_name=record.sort_name or record.display_name,
            source=record.source.value,
            verified=record.verified,
            score=record.relevance_score,
        )


class ArtistSearchResponse(BaseModel):
    """Hybrid search result for the autocomplete box."""

    model_config = _CAMEL

    query: str
    source: str
    artists: list[HybridArtistResult] = Field(default_factory=list)
    has_more: bool = Field(default=False, alias="hasMore")


class PlaylistCreateRequest(BaseModel):
    """Create a Spotify playlist from a setlist fetched earlier."""

    model_config = _CAMEL

    access_token: str | None = Field(default=None, alias="accessToken")
    setlist: Setlist | None = None


class ApplePlaylistCreateRequest(BaseModel):
    """Create an Apple Music library playlist from a setlist."""

    model_config = _CAMEL

    user_token: str | None = Field(default=None, alias="userToken")
    setlist: Setlist | None = None


class DeveloperTokenResponse(BaseModel):
    """Signed MusicKit developer token."""

    model_config = _CAMEL

    developer_token: str = Field(alias="developerToken")


class AppleMusicStatusResponse(BaseModel):
    available: bool


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
