"""Artist search domain models.

``ArtistRecord`` is the single shape every search source is converted into
at its adapter boundary.  Provider field names (``sort-name``, ``ext:score``,
``attributes.name``) never travel past the adapter that parsed them.

Records are frozen: the merge stage builds new records with
``model_copy(update=...)`` instead of mutating what an adapter returned,
so a cached adapter result is never changed by a later merge.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ArtistSource(str, Enum):  # noqa: UP042
    """Where an :class:`ArtistRecord` came from."""

    CURATED = "curated"          # embedded hand-checked list
    MUSICBRAINZ = "musicbrainz"
    SETLISTFM = "setlistfm"      # the only network source that indexes setlists
    APPLE = "apple"


class ArtistRecord(BaseModel):
    """One artist candidate from one search source.

    ``verified`` means the artist is known to have setlist data (or has been
    hand-checked), so it is safe to offer for the setlist step.
    ``relevance_score`` is the source's own confidence in [0, 1] when it
    reports one.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    display_name: str
    sort_name: str = ""
    disambiguation: str | None = None
    source: ArtistSource
    verified: bool = False
    relevance_score: float | None = Field(default=None, ge=0.0, le=1.0)

    @property
    def effective_score(self) -> float:
        """Relevance score used for ranking; a missing score ranks as 0."""
        return self.relevance_score if self.relevance_score is not None else 0.0


class MatchConfidence(str, Enum):  # noqa: UP042
    """How sure a name-to-identifier mapping is.

    Thresholds on the upstream 0-100 score:
        HIGH:   >= 95
        MEDIUM: >= 80
        LOW:    below 80
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: float) -> MatchConfidence:
        """Map a 0-1 relevance score to a confidence tier."""
        if score >= 0.95:
            return cls.HIGH
        if score >= 0.80:
            return cls.MEDIUM
        return cls.LOW


class ArtistMatch(BaseModel):
    """The best candidate found for a typed artist name."""

    model_config = ConfigDict(frozen=True)

    artist: ArtistRecord
    confidence: MatchConfidence
    candidates: list[ArtistRecord] = Field(default_factory=list)
