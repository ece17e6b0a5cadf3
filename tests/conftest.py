"""Shared pytest fixtures for the Concert Recap test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from src.config.settings import Settings
from src.models.artist import ArtistRecord, ArtistSource
from src.models.setlist import Setlist


def make_settings(**overrides: Any) -> Settings:
    """Build Settings without reading the developer's .env file."""
    return Settings(_env_file=None, **overrides)


def make_record(
    name: str,
    source: ArtistSource = ArtistSource.MUSICBRAINZ,
    *,
    verified: bool = False,
    score: float | None = None,
    identifier: str | None = None,
) -> ArtistRecord:
    return ArtistRecord(
        identifier=identifier or f"{source.value}-{name.lower().replace(' ', '-')}",
        display_name=name,
        sort_name=name,
        source=source,
        verified=verified,
        relevance_score=score,
    )


def mock_response(status_code: int = 200, json_data: Any = None) -> MagicMock:
    """A stand-in for ``httpx.Response`` with the attributes providers read."""
    response = MagicMock()
    response.status_code = status_code
    response.json = MagicMock(return_value=json_data if json_data is not None else {})
    response.content = b"{}" if json_data is not None else b""
    response.raise_for_status = MagicMock()
    return response


def setlist_payload(
    songs: list[list[str]] | list[str],
    *,
    setlist_id: str = "63de4613",
    artist: str = "Radiohead",
    mbid: str = "a74b1b7f-71a5-4011-9441-d0b5e4122711",
    event_date: str = "14-07-2024",
    venue: str = "Madison Square Garden",
    city: str = "New York",
) -> dict[str, Any]:
    """Setlist.fm JSON for one show.  *songs* is one list per set."""
    sets = songs if songs and isinstance(songs[0], list) else [songs]
    return {
        "id": setlist_id,
        "eventDate": event_date,
        "artist": {"mbid": mbid, "name": artist, "sortName": artist},
        "venue": {
            "id": "venue-1",
            "name": venue,
            "city": {"name": city, "state": "New York", "country": {"code": "US", "name": "USA"}},
        },
        "sets": {"set": [{"song": [{"name": name} for name in set_songs]} for set_songs in sets]},
        "url": f"https://www.setlist.fm/setlist/{setlist_id}.html",
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def settings() -> Settings:
    return make_settings(
        setlistfm_api_key="test-setlistfm-key",
        musicbrainz_app_name="concert-recap-test",
        musicbrainz_contact="test@example.com",
    )


@pytest.fixture
def sample_setlist() -> Setlist:
    return Setlist.model_validate(
        setlist_payload([["15 Step", "Airbag", "Creep"], ["Karma Police"]])
    )
