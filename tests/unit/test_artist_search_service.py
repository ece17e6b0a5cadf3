"""Unit tests for ArtistSearchService routing, merging and caching."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.artist_search_provider import IArtistSearchProvider
from src.models.artist import ArtistRecord, ArtistSource
from src.models.search import ResultOrigin
from src.providers.artist_search.curated_provider import CuratedArtistProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.artist_search_service import ArtistSearchService
from tests.conftest import make_record


def _source(
    name: str,
    results: list[ArtistRecord] | Exception,
    *,
    verified: bool = False,
    available: bool = True,
) -> MagicMock:
    provider = MagicMock(spec=IArtistSearchProvider)
    provider.get_provider_name.return_value = name
    provider.is_available.return_value = available
    provider.is_verified_source.return_value = verified
    if isinstance(results, Exception):
        provider.search = AsyncMock(side_effect=results)
    else:
        provider.search = AsyncMock(return_value=results)
    return provider


def _service(*sources: MagicMock, max_results: int = 8) -> ArtistSearchService:
    return ArtistSearchService(
        curated=CuratedArtistProvider(),
        network_providers=list(sources),
        cache=MemoryCacheProvider(),
        max_results=max_results,
    )


class TestQueryRouting:
    @pytest.mark.asyncio
    async def test_too_short_searches_nothing(self) -> None:
        network = _source("musicbrainz", [make_record("Adele")])
        result = await _service(network).search("a")

        assert result.origin == ResultOrigin.NONE
        assert result.is_empty
        network.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_query(self) -> None:
        result = await _service().search("   ")
        assert result.origin == ResultOrigin.NONE

    @pytest.mark.asyncio
    async def test_two_characters_use_curated_only(self) -> None:
        network = _source("musicbrainz", [make_record("Taylor Made")])
        result = await _service(network).search("ta")

        assert result.origin == ResultOrigin.CURATED
        assert "Taylor Swift" in [r.display_name for r in result.artists]
        network.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_without_network_falls_back_to_curated(self) -> None:
        result = await _service().search("tay")

        assert result.origin == ResultOrigin.FALLBACK
        assert result.artists[0].display_name == "Taylor Swift"
        assert result.artists[0].effective_score > 0.3

    @pytest.mark.asyncio
    async def test_unavailable_sources_skipped(self) -> None:
        offline = _source("apple_music", [make_record("Taylor Swift")], available=False)
        result = await _service(offline).search("tay")

        offline.search.assert_not_called()
        assert result.origin == ResultOrigin.FALLBACK


class TestHybridSearch:
    @pytest.mark.asyncio
    async def test_merges_sources_verified_first(self) -> None:
        setlistfm = _source(
            "setlistfm",
            [make_record("Drake", ArtistSource.SETLISTFM, verified=True, score=0.8)],
            verified=True,
        )
        musicbrainz = _source(
            "musicbrainz",
            [
                make_record("Drake", score=1.0),
                make_record("Drake Bell", score=0.9),
            ],
        )

        result = await _service(setlistfm, musicbrainz).search("drake")

        assert result.origin == ResultOrigin.HYBRID
        assert [(r.display_name, r.verified) for r in result.artists] == [
            ("Drake", True),
            ("Drake Bell", False),
        ]
        assert result.has_more is False

    @pytest.mark.asyncio
    async def test_failed_source_contributes_nothing(self) -> None:
        broken = _source("setlistfm", RuntimeError("boom"), verified=True)
        working = _source("musicbrainz", [make_record("Coldplay", score=1.0)])

        result = await _service(broken, working).search("coldplay")

        assert [r.display_name for r in result.artists] == ["Coldplay"]

    @pytest.mark.asyncio
    async def test_all_sources_empty_falls_back_without_error(self) -> None:
        result = await _service(
            _source("setlistfm", [], verified=True),
            _source("musicbrainz", []),
            _source("apple_music", []),
        ).search("zzzznotanartist")

        assert result.origin == ResultOrigin.FALLBACK
        assert result.artists == []

    @pytest.mark.asyncio
    async def test_has_more_and_limit(self) -> None:
        records = [make_record(f"Band {i}", score=0.5) for i in range(5)]
        result = await _service(_source("musicbrainz", records), max_results=3).search("band")

        assert len(result.artists) == 3
        assert result.has_more is True

    @pytest.mark.asyncio
    async def test_explicit_max_results(self) -> None:
        records = [make_record(f"Band {i}", score=0.5) for i in range(5)]
        result = await _service(_source("musicbrainz", records)).search("band", max_results=5)

        assert len(result.artists) == 5
        assert result.has_more is False

    @pytest.mark.asyncio
    async def test_zero_max_results_is_respected(self) -> None:
        records = [make_record(f"Band {i}", score=0.5) for i in range(3)]
        result = await _service(_source("musicbrainz", records)).search("band", max_results=0)

        assert result.artists == []
        assert result.has_more is True

    @pytest.mark.asyncio
    async def test_result_cached_per_normalized_query(self) -> None:
        network = _source("musicbrainz", [make_record("The Strokes", score=1.0)])
        service = _service(network)

        first = await service.search("The Strokes")
        second = await service.search("strokes")

        assert first.origin == ResultOrigin.HYBRID
        assert second.origin == ResultOrigin.CACHE
        assert second.query == "strokes"
        assert second.artists == first.artists
        network.search.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fallback_not_cached(self) -> None:
        network = _source("musicbrainz", [])
        service = _service(network)

        await service.search("queen")
        network.search.return_value = [make_record("Queen", score=1.0)]
        result = await service.search("queen")

        assert result.origin == ResultOrigin.HYBRID
        assert network.search.await_count == 2

    @pytest.mark.asyncio
    async def test_clear_caches(self) -> None:
        network = _source("musicbrainz", [make_record("Queen", score=1.0)])
        service = _service(network)

        await service.search("queen")
        await service.clear_caches()
        await service.search("queen")

        assert network.search.await_count == 2
        network.clear_cache.assert_called()


class TestVerifiedSearch:
    @pytest.mark.asyncio
    async def test_only_verified_sources_queried(self) -> None:
        setlistfm = _source(
            "setlistfm",
            [make_record("Radiohead", ArtistSource.SETLISTFM, verified=True)],
            verified=True,
        )
        musicbrainz = _source("musicbrainz", [make_record("Radiohead")])

        results = await _service(setlistfm, musicbrainz).search_verified("radiohead")

        assert [r.source for r in results] == [ArtistSource.SETLISTFM]
        musicbrainz.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_limit(self) -> None:
        records = [make_record(f"Band {i}", ArtistSource.SETLISTFM, verified=True) for i in range(12)]
        setlistfm = _source("setlistfm", records, verified=True)

        assert len(await _service(setlistfm).search_verified("band", limit=10)) == 10

    @pytest.mark.asyncio
    async def test_zero_limit_is_respected(self) -> None:
        setlistfm = _source(
            "setlistfm",
            [make_record("Radiohead", ArtistSource.SETLISTFM, verified=True)],
            verified=True,
        )

        assert await _service(setlistfm).search_verified("radiohead", limit=0) == []


class TestSession:
    @pytest.mark.asyncio
    async def test_open_session_searches_through_service(self) -> None:
        network = _source("musicbrainz", [make_record("Radiohead", score=1.0)])
        service = ArtistSearchService(
            curated=CuratedArtistProvider(),
            network_providers=[network],
            cache=MemoryCacheProvider(),
            debounce_seconds=0,
        )

        session = service.open_session()
        session.on_input("radiohead")
        snapshot = await session.wait_until_settled()

        assert [a.display_name for a in snapshot.suggestions] == ["Radiohead"]
        network.search.assert_awaited_once_with("radiohead")

    @pytest.mark.asyncio
    async def test_custom_min_query_length(self) -> None:
        network = _source("musicbrainz", [make_record("U2", score=1.0)])
        service = ArtistSearchService(
            curated=CuratedArtistProvider(),
            network_providers=[network],
            cache=MemoryCacheProvider(),
            min_query_length=4,
        )

        result = await service.search("abc")

        assert result.origin == ResultOrigin.NONE
        network.search.assert_not_called()


class TestStatus:
    def test_source_status(self) -> None:
        service = _service(
            _source("setlistfm", [], available=False),
            _source("musicbrainz", []),
        )
        assert service.source_status() == {
            "curated": True,
            "setlistfm": False,
            "musicbrainz": True,
        }

    def test_recently_played(self) -> None:
        assert _service().recently_played()[0].display_name == "Taylor Swift"
