"""Concert Recap FastAPI application entry point.

Wires together all providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, and exposes health and index endpoints.

Also provides the standalone ``build_services`` helper for CLI or scripting
usage outside the web server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI, Request

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.api.schemas import HealthResponse
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.artist_search_provider import IArtistSearchProvider
from src.models.playlist import Platform
from src.providers.artist_search.apple_music_provider import AppleMusicArtistProvider
from src.providers.artist_search.curated_provider import CuratedArtistProvider
from src.providers.artist_search.musicbrainz_provider import MusicBrainzArtistProvider
from src.providers.artist_search.setlistfm_provider import SetlistFmArtistProvider
from src.providers.auth.apple_developer_token import AppleDeveloperTokenSigner
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.playlist.apple_music_provider import AppleMusicPlaylistProvider
from src.providers.playlist.spotify_provider import SpotifyPlaylistProvider
from src.providers.setlist.setlistfm_provider import SetlistFmSetlistProvider
from src.services.artist_search_service import ArtistSearchService
from src.services.playlist_service import PlaylistService
from src.services.setlist_service import SetlistService
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, app_config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    app_config = app_config or {}
    setlist_config = app_config.get("setlist") or {}
    search_config = app_config.get("search") or {}
    cache_config = app_config.get("cache") or {}
    s = app_settings

    # Config sections come from load_config(), which has already applied
    # env overrides; Settings only fills keys a hand-built dict leaves out.
    cache_max_size = cache_config.get("max_size", s.cache_max_size)
    search_ttl = cache_config.get("search_ttl", s.search_cache_ttl)
    setlist_ttl = cache_config.get("setlist_ttl", s.setlist_cache_ttl)
    suggestion_max_results = search_config.get(
        "suggestion_max_results", s.search_suggestion_max_results
    )

    # -- Shared resources --
    http_client = httpx.AsyncClient(
        timeout=(app_config.get("http") or {}).get("timeout", s.http_timeout)
    )
    token_signer = AppleDeveloperTokenSigner(settings=app_settings)

    # -- Artist search sources --
    # Network sources in trust order: the setlist-backed source first, so
    # its records win name collisions against unverified ones.
    curated = CuratedArtistProvider(
        relevance_threshold=search_config.get(
            "relevance_threshold", s.search_relevance_threshold
        ),
        max_results=suggestion_max_results,
    )
    musicbrainz = MusicBrainzArtistProvider(
        settings=app_settings,
        requests_per_second=(app_config.get("rate_limits") or {}).get(
            "musicbrainz", s.musicbrainz_requests_per_second
        ),
    )
    network_sources: list[IArtistSearchProvider] = [
        SetlistFmArtistProvider(http_client=http_client, settings=app_settings),
        musicbrainz,
        AppleMusicArtistProvider(
            http_client=http_client, settings=app_settings, token_signer=token_signer
        ),
    ]

    # -- Services --
    # Separate caches: clearing search suggestions must not drop setlists.
    artist_search = ArtistSearchService(
        curated=curated,
        network_providers=network_sources,
        cache=MemoryCacheProvider(max_size=cache_max_size, ttl=search_ttl),
        cache_ttl=search_ttl,
        local_query_length=search_config.get("local_query_length", s.search_local_query_length),
        max_results=suggestion_max_results,
        verified_max_results=search_config.get("api_max_results", s.search_api_max_results),
        min_query_length=search_config.get("min_query_length", s.search_min_query_length),
        debounce_seconds=search_config.get("debounce_seconds", s.search_debounce_seconds),
    )
    setlist_provider = SetlistFmSetlistProvider(http_client=http_client, settings=app_settings)
    setlist_service = SetlistService(
        provider=setlist_provider,
        cache=MemoryCacheProvider(max_size=cache_max_size, ttl=setlist_ttl),
        cache_ttl=setlist_ttl,
        artist_resolver=musicbrainz,
        average_show_count=setlist_config.get("average_show_count", 20),
        max_songs=setlist_config.get("max_songs", 20),
    )
    playlist_service = PlaylistService(
        providers={
            Platform.SPOTIFY: SpotifyPlaylistProvider(
                http_client=http_client, settings=app_settings
            ),
            Platform.APPLE_MUSIC: AppleMusicPlaylistProvider(
                http_client=http_client, settings=app_settings, token_signer=token_signer
            ),
        }
    )

    # -- Provider registry for health endpoint --
    provider_registry: dict[str, bool] = {
        **artist_search.source_status(),
        f"setlist:{setlist_provider.get_provider_name()}": setlist_provider.is_available(),
        "apple_music_token": token_signer.is_available(),
    }
    for platform in Platform:
        provider_registry[f"playlist:{platform.value}"] = (
            platform in playlist_service.available_platforms()
        )

    return {
        "http_client": http_client,
        "apple_token_signer": token_signer,
        "artist_search": artist_search,
        "setlist_service": setlist_service,
        "playlist_service": playlist_service,
        "provider_registry": provider_registry,
    }


def build_services(custom_settings: Settings | None = None) -> dict[str, Any]:
    """Construct all services outside the web server (CLI / scripting).

    The caller owns the returned ``http_client`` and must close it.
    """
    s = custom_settings or settings
    return _build_all(s, load_config(settings=s))


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=settings.app_env,
        providers=sum(components["provider_registry"].values()),
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="Concert Recap API",
        version=_VERSION,
        description=(
            "Find an artist, see what they played at recent shows or what they "
            "usually play, and turn a setlist into a Spotify or Apple Music playlist."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.get_cors_origins())

    # -- API routes --
    application.include_router(api_router)

    @application.get("/", include_in_schema=False)
    async def index() -> dict[str, str]:
        return {"service": "concert-recap", "version": _VERSION, "docs": "/docs"}

    @application.get("/health", response_model=HealthResponse)
    async def health(request: Request) -> HealthResponse:
        return HealthResponse(
            status="ok",
            version=_VERSION,
            providers=getattr(request.app.state, "provider_registry", {}),
        )

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
