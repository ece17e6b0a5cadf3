"""FastAPI API routes for Concert Recap.

Provides REST endpoints for artist search, setlist lookup, playlist
creation, and the Apple Music developer token.  Service dependencies are
resolved from ``app.state`` via FastAPI's ``Depends`` using the
``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api                                  GET     Route listing
# /api/artist/search?q=                 GET     Setlist-backed artist search
# /api/artists/search?q=&limit=         GET     Hybrid autocomplete feed
# /api/setlist/search?artist=&limit=    GET     Recent shows for an artist
# /api/setlist/average?artist=&mbid=    GET     Average setlist from recent shows
# /api/playlist/create                  POST    Setlist → Spotify playlist
# /api/apple-music/playlist/create      POST    Setlist → Apple Music playlist
# /api/apple-music/developer-token      GET     Signed MusicKit token
# /api/apple-music/status               GET     Is Apple Music configured?
#
# Application errors are raised as ConcertRecapError subclasses and turned
# into JSON by ErrorHandlingMiddleware; routes never build error bodies.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request

from src.api.schemas import (
    AppleMusicStatusResponse,
    ApplePlaylistCreateRequest,
    ArtistSearchResponse,
    ArtistSummary,
    DeveloperTokenResponse,
    HybridArtistResult,
    PlaylistCreateRequest,
)
from src.models.playlist import Platform, PlaylistResult
from src.models.setlist import Setlist, SetlistData
from src.providers.auth.apple_developer_token import AppleDeveloperTokenSigner
from src.services.artist_search_service import ArtistSearchService
from src.services.playlist_service import PlaylistService
from src.services.setlist_service import SetlistService
from src.utils.errors import InvalidRequestError, ProviderUnavailableError
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_artist_search(request: Request) -> ArtistSearchService:
    """Return the hybrid artist search service from application state."""
    return request.app.state.artist_search


def _get_setlist_service(request: Request) -> SetlistService:
    return request.app.state.setlist_service


def _get_playlist_service(request: Request) -> PlaylistService:
    return request.app.state.playlist_service


def _get_token_signer(request: Request) -> AppleDeveloperTokenSigner:
    return request.app.state.apple_token_signer


ArtistSearchDep = Annotated[ArtistSearchService, Depends(_get_artist_search)]
SetlistServiceDep = Annotated[SetlistService, Depends(_get_setlist_service)]
PlaylistServiceDep = Annotated[PlaylistService, Depends(_get_playlist_service)]
TokenSignerDep = Annotated[AppleDeveloperTokenSigner, Depends(_get_token_signer)]


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


@router.get("")
async def list_routes(request: Request) -> dict[str, list[str]]:
    """List every API route, for humans poking at the server."""
    # Included routers show up in app.routes without a path of their own.
    paths = sorted(
        path
        for path in {getattr(route, "path", None) for route in request.app.routes}
        if path and path.startswith("/api/")
    )
    return {"endpoints": paths}


# ---------------------------------------------------------------------------
# Artist search
# ---------------------------------------------------------------------------


@router.get("/artist/search", response_model=list[ArtistSummary])
async def search_artists(
    search: ArtistSearchDep,
    q: Annotated[str | None, Query()] = None,
) -> list[ArtistSummary]:
    """Search the setlist-backed sources for artists with setlist data."""
    query = (q or "").strip()
    if not query:
        raise InvalidRequestError("Query parameter 'q' is required")

    records = await search.search_verified(query)
    return [ArtistSummary.from_record(record) for record in records]


@router.get("/artists/search", response_model=ArtistSearchResponse)
async def hybrid_search(
    search: ArtistSearchDep,
    q: Annotated[str, Query()] = "",
    limit: Annotated[int | None, Query(ge=1, le=50)] = None,
) -> ArtistSearchResponse:
    """Autocomplete feed: curated for short prefixes, merged sources otherwise.

    An empty query returns the recently played list.
    """
    if not q.strip():
        recent = search.recently_played()
        return ArtistSearchResponse(
            query="",
            source="recent",
            artists=[HybridArtistResult.from_record(r) for r in recent],
        )

    result = await search.search(q, max_results=limit)
    return ArtistSearchResponse(
        query=result.query,
        source=result.origin.value,
        artists=[HybridArtistResult.from_record(r) for r in result.artists],
        has_more=result.has_more,
    )


# ---------------------------------------------------------------------------
# Setlists
# ---------------------------------------------------------------------------


@router.get(
    "/setlist/search",
    response_model=list[Setlist],
    response_model_exclude_none=True,
)
async def search_setlists(
    setlists: SetlistServiceDep,
    artist: Annotated[str, Query()] = "",
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
) -> list[Setlist]:
    return await setlists.search_setlists(artist, limit=limit)


@router.get("/setlist/average", response_model=SetlistData)
async def average_setlist(
    setlists: SetlistServiceDep,
    artist: Annotated[str, Query()] = "",
    mbid: Annotated[str | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1, le=60)] = None,
) -> SetlistData:
    """What the artist is likely to play, from their recent shows."""
    return await setlists.build_average_setlist(artist, mbid=mbid or None, limit=limit)


# ---------------------------------------------------------------------------
# Playlists
# ---------------------------------------------------------------------------


@router.post("/playlist/create", response_model=PlaylistResult)
async def create_spotify_playlist(
    body: PlaylistCreateRequest,
    playlists: PlaylistServiceDep,
) -> PlaylistResult:
    return await playlists.create_from_setlist(Platform.SPOTIFY, body.access_token, body.setlist)


@router.post("/apple-music/playlist/create", response_model=PlaylistResult)
async def create_apple_music_playlist(
    body: ApplePlaylistCreateRequest,
    playlists: PlaylistServiceDep,
) -> PlaylistResult:
    return await playlists.create_from_setlist(
        Platform.APPLE_MUSIC, body.user_token, body.setlist
    )


# ---------------------------------------------------------------------------
# Apple Music token
# ---------------------------------------------------------------------------


@router.get("/apple-music/developer-token", response_model=DeveloperTokenResponse)
async def apple_developer_token(signer: TokenSignerDep) -> DeveloperTokenResponse:
    """Hand the browser a MusicKit developer token.

    The private key never leaves the server; only the signed token does.
    """
    if not signer.is_available():
        raise ProviderUnavailableError(
            message="Apple Music is not configured", provider_name="apple_music"
        )
    return DeveloperTokenResponse(developer_token=signer.get_token())


@router.get("/apple-music/status", response_model=AppleMusicStatusResponse)
async def apple_music_status(signer: TokenSignerDep) -> AppleMusicStatusResponse:
    return AppleMusicStatusResponse(available=signer.is_available())
