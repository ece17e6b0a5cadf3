"""Concert Recap API layer: routes, schemas, and middleware."""

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router
from src.api.schemas import (
    AppleMusicStatusResponse,
    ApplePlaylistCreateRequest,
    ArtistSearchResponse,
    ArtistSummary,
    DeveloperTokenResponse,
    ErrorResponse,
    HealthResponse,
    HybridArtistResult,
    PlaylistCreateRequest,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "AppleMusicStatusResponse",
    "ApplePlaylistCreateRequest",
    "ArtistSearchResponse",
    "ArtistSummary",
    "DeveloperTokenResponse",
    "ErrorResponse",
    "HealthResponse",
    "HybridArtistResult",
    "PlaylistCreateRequest",
]
