"""Utility modules for Concert Recap.

- **errors** -- exception hierarchy rooted at ConcertRecapError; each
  subclass carries the HTTP status the API answers with.
- **concurrency** -- semaphore-throttled gather and per-source fan-out.
- **logging** -- structlog setup: coloured console in development,
  JSON in production.
- **text_normalizer** -- artist-name normalization and tiered fuzzy scoring.
"""

from src.utils.concurrency import gather_by_source, throttled_gather
from src.utils.errors import (
    AuthorizationError,
    ConcertRecapError,
    ConfigurationError,
    InvalidRequestError,
    PlaylistCreationError,
    ProviderUnavailableError,
    RateLimitError,
    SetlistError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.text_normalizer import (
    fuzzy_search_artists,
    name_similarity,
    normalize_artist_name,
    score_artist_match,
)

__all__ = [
    "AuthorizationError",
    "ConcertRecapError",
    "ConfigurationError",
    "InvalidRequestError",
    "PlaylistCreationError",
    "ProviderUnavailableError",
    "RateLimitError",
    "SetlistError",
    "configure_logging",
    "fuzzy_search_artists",
    "gather_by_source",
    "get_logger",
    "name_similarity",
    "normalize_artist_name",
    "score_artist_match",
    "throttled_gather",
]
