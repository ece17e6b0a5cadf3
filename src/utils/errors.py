"""Custom exception hierarchy for Concert Recap.

All application exceptions inherit from :class:`ConcertRecapError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "spotify", "setlistfm", "apple_music") caused the
failure.

    ConcertRecapError  (base -- catch-all for any Concert Recap error)
    +-- InvalidRequestError      (missing query / token / setlist -> 400)
    +-- AuthorizationError       (platform rejected the user token -> 401)
    +-- RateLimitError           (provider rate-limit exceeded -> 429)
    +-- ProviderUnavailableError (external service down / unconfigured -> 503)
    +-- SetlistError             (setlist fetch failed -> 502)
    +-- PlaylistCreationError    (playlist could not be created -> 502)
    +-- ConfigurationError       (startup / missing config -> 500)

Artist search adapters never raise these: a failed search source logs and
contributes an empty list.  The hierarchy is for the setlist and playlist
flows, where the caller needs to tell the user what went wrong.
"""


class ConcertRecapError(Exception):
    """Base exception for all Concert Recap errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[spotify] Access token expired``.

    ``status_code`` is the HTTP status the API middleware responds with.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Request errors
# ---------------------------------------------------------------------------


class InvalidRequestError(ConcertRecapError):
    """Raised before any network call when required input is missing."""

    status_code = 400

    def __init__(
        self,
        message: str = "Invalid request",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AuthorizationError(ConcertRecapError):
    """Raised when a streaming platform rejects the user's token.

    Not retried: the user has to log in to the platform again.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Authorization expired. Please log in again.",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------


class RateLimitError(ConcertRecapError):
    """Raised when an API rate limit is exceeded."""

    status_code = 429

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderUnavailableError(ConcertRecapError):
    """Raised when an external service is unreachable or not configured."""

    status_code = 503

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class SetlistError(ConcertRecapError):
    """Raised when setlists cannot be fetched from Setlist.fm."""

    status_code = 502

    def __init__(
        self,
        message: str = "Failed to fetch setlists",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PlaylistCreationError(ConcertRecapError):
    """Raised when a playlist cannot be created on a streaming platform."""

    status_code = 502

    def __init__(
        self,
        message: str = "Failed to create playlist",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigurationError(ConcertRecapError):
    """Raised when configuration is invalid or missing."""

    status_code = 500

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
