"""Apple Music developer token signing.

MusicKit requires an ES256 JSON Web Token signed with the team's private
key, with the key identifier in the ``kid`` header.  Tokens are valid for
about six months; a signed token is reused until five minutes before it
expires.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

import jwt

from src.config.settings import Settings
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

TOKEN_LIFETIME_SECONDS = 15_778_800  # ~6 months, the MusicKit maximum
_REFRESH_MARGIN_SECONDS = 300

logger = get_logger(__name__)


class AppleDeveloperTokenSigner:
    """Sign and cache Apple Music developer tokens.

    Parameters
    ----------
    settings:
        Supplies team id, key id and the private key (inline PEM or a path).
    clock:
        Returns the current Unix time; injectable for tests.
    """

    def __init__(self, settings: Settings, clock: Callable[[], float] = time.time) -> None:
        self._team_id = settings.apple_music_team_id
        self._key_id = settings.apple_music_key_id
        self._inline_key = settings.apple_music_private_key
        self._key_path = settings.apple_music_private_key_path
        self._clock = clock
        self._token: str | None = None
        self._expires_at: float = 0.0
        self._key_error: str | None = None
        self._private_key = self._load_private_key()

    def is_available(self) -> bool:
        """Return ``True`` when team id, key id and a private key are configured."""
        return bool(self._team_id and self._key_id and (self._inline_key or self._key_path))

    def _load_private_key(self) -> str:
        """Read the key once, at construction, so signing never touches disk."""
        if self._inline_key:
            # .env files cannot hold multi-line values; accept escaped newlines.
            return self._inline_key.replace("\\n", "\n")
        if not self._key_path:
            return ""
        try:
            return Path(self._key_path).read_text(encoding="utf-8")
        except OSError as exc:
            self._key_error = f"Failed to read Apple Music private key: {exc}"
            logger.warning("apple_private_key_unreadable", path=self._key_path, error=str(exc))
            return ""

    def get_token(self) -> str:
        """Return a valid developer token, signing a new one when needed.

        Raises
        ------
        ConfigurationError
            If credentials are missing or the key cannot be used for ES256.
        """
        if not self.is_available():
            raise ConfigurationError(
                message="Apple Music credentials missing. Set APPLE_MUSIC_TEAM_ID, "
                "APPLE_MUSIC_KEY_ID and APPLE_MUSIC_PRIVATE_KEY(_PATH).",
                provider_name="apple_music",
            )
        if self._key_error is not None:
            raise ConfigurationError(message=self._key_error, provider_name="apple_music")

        now = int(self._clock())
        if self._token and now < self._expires_at - _REFRESH_MARGIN_SECONDS:
            return self._token

        payload = {"iss": self._team_id, "iat": now, "exp": now + TOKEN_LIFETIME_SECONDS}
        try:
            token = jwt.encode(
                payload,
                self._private_key,
                algorithm="ES256",
                headers={"kid": self._key_id},
            )
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            raise ConfigurationError(
                message=f"Failed to sign Apple Music developer token: {exc}",
                provider_name="apple_music",
            ) from exc

        self._token = token
        self._expires_at = payload["exp"]
        logger.info("apple_developer_token_signed", expires_at=self._expires_at)
        return token
