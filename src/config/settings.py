"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from TWO sources (in priority order):
#
#   1. **Environment variables**, e.g. SETLISTFM_API_KEY=abc123
#      (highest priority, always wins)
#   2. **.env file**: key=value lines in the project root .env file
#      (used for local development)
#
# Field name `setlistfm_api_key` maps to env var `SETLISTFM_API_KEY`.
# Empty strings mean "not configured": providers check for them in
# is_available() and the app factory skips or degrades accordingly.
#
# The .env file is never committed.  Use .env.example as the template.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Concert Recap application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === Setlist.fm ===
    setlistfm_api_key: str = ""
    setlistfm_base_url: str = "https://api.setlist.fm/rest/1.0"

    # === Spotify ===
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_redirect_uri: str = ""
    spotify_api_base_url: str = "https://api.spotify.com/v1"

    # === Apple Music (MusicKit) ===
    apple_music_team_id: str = ""
    apple_music_key_id: str = ""
    apple_music_private_key: str = ""  # PEM contents; wins over the path below
    apple_music_private_key_path: str = ""
    apple_music_api_base_url: str = "https://api.music.apple.com/v1"
    apple_music_storefront: str = "us"

    # === MusicBrainz ===
    musicbrainz_app_name: str = "concert-recap"
    musicbrainz_app_version: str = "0.1.0"
    musicbrainz_contact: str = ""
    musicbrainz_requests_per_second: float = 1.0

    # === Search tuning ===
    search_min_query_length: int = 2
    search_local_query_length: int = 3
    search_debounce_seconds: float = 0.3
    search_relevance_threshold: float = 0.3
    search_api_max_results: int = 10
    search_suggestion_max_results: int = 8

    # === Caching (seconds) ===
    search_cache_ttl: int = 300
    setlist_cache_ttl: int = 3600
    cache_max_size: int = 1000

    # === HTTP ===
    http_timeout: float = 10.0

    # === Affiliate / ticketing ===
    affiliate_tracking_id: str = ""

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = ""  # comma-separated; empty allows all origins

    def get_cors_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_available_platforms(self) -> list[str]:
        """Return the playlist platforms the server can talk to.

        Spotify only needs a user access token supplied per request, so it is
        always listed.  Apple Music needs signing credentials on the server.
        """
        platforms = ["spotify"]
        if self.apple_music_team_id and self.apple_music_key_id and (
            self.apple_music_private_key or self.apple_music_private_key_path
        ):
            platforms.append("apple_music")
        return platforms
