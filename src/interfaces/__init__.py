"""Public interface definitions for all external service providers.

Every external API is reached through one of the abstract base classes in
this package.  Concrete adapters live in ``src/providers/`` and are
constructed once in ``src/main.py`` at startup, then handed to the
services that need them.  Tests inject mocks against the same interfaces.

    Interface              →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    IArtistSearchProvider  →  CuratedArtistProvider, MusicBrainzArtistProvider,
                              SetlistFmArtistProvider, AppleMusicArtistProvider
    ISetlistProvider       →  SetlistFmSetlistProvider
    IPlaylistProvider      →  SpotifyPlaylistProvider, AppleMusicPlaylistProvider
    ICacheProvider         →  MemoryCacheProvider
"""

from src.interfaces.artist_search_provider import MIN_QUERY_LENGTH, IArtistSearchProvider
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.playlist_provider import IPlaylistProvider
from src.interfaces.setlist_provider import ISetlistProvider

__all__ = [
    "MIN_QUERY_LENGTH",
    "IArtistSearchProvider",
    "ICacheProvider",
    "IPlaylistProvider",
    "ISetlistProvider",
]
