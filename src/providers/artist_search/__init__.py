"""Artist-search adapters.

Four implementations of IArtistSearchProvider, merged by the hybrid
search service in trust order:

    1. CuratedArtistProvider      : embedded hand-checked list, verified,
       no I/O.  Sole source for very short queries and the fallback.
    2. SetlistFmArtistProvider    : Setlist.fm REST API (SETLISTFM_API_KEY),
       verified: every hit has setlists.
    3. MusicBrainzArtistProvider  : musicbrainzngs, fuzzy Lucene query,
       1 req/sec.  Unverified.
    4. AppleMusicArtistProvider   : Apple Music catalog (developer token).
       Unverified.
"""

from src.providers.artist_search.apple_music_provider import AppleMusicArtistProvider
from src.providers.artist_search.curated_provider import CuratedArtistProvider
from src.providers.artist_search.musicbrainz_provider import MusicBrainzArtistProvider
from src.providers.artist_search.setlistfm_provider import SetlistFmArtistProvider

__all__ = [
    "AppleMusicArtistProvider",
    "CuratedArtistProvider",
    "MusicBrainzArtistProvider",
    "SetlistFmArtistProvider",
]
