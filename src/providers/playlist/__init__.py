"""Playlist providers, one per streaming platform."""

from src.providers.playlist.apple_music_provider import AppleMusicPlaylistProvider
from src.providers.playlist.spotify_provider import SpotifyPlaylistProvider

__all__ = ["AppleMusicPlaylistProvider", "SpotifyPlaylistProvider"]
