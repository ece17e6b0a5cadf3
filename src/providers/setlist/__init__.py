"""Setlist providers."""

from src.providers.setlist.setlistfm_provider import SetlistFmSetlistProvider

__all__ = ["SetlistFmSetlistProvider"]
