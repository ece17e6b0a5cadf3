"""Hybrid merge/rank stage for artist search results.

Different sources spell the same artist differently ("The Weeknd" vs
"Weeknd"), so records are deduplicated on the normalized display name,
not on identifiers (which are not shared across sources).

Collision rule
--------------
The first record seen for a key wins, with one exception: a verified
record replaces an unverified one, and the stored record keeps
``verified=True``.  Because ties otherwise go to whoever came first,
callers must pass the higher-trust source first.

Ranking
-------
Verified records sort before unverified ones; within each group, higher
relevance score first (a missing score counts as 0).  The sort is stable,
so equal records keep source order.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.models.artist import ArtistRecord
from src.utils.text_normalizer import normalize_artist_name


def _dedup_key(record: ArtistRecord) -> str:
    # Names made entirely of punctuation normalize to "" and must not
    # collapse into one another.
    return normalize_artist_name(record.display_name) or f"id:{record.identifier}"


def merge_artist_results(
    results_by_source: Iterable[Iterable[ArtistRecord]],
    max_results: int,
) -> list[ArtistRecord]:
    """Merge per-source result lists into one deduplicated, ranked list.

    Parameters
    ----------
    results_by_source:
        One list of records per source, highest-trust source first.
    max_results:
        Maximum length of the returned list.

    Returns
    -------
    list[ArtistRecord]
        At most *max_results* records, unique by normalized name.
    """
    if max_results <= 0:
        return []

    merged: dict[str, ArtistRecord] = {}
    for records in results_by_source:
        for record in records:
            key = _dedup_key(record)
            existing = merged.get(key)
            if existing is None:
                merged[key] = record
            elif record.verified and not existing.verified:
                merged[key] = record.model_copy(update={"verified": True})

    ranked = sorted(
        merged.values(),
        key=lambda record: (not record.verified, -record.effective_score),
    )
    return ranked[:max_results]
