"""Text normalization and fuzzy matching for artist names.

Artist names arrive from four sources that disagree about case,
punctuation and articles ("The Beatles" vs "Beatles, The" vs "beatles").
This module provides the two primitives every other search component
relies on:

1. **normalize_artist_name** -- the dedup/comparison key.  Two records
   describe the same artist for merge purposes iff their keys are equal.

2. **score_artist_match** -- a tiered relevance score in [0, 1] for a
   query against a candidate name (exact > prefix > substring > word
   match > ordered-subsequence fallback).

A third helper, **name_similarity**, wraps rapidfuzz ``token_sort_ratio``
for adapters whose upstream API returns no relevance score of its own.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import TypeVar

from rapidfuzz import fuzz

_T = TypeVar("_T")

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
# Repeated so that normalize(normalize(x)) == normalize(x) for "The The".
_LEADING_ARTICLE_RE = re.compile(r"^(?:the )+")

# Tiered scores, highest first.
EXACT_SCORE = 1.0
PREFIX_SCORE = 0.9
SUBSTRING_SCORE = 0.7
WORD_PREFIX_SCORE = 0.6
WORD_SUBSTRING_SCORE = 0.4

DEFAULT_RELEVANCE_THRESHOLD = 0.3


def normalize_artist_name(name: str) -> str:
    """Return the comparison key for an artist name.

    Lowercases, drops every character that is neither a word character
    nor whitespace, collapses whitespace runs, removes a leading "the "
    and trims.  ``"The Beatles"``, ``"beatles"`` and ``"  THE  Beatles!"``
    all normalize to ``"beatles"``.

    Word characters follow Python's Unicode definition, so accented
    letters are kept as-is rather than folded to ASCII.
    """
    if not name:
        return ""
    normalized = name.lower()
    normalized = _NON_WORD_RE.sub("", normalized)
    normalized = _WHITESPACE_RE.sub(" ", normalized).strip()
    normalized = _LEADING_ARTICLE_RE.sub("", normalized)
    return normalized.strip()


def _subsequence_score(query: str, candidate: str) -> float:
    """Greedy single-pass ordered-subsequence similarity.

    Walks *candidate* once, advancing through *query* on each matching
    character.  Completeness (share of the query matched) dominates;
    density (share of the candidate used) breaks ties toward shorter names.
    """
    query_index = 0
    matched = 0
    for char in candidate:
        if query_index >= len(query):
            break
        if char == query[query_index]:
            matched += 1
            query_index += 1

    completeness = matched / len(query)
    density = matched / len(candidate)
    return completeness * 0.8 + density * 0.2


def score_artist_match(query: str, candidate: str) -> float:
    """Score how well *candidate* matches *query*, in [0, 1].

    Both strings are normalized first.  The score is 1.0 exactly when the
    normalized forms are equal.  An empty normalized query or candidate
    scores 0.0.
    """
    q = normalize_artist_name(query)
    c = normalize_artist_name(candidate)
    if not q or not c:
        return 0.0

    if c == q:
        return EXACT_SCORE
    if c.startswith(q):
        return PREFIX_SCORE
    if q in c:
        return SUBSTRING_SCORE

    for word in c.split(" "):
        if word.startswith(q):
            return WORD_PREFIX_SCORE
        if q in word:
            return WORD_SUBSTRING_SCORE

    return _subsequence_score(q, c)


def apply_relevance_threshold(
    score: float, threshold: float = DEFAULT_RELEVANCE_THRESHOLD
) -> float:
    """Return *score*, or 0.0 when it does not clear *threshold*."""
    return score if score > threshold else 0.0


def fuzzy_search_artists(
    query: str,
    candidates: Iterable[_T],
    *,
    key: Callable[[_T], str] = str,
    threshold: float = DEFAULT_RELEVANCE_THRESHOLD,
    limit: int | None = None,
) -> list[tuple[_T, float]]:
    """Rank *candidates* against *query* and drop those at or below *threshold*.

    Args:
        query: Raw user query.
        candidates: Objects to rank.
        key: Extracts the display name from a candidate.
        threshold: Minimum score (exclusive) to keep a candidate.
        limit: Maximum number of results; ``None`` keeps all.

    Returns:
        ``(candidate, score)`` pairs, best first.  Equal scores keep the
        shorter name first, then input order.
    """
    scored: list[tuple[_T, float, str]] = []
    for candidate in candidates:
        name = key(candidate)
        score = apply_relevance_threshold(score_artist_match(query, name), threshold)
        if score > 0.0:
            scored.append((candidate, score, name))

    scored.sort(key=lambda item: (-item[1], len(item[2])))
    ranked = [(candidate, score) for candidate, score, _name in scored]
    return ranked[:limit] if limit is not None else ranked


def name_similarity(query: str, name: str) -> float:
    """Order-insensitive similarity of two names in [0, 1] via rapidfuzz."""
    return fuzz.token_sort_ratio(normalize_artist_name(query), normalize_artist_name(name)) / 100.0
