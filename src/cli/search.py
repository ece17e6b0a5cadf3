"""Standalone CLI for the hybrid artist search.

Usage::

    python -m src.cli.search "radiohead"
    python -m src.cli.search "ta" --json
    python -m src.cli.search "arctic monkeys" --setlist

Runs the same routing as the autocomplete endpoint (curated list for
short prefixes, every configured network source otherwise) and prints
the ranked suggestions.  With ``--setlist`` the top suggestion's average
setlist is printed as well.

Log lines always go to stderr so stdout carries only the results.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Callable

from src.models.artist import ArtistSource
from src.models.search import ArtistSearchResult
from src.models.setlist import SetlistData

# Sources whose identifier is a MusicBrainz ID.
_MBID_SOURCES = frozenset({ArtistSource.MUSICBRAINZ, ArtistSource.SETLISTFM})


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


def _format_text_output(result: ArtistSearchResult, setlist: SetlistData | None) -> str:
    lines: list[str] = []
    sep = "=" * 60

    lines.append(sep)
    lines.append(f"  Artists for '{result.query}'  ({result.origin.value})")
    lines.append(sep)

    if result.is_empty:
        lines.append("  No artists found.")
    for position, artist in enumerate(result.artists, start=1):
        mark = "*" if artist.verified else " "
        extra = f"  ({artist.disambiguation})" if artist.disambiguation else ""
        lines.append(
            f" {mark}{position:>2}. {artist.display_name}{extra}"
            f"  [{artist.source.value}, {artist.effective_score:.2f}]"
        )
    if result.has_more:
        lines.append("      ... more results available")

    if setlist is not None:
        lines.append("")
        lines.append(f"AVERAGE SETLIST: {setlist.artist_name}")
        lines.append("-" * 40)
        lines.append(f"  {setlist.context}  |  Confidence: {setlist.confidence.value}")
        for position, song in enumerate(setlist.songs, start=1):
            lines.append(f"  {position:>2}. {song.name}  ({song.frequency}%, {song.played_in})")

    lines.append("")
    lines.append("  * = verified (has setlist data)")
    return "\n".join(lines)


def _format_json_output(result: ArtistSearchResult, setlist: SetlistData | None) -> str:
    output: dict = {
        "query": result.query,
        "source": result.origin.value,
        "hasMore": result.has_more,
        "artists": [artist.model_dump(mode="json") for artist in result.artists],
    }
    if setlist is not None:
        output["setlist"] = setlist.model_dump(mode="json", by_alias=True)
    return json.dumps(output, indent=2)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


async def _run(
    build_services: Callable[[], dict[str, Any]],
    query: str,
    json_output: bool,
    with_setlist: bool,
) -> int:
    components = build_services()
    try:
        result = await components["artist_search"].search(query)

        setlist: SetlistData | None = None
        if with_setlist and result.artists:
            top = result.artists[0]
            setlist_service = components["setlist_service"]
            if setlist_service.is_available():
                has_mbid = top.source in _MBID_SOURCES and top.identifier != top.display_name
                mbid = top.identifier if has_mbid else None
                setlist = await setlist_service.build_average_setlist(top.display_name, mbid=mbid)
            else:
                print("SETLISTFM_API_KEY is not set; skipping setlist.", file=sys.stderr)
    finally:
        await components["http_client"].aclose()

    if json_output:
        print(_format_json_output(result, setlist))
    else:
        print(_format_text_output(result, setlist))
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.search",
        description="Search artists across the curated list, MusicBrainz, Setlist.fm and Apple Music.",
    )
    parser.add_argument("query", type=str, help="Artist name or prefix.")
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text.",
    )
    parser.add_argument(
        "--setlist",
        action="store_true",
        help="Also print the average setlist of the top result (needs SETLISTFM_API_KEY).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log at INFO instead of WARNING.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = _build_parser().parse_args(argv)

    level = "INFO" if args.verbose else "WARNING"
    os.environ["LOG_LEVEL"] = level

    # src.main configures logging to stdout on import; nothing has logged
    # yet, so it can still be pointed at stderr.
    from src.main import build_services
    from src.utils.logging import configure_logging

    configure_logging(log_level=level, stream=sys.stderr)
    return asyncio.run(_run(build_services, args.query, args.json_output, args.setlist))


if __name__ == "__main__":
    sys.exit(main())
