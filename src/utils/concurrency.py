"""Concurrency helpers for provider fan-out.

Two patterns are exposed:

1. **throttled_gather** -- ``asyncio.gather`` with every awaitable wrapped
   in a semaphore acquire/release, so a burst of playlist track searches
   cannot open more than a handful of upstream requests at once.

2. **gather_by_source** -- the fan-out / merge step of hybrid artist
   search: run one search per named source concurrently, keep the
   successes keyed by source name, and log (rather than raise) failures.
   A failed source contributes an empty list.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Mapping, TypeVar

import structlog

from src.utils.logging import get_logger

_T = TypeVar("_T")

_DEFAULT_CONCURRENCY = 5

_logger: structlog.BoundLogger = get_logger(__name__)


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore | None = None,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Run awaitables concurrently with semaphore throttling.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Concurrency limit.  When omitted a fresh semaphore allowing
        ``_DEFAULT_CONCURRENCY`` awaitables is created for this call, so
        nothing is bound to an event loop between calls.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """
    if semaphore is None:
        semaphore = asyncio.Semaphore(_DEFAULT_CONCURRENCY)

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    tasks = [_wrapped(c) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)


async def gather_by_source(
    calls: Mapping[str, Awaitable[list[_T]]],
    logger: structlog.BoundLogger | None = None,
    error_msg: str = "source_search_failed",
) -> dict[str, list[_T]]:
    """Await one search per source concurrently and key the results by source.

    Insertion order of *calls* is preserved in the returned dict, which is
    what lets callers pass the higher-trust source first.

    Parameters
    ----------
    calls:
        Source name -> awaitable returning a list of results.
    logger:
        Structured logger for failures.
    error_msg:
        Event name logged for each failed source.

    Returns
    -------
    dict[str, list]
        Source name -> results; failed sources map to ``[]``.
    """
    if logger is None:
        logger = _logger

    names = list(calls)
    raw_results = await asyncio.gather(*calls.values(), return_exceptions=True)

    by_source: dict[str, list[_T]] = {}
    for name, result in zip(names, raw_results):
        if isinstance(result, BaseException):
            logger.warning(error_msg, source=name, error=str(result))
            by_source[name] = []
        else:
            by_source[name] = list(result or [])

    return by_source
