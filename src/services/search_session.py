"""Search-as-you-type session: debounce timer plus stale-response filtering.

State machine
-------------
::

    IDLE ──input──> DEBOUNCING ──timer──> IN_FLIGHT ──response──> SETTLED
      ^                 ^  │                   │                    │
      │                 └──┴──────input────────┴────────────────────┘
      └──────────────────────── select ────────────────────────────┘

- Every input cancels the pending debounce timer and starts a new one.
- When the timer fires, queries under the minimum length settle as
  ``EMPTY`` without searching.  Otherwise the search is dispatched.
- In-flight searches are never cancelled.  Each response is tagged with
  the query that produced it and is dropped unless that query is still
  the session's current query, so a slow response for "a" can never
  overwrite the suggestions for "ab".
- Selecting a suggestion returns to ``IDLE``, clears the suggestions and
  invalidates any in-flight response.

Every transition publishes an immutable :class:`SearchSnapshot` to the
optional ``on_change`` callback.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import structlog

from src.interfaces.artist_search_provider import MIN_QUERY_LENGTH
from src.models.artist import ArtistRecord
from src.models.search import ArtistSearchResult, SearchOutcome, SearchSnapshot, SearchState
from src.utils.logging import get_logger

SearchFn = Callable[[str], Awaitable[ArtistSearchResult]]
ChangeListener = Callable[[SearchSnapshot], None]

DEFAULT_DEBOUNCE_SECONDS = 0.3


class SearchSession:
    """One user's search box.

    Parameters
    ----------
    search_fn:
        Coroutine function returning ranked results for a query, normally
        :meth:`ArtistSearchService.search`.
    debounce_seconds:
        Quiet period after the last input before a search is dispatched.
    min_query_length:
        Shorter queries settle as empty without searching.
    on_change:
        Called with a snapshot after every state transition.
    """

    def __init__(
        self,
        search_fn: SearchFn,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        min_query_length: int = MIN_QUERY_LENGTH,
        on_change: ChangeListener | None = None,
    ) -> None:
        self._search_fn = search_fn
        self._debounce_seconds = debounce_seconds
        self._min_query_length = min_query_length
        self._on_change = on_change
        self._logger: structlog.BoundLogger = get_logger(__name__)

        self._snapshot = SearchSnapshot()
        # The query whose response is allowed to reach the suggestion list.
        self._current_query: str | None = None
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> SearchSnapshot:
        return self._snapshot

    @property
    def state(self) -> SearchState:
        return self._snapshot.state

    def _publish(self, **changes: object) -> None:
        self._snapshot = self._snapshot.model_copy(update=changes)
        if self._on_change is not None:
            self._on_change(self._snapshot)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_input(self, query: str) -> None:
        """Register a keystroke: restart the debounce timer for *query*.

        Must be called from inside a running event loop.
        """
        self._cancel_timer()
        self._current_query = query
        self._publish(
            state=SearchState.DEBOUNCING, query=query, outcome=None, error=None, selected=None
        )
        self._timer = asyncio.get_running_loop().create_task(self._debounce(query))

    def dispatch(self, query: str) -> asyncio.Task[None]:
        """Skip the debounce window and search *query* right away.

        Returns the task carrying the search so callers can await it.
        """
        self._cancel_timer()
        self._current_query = query
        self._publish(query=query, selected=None)
        return self._start_search(query)

    def select(self, artist: ArtistRecord) -> None:
        """Accept a suggestion and return to idle."""
        self._cancel_timer()
        self._current_query = None
        self._publish(
            state=SearchState.IDLE,
            outcome=None,
            query=artist.display_name,
            suggestions=[],
            selected=artist,
            error=None,
        )

    async def wait_until_settled(self) -> SearchSnapshot:
        """Wait for the pending timer and every in-flight search to finish."""
        if self._timer is not None:
            await asyncio.gather(self._timer, return_exceptions=True)
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
        return self._snapshot

    async def close(self) -> None:
        """Cancel the timer and abandon in-flight searches."""
        self._cancel_timer()
        self._current_query = None
        for task in list(self._in_flight):
            task.cancel()
        await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _debounce(self, query: str) -> None:
        await asyncio.sleep(self._debounce_seconds)
        self._start_search(query)

    def _start_search(self, query: str) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(self._run_search(query))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _run_search(self, query: str) -> None:
        if len(query.strip()) < self._min_query_length:
            self._settle(query, SearchOutcome.EMPTY, [])
            return

        if self._is_current(query):
            self._publish(state=SearchState.IN_FLIGHT)
        try:
            result = await self._search_fn(query)
        except asyncio.CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - any failure settles the box as error
            if self._is_current(query):
                self._logger.warning("search_session_failed", query=query, error=str(exc))
                self._settle(query, SearchOutcome.ERROR, [], error=str(exc))
            return

        outcome = SearchOutcome.SUCCESS if result.artists else SearchOutcome.EMPTY
        self._settle(query, outcome, list(result.artists))

    def _is_current(self, query: str) -> bool:
        return self._current_query == query

    def _settle(
        self,
        query: str,
        outcome: SearchOutcome,
        suggestions: list[ArtistRecord],
        error: str | None = None,
    ) -> None:
        if not self._is_current(query):
            self._logger.debug(
                "stale_search_response_discarded", query=query, current=self._current_query
            )
            return
        self._publish(
            state=SearchState.SETTLED,
            outcome=outcome,
            suggestions=suggestions,
            error=error,
        )
