"""
Search Debouncer - Turns a stream of typed queries into at most one search per quiet period.

State machine (SearchState.phase):
    IDLE       -> nothing pending; `results` holds the last applied matches
    WAITING    -> a query is waiting for its deadline; any new input restarts it
    IN_FLIGHT  -> the search call for `query` is running

Cancel wins: every input bumps a generation counter. A search applies its
results only if the generation captured at dispatch still matches at
completion, so a request that finishes after being superseded never
touches the visible list, even if the underlying call ignored cancellation.
"""

import asyncio
from dataclasses import dataclass, replace
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple

from config.constants import SEARCH_DEBOUNCE_SECONDS
from utils.logger import setup_logger
from utils.unified_schema import SearchMatch

logger = setup_logger('search_debouncer')

SearchFunc = Callable[[str], Awaitable[Optional[List[SearchMatch]]]]


class SearchPhase(Enum):
    IDLE = "idle"
    WAITING = "waiting"
    IN_FLIGHT = "in_flight"


@dataclass(frozen=True)
class SearchState:
    phase: SearchPhase = SearchPhase.IDLE
    query: Optional[str] = None
    deadline: Optional[float] = None
    results: Tuple[SearchMatch, ...] = ()


class SearchDebouncer:
    """
    Debounced, cancellable symbol search.

    Args:
        search: Coroutine function returning matches (or None on failure)
        quiet_period: Seconds of no input before a search is dispatched
        on_change: Called with every new SearchState
        clock: Monotonic time source used for deadlines
        sleep: Coroutine used to wait; injectable for fake-clock tests
    """

    def __init__(
        self,
        search: SearchFunc,
        quiet_period: float = SEARCH_DEBOUNCE_SECONDS,
        on_change: Optional[Callable[[SearchState], None]] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._search = search
        self.quiet_period = quiet_period
        self._on_change = on_change
        self._clock = clock
        self._sleep = sleep
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._state = SearchState()

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def results(self) -> Tuple[SearchMatch, ...]:
        return self._state.results

    def _now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return asyncio.get_running_loop().time()

    def _set_state(self, state: SearchState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def _invalidate(self) -> int:
        """Cancel pending work and start a new generation."""
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        return self._generation

    def on_input(self, text: str) -> None:
        """
        Feed the current contents of the search box.
        Must be called from inside a running event loop.
        """
        generation = self._invalidate()
        query = (text or "").strip()

        if not query:
            self._set_state(SearchState())
            return

        deadline = self._now() + self.quiet_period
        self._set_state(replace(self._state, phase=SearchPhase.WAITING, query=query, deadline=deadline))
        self._task = asyncio.create_task(self._run(query, generation))

    def select(self, match: SearchMatch) -> Optional[str]:
        """Pick a match: pending work is dropped, the list is cleared, the symbol returned."""
        self._invalidate()
        self._set_state(SearchState())
        return match.symbol

    def cancel(self) -> None:
        """Drop pending work but keep the visible results."""
        self._invalidate()
        self._set_state(replace(self._state, phase=SearchPhase.IDLE, query=None, deadline=None))

    async def wait(self) -> None:
        """Wait for the pending search (if any) to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self, query: str, generation: int) -> None:
        await self._sleep(self.quiet_period)
        if generation != self._generation:
            return

        self._set_state(replace(self._state, phase=SearchPhase.IN_FLIGHT, deadline=None))
        logger.info(f"Dispatching search for '{query}'")
        try:
            matches = await self._search(query)
        except Exception:
            logger.exception(f"Search for '{query}' failed")
            matches = None

        if generation != self._generation:
            logger.debug(f"Discarding stale results for '{query}'")
            return

        self._set_state(SearchState(results=tuple(matches or ())))
