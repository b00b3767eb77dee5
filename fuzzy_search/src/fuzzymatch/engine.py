# fuzzymatch/engine.py
from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from . import search as search_mod
from .config import INDEX_KIND, SearchOptions
from .DB.api import make_index
from .DB.cache import QUERY, SUGGESTION, ResultCache, cache_key
from .DB.memory_store import RecordLike
from .errors import SearchCancelled, SearchTimeout
from .messages import MessageProvider, resolve_messages
from .models import Matches, MatchOutcome, Suggestions
from .normalize import normalize
from .similarity import SimilarityEngine
from .synonyms import SynonymResolver

log = logging.getLogger(__name__)


class QueryState(str, Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    SEARCHING = "searching"
    RESOLVED = "resolved"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    FAILED = "failed"


_TERMINAL = {QueryState.RESOLVED, QueryState.CANCELLED, QueryState.TIMED_OUT, QueryState.FAILED}


@dataclass(eq=False)
class InFlightQuery:
    """
    Generation marker and cancellation token of one search() call.

    `future` is settled exactly once (first of resolve / timeout / cancel
    wins). `stop` is the flag the worker thread polls between records.
    """
    query: str
    generation: int
    future: asyncio.Future
    state: QueryState = QueryState.DEBOUNCING
    timer: Optional[asyncio.TimerHandle] = None
    task: Optional[asyncio.Task] = None
    stop: threading.Event = field(default_factory=threading.Event)

    @property
    def live(self) -> bool:
        return not self.future.done()

    def settle(self, state: QueryState, result: Optional[MatchOutcome] = None,
               exc: Optional[BaseException] = None) -> bool:
        if self.future.done():
            return False
        self.state = state
        if exc is not None:
            self.future.set_exception(exc)
        else:
            self.future.set_result(result)
        return True

    def checkpoint(self) -> None:
        if self.stop.is_set():
            raise SearchCancelled(self.query)


class Engine:
    """
    Query orchestrator: owns the index, the synonym resolver, the similarity
    engine (with its memo) and the result cache, and turns each search() call
    into one resolved outcome.

    Public API:
      * await search(query):  debounced, cancellable, time-limited lookup
      * lookup(query):        synchronous one-shot lookup (no debounce/timeout)
      * reset():              drop cached results and the algorithm memo
      * shutdown():           cancel the live query

    Only one query is live at a time: a new search() cancels the previous one
    (it raises SearchCancelled). Work already running in the worker thread is
    not interrupted; it stops at the next record and its result is dropped
    without touching the cache.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        records: Iterable[RecordLike],
        synonyms: Optional[Mapping[str, Sequence[str]]] = None,
        usage: Optional[Mapping[str, float]] = None,
        options: Union[SearchOptions, Mapping, None] = None,
        *,
        index: str = INDEX_KIND,
        messages: Optional[MessageProvider] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if options is None:
            options = SearchOptions()
        elif not isinstance(options, SearchOptions):
            options = SearchOptions.from_mapping(options)
        self.options = options

        self.index = make_index(records, index)
        self.cache = ResultCache(options.cache_size, options.cache_ttl, clock=clock)
        self.scorer = SimilarityEngine()
        self.resolver = SynonymResolver(synonyms, usage, cache=self.cache)
        self._messages = resolve_messages(options.language, messages, options.custom_messages)

        self._live: Optional[InFlightQuery] = None
        self._generation = 0
        log.info(
            "Engine ready: records=%d index=%s algorithms=%s",
            self.index.count(), self.index.kind, ",".join(options.algorithm),
        )

    @property
    def messages(self) -> Mapping[str, str]:
        return dict(self._messages)

    @property
    def state(self) -> QueryState:
        return self._live.state if self._live is not None else QueryState.IDLE

    def reset(self) -> None:
        self.cache.clear()
        self.scorer.memo.clear()
        log.info("Engine reset: cache and memo cleared")

    def shutdown(self) -> None:
        live, self._live = self._live, None
        if live is not None and live.live:
            self._cancel(live)
        log.info("Engine shutdown complete")

    # ------------- query -------------

    async def search(self, query: str) -> MatchOutcome:
        loop = asyncio.get_running_loop()
        prior = self._live
        if prior is not None and prior.live:
            self._cancel(prior)

        self._generation += 1
        flight = InFlightQuery(query=query, generation=self._generation, future=loop.create_future())
        self._live = flight
        flight.timer = loop.call_later(self.options.debounce_delay, self._on_debounced, flight)
        try:
            return await flight.future
        except asyncio.CancelledError:
            # the caller stopped waiting; treat like a superseded query
            self._abandon(flight)
            if flight.state not in _TERMINAL:
                flight.state = QueryState.CANCELLED
            raise

    def lookup(self, query: str) -> MatchOutcome:
        if not normalize(query):
            return Matches(())
        cached = self._cached(query)
        if cached is not None:
            return cached
        outcome = self._run(query)
        self._store(query, outcome)
        return outcome

    # ------------- internals -------------

    def _on_debounced(self, flight: InFlightQuery) -> None:
        flight.timer = None
        if not flight.live:
            return
        if not normalize(flight.query):
            flight.settle(QueryState.RESOLVED, Matches(()))
            return
        cached = self._cached(flight.query)
        if cached is not None:
            log.debug("Cache hit: %r", flight.query)
            flight.settle(QueryState.RESOLVED, cached)
            return
        flight.state = QueryState.SEARCHING
        flight.task = asyncio.get_running_loop().create_task(self._race(flight))

    async def _race(self, flight: InFlightQuery) -> None:
        timeout = self.options.timeout or None
        try:
            outcome = await asyncio.wait_for(
                asyncio.to_thread(self._run, flight.query, flight.checkpoint), timeout
            )
        except asyncio.TimeoutError:
            flight.stop.set()
            log.info("Search for %r timed out after %ss", flight.query, timeout)
            flight.settle(QueryState.TIMED_OUT, exc=SearchTimeout(flight.query, timeout or 0.0))
            return
        except SearchCancelled:
            return
        except Exception as exc:
            log.warning("Search for %r failed: %r", flight.query, exc)
            flight.settle(QueryState.FAILED, exc=exc)
            return

        if not flight.live or flight.stop.is_set():
            log.debug("Discarding stale result for %r", flight.query)
            return
        self._store(flight.query, outcome)
        flight.settle(QueryState.RESOLVED, outcome)

    def _run(self, query: str, checkpoint: Callable[[], None] = search_mod.no_checkpoint) -> MatchOutcome:
        return search_mod.run(
            query, self.index, self.resolver, self.scorer, self.options, self._messages, checkpoint
        )

    def _cached(self, query: str) -> Optional[MatchOutcome]:
        hit = self.cache.get(cache_key(QUERY, query))
        if hit is None:
            hit = self.cache.get(cache_key(SUGGESTION, query))
        return hit

    def _store(self, query: str, outcome: MatchOutcome) -> None:
        namespace = SUGGESTION if isinstance(outcome, Suggestions) else QUERY
        self.cache.put(cache_key(namespace, query), outcome)

    def _abandon(self, flight: InFlightQuery) -> None:
        flight.stop.set()
        if flight.timer is not None:
            flight.timer.cancel()
            flight.timer = None
        if flight.task is not None and not flight.task.done():
            flight.task.cancel()

    def _cancel(self, flight: InFlightQuery) -> None:
        log.debug("Cancelling superseded query %r", flight.query)
        self._abandon(flight)
        flight.settle(QueryState.CANCELLED, exc=SearchCancelled(flight.query))
