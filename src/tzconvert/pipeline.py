"""Incremental Query Pipeline.

Serializes query updates posted as the user types. A single consumer task
takes queries off an ordered queue one at a time and runs each to completion
before taking the next, so results are published strictly in post order.

Every publish is one commit: a new :class:`~tzconvert.models.QueryState`
replaces the old one (results, loading flag and error flag together) and the
listeners are notified. A failing query commits ``is_error=True`` with no
results; the consumer keeps running.

Usage:
    async with QueryPipeline(service) as pipeline:
        pipeline.on_query_changed("10:00 AM, London")
        await pipeline.drain()
        items = pipeline.current_results()
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

from tzconvert.exceptions import ProviderFault
from tzconvert.models import EmptyStateDescriptor, QueryState, ResultItem
from tzconvert.utils.logger import get_logger

if TYPE_CHECKING:
    from tzconvert.service import TimezoneQueryService

logger = get_logger("pipeline")

ERROR_EMPTY_STATE = EmptyStateDescriptor(
    title="Error loading time zones",
    subtitle="An error occurred while fetching time zones.",
    icon="\uea39",
)

NO_RESULTS_EMPTY_STATE = EmptyStateDescriptor(
    title="No time zones found",
    subtitle="Try searching for a different time zone.",
    icon="\ue8af",
)

StateListener = Callable[[QueryState], None]


class QueryPipeline:
    """Single-consumer query channel with committed state snapshots."""

    def __init__(self, service: TimezoneQueryService) -> None:
        """Initialize the pipeline.

        Args:
            service: Service mapping query text to result items
        """
        self._service = service
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._state = QueryState()
        self._last_posted: str | None = None
        self._listeners: list[StateListener] = []
        self._stopping = asyncio.Event()
        self._task: asyncio.Task | None = None

    async def __aenter__(self) -> QueryPipeline:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # === Lifecycle ===

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the consumer task on the running event loop."""
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.get_running_loop().create_task(self._consume(), name="tzconvert-query-consumer")
        logger.debug("Query consumer started")

    async def stop(self) -> None:
        """Stop the consumer; an in-flight query is not published."""
        self._stopping.set()
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug("Query consumer stopped")

    async def drain(self) -> None:
        """Wait until every posted query has been processed."""
        await self._queue.join()

    # === Producer side ===

    def post(self, text: str) -> bool:
        """Enqueue a query; text equal to the previous post is dropped.

        Returns:
            True if the query was enqueued
        """
        if text == self._last_posted:
            return False
        self._last_posted = text
        self._queue.put_nowait(text)
        return True

    def on_query_changed(self, text: str) -> bool:
        return self.post(text)

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        self._listeners.remove(listener)

    # === Reader side ===

    @property
    def state(self) -> QueryState:
        return self._state

    def current_results(self) -> list[ResultItem]:
        return list(self._state.results)

    def is_loading(self) -> bool:
        return self._state.is_loading

    def is_error(self) -> bool:
        return self._state.is_error

    def empty_state_descriptor(self) -> EmptyStateDescriptor:
        return ERROR_EMPTY_STATE if self._state.is_error else NO_RESULTS_EMPTY_STATE

    # === Consumer ===

    def _commit(self, state: QueryState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception(f"State listener {listener!r} failed")

    async def _consume(self) -> None:
        while not self._stopping.is_set():
            text = await self._queue.get()
            try:
                await self._process(text)
            finally:
                self._queue.task_done()

    async def _process(self, text: str) -> None:
        self._commit(self._state.loading(text))
        # Let the host observe the loading state before the synchronous work
        await asyncio.sleep(0)

        try:
            context = self._service.session()
            results = self._service.query(text, context)
        except ProviderFault as e:
            logger.error(f"Provider failure for '{text}': {e.message}")
            results, is_error = [], True
        except Exception as e:
            logger.exception(f"Unexpected failure for '{text}': {e}")
            results, is_error = [], True
        else:
            is_error = False

        if self._stopping.is_set():
            logger.debug(f"Shutdown requested; not publishing results for '{text}'")
            return

        self._commit(QueryState(results=tuple(results), is_loading=False, is_error=is_error, query=text))


__all__ = [
    "ERROR_EMPTY_STATE",
    "NO_RESULTS_EMPTY_STATE",
    "QueryPipeline",
    "StateListener",
]
