# Path: core/search/pagination.py
# Purpose: Drive incremental, page-based fetching of search results for the gallery.
# Layer: core/search.
# Details: Owns the GallerySession, gates fetches with the loading flag, and drops stale responses.

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Protocol, Set

from config import GallerySettings
from core.errors import GalleryError
from core.models.domain import GallerySession, GalleryState, ImageResult, effective_query
from core.utils.debounce import Debouncer

LOGGER = logging.getLogger(__name__)

StateListener = Callable[[GalleryState], None]
ErrorListener = Callable[[GalleryError], None]


class PageFetcher(Protocol):
    """Anything able to return one page of results for a query."""

    async def fetch(self, query: str, page: int) -> List[ImageResult]:
        """Return the results of ``page`` for ``query``; may be empty."""


class PaginationController:
    """Stateful core behind the gallery view.

    The view calls ``on_query_changed`` for text input and
    ``on_scroll_reached_end`` when the grid is scrolled to the bottom; it
    renders the ``GalleryState`` snapshots pushed to state listeners and
    shows errors pushed to error listeners as transient notifications.

    At most one fetch runs per session. A trigger arriving while a fetch is
    outstanding is dropped, not queued. Changing the query replaces the
    session; the superseded fetch keeps running but its result is ignored.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        settings: Optional[GallerySettings] = None,
        debouncer: Optional[Debouncer] = None,
        logger: Optional[logging.Logger] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.settings = settings or GallerySettings()
        self._fetcher = fetcher
        self._logger = logger or LOGGER
        self._loop = loop
        self._debouncer = debouncer or Debouncer(self.settings.debounce_delay, loop=loop, logger=self._logger)
        self._generation = 0
        self._session = GallerySession(query=effective_query(None, self.settings.default_query))
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._listeners: List[StateListener] = []
        self._error_listeners: List[ErrorListener] = []
        self._closed = False

    @property
    def state(self) -> GalleryState:
        return self._session.snapshot()

    @property
    def closed(self) -> bool:
        return self._closed

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add_error_listener(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        if listener in self._error_listeners:
            self._error_listeners.remove(listener)

    def start(self) -> Optional["asyncio.Task[None]"]:
        """Fetch the first page of the initial session."""

        return self.load_next()

    def on_query_changed(self, text: str, delay: Optional[float] = None) -> None:
        """Debounce raw text input before it reaches ``set_query``."""

        if self._closed:
            return
        self._debouncer.schedule(lambda: self.set_query(text), delay)

    def set_query(self, text: Optional[str]) -> Optional["asyncio.Task[None]"]:
        """Start a new session for ``text`` unless it maps to the current query."""

        if self._closed:
            return None
        query = effective_query(text, self.settings.default_query)
        if query == self._session.query:
            self._logger.debug("Query %r unchanged; keeping current session", query)
            return None

        self._generation += 1
        self._session = GallerySession(query=query, generation=self._generation)
        self._logger.info("Starting session %d for query %r", self._generation, query)
        self._notify()
        return self._trigger_fetch()

    def on_scroll_reached_end(self) -> Optional["asyncio.Task[None]"]:
        return self.load_next()

    def load_next(self) -> Optional["asyncio.Task[None]"]:
        """Fetch the current page when more results exist and nothing is loading."""

        session = self._session
        if self._closed or session.is_loading or not session.has_more:
            return None
        return self._trigger_fetch()

    def dismiss_error(self) -> None:
        if self._session.last_error is None:
            return
        self._session.last_error = None
        self._notify()

    def close(self) -> None:
        """Tear down: cancel the pending debounce and ignore every outstanding fetch."""

        if self._closed:
            return
        self._closed = True
        self._debouncer.cancel()
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()
        self._error_listeners.clear()
        self._logger.debug("Pagination controller closed")

    def _is_current(self, session: GallerySession) -> bool:
        return not self._closed and session is self._session

    def _trigger_fetch(self) -> "asyncio.Task[None]":
        session = self._session
        session.is_loading = True
        session.last_error = None
        self._notify()

        loop = self._loop or asyncio.get_running_loop()
        task = loop.create_task(self._run_fetch(session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(self._log_task_failure)
        return task

    def _log_task_failure(self, task: "asyncio.Task[None]") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.error("Fetch task failed unexpectedly: %r", error, exc_info=error)

    async def _run_fetch(self, session: GallerySession) -> None:
        query, page = session.query, session.page
        error: Optional[GalleryError] = None
        results: List[ImageResult] = []
        try:
            results = await self._fetcher.fetch(query, page)
        except GalleryError as exc:
            error = exc
        except BaseException:
            if self._is_current(session):
                session.is_loading = False
                self._notify()
            raise

        if not self._is_current(session):
            self._logger.debug("Discarding stale response for %r page %d", query, page)
            return

        session.is_loading = False
        if error is not None:
            session.last_error = error
            self._logger.error("Error loading images for %r page %d: %s", query, page, error)
        elif not results:
            session.has_more = False
            self._logger.info("No more results for %r after page %d", query, page - 1)
        else:
            session.results.extend(results)
            session.page += 1
        self._notify()

        if error is not None:
            for listener in list(self._error_listeners):
                listener(error)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self._session.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
