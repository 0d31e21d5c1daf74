# Path: core/utils/debounce.py
# Purpose: Coalesce rapid-fire events into a single delayed action.
# Layer: core/utils.
# Details: Runs on the asyncio event loop so it works both headless and under the qasync Qt loop.

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

LOGGER = logging.getLogger(__name__)


class Debouncer:
    """Delay an action until a quiet period follows the last ``schedule`` call.

    At most one action is pending per instance: scheduling a new action
    cancels the previous one. When the action returns a coroutine it is
    wrapped in a task on the same loop.
    """

    def __init__(
        self,
        delay: float = 0.5,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if delay < 0:
            raise ValueError("Debounce delay must not be negative.")
        self.delay = delay
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._logger = logger or LOGGER

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, action: Callable[[], Any], delay: Optional[float] = None) -> None:
        """Cancel any pending action, then run ``action`` after ``delay`` seconds."""

        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        wait = self.delay if delay is None else delay
        self._handle = loop.call_later(wait, self._fire, action)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, action: Callable[[], Any]) -> None:
        self._handle = None
        result = action()
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            task.add_done_callback(self._log_task_failure)

    def _log_task_failure(self, task: "asyncio.Future[Any]") -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.error("Debounced action failed: %s", error)
