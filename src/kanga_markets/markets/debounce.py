"""Debounce helper for search input"""

import asyncio
import contextlib
import inspect
from collections.abc import Callable
from typing import Any

from loguru import logger

from kanga_markets.shared.constants import DEFAULT_SEARCH_DEBOUNCE_MS


class Debouncer:
    """Deliver only the latest submitted value after a quiet period

    Each ``submit`` restarts the timer. ``callback`` may be a plain function
    or a coroutine function. Must be used from inside a running event loop.
    """

    def __init__(
        self,
        callback: Callable[[Any], Any],
        delay_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative")
        self._callback = callback
        self._delay = delay_ms / 1000
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, value: Any) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(value))
        self._task.add_done_callback(self._report_failure)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait until the pending value (if any) has been delivered"""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    @staticmethod
    def _report_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error(f"Debounced callback failed: {error}")

    async def _fire(self, value: Any) -> None:
        await asyncio.sleep(self._delay)
        result = self._callback(value)
        if inspect.isawaitable(result):
            await result
