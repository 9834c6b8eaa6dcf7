"""Cancellable repeating tasks and debounce timers on the running event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Calls a synchronous callback at a fixed interval.

    Starting an already running task restarts it, so at most one loop per
    instance is ever scheduled.
    """

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        callback: Callable[[], Any],
        run_immediately: bool = False,
    ) -> None:
        """Initialize the periodic task.

        Args:
            name: Name used for logging and for the asyncio task.
            interval_seconds: Delay between two invocations.
            callback: Synchronous callable invoked on every tick.
            run_immediately: Invoke the callback once right after start.
        """
        self.name = name
        self.interval_seconds = interval_seconds
        self._callback = callback
        self._run_immediately = run_immediately
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking, cancelling any loop this instance already runs."""
        self.stop()
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.debug(f"Started {self.name} (every {self.interval_seconds:g}s)")

    def stop(self) -> asyncio.Task[None] | None:
        """Stop ticking. Safe to call when not running.

        Returns:
            The cancelled task, so callers can await its completion.
        """
        task, self._task = self._task, None
        if task is None or task.done():
            return None
        task.cancel()
        logger.debug(f"Stopped {self.name}")
        return task

    async def _loop(self) -> None:
        if self._run_immediately:
            self._invoke()
        while True:
            await asyncio.sleep(self.interval_seconds)
            self._invoke()

    def _invoke(self) -> None:
        try:
            self._callback()
        except Exception:
            # A failing tick must not end the schedule
            logger.exception(f"{self.name} tick failed")


class Debouncer:
    """Delays a call until no new call was requested for a quiet period."""

    def __init__(self, delay_seconds: float) -> None:
        self.delay_seconds = delay_seconds
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, callback: Callable[..., Any], *args: Any) -> None:
        """Schedule callback(*args), replacing any pending call."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_seconds, self._fire, callback, args)

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self._handle = None
        callback(*args)
