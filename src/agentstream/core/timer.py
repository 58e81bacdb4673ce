"""Scheduled-callback timers for paced reveal."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """A running repeating timer."""

    def cancel(self) -> None:
        """Stop the timer.  Safe to call more than once."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Creates repeating timers on the host event loop."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Invoke *callback* every *interval* seconds until cancelled."""
        ...


class _RepeatingTimer:
    """Re-arms ``loop.call_later`` after every fire."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._handle: asyncio.TimerHandle | None = loop.call_later(interval, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _fire(self) -> None:
        if self._cancelled:
            return
        # Re-arm first so a raising callback does not stall the timer; the
        # callback may cancel the fresh handle.
        self._handle = self._loop.call_later(self._interval, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    With no explicit loop the running loop is looked up when a timer starts,
    so the scheduler itself can be built outside of a coroutine.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return _RepeatingTimer(loop, interval, callback)
