"""Test fixtures including RecordingSink and ManualScheduler for deterministic testing."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from agentstream.core.controller import StreamController
from agentstream.types.config import StreamConfig


@dataclass
class RecordingSink:
    """A sink that records every call for assertions.

    ``events`` interleaves all calls in order, e.g.
    ``[("start",), ("insert", ["a"]), ("stop",)]``.
    """

    batches: list[list[str]] = field(default_factory=list)
    events: list[tuple] = field(default_factory=list)
    start_calls: int = 0
    stop_calls: int = 0

    def insert_lines(self, lines: list[str]) -> None:
        self.batches.append(list(lines))
        self.events.append(("insert", list(lines)))

    def start_animation(self) -> None:
        self.start_calls += 1
        self.events.append(("start",))

    def stop_animation(self) -> None:
        self.stop_calls += 1
        self.events.append(("stop",))

    @property
    def lines(self) -> list[str]:
        return [line for batch in self.batches for line in batch]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


class ManualTimer:
    """A timer that only fires when the test advances the scheduler."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """A deterministic scheduler: ``tick()`` fires every live timer once."""

    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def call_every(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def live_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def tick(self, count: int = 1) -> None:
        for _ in range(count):
            for timer in self.live_timers:
                timer.callback()

    def run_until_idle(self, limit: int = 1000) -> int:
        """Tick until no timer is live.  Returns the number of ticks."""
        ticks = 0
        while self.live_timers:
            if ticks >= limit:
                raise AssertionError("timer never stopped")
            self.tick()
            ticks += 1
        return ticks


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(scheduler: ManualScheduler) -> StreamController:
    return StreamController(StreamConfig(tick_interval_ms=50), scheduler=scheduler)
