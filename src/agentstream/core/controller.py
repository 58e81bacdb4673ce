"""Stream controller: delta intake, line commits, and paced reveal."""

from __future__ import annotations

import logging

from agentstream.core.collector import LineCollector
from agentstream.core.streamer import LineStreamer
from agentstream.core.timer import AsyncioScheduler, Scheduler, TimerHandle
from agentstream.types.config import StreamConfig, StreamState
from agentstream.types.sink import Sink

logger = logging.getLogger(__name__)


class StreamController:
    """Drives one logical stream from producer deltas to a Sink.

    Lifecycle::

        begin(sink) -> push_and_maybe_commit(delta)* -> finalize(flush)
        begin(sink) -> apply_final_answer(message)

    Committed lines are revealed one per timer tick.  The timer runs only
    while lines are queued.  ``clear_all()`` cancels from any state.

    Not safe to share between concurrent streams; give each conversation its
    own controller.
    """

    def __init__(
        self,
        config: StreamConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config or StreamConfig()
        self._scheduler = scheduler or AsyncioScheduler()
        self._collector = LineCollector()
        self._streamer = LineStreamer()
        self._sink: Sink | None = None
        self._timer: TimerHandle | None = None
        self._is_active = False
        self._is_finishing_after_drain = False

    # ── Introspection ────────────────────────────────────────────────────────

    @property
    def config(self) -> StreamConfig:
        return self._config

    @property
    def state(self) -> StreamState:
        if not self._is_active:
            return StreamState.IDLE
        if self._is_finishing_after_drain:
            return StreamState.DRAINING
        return StreamState.ACTIVE

    @property
    def is_animating(self) -> bool:
        return self._timer is not None

    @property
    def pending_lines(self) -> int:
        return self._streamer.size()

    def is_write_cycle_active(self) -> bool:
        return self._is_active

    # ── Producer entry points ────────────────────────────────────────────────

    def begin(self, sink: Sink) -> None:
        """Start a logical stream that reveals into *sink*."""
        self._sink = sink
        self._is_active = True
        self._is_finishing_after_drain = False
        logger.debug("Stream begun")

    def push_and_maybe_commit(self, delta: str) -> None:
        """Buffer a delta and queue any lines it completes."""
        if not self._is_active or self._sink is None:
            logger.debug("Ignoring delta while idle")
            return

        self._collector.push_delta(delta)
        if "\n" not in delta:
            return

        committed = self._collector.commit_complete_lines()
        if committed:
            self._streamer.enqueue(committed)
            self._start_commit_animation()

    def finalize(self, flush_immediately: bool = False) -> bool:
        """End the stream.

        Returns True if every line was delivered synchronously, False if the
        remaining lines keep animating out on the timer.
        """
        if not self._is_active or self._sink is None:
            logger.debug("Ignoring finalize while idle")
            return False

        remaining = self._collector.finalize_and_drain()

        if flush_immediately:
            # Queued lines precede the leftovers in the source text
            lines = self._streamer.drain_all().lines_to_add + remaining
            if lines:
                self._sink.insert_lines(lines)
            self._cleanup()
            logger.debug("Stream flushed %d lines", len(lines))
            return True

        if remaining:
            self._streamer.enqueue(remaining)
        self._is_finishing_after_drain = True
        logger.debug("Stream draining %d lines", self._streamer.size())
        self._start_commit_animation()
        if self._timer is None:
            # Nothing left to animate
            self._cleanup()
        return False

    def apply_final_answer(self, message: str, sink: Sink | None = None) -> bool:
        """Deliver a complete message in one flush.

        If deltas already built this turn's text the message is not injected;
        whatever is still buffered or queued is flushed instead.
        """
        target = sink if sink is not None else self._sink
        if target is None:
            logger.debug("Ignoring final answer with no sink")
            return False

        deltas_streamed = self._collector.has_seen_delta or self._is_finishing_after_drain
        self.begin(target)

        if not deltas_streamed and message:
            normalized = message if message.endswith("\n") else message + "\n"
            self._collector.replace_with_and_mark_committed(
                normalized, self._collector.committed_count,
            )

        return self.finalize(flush_immediately=True)

    def clear_all(self) -> None:
        """Hard reset.  Already revealed lines stay revealed."""
        self._stop_commit_animation()
        self._collector.clear()
        self._streamer.clear()
        self._is_active = False
        self._is_finishing_after_drain = False

    # ── Animation ────────────────────────────────────────────────────────────

    def _start_commit_animation(self) -> None:
        if self._timer is not None or self._streamer.is_empty():
            return
        self._timer = self._scheduler.call_every(
            self._config.tick_interval, self._on_commit_tick,
        )
        if self._sink is not None:
            self._sink.start_animation()

    def _stop_commit_animation(self) -> None:
        if self._timer is None:
            return
        self._timer.cancel()
        self._timer = None
        if self._sink is not None:
            self._sink.stop_animation()

    def _on_commit_tick(self) -> None:
        if not self._is_active or self._sink is None:
            return

        step = self._streamer.step()
        if step.lines_to_add:
            self._sink.insert_lines(step.lines_to_add)

        if step.is_complete:
            self._stop_commit_animation()
            if self._is_finishing_after_drain:
                self._cleanup()
                logger.debug("Stream drained")

    def _cleanup(self) -> None:
        self._stop_commit_animation()
        self._collector.clear()
        self._streamer.clear()
        self._is_active = False
        self._is_finishing_after_drain = False
