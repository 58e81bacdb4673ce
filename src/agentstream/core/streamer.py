"""FIFO of committed lines, revealed one per animation step."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class AnimationStep:
    """Lines released by one step and whether the queue is now empty."""

    lines_to_add: list[str] = field(default_factory=list)
    is_complete: bool = True


class LineStreamer:
    """Queue of committed lines awaiting reveal."""

    def __init__(self) -> None:
        self._queue: deque[str] = deque()

    def enqueue(self, lines: list[str]) -> None:
        self._queue.extend(lines)

    def step(self) -> AnimationStep:
        """Dequeue at most one line."""
        lines = [self._queue.popleft()] if self._queue else []
        return AnimationStep(lines_to_add=lines, is_complete=not self._queue)

    def drain_all(self) -> AnimationStep:
        """Dequeue everything at once."""
        lines = list(self._queue)
        self._queue.clear()
        return AnimationStep(lines_to_add=lines, is_complete=True)

    def is_empty(self) -> bool:
        return not self._queue

    def size(self) -> int:
        return len(self._queue)

    def clear(self) -> None:
        self._queue.clear()
