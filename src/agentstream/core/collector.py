"""Newline-gated line collector for streamed markdown."""

from __future__ import annotations

import logging

from agentstream.core.markdown import (
    is_inside_open_markdown_wrapper,
    is_inside_unclosed_fence,
    process_markdown_for_streaming,
)

logger = logging.getLogger(__name__)


class LineCollector:
    """Accumulates deltas and releases lines once they are safe to render.

    A line is safe when it is complete (a newline follows it) and the
    normalized buffer is not inside an open code fence.  The committed
    watermark counts lines already handed out; it only moves forward until
    ``clear()``.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._committed_count = 0
        self._has_seen_delta = False

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def committed_count(self) -> int:
        return self._committed_count

    @property
    def has_seen_delta(self) -> bool:
        return self._has_seen_delta

    @property
    def has_content(self) -> bool:
        return bool(self._buffer)

    def push_delta(self, delta: str) -> None:
        """Append a text fragment.  Never commits."""
        if delta:
            self._has_seen_delta = True
        self._buffer += delta

    def commit_complete_lines(self) -> list[str]:
        """Return lines completed since the last commit, or [] if none are safe."""
        if "\n" not in self._buffer:
            return []
        if is_inside_open_markdown_wrapper(self._buffer):
            return []

        processed = process_markdown_for_streaming(self._buffer)
        if is_inside_unclosed_fence(processed):
            return []

        lines = processed.split("\n")
        # The element after the last newline may still grow
        complete = len(lines) - 1
        while complete > 0 and not lines[complete - 1].strip():
            complete -= 1

        if complete <= self._committed_count:
            return []

        new_lines = lines[self._committed_count:complete]
        logger.debug(
            "Committed lines %d..%d", self._committed_count, complete - 1,
        )
        self._committed_count = complete
        return new_lines

    def finalize_and_drain(self) -> list[str]:
        """Return every line not yet committed and reset the collector.

        The trailing partial line, if any, is released as a full line.
        """
        if not self._has_seen_delta or not self._buffer:
            return []

        processed = process_markdown_for_streaming(self._buffer)
        if not processed.endswith("\n"):
            processed += "\n"

        lines = processed.split("\n")[:-1]
        remaining = lines[self._committed_count:]
        self.clear()
        return remaining

    def replace_with_and_mark_committed(self, content: str, committed_count: int) -> None:
        """Seed the buffer with a complete message.

        Lines before *committed_count* are treated as already displayed.
        """
        self._buffer = content
        self._committed_count = committed_count
        self._has_seen_delta = bool(content)

    def clear(self) -> None:
        self._buffer = ""
        self._committed_count = 0
        self._has_seen_delta = False
