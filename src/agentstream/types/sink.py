"""Sink protocol implemented by the rendering layer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Protocol for anything that displays revealed lines.

    All three calls are fire-and-forget notifications; return values are
    never consulted.
    """

    def insert_lines(self, lines: list[str]) -> None:
        """Append lines to the visible transcript, in order."""
        ...

    def start_animation(self) -> None:
        """Signal that a reveal is in progress."""
        ...

    def stop_animation(self) -> None:
        """Signal that the reveal has paused or stopped."""
        ...
