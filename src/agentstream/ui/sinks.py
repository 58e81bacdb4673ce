"""Concrete sinks for revealed lines."""

from __future__ import annotations

from collections.abc import Callable

from rich.console import Console
from rich.markdown import Markdown

UpdateCallback = Callable[[str, str], None]


class MessageSink:
    """Builds one chat message body from revealed lines.

    Each batch is joined to the body with a newline and ``on_update`` is called
    with ``(message_id, content)`` so a store can replace the message text.
    """

    def __init__(self, message_id: str, on_update: UpdateCallback | None = None) -> None:
        self.message_id = message_id
        self._on_update = on_update
        self._content = ""
        self._started = False
        self.animating = False

    @property
    def content(self) -> str:
        return self._content

    def insert_lines(self, lines: list[str]) -> None:
        if not lines:
            return
        chunk = "\n".join(lines)
        self._content = f"{self._content}\n{chunk}" if self._started else chunk
        self._started = True
        if self._on_update is not None:
            self._on_update(self.message_id, self._content)

    def start_animation(self) -> None:
        self.animating = True

    def stop_animation(self) -> None:
        self.animating = False


class RichSink:
    """Prints revealed lines to a Rich console as they arrive."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()
        self._lines: list[str] = []
        self.animating = False

    def insert_lines(self, lines: list[str]) -> None:
        for line in lines:
            self._console.print(line, highlight=False, markup=False)
        self._lines.extend(lines)

    def start_animation(self) -> None:
        self.animating = True

    def stop_animation(self) -> None:
        self.animating = False

    @property
    def content(self) -> str:
        """Return every line printed so far."""
        return "\n".join(self._lines)

    def render_markdown(self) -> None:
        """Render the accumulated lines as Markdown."""
        if self._lines:
            self._console.print(Markdown(self.content))

    def clear(self) -> None:
        self._lines.clear()
        self.animating = False
