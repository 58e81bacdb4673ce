"""Markdown safety helpers for streamed assistant text.

These functions never parse markdown.  They only look at fence markers so the
line collector can tell whether a prefix of the stream is safe to display.
"""

from __future__ import annotations

FENCE = "```"

_MARKDOWN_LABELS = frozenset({"markdown", "md"})


def is_inside_unclosed_fence(text: str) -> bool:
    """Return True if *text* has an odd number of fence markers."""
    return text.count(FENCE) % 2 == 1


def _is_fence_line(line: str) -> bool:
    return line.lstrip().startswith(FENCE)


def strip_empty_fenced_code_blocks(text: str) -> str:
    """Remove fence pairs whose body is empty or whitespace only.

    Fences are paired in document order, so the closer of one block and the
    opener of the next are never mistaken for an empty pair.
    """
    lines = text.split("\n")
    kept: list[str] = []
    inside = False
    i = 0
    while i < len(lines):
        line = lines[i]
        if not _is_fence_line(line):
            kept.append(line)
            i += 1
            continue
        if inside:
            inside = False
            kept.append(line)
            i += 1
            continue

        # Opening fence: look past blank lines for a bare closing fence
        j = i + 1
        while j < len(lines) - 1 and not lines[j].strip():
            j += 1
        if j < len(lines) and lines[j].strip() == FENCE:
            i = j + 1
            continue

        inside = True
        kept.append(line)
        i += 1

    return "\n".join(kept)


def _unwrap_once(text: str) -> str:
    lines = text.split("\n")
    if len(lines) < 2:
        return text

    opening = lines[0].strip()
    if not opening.startswith(FENCE):
        return text
    if opening[len(FENCE):].strip().lower() not in _MARKDOWN_LABELS:
        return text

    # Last non-blank line must be the closing fence
    last = len(lines) - 1
    while last > 0 and not lines[last].strip():
        last -= 1
    if last == 0 or lines[last].strip() != FENCE:
        return text

    inner = lines[1:last]
    if not inner:
        return ""
    return "\n".join(inner) + ("\n" if text.endswith("\n") else "")


def unwrap_markdown_language_fence(text: str) -> str:
    """Return the body of a ```markdown / ```md fence wrapping all of *text*.

    Text that is not wrapped in such a fence is returned unchanged.
    """
    while True:
        unwrapped = _unwrap_once(text)
        if unwrapped == text:
            return unwrapped
        text = unwrapped


def is_inside_open_markdown_wrapper(text: str) -> bool:
    """Return True if *text* opens with ```markdown / ```md that has not closed yet.

    Until the wrapper closes, line numbering of the unwrapped text is unknown,
    so nothing may be committed.
    """
    opening = text.split("\n", 1)[0].strip()
    if not opening.startswith(FENCE):
        return False
    if opening[len(FENCE):].strip().lower() not in _MARKDOWN_LABELS:
        return False
    return unwrap_markdown_language_fence(text) == text


def process_markdown_for_streaming(text: str) -> str:
    """Normalize a buffer snapshot before it is gated and split into lines."""
    while True:
        processed = strip_empty_fenced_code_blocks(unwrap_markdown_language_fence(text))
        if processed == text:
            return processed
        text = processed
