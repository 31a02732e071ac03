"""ANSI-aware width measurement and line shaping for frame composition.

Escape sequences never count toward width; East Asian wide characters count
two columns and combining marks none.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"


def char_display_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Return the ``max_cols`` display columns of ``text`` starting at ``start_cols``.

    Escapes before the window are replayed at its start, so visible text keeps
    its styling. A wide character that would straddle an edge is dropped.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)

    out: list[str] = []
    carried: list[str] = []
    col = 0
    shown = 0
    i = 0
    n = len(text)
    while i < n and shown < max_cols:
        match = ANSI_ESCAPE_RE.match(text, i) if text[i] == "\x1b" else None
        if match:
            (carried if col < start_cols else out).append(match.group(0))
            i = match.end()
            continue
        ch = text[i]
        w = char_display_width(ch)
        i += 1
        if col < start_cols:
            col += w
            continue
        if carried:
            out.extend(carried)
            carried = []
        if shown + w > max_cols:
            break
        out.append(ch)
        shown += w
        col += w
    return "".join(out)


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns."""
    return slice_ansi_line(text, 0, max_cols)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` with spaces to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap plain multi-line text to ``width`` columns, breaking inside words when needed."""
    if width <= 0:
        return [""]
    lines: list[str] = []
    for raw_line in text.splitlines() or [""]:
        raw_line = raw_line.expandtabs(4)
        chunk: list[str] = []
        col = 0
        for ch in raw_line:
            w = char_display_width(ch)
            if col + w > width and chunk:
                lines.append("".join(chunk))
                chunk = []
                col = 0
            chunk.append(ch)
            col += w
        lines.append("".join(chunk))
    return lines


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_ansi_line",
    "slice_ansi_line",
    "strip_ansi",
    "wrap_text",
]
