"""Source loading, sanitization, and syntax highlighting for the view action.

Pygments renders the file with a terminal formatter; files it has no lexer
for are shown as plain text. Control bytes are neutralized so viewing a file
cannot drive the terminal.
"""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import OperationError

DEFAULT_STYLE = "monokai"
BINARY_SNIFF_BYTES = 8192

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()
_FORMATTERS: dict[str, TerminalFormatter] = {}


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def looks_binary(path: Path) -> bool:
    with path.open("rb") as handle:
        return b"\0" in handle.read(BINARY_SNIFF_BYTES)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    style = _normalize_style(style)
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    return pygments_highlight(source, lexer, _formatter_for_style(style))


def render_file_for_view(path: Path, style: str = DEFAULT_STYLE, no_color: bool = False) -> str:
    """Return the text the view action pipes into the pager."""
    if path.is_dir():
        raise OperationError(f"cannot view '{path}': it is a directory")
    try:
        if looks_binary(path):
            raise OperationError(f"cannot view '{path}': binary file")
        source = sanitize_terminal_text(read_text(path))
    except OSError as exc:
        raise OperationError(f"cannot view '{path}'") from exc
    if no_color:
        return source
    return colorize_source(source, path, style)


__all__ = [
    "DEFAULT_STYLE",
    "read_text",
    "looks_binary",
    "sanitize_terminal_text",
    "colorize_source",
    "render_file_for_view",
]
