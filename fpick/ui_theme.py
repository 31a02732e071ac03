"""UI palette for the picker frame.

The plain theme (``NO_COLOR``) keeps reverse video for the selection so the
cursor stays visible without colors.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    reverse: str
    border: str
    title: str
    directory: str
    file: str
    other: str
    symlink: str
    self_reference: str
    search_text: str
    hint: str
    menu_border: str
    menu_title: str
    dialog_input: str
    error_border: str
    error_title: str
    info_border: str
    info_title: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2m",
    title="\033[1m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    other="\033[38;5;244m",
    symlink="\033[38;5;44m",
    self_reference="\033[38;5;81m",
    search_text="\033[93m",
    hint="\033[2;38;5;250m",
    menu_border="\033[38;5;45m",
    menu_title="\033[1;38;5;45m",
    dialog_input="\033[93m",
    error_border="\033[1;31m",
    error_title="\033[1;37;41m",
    info_border="\033[38;5;42m",
    info_title="\033[1;38;5;42m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    border="",
    title="",
    directory="",
    file="",
    other="",
    symlink="",
    self_reference="",
    search_text="",
    hint="",
    menu_border="",
    menu_title="",
    dialog_input="",
    error_border="",
    error_title="",
    info_border="",
    info_title="",
)


def resolve_theme(*, no_color: bool = False) -> UITheme:
    return PLAIN_THEME if no_color else DEFAULT_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "resolve_theme",
]
