"""Frame composition for the picker TUI.

``render_frame`` turns the session state into one full-screen string: the
directory list box, the search box, and at most one overlay (action menu,
input dialog, or message). It only reads state, apart from keeping the list
scroll offsets in step with the cursors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .actions import Focus
from .actions.dialog import DialogState
from .ansi import RESET, clip_ansi_line, display_width, pad_ansi_line, slice_ansi_line, wrap_text
from .filesystem import FileType
from .tree_model import TreeNode
from .ui_theme import UITheme

if TYPE_CHECKING:
    from .app import PickerApp

SELECTION_MARKER = ">> "
SEARCH_CURSOR = "█"
SEARCH_BOX_ROWS = 3
TREE_HINT = "Enter open/pick  Ctrl+O actions  > pick dir  Esc quit"
MENU_HINT = "Enter run  Esc close"
DIALOG_HINT = "Enter confirm  Esc cancel"
MESSAGE_HINT = "Enter/Esc dismiss"
SELF_REFERENCE_NOTE = "(this directory)"


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Reverse-video ``text`` while keeping its inner colors."""
    if not theme.reverse:
        return text
    return theme.reverse + text.replace(RESET, RESET + theme.reverse) + RESET


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


def _border_top(width: int, title: str, border: str, title_style: str, theme: UITheme) -> str:
    inner = max(0, width - 2)
    label = clip_ansi_line(f" {title} ", max(0, inner - 1)) if title else ""
    fill = "─" * max(0, inner - 1 - display_width(label)) if label else "─" * inner
    lead = "─" if label else ""
    return (
        _styled("╭" + lead, border, theme)
        + _styled(label, title_style, theme)
        + _styled(fill + "╮", border, theme)
    )


def _border_bottom(width: int, footer: str, border: str, theme: UITheme) -> str:
    inner = max(0, width - 2)
    label = clip_ansi_line(f" {footer} ", max(0, inner - 1)) if footer else ""
    fill = "─" * max(0, inner - 1 - display_width(label)) if label else "─" * inner
    lead = "─" if label else ""
    return _styled("╰" + lead, border, theme) + _styled(label, theme.hint, theme) + _styled(fill + "╯", border, theme)


def _box(
    title: str,
    body: list[str],
    width: int,
    theme: UITheme,
    *,
    border: str,
    title_style: str,
    footer: str = "",
) -> list[str]:
    inner = max(0, width - 2)
    side = _styled("│", border, theme)
    rows = [_border_top(width, title, border, title_style, theme)]
    rows.extend(side + pad_ansi_line(line, inner) + theme.reset + side for line in body)
    rows.append(_border_bottom(width, footer, border, theme))
    return rows


def _overlay(screen: list[str], box: list[str], top: int, left: int, columns: int, theme: UITheme) -> None:
    """Paint ``box`` over ``screen`` rows in place."""
    for offset, box_row in enumerate(box):
        row = top + offset
        if row < 0 or row >= len(screen):
            continue
        base = screen[row]
        box_width = display_width(box_row)
        right_start = left + box_width
        screen[row] = (
            clip_ansi_line(base, left)
            + theme.reset
            + box_row
            + theme.reset
            + slice_ansi_line(base, right_start, max(0, columns - right_start))
        )


def format_tree_row(node: TreeNode, theme: UITheme) -> str:
    if node.file_node is None:
        return _styled(node.display_name(), theme.self_reference, theme) + " " + _styled(SELF_REFERENCE_NOTE, theme.hint, theme)
    file_node = node.file_node
    if file_node.file_type is FileType.DIRECTORY:
        style = theme.directory
    elif file_node.file_type is FileType.REGULAR:
        style = theme.file
    else:
        style = theme.other
    if file_node.is_symlink:
        style = theme.symlink or style
    return _styled(node.display_name(), style, theme)


def _tree_rows(app: PickerApp, visible_rows: int, inner_width: int, theme: UITheme) -> list[str]:
    navigator = app.navigator
    nodes = navigator.tree_nodes
    offset = navigator.cursor.scroll_to_visible(visible_rows, len(nodes))
    rows: list[str] = []
    for idx in range(offset, min(len(nodes), offset + visible_rows)):
        text = format_tree_row(nodes[idx], theme)
        if idx == navigator.cursor.selected:
            rows.append(selected_with_ansi(pad_ansi_line(SELECTION_MARKER + text, inner_width), theme))
        else:
            rows.append(" " * len(SELECTION_MARKER) + text)
    while len(rows) < visible_rows:
        rows.append("")
    return rows


def _menu_box(app: PickerApp, columns: int, rows: int, theme: UITheme) -> tuple[list[str], int, int]:
    dispatcher = app.dispatcher
    names = [action.name for action in dispatcher.catalog]
    width = min(columns, max(display_width(name) for name in names) + len(SELECTION_MARKER) + 6)
    width = max(width, min(columns, display_width(MENU_HINT) + 6))
    visible = max(1, min(len(names), rows - 4))
    cursor = dispatcher.menu_cursor
    offset = cursor.scroll_to_visible(visible, len(names))
    body: list[str] = []
    for idx in range(offset, min(len(names), offset + visible)):
        if idx == cursor.selected:
            body.append(selected_with_ansi(pad_ansi_line(" " + SELECTION_MARKER + names[idx], width - 2), theme))
        else:
            body.append(" " * (len(SELECTION_MARKER) + 1) + names[idx])
    box = _box("Actions", body, width, theme, border=theme.menu_border, title_style=theme.menu_title, footer=MENU_HINT)
    return box, max(0, (rows - len(box)) // 2), max(0, (columns - width) // 2)


def dialog_input_line(dialog: DialogState, width: int, theme: UITheme) -> str:
    """Render the dialog buffer with a block cursor, scrolled to keep it visible."""
    width = max(1, width)
    buffer = dialog.buffer
    cursor = max(0, min(dialog.cursor, len(buffer)))
    start = 0
    while display_width(buffer[start:cursor]) >= width:
        start += 1
    before = buffer[start:cursor]
    under = buffer[cursor] if cursor < len(buffer) else " "
    after = buffer[cursor + 1 :]
    cursor_cell = selected_with_ansi(under, theme) if theme.reverse else SEARCH_CURSOR
    line = _styled(before, theme.dialog_input, theme) + cursor_cell + _styled(after, theme.dialog_input, theme)
    return clip_ansi_line(line, width)


def _dialog_box(app: PickerApp, columns: int, rows: int, theme: UITheme) -> tuple[list[str], int, int]:
    dialog = app.dispatcher.dialog
    assert dialog is not None
    width = min(columns, max(50, display_width(dialog.title) + 6, int(columns * 0.6)))
    body = [" " + dialog_input_line(dialog, width - 4, theme)]
    box = _box(dialog.title, body, width, theme, border=theme.menu_border, title_style=theme.menu_title, footer=DIALOG_HINT)
    return box, max(0, (rows - len(box)) // 2), max(0, (columns - width) // 2)


def _message_box(app: PickerApp, columns: int, rows: int, theme: UITheme) -> tuple[list[str], int, int]:
    message = app.message
    assert message is not None
    width = min(columns, max(24, int(columns * 0.75)))
    lines = [" " + line for line in wrap_text(message.text, max(1, width - 4))]
    max_body = max(1, rows - 4)
    if len(lines) > max_body:
        lines = lines[: max_body - 1] + [" ..."]
    if message.is_error:
        border, title_style, title = theme.error_border, theme.error_title, "Error"
    else:
        border, title_style, title = theme.info_border, theme.info_title, "Info"
    box = _box(title, lines, width, theme, border=border, title_style=title_style, footer=MESSAGE_HINT)
    return box, max(0, (rows - len(box)) // 2), max(0, (columns - width) // 2)


def render_frame(app: PickerApp, columns: int, rows: int, theme: UITheme) -> str:
    """Compose one full frame of ``rows`` lines, each ``columns`` wide."""
    columns = max(8, columns)
    rows = max(SEARCH_BOX_ROWS + 3, rows)
    inner_width = columns - 2
    list_rows = rows - SEARCH_BOX_ROWS - 2

    navigator = app.navigator
    screen = _box(
        navigator.current_path(),
        _tree_rows(app, list_rows, inner_width, theme),
        columns,
        theme,
        border=theme.border,
        title_style=theme.title,
    )
    search_line = _styled(navigator.filter_text + SEARCH_CURSOR, theme.search_text, theme)
    screen.extend(
        _box("Search", [search_line], columns, theme, border=theme.border, title_style=theme.title, footer=TREE_HINT)
    )

    focus = app.focus
    if focus is Focus.ACTION_MENU:
        _overlay(screen, *_menu_box(app, columns, rows, theme), columns, theme)
    elif focus is Focus.ACTION_MENU_STEP2 and app.dispatcher.dialog is not None:
        _overlay(screen, *_dialog_box(app, columns, rows, theme), columns, theme)
    if app.message is not None:
        _overlay(screen, *_message_box(app, columns, rows, theme), columns, theme)

    return "\033[H\033[J" + "\r\n".join(screen[:rows])


__all__ = [
    "SELECTION_MARKER",
    "SEARCH_CURSOR",
    "dialog_input_line",
    "format_tree_row",
    "render_frame",
    "selected_with_ansi",
]
