"""Tests for frame composition."""

from __future__ import annotations

import unittest

from fpick.actions import CommandExecutor, Rename
from fpick.actions.dialog import DialogState
from fpick.ansi import display_width, strip_ansi
from fpick.app import PickerApp
from fpick.config import AppConfig
from fpick.filesystem import FileNode, FileType
from fpick.render import dialog_input_line, render_frame
from fpick.runtime.background import BackgroundEventChannel
from fpick.ui_theme import DEFAULT_THEME, PLAIN_THEME

COLUMNS = 60
ROWS = 12


def make_app(entries: list[FileNode]) -> PickerApp:
    background = BackgroundEventChannel()
    app = PickerApp(
        AppConfig(start_dir="/work"),
        CommandExecutor(background, tty_path="/nonexistent/tty"),
        background,
        list_files_fn=lambda _path: list(entries),
    )
    app.init()
    return app


def frame_lines(app: PickerApp, theme=PLAIN_THEME) -> list[str]:
    frame = render_frame(app, COLUMNS, ROWS, theme)
    assert frame.startswith("\033[H\033[J")
    return frame[len("\033[H\033[J"):].split("\r\n")


SMALL_TREE = [
    FileNode.directory("src"),
    FileNode("notes.txt", FileType.REGULAR),
    FileNode("link", FileType.REGULAR, is_symlink=True),
]


class RenderFrameTests(unittest.TestCase):
    def test_frame_has_fixed_size(self) -> None:
        lines = frame_lines(make_app(SMALL_TREE), DEFAULT_THEME)

        self.assertEqual(len(lines), ROWS)
        self.assertEqual({display_width(line) for line in lines}, {COLUMNS})

    def test_list_box_shows_path_rows_and_selection(self) -> None:
        plain = [strip_ansi(line) for line in frame_lines(make_app(SMALL_TREE))]

        self.assertIn("/work", plain[0])
        self.assertIn(">> . (this directory)", plain[1])
        self.assertIn("src/", plain[2])
        self.assertIn("notes.txt", "\n".join(plain))
        self.assertIn("Search", plain[-3])
        self.assertIn("█", plain[-2])

    def test_search_box_shows_filter_text(self) -> None:
        app = make_app(SMALL_TREE)
        app.navigator.type_filter_text("no")

        plain = [strip_ansi(line) for line in frame_lines(app)]

        self.assertIn("no█", plain[-2])
        self.assertIn(">> notes.txt", plain[1])

    def test_list_scrolls_to_keep_selection_visible(self) -> None:
        entries = [FileNode(f"file{idx:02d}", FileType.REGULAR) for idx in range(30)]
        app = make_app(entries)
        app.navigator.set_cursor(len(app.navigator.tree_nodes) - 1)

        text = "\n".join(strip_ansi(line) for line in frame_lines(app))

        self.assertIn(">> file29", text)
        self.assertNotIn("file00", text)

    def test_action_menu_overlay(self) -> None:
        app = make_app(SMALL_TREE)
        app.dispatcher.open_action_menu()

        lines = frame_lines(app)
        text = "\n".join(strip_ansi(line) for line in lines)

        self.assertIn("Actions", text)
        self.assertIn(">> Open in editor", text)
        self.assertEqual({display_width(line) for line in lines}, {COLUMNS})

    def test_dialog_overlay_shows_title_and_buffer(self) -> None:
        app = make_app(SMALL_TREE)
        app.navigator.set_cursor(3)
        app.dispatcher.rename_selected()

        text = "\n".join(strip_ansi(line) for line in frame_lines(app))

        self.assertIn("New name for notes.txt", text)
        self.assertIn("notes.txt ", text)

    def test_message_overlay_titles(self) -> None:
        app = make_app(SMALL_TREE)
        app.show_error("something broke")
        text = "\n".join(strip_ansi(line) for line in frame_lines(app))
        self.assertIn("Error", text)
        self.assertIn("something broke", text)

        app.show_info("all good")
        text = "\n".join(strip_ansi(line) for line in frame_lines(app))
        self.assertIn("Info", text)
        self.assertIn("all good", text)

    def test_empty_listing_renders_without_selection(self) -> None:
        app = make_app([])
        app.navigator.type_filter_text("zzz")

        plain = [strip_ansi(line) for line in frame_lines(app)]

        self.assertNotIn(">>", "\n".join(plain))
        self.assertEqual(len(plain), ROWS)


class DialogInputLineTests(unittest.TestCase):
    def test_cursor_stays_visible_in_narrow_field(self) -> None:
        dialog = DialogState.open(Rename(), "title", "abcdef")

        self.assertEqual(strip_ansi(dialog_input_line(dialog, 4, PLAIN_THEME)), "def ")

    def test_cursor_inside_buffer_highlights_character(self) -> None:
        dialog = DialogState.open(Rename(), "title", "abc")
        dialog.home()

        line = dialog_input_line(dialog, 10, PLAIN_THEME)

        self.assertTrue(line.startswith("\033[7ma"))
        self.assertEqual(strip_ansi(line), "abc")


if __name__ == "__main__":
    unittest.main()
