"""Navigator tests against real temporary directory trees."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from fpick.errors import ListingError
from fpick.filesystem import FileNode, FileType, path_file_nodes
from fpick.navigator import Navigator, sort_file_nodes


def _names(navigator: Navigator) -> list[str]:
    return [node.display_name() for node in navigator.tree_nodes]


class NavigatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(os.path.realpath(self._tmp.name))
        (self.root / "Zebra").mkdir()
        (self.root / "alpha").mkdir()
        (self.root / "apple.txt").write_text("a", encoding="utf-8")
        (self.root / "Banana.txt").write_text("b", encoding="utf-8")
        (self.root / "alpha" / "inner.txt").write_text("i", encoding="utf-8")
        self.errors: list[str] = []
        self.navigator = Navigator(path_file_nodes(str(self.root)), report_error=self.errors.append)
        self.navigator.refresh_children()
        self.navigator.set_cursor(0)

    def test_current_path_joins_parent_chain(self) -> None:
        self.assertEqual(self.navigator.current_path(), str(self.root))
        self.assertEqual(Navigator().current_path(), "/")

    def test_listing_is_sorted_directories_first(self) -> None:
        self.assertEqual(_names(self.navigator), [".", "alpha/", "Zebra/", "apple.txt", "Banana.txt"])

    def test_self_reference_selects_current_directory(self) -> None:
        self.assertEqual(self.navigator.selected_abs_path(), str(self.root))

    def test_go_into_then_go_up_reselects_directory(self) -> None:
        self.navigator.set_cursor(2)
        self.assertEqual(self.navigator.selected_tree_node().name, "Zebra")
        chain_before = list(self.navigator.parent_nodes)

        self.navigator.go_into()
        self.assertEqual(self.navigator.current_path(), str(self.root / "Zebra"))
        self.assertEqual(_names(self.navigator), ["."])

        self.navigator.go_up()
        self.assertEqual(self.navigator.parent_nodes, chain_before)
        self.assertEqual(self.navigator.selected_tree_node().name, "Zebra")

    def test_go_into_is_noop_on_files_and_self_reference(self) -> None:
        self.navigator.go_into()
        self.assertEqual(self.navigator.current_path(), str(self.root))

        self.navigator.set_cursor(3)
        self.navigator.go_into()
        self.assertEqual(self.navigator.current_path(), str(self.root))

    def test_go_into_clears_filter(self) -> None:
        self.navigator.type_filter_text("a")
        self.navigator.type_filter_text("l")
        self.assertEqual(self.navigator.selected_tree_node().name, "alpha")

        self.navigator.go_into()

        self.assertEqual(self.navigator.filter_text, "")
        self.assertEqual(_names(self.navigator), [".", "inner.txt"])
        self.assertEqual(self.navigator.cursor.selected, 0)

    def test_go_to_root(self) -> None:
        self.navigator.go_to_root()

        self.assertEqual(self.navigator.current_path(), "/")
        self.assertEqual(self.navigator.parent_nodes, [])
        self.assertEqual(self.navigator.cursor.selected, 0)

    def test_go_up_on_root_is_noop(self) -> None:
        navigator = Navigator(list_files_fn=lambda _path: [])
        navigator.go_up()
        self.assertEqual(navigator.current_path(), "/")

    def test_filter_editing_reruns_filter_without_listing(self) -> None:
        calls: list[str] = []

        def list_files(path: str) -> list[FileNode]:
            calls.append(path)
            return [FileNode("notes.md", FileType.REGULAR), FileNode("todo.txt", FileType.REGULAR)]

        navigator = Navigator(path_file_nodes("/tmp/x"), list_files_fn=list_files)
        navigator.refresh_children()
        navigator.type_filter_text("t")
        navigator.type_filter_text("o")
        self.assertEqual([node.name for node in navigator.tree_nodes], ["todo.txt"])

        navigator.backspace_filter_text()
        navigator.clear_filter_text()
        navigator.backspace_filter_text()

        self.assertEqual(calls, ["/tmp/x"])
        self.assertEqual(len(navigator.tree_nodes), 3)

    def test_cursor_clamped_when_filter_shrinks_list(self) -> None:
        self.navigator.set_cursor(4)
        self.navigator.type_filter_text("zeb")

        self.assertEqual(self.navigator.cursor.selected, 0)
        self.assertEqual(self.navigator.selected_tree_node().name, "Zebra")

    def test_no_match_leaves_no_selection(self) -> None:
        self.navigator.type_filter_text("qqq")

        self.assertEqual(self.navigator.tree_nodes, [])
        self.assertIsNone(self.navigator.selected_tree_node())
        self.assertIsNone(self.navigator.selected_abs_path())

    def test_listing_failure_reports_error_and_empties_list(self) -> None:
        def failing(path: str) -> list[FileNode]:
            raise ListingError(f"failed to read directory '{path}'") from PermissionError("denied")

        navigator = Navigator(path_file_nodes("/locked"), report_error=self.errors.append, list_files_fn=failing)
        navigator.refresh_children()

        self.assertEqual(navigator.child_nodes, [])
        self.assertEqual(navigator.tree_nodes, [])
        self.assertIsNone(navigator.cursor.selected)
        self.assertEqual(self.errors, ["failed to read directory '/locked': denied"])

    def test_sort_file_nodes_case_insensitive(self) -> None:
        nodes = [
            FileNode("b.txt", FileType.REGULAR),
            FileNode("A.txt", FileType.REGULAR),
            FileNode.directory("c"),
            FileNode.directory("B"),
        ]

        self.assertEqual([node.name for node in sort_file_nodes(nodes)], ["B", "c", "A.txt", "b.txt"])


if __name__ == "__main__":
    unittest.main()
