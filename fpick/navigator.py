"""Current-directory state: parent chain, listed children, filter, cursor."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .cursor import SelectionCursor
from .errors import ListingError, contextualized_error
from .filesystem import FileNode, FileType, ParentChain, chain_abs_path, join_path, list_files
from .tree_model import TreeNode, filter_tree_nodes

logger = logging.getLogger(__name__)

ListFiles = Callable[[str], list[FileNode]]


def sort_file_nodes(nodes: list[FileNode]) -> list[FileNode]:
    """Directories first, then case-insensitive name ascending."""
    return sorted(nodes, key=lambda node: (node.file_type is not FileType.DIRECTORY, node.lowercase_name))


class Navigator:
    """Owns "where the user is" and "what is shown there".

    Listing failures never raise: they are passed to ``report_error`` and the
    displayed rows become empty.
    """

    def __init__(
        self,
        parent_nodes: ParentChain | None = None,
        *,
        report_error: Callable[[str], None] | None = None,
        list_files_fn: ListFiles = list_files,
    ) -> None:
        self.parent_nodes: ParentChain = list(parent_nodes or [])
        self.child_nodes: list[FileNode] = []
        self.tree_nodes: list[TreeNode] = []
        self.filter_text = ""
        self.cursor = SelectionCursor()
        self._report_error = report_error
        self._list_files = list_files_fn

    def current_path(self) -> str:
        return chain_abs_path(self.parent_nodes)

    def current_dir_abs_path(self) -> str:
        """Path picked by the "current directory" shortcut."""
        return self.current_path()

    def refresh_children(self) -> None:
        """Re-list the current directory and rebuild the displayed rows."""
        path = self.current_path()
        try:
            nodes = self._list_files(path)
        except (ListingError, OSError) as exc:
            message = contextualized_error(exc)
            logger.warning("listing failed: %s", message)
            self.child_nodes = []
            self.tree_nodes = []
            self.cursor.reset_offset()
            self.cursor.revalidate(0)
            if self._report_error is not None:
                self._report_error(message)
            return
        self.child_nodes = sort_file_nodes(nodes)
        self.render_tree_nodes()

    def render_tree_nodes(self) -> None:
        """Re-run the filter over the current children."""
        self.tree_nodes = filter_tree_nodes(self.child_nodes, self.filter_text)
        self.cursor.reset_offset()
        self.cursor.revalidate(len(self.tree_nodes))

    def set_cursor(self, index: int) -> None:
        self.cursor.set(index, len(self.tree_nodes))

    def move_cursor(self, delta: int) -> None:
        self.cursor.move(delta, len(self.tree_nodes))

    def selected_tree_node(self) -> TreeNode | None:
        if self.cursor.selected is None or self.cursor.selected >= len(self.tree_nodes):
            return None
        return self.tree_nodes[self.cursor.selected]

    def selected_file_node(self) -> FileNode | None:
        node = self.selected_tree_node()
        return None if node is None else node.file_node

    def selected_abs_path(self) -> str | None:
        """Absolute path of the selection; the self reference is the current dir."""
        node = self.selected_tree_node()
        if node is None:
            return None
        if node.file_node is None:
            return self.current_path()
        return join_path(self.current_path(), node.file_node.name)

    def go_into(self) -> None:
        selected = self.selected_file_node()
        if selected is None or selected.file_type is not FileType.DIRECTORY:
            return
        self.parent_nodes.append(selected)
        self.filter_text = ""
        self.refresh_children()
        self.set_cursor(0)

    def go_up(self) -> None:
        if not self.parent_nodes:
            return
        parent = self.parent_nodes.pop()
        self.filter_text = ""
        self.refresh_children()
        index = next(
            (
                idx
                for idx, node in enumerate(self.tree_nodes)
                if node.file_node is not None and node.file_node.name == parent.name
            ),
            0,
        )
        self.set_cursor(index)

    def go_to_root(self) -> None:
        self.parent_nodes.clear()
        self.filter_text = ""
        self.refresh_children()
        self.set_cursor(0)

    def type_filter_text(self, ch: str) -> None:
        self.filter_text += ch
        self.render_tree_nodes()

    def backspace_filter_text(self) -> None:
        if not self.filter_text:
            return
        self.filter_text = self.filter_text[:-1]
        self.render_tree_nodes()

    def clear_filter_text(self) -> None:
        self.filter_text = ""
        self.render_tree_nodes()


__all__ = [
    "Navigator",
    "sort_file_nodes",
]
