"""Displayable rows of the directory list."""

from __future__ import annotations

from dataclasses import dataclass

from ..filesystem import FileNode

SELF_REFERENCE_NAME = "."


@dataclass(frozen=True)
class TreeNode:
    """One row: a real entry, or the "pick this directory" pseudo-entry.

    ``file_node`` is ``None`` for the self reference. ``relevance`` is only
    meaningful while a filter is active.
    """

    file_node: FileNode | None
    relevance: int = 0

    @classmethod
    def self_reference(cls, relevance: int = 0) -> TreeNode:
        return cls(file_node=None, relevance=relevance)

    @property
    def is_self_reference(self) -> bool:
        return self.file_node is None

    @property
    def is_directory(self) -> bool:
        return self.file_node is None or self.file_node.is_directory

    @property
    def indexed_name(self) -> str:
        """Lowercase name the filter matches against."""
        if self.file_node is None:
            return SELF_REFERENCE_NAME
        return self.file_node.lowercase_name

    @property
    def name(self) -> str:
        if self.file_node is None:
            return SELF_REFERENCE_NAME
        return self.file_node.name

    def display_name(self) -> str:
        if self.file_node is None:
            return SELF_REFERENCE_NAME
        return self.file_node.display_name()
