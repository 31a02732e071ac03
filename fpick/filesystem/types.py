"""Domain datatypes for directory entries and the parent chain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FileType(Enum):
    """Entry kind, resolved through symlinks."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    OTHER = "other"


@dataclass(frozen=True)
class FileNode:
    """One directory entry as observed by the filesystem adapter.

    ``is_directory`` and ``file_type`` describe the symlink target, not the
    link itself; ``is_symlink`` records whether the entry is a link.
    """

    name: str
    file_type: FileType
    is_symlink: bool = False
    is_directory: bool = False
    lowercase_name: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "lowercase_name", self.name.lower())

    @classmethod
    def directory(cls, name: str) -> FileNode:
        """Build a parent-chain element for a path component."""
        return cls(name=name, file_type=FileType.DIRECTORY, is_directory=True)

    def display_name(self) -> str:
        return self.name + ("/" if self.is_directory else "")


ParentChain = list[FileNode]


__all__ = [
    "FileType",
    "FileNode",
    "ParentChain",
]
