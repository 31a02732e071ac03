"""Filesystem adapter: directory listing and start-path resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import ListingError, StartupError
from .types import FileNode, FileType, ParentChain

logger = logging.getLogger(__name__)


def _classify(entry: os.DirEntry) -> FileNode:
    """Build a ``FileNode`` for ``entry``, following symlinks for the type."""
    try:
        is_symlink = entry.is_symlink()
    except OSError:
        is_symlink = False
    try:
        is_directory = entry.is_dir(follow_symlinks=True)
        is_regular = entry.is_file(follow_symlinks=True)
    except OSError:
        # Dangling or unreadable link target.
        is_directory = False
        is_regular = False

    if is_directory:
        file_type = FileType.DIRECTORY
    elif is_regular:
        file_type = FileType.REGULAR
    else:
        file_type = FileType.OTHER
    return FileNode(
        name=entry.name,
        file_type=file_type,
        is_symlink=is_symlink,
        is_directory=is_directory,
    )


def list_files(dir_path: str | Path) -> list[FileNode]:
    """List the entries of ``dir_path`` in directory order (unsorted).

    Raises ``ListingError`` chained to the underlying ``OSError`` when the
    directory cannot be scanned.
    """
    nodes: list[FileNode] = []
    try:
        with os.scandir(dir_path) as entries:
            for entry in entries:
                nodes.append(_classify(entry))
    except OSError as exc:
        raise ListingError(f"failed to read directory '{dir_path}'") from exc
    return nodes


def resolve_start_dir(path: str | None) -> str:
    """Canonicalize the starting directory given on the command line.

    An empty or missing argument means the current working directory. The
    result is absolute with symlinks resolved and no trailing slash.
    """
    raw = path if path else "."
    candidate = Path(raw).expanduser()
    if not candidate.exists():
        raise StartupError(f"evaluating absolute path '{raw}': no such file or directory")
    try:
        resolved = candidate.resolve(strict=True)
    except OSError as exc:
        raise StartupError(f"evaluating absolute path '{raw}'") from exc
    if not resolved.is_dir():
        raise StartupError(f"'{raw}' is not a directory")
    if not os.access(resolved, os.R_OK | os.X_OK):
        raise StartupError(f"'{raw}' is not readable")
    logger.debug("starting directory resolved to %s", resolved)
    return str(resolved)


def path_file_nodes(abs_path: str) -> ParentChain:
    """Split an absolute path into its root-to-leaf parent chain."""
    return [FileNode.directory(part) for part in abs_path.split("/") if part]


__all__ = [
    "list_files",
    "resolve_start_dir",
    "path_file_nodes",
]
