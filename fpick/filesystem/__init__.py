"""Filesystem model: typed entries, directory listing, and path helpers.

This package contains non-UI primitives:
- ``FileNode``/``FileType`` entry datatypes and the parent chain
- directory listing and start-path resolution
- parent-chain/relative-path string helpers
- metadata summaries for the details action
"""

from __future__ import annotations

from .types import FileNode, FileType, ParentChain
from .fs import list_files, path_file_nodes, resolve_start_dir
from .paths import (
    PathMode,
    base_name,
    chain_abs_path,
    join_path,
    make_relative_path,
    normalize_path,
    output_path,
    parent_dir,
    trim_end_slash,
)
from .details import file_details, format_file_size

__all__ = [
    "FileNode",
    "FileType",
    "ParentChain",
    "list_files",
    "path_file_nodes",
    "resolve_start_dir",
    "PathMode",
    "base_name",
    "chain_abs_path",
    "join_path",
    "make_relative_path",
    "normalize_path",
    "output_path",
    "parent_dir",
    "trim_end_slash",
    "file_details",
    "format_file_size",
]
