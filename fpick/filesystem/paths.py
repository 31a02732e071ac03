"""String path helpers for parent chains and relative/absolute output."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from ..errors import RelativePathError
from .types import FileNode

_REPEATED_SLASH_RE = re.compile(r"/{2,}")


class PathMode(Enum):
    """How a picked path is printed."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"


def normalize_path(path: str) -> str:
    """Collapse repeated slashes."""
    return _REPEATED_SLASH_RE.sub("/", path)


def trim_end_slash(path: str) -> str:
    if path == "/":
        return path
    return path.rstrip("/") or "/"


def chain_abs_path(nodes: Iterable[FileNode]) -> str:
    """Absolute path of a parent chain; the empty chain is ``/``."""
    names = [node.name for node in nodes]
    if not names:
        return "/"
    return normalize_path("/" + "/".join(names))


def join_path(directory: str, name: str) -> str:
    return normalize_path(f"{directory}/{name}")


def parent_dir(path: str) -> str:
    head, _sep, _tail = trim_end_slash(path).rpartition("/")
    return head or "/"


def base_name(path: str) -> str:
    return trim_end_slash(path).rpartition("/")[2]


def make_relative_path(abs_path: str, start_dir: str) -> str | None:
    """Return ``abs_path`` relative to ``start_dir`` or ``None`` when outside it.

    The starting directory itself is ``"."``.
    """
    abs_path = trim_end_slash(normalize_path(abs_path))
    start_dir = trim_end_slash(normalize_path(start_dir))
    if abs_path == start_dir:
        return "."
    prefix = start_dir if start_dir.endswith("/") else start_dir + "/"
    if abs_path.startswith(prefix):
        return abs_path[len(prefix):]
    return None


def output_path(abs_path: str, start_dir: str, mode: PathMode | None) -> str:
    """Resolve the printed form of a picked path.

    With no forced ``mode`` the path is relative when it lies inside the
    starting directory's subtree and absolute otherwise.
    """
    if mode is PathMode.ABSOLUTE:
        return abs_path
    relative = make_relative_path(abs_path, start_dir)
    if relative is not None:
        return relative
    if mode is PathMode.RELATIVE:
        raise RelativePathError(f"'{abs_path}' is not inside the starting directory '{start_dir}'")
    return abs_path


__all__ = [
    "PathMode",
    "normalize_path",
    "trim_end_slash",
    "chain_abs_path",
    "join_path",
    "parent_dir",
    "base_name",
    "make_relative_path",
    "output_path",
]
