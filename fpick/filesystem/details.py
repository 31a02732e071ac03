"""Metadata summary shown by the "Show details" action."""

from __future__ import annotations

import os
import stat
from datetime import datetime

from ..errors import MetadataError

SIZE_UNITS: tuple[str, ...] = ("KiB", "MiB", "GiB", "TiB")


def format_file_size(size_bytes: int) -> str:
    """Format a byte count with binary units, e.g. ``1.5 KiB``."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    value = float(size_bytes)
    unit = "B"
    for unit in SIZE_UNITS:
        value /= 1024.0
        if value < 1024.0:
            break
    return f"{value:.1f} {unit}"


def _describe_type(mode: int, is_symlink: bool) -> str:
    if stat.S_ISDIR(mode):
        kind = "directory"
    elif stat.S_ISREG(mode):
        kind = "regular file"
    else:
        kind = "other"
    return f"{kind} (symlink)" if is_symlink else kind


def file_details(path: str) -> str:
    """Return a multi-line description of ``path``: type, size, mode, mtime."""
    try:
        link_stat = os.lstat(path)
        target_stat = os.stat(path)
    except OSError as exc:
        raise MetadataError(f"failed to read metadata of '{path}'") from exc

    is_symlink = stat.S_ISLNK(link_stat.st_mode)
    modified = datetime.fromtimestamp(target_stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        f"Path: {path}",
        f"Type: {_describe_type(target_stat.st_mode, is_symlink)}",
        f"Size: {format_file_size(target_stat.st_size)} ({target_stat.st_size} bytes)",
        f"Permissions: {stat.filemode(target_stat.st_mode)}",
        f"Modified: {modified}",
    ]
    if is_symlink:
        try:
            lines.append(f"Link target: {os.readlink(path)}")
        except OSError:
            pass
    return "\n".join(lines)


__all__ = [
    "format_file_size",
    "file_details",
]
