"""Clipboard copy through platform command-line tools."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from ..errors import ClipboardError

logger = logging.getLogger(__name__)


def clipboard_commands(platform: str | None = None) -> list[list[str]]:
    """Candidate clipboard writers for ``platform``, in preference order."""
    platform = platform or sys.platform
    if platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> str:
    """Copy ``text`` with the first working backend and return its name.

    Raises ``ClipboardError`` when no backend is installed or all of them fail.
    """
    if not text:
        raise ClipboardError("nothing to copy")

    try:
        data = os.fsencode(text)
    except UnicodeError as exc:
        raise ClipboardError(f"cannot encode path for the clipboard: {text!r}") from exc
    failures: list[str] = []
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=data,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            failures.append(f"{command[0]}: {exc}")
            continue
        if proc.returncode == 0:
            logger.info("copied %d characters with %s", len(text), command[0])
            return command[0]
        failures.append(f"{command[0]}: exit status {proc.returncode}")

    if not failures:
        raise ClipboardError("no clipboard tool found (tried wl-copy, xclip, xsel, pbcopy)")
    raise ClipboardError("clipboard copy failed: " + "; ".join(failures))


__all__ = [
    "clipboard_commands",
    "copy_text_to_clipboard",
]
