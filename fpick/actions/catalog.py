"""Operations offered in the action menu.

``Operation`` is a closed union of frozen dataclasses; the dispatcher handles
every member explicitly. The catalog itself is an immutable tuple built once.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass

EDITOR_COMMAND = '"${VISUAL:-${EDITOR:-vi}}" {}'
LESS_COMMAND = "less {}"


@dataclass(frozen=True)
class ShellCommand:
    """Run ``template`` in the foreground, capturing its output."""

    template: str


@dataclass(frozen=True)
class InteractiveShellCommand:
    """Run ``template`` attached to the terminal (editors, pagers)."""

    template: str


@dataclass(frozen=True)
class PickAbsolutePath:
    pass


@dataclass(frozen=True)
class PickRelativePath:
    pass


@dataclass(frozen=True)
class Rename:
    pass


@dataclass(frozen=True)
class CreateFile:
    pass


@dataclass(frozen=True)
class CreateDir:
    pass


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class CopyToClipboard:
    is_relative: bool


@dataclass(frozen=True)
class FileDetails:
    pass


@dataclass(frozen=True)
class ViewContent:
    pass


@dataclass(frozen=True)
class CustomCommand:
    """Ask for a command template and run it in the background."""


@dataclass(frozen=True)
class CustomInteractiveCommand:
    """Ask for a command template and run it attached to the terminal."""


Operation = (
    ShellCommand
    | InteractiveShellCommand
    | PickAbsolutePath
    | PickRelativePath
    | Rename
    | CreateFile
    | CreateDir
    | Delete
    | CopyToClipboard
    | FileDetails
    | ViewContent
    | CustomCommand
    | CustomInteractiveCommand
)

# Operations that take a typed argument in the second dialog step.
INPUT_OPERATIONS: tuple[type, ...] = (
    Rename,
    CreateFile,
    CreateDir,
    CustomCommand,
    CustomInteractiveCommand,
)

# Operations that work without a selected row.
SELECTIONLESS_OPERATIONS: tuple[type, ...] = (CreateFile, CreateDir)


@dataclass(frozen=True)
class MenuAction:
    name: str
    operation: Operation


def needs_input(operation: Operation) -> bool:
    return isinstance(operation, INPUT_OPERATIONS)


def needs_selection(operation: Operation) -> bool:
    return not isinstance(operation, SELECTIONLESS_OPERATIONS)


def default_open_command(platform: str | None = None) -> str:
    """Command template that opens a path with the desktop's default app."""
    platform = platform or sys.platform
    if platform == "darwin":
        return "open {}"
    return "xdg-open {}"


def generate_known_actions(platform: str | None = None) -> tuple[MenuAction, ...]:
    return (
        MenuAction("Open in editor", InteractiveShellCommand(EDITOR_COMMAND)),
        MenuAction("View content", ViewContent()),
        MenuAction("Open in less", InteractiveShellCommand(LESS_COMMAND)),
        MenuAction("Show details", FileDetails()),
        MenuAction("Pick absolute path", PickAbsolutePath()),
        MenuAction("Pick relative path", PickRelativePath()),
        MenuAction("Rename", Rename()),
        MenuAction("Create file", CreateFile()),
        MenuAction("Create directory", CreateDir()),
        MenuAction("Delete", Delete()),
        MenuAction("Copy absolute path to clipboard", CopyToClipboard(is_relative=False)),
        MenuAction("Copy relative path to clipboard", CopyToClipboard(is_relative=True)),
        MenuAction("Run command in background", CustomCommand()),
        MenuAction("Run interactive command", CustomInteractiveCommand()),
        MenuAction("Open with default application", ShellCommand(default_open_command(platform))),
    )


__all__ = [
    "ShellCommand",
    "InteractiveShellCommand",
    "PickAbsolutePath",
    "PickRelativePath",
    "Rename",
    "CreateFile",
    "CreateDir",
    "Delete",
    "CopyToClipboard",
    "FileDetails",
    "ViewContent",
    "CustomCommand",
    "CustomInteractiveCommand",
    "Operation",
    "MenuAction",
    "needs_input",
    "needs_selection",
    "default_open_command",
    "generate_known_actions",
]
