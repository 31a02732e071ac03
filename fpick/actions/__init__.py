"""Action menu: operation catalog, execution modes, dialog and dispatcher."""

from __future__ import annotations

from .catalog import (
    MenuAction,
    Operation,
    Rename,
    generate_known_actions,
    needs_input,
    needs_selection,
)
from .commands import CommandExecutor, CommandOutput, expand_template, run_shell_command
from .dialog import DialogState
from .dispatcher import ActionDispatcher, DispatchContext, Focus

__all__ = [
    "MenuAction",
    "Operation",
    "Rename",
    "generate_known_actions",
    "needs_input",
    "needs_selection",
    "CommandExecutor",
    "CommandOutput",
    "expand_template",
    "run_shell_command",
    "DialogState",
    "ActionDispatcher",
    "DispatchContext",
    "Focus",
]
