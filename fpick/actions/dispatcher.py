"""Focus state machine and action execution.

Focus moves between the tree, the action menu, and the second-step dialog.
Every action attempt ends back in the tree with the listing refreshed, and
every failure becomes one user-visible message.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..cursor import SelectionCursor
from ..errors import FpickError, OperationError, contextualized_error
from ..filesystem import PathMode, base_name, file_details, join_path, output_path
from ..highlight import DEFAULT_STYLE, render_file_for_view
from ..navigator import Navigator
from .catalog import (
    CopyToClipboard,
    CreateDir,
    CreateFile,
    CustomCommand,
    CustomInteractiveCommand,
    Delete,
    FileDetails,
    InteractiveShellCommand,
    MenuAction,
    Operation,
    PickAbsolutePath,
    PickRelativePath,
    Rename,
    ShellCommand,
    ViewContent,
    generate_known_actions,
    needs_selection,
)
from .clipboard import copy_text_to_clipboard
from .commands import (
    CommandExecutor,
    create_directory,
    create_file,
    delete_path,
    expand_template,
    rename_file,
)
from .dialog import DialogState

logger = logging.getLogger(__name__)

DEFAULT_PAGER_COMMAND = "less -R"
CONFIRM_ANSWERS = frozenset({"y", "yes"})


class Focus(Enum):
    TREE = "tree"
    ACTION_MENU = "action_menu"
    ACTION_MENU_STEP2 = "action_menu_step2"


@dataclass(frozen=True)
class DispatchContext:
    """Collaborators the dispatcher acts on."""

    navigator: Navigator
    executor: CommandExecutor
    start_dir: str
    pick_path: Callable[[str, PathMode | None], None]
    show_error: Callable[[str], None]
    show_info: Callable[[str], None]
    view_style: str = DEFAULT_STYLE
    no_color: bool = False
    pager_command: str = DEFAULT_PAGER_COMMAND


@dataclass(frozen=True)
class DialogTarget:
    """What an open dialog will act on, captured when it opened."""

    path: str
    is_directory: bool = False


class ActionDispatcher:
    """Routes menu/dialog confirmations to operations."""

    def __init__(
        self,
        context: DispatchContext,
        catalog: Sequence[MenuAction] | None = None,
    ) -> None:
        self.context = context
        self.catalog: tuple[MenuAction, ...] = tuple(catalog) if catalog is not None else generate_known_actions()
        self.focus = Focus.TREE
        self.dialog: DialogState | None = None
        self.dialog_target: DialogTarget | None = None
        self.menu_cursor = SelectionCursor()

    # Focus transitions

    def open_action_menu(self) -> None:
        if not self.context.navigator.tree_nodes:
            return
        self.focus = Focus.ACTION_MENU
        self.menu_cursor.set(0, len(self.catalog))
        self.menu_cursor.reset_offset()

    def close(self) -> None:
        """Return to the tree, discarding any open dialog."""
        self.focus = Focus.TREE
        self.dialog = None
        self.dialog_target = None

    def move_menu_cursor(self, delta: int) -> None:
        self.menu_cursor.move(delta, len(self.catalog))

    def selected_action(self) -> MenuAction | None:
        if self.menu_cursor.selected is None:
            return None
        return self.catalog[self.menu_cursor.selected]

    def _open_dialog(self, operation: Operation, title: str, target: DialogTarget, initial: str = "") -> None:
        self.dialog = DialogState.open(operation, title, initial)
        self.dialog_target = target
        self.focus = Focus.ACTION_MENU_STEP2

    def _fail(self, exc: BaseException) -> None:
        message = contextualized_error(exc)
        logger.warning("action failed: %s", message)
        self.close()
        self.context.show_error(message)

    # Entry points

    def execute_selected_action(self) -> None:
        action = self.selected_action()
        if action is None:
            self.close()
            return
        logger.debug("menu action selected: %s", action.name)
        self.perform(action.operation)

    def perform(self, operation: Operation) -> None:
        """Run ``operation`` now, or open its dialog when it needs an argument."""
        try:
            self._start(operation)
        except (FpickError, OSError) as exc:
            self._fail(exc)
        finally:
            self.context.navigator.refresh_children()

    def rename_selected(self) -> None:
        self.perform(Rename())

    def delete_selected_with_confirm(self) -> None:
        """Open a yes/no dialog before deleting the selection."""
        navigator = self.context.navigator
        node = navigator.selected_tree_node()
        abs_path = navigator.selected_abs_path()
        if node is None or abs_path is None:
            return
        if node.is_self_reference:
            self.context.show_error("cannot delete the directory being browsed")
            return
        self._open_dialog(
            Delete(),
            f"Delete {node.display_name()}? Type y to confirm",
            DialogTarget(abs_path, node.is_directory),
        )

    def submit_dialog(self) -> None:
        """Confirm the open dialog; an empty buffer keeps it open with an error."""
        dialog = self.dialog
        target = self.dialog_target
        if dialog is None or target is None:
            self.close()
            return
        if not dialog.buffer:
            self.context.show_error("No value given")
            return
        self.close()
        try:
            self._finish(dialog.operation, dialog.buffer, target)
        except (FpickError, OSError) as exc:
            self._fail(exc)
        finally:
            self.context.navigator.refresh_children()

    # Operation handling

    def _start(self, operation: Operation) -> None:
        ctx = self.context
        navigator = ctx.navigator
        node = navigator.selected_tree_node()
        abs_path = navigator.selected_abs_path()
        current_dir = navigator.current_path()
        if abs_path is None or node is None:
            if needs_selection(operation):
                self.close()
                return
            abs_path = current_dir

        self.focus = Focus.TREE
        if isinstance(operation, ShellCommand):
            output = ctx.executor.run_foreground(expand_template(operation.template, abs_path))
            if output.stdout.strip() or output.stderr.strip():
                ctx.show_info(output.summary())
        elif isinstance(operation, InteractiveShellCommand):
            ctx.executor.run_interactive(expand_template(operation.template, abs_path))
        elif isinstance(operation, PickAbsolutePath):
            ctx.pick_path(abs_path, PathMode.ABSOLUTE)
        elif isinstance(operation, PickRelativePath):
            ctx.pick_path(abs_path, PathMode.RELATIVE)
        elif isinstance(operation, Rename):
            if node is None or node.is_self_reference:
                raise OperationError("cannot rename the directory being browsed")
            name = base_name(abs_path)
            self._open_dialog(operation, f"New name for {name}", DialogTarget(abs_path, node.is_directory), name)
        elif isinstance(operation, CreateFile):
            self._open_dialog(operation, f"New file at {current_dir}", DialogTarget(current_dir, True))
        elif isinstance(operation, CreateDir):
            self._open_dialog(operation, f"New directory at {current_dir}", DialogTarget(current_dir, True))
        elif isinstance(operation, Delete):
            if node is None or node.is_self_reference:
                raise OperationError("cannot delete the directory being browsed")
            delete_path(abs_path, node.is_directory)
        elif isinstance(operation, CopyToClipboard):
            mode = PathMode.RELATIVE if operation.is_relative else PathMode.ABSOLUTE
            copy_text_to_clipboard(output_path(abs_path, ctx.start_dir, mode))
        elif isinstance(operation, FileDetails):
            ctx.show_info(file_details(abs_path))
        elif isinstance(operation, ViewContent):
            text = render_file_for_view(Path(abs_path), ctx.view_style, ctx.no_color)
            ctx.executor.run_interactive(ctx.pager_command, input_text=text)
        elif isinstance(operation, CustomCommand):
            self._open_dialog(
                operation,
                "Command to run in background ({} is the path)",
                DialogTarget(abs_path, node is not None and node.is_directory),
            )
        elif isinstance(operation, CustomInteractiveCommand):
            self._open_dialog(
                operation,
                "Interactive command to run ({} is the path)",
                DialogTarget(abs_path, node is not None and node.is_directory),
            )
        else:
            raise TypeError(f"unknown operation: {operation!r}")

    def _finish(self, operation: Operation, value: str, target: DialogTarget) -> None:
        ctx = self.context
        if isinstance(operation, Rename):
            rename_file(target.path, value)
        elif isinstance(operation, CreateFile):
            create_file(join_path(target.path, value))
        elif isinstance(operation, CreateDir):
            create_directory(join_path(target.path, value))
        elif isinstance(operation, Delete):
            if value.strip().lower() not in CONFIRM_ANSWERS:
                ctx.show_info(f"Nothing deleted: {target.path}")
                return
            delete_path(target.path, target.is_directory)
        elif isinstance(operation, CustomCommand):
            ctx.executor.run_background(expand_template(value, target.path))
        elif isinstance(operation, CustomInteractiveCommand):
            ctx.executor.run_interactive(expand_template(value, target.path))
        elif isinstance(
            operation,
            (
                ShellCommand,
                InteractiveShellCommand,
                PickAbsolutePath,
                PickRelativePath,
                CopyToClipboard,
                FileDetails,
                ViewContent,
            ),
        ):
            raise OperationError(f"{type(operation).__name__} takes no argument")
        else:
            raise TypeError(f"unknown operation: {operation!r}")


__all__ = [
    "CONFIRM_ANSWERS",
    "DEFAULT_PAGER_COMMAND",
    "Focus",
    "DispatchContext",
    "DialogTarget",
    "ActionDispatcher",
]
