"""Picker session state: navigator, action dispatcher, and the message slot.

``PickerApp`` is what key handlers and the main loop operate on. It owns the
single user-visible message, the picked result, and the quit flag.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .actions import ActionDispatcher, CommandExecutor, DispatchContext, Focus, MenuAction
from .config import AppConfig
from .errors import RelativePathError, contextualized_error
from .filesystem import PathMode, list_files, output_path, path_file_nodes
from .navigator import ListFiles, Navigator
from .runtime.background import BackgroundEventChannel, ErrorMessage, InfoMessage

logger = logging.getLogger(__name__)

MESSAGE_ERROR = "error"
MESSAGE_INFO = "info"


@dataclass(frozen=True)
class UserMessage:
    kind: str
    text: str

    @property
    def is_error(self) -> bool:
        return self.kind == MESSAGE_ERROR


class PickerApp:
    """One picker session from start directory to pick or quit."""

    def __init__(
        self,
        config: AppConfig,
        executor: CommandExecutor,
        background: BackgroundEventChannel,
        *,
        catalog: Sequence[MenuAction] | None = None,
        list_files_fn: ListFiles = list_files,
    ) -> None:
        self.config = config
        self.background = background
        self.message: UserMessage | None = None
        self.picked_path: str | None = None
        self.should_quit = False
        self.navigator = Navigator(
            path_file_nodes(config.start_dir),
            report_error=self.show_error,
            list_files_fn=list_files_fn,
        )
        self.dispatcher = ActionDispatcher(
            DispatchContext(
                navigator=self.navigator,
                executor=executor,
                start_dir=config.start_dir,
                pick_path=self.pick_path,
                show_error=self.show_error,
                show_info=self.show_info,
                view_style=config.view_style,
                no_color=config.no_color,
                pager_command=config.pager_command,
            ),
            catalog,
        )

    def init(self) -> None:
        self.navigator.refresh_children()
        self.navigator.set_cursor(0)

    @property
    def focus(self) -> Focus:
        return self.dispatcher.focus

    # Messages

    def show_error(self, text: str) -> None:
        self.message = UserMessage(MESSAGE_ERROR, text)

    def show_info(self, text: str) -> None:
        self.message = UserMessage(MESSAGE_INFO, text)

    def has_error(self) -> bool:
        return self.message is not None and self.message.kind == MESSAGE_ERROR

    def has_info(self) -> bool:
        return self.message is not None and self.message.kind == MESSAGE_INFO

    def clear_message(self) -> None:
        self.message = None

    # Result

    def quit(self) -> None:
        self.should_quit = True

    def pick_path(self, abs_path: str, mode: PathMode | None = None) -> None:
        """Finish the session with ``abs_path`` in its printed form.

        An explicit ``mode`` (from a menu action) wins over the mode forced on
        the command line. A relative pick outside the starting directory is
        refused with a message.
        """
        mode = mode or self.config.path_mode
        try:
            result = output_path(abs_path, self.config.start_dir, mode)
        except RelativePathError as exc:
            logger.info("pick refused: %s", exc)
            self.show_error(contextualized_error(exc))
            return
        logger.info("picked %s", result)
        self.picked_path = result
        self.quit()

    def pick_selected_node(self, mode: PathMode | None = None) -> None:
        abs_path = self.navigator.selected_abs_path()
        if abs_path is None:
            return
        self.pick_path(abs_path, mode)

    def pick_current_dir(self) -> None:
        self.pick_path(self.navigator.current_dir_abs_path())

    def enter_selected_node(self) -> None:
        """Go into a selected directory; pick anything else."""
        node = self.navigator.selected_tree_node()
        if node is None:
            return
        if node.file_node is not None and node.is_directory:
            self.navigator.go_into()
            return
        self.pick_selected_node()

    # Background results

    def check_background_events(self) -> bool:
        """Show at most one pending background result; return True when one was taken.

        Nothing is taken while a message is open, so results queue up and are
        shown one at a time.
        """
        if self.message is not None:
            return False
        event = self.background.try_receive()
        if event is None:
            return False
        if isinstance(event, ErrorMessage):
            self.show_error(event.text)
        elif isinstance(event, InfoMessage):
            self.show_info(event.text)
        else:
            raise TypeError(f"unknown background event: {event!r}")
        self.navigator.refresh_children()
        return True

    def reload(self) -> None:
        self.navigator.refresh_children()


__all__ = [
    "MESSAGE_ERROR",
    "MESSAGE_INFO",
    "UserMessage",
    "PickerApp",
]
