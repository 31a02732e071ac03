"""Runtime composition: opens the terminal, wires the session, runs the loop.

This is the only module that touches the real tty; everything below it takes
its collaborators as arguments.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
from collections.abc import Iterator

from ..actions import CommandExecutor
from ..app import PickerApp
from ..config import AppConfig
from ..errors import StartupError
from ..input import EventHandler, KeyReader, PickerKeyHandler
from ..render import render_frame
from ..ui_theme import resolve_theme
from .background import BackgroundEventChannel
from .loop import RuntimeLoopCallbacks, run_main_loop
from .signals import install_signal_handlers, restore_signal_handlers
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def open_terminal(tty_path: str) -> int:
    """Open the controlling terminal for reading and drawing."""
    try:
        return os.open(tty_path, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise StartupError(f"cannot open terminal '{tty_path}'") from exc


def run_picker(config: AppConfig) -> str | None:
    """Run one interactive session; return the picked path or ``None`` on quit."""
    tty_fd = open_terminal(config.tty_path)
    try:
        try:
            terminal = TerminalController(tty_fd, tty_fd)
        except termios.error as exc:
            raise StartupError(f"'{config.tty_path}' is not a terminal") from exc
        events = EventHandler(KeyReader(tty_fd), tick_seconds=config.tick_seconds)
        background = BackgroundEventChannel()

        @contextlib.contextmanager
        def release_terminal() -> Iterator[None]:
            events.suspend()
            terminal.disable_tui_mode()
            try:
                yield
            finally:
                terminal.enable_tui_mode()
                events.resume()

        executor = CommandExecutor(background, release_terminal, tty_path=config.tty_path)
        app = PickerApp(config, executor, background)
        app.init()
        theme = resolve_theme(no_color=config.no_color)

        def draw() -> None:
            columns, rows = terminal.size()
            terminal.write(render_frame(app, columns, rows, theme))

        callbacks = RuntimeLoopCallbacks(
            draw=draw,
            next_event=events.next,
            handle_key=PickerKeyHandler(app).handle,
        )

        previous_handlers = install_signal_handlers(events.post, lambda: not terminal.tui_active)
        try:
            with terminal.raw_mode():
                events.listen()
                try:
                    run_main_loop(app, callbacks)
                finally:
                    events.stop()
        finally:
            restore_signal_handlers(previous_handlers)
        logger.info("session finished, picked=%r", app.picked_path)
        return app.picked_path
    finally:
        os.close(tty_fd)


__all__ = [
    "open_terminal",
    "run_picker",
]
