"""Terminal control for the picker session.

Owns raw-mode lifecycle and alternate-screen switching on the controlling
terminal, and writes finished frames to it.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"
DEFAULT_SIZE = (80, 24)


class TerminalController:
    """Switch a tty between raw alternate-screen mode and its saved state."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.tui_active = False

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        if self.tui_active:
            return
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self.tui_active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, restore saved tty modes."""
        if not self.tui_active:
            return
        os.write(self.stdout_fd, LEAVE_TUI_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self.tui_active = False

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the terminal."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return DEFAULT_SIZE
        return max(1, size.columns), max(1, size.lines)

    def write(self, text: str) -> None:
        data = text.encode("utf-8", errors="replace")
        while data:
            written = os.write(self.stdout_fd, data)
            data = data[written:]

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
