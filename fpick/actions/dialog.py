"""Second-step text-input dialog state with line editing.

All positions are character indices into ``buffer`` (Python ``str`` indexing),
so editing stays correct for multi-byte input.
"""

from __future__ import annotations

from dataclasses import dataclass

from .catalog import Operation


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


@dataclass
class DialogState:
    """An open dialog awaiting the argument for ``operation``."""

    operation: Operation
    title: str
    buffer: str = ""
    cursor: int = 0

    @classmethod
    def open(cls, operation: Operation, title: str, initial: str = "") -> DialogState:
        return cls(operation=operation, title=title, buffer=initial, cursor=len(initial))

    def _clamp(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.buffer)))

    def _word_start_before(self, position: int) -> int:
        idx = position
        while idx > 0 and not _is_word_char(self.buffer[idx - 1]):
            idx -= 1
        while idx > 0 and _is_word_char(self.buffer[idx - 1]):
            idx -= 1
        return idx

    def _word_end_after(self, position: int) -> int:
        idx = position
        n = len(self.buffer)
        while idx < n and not _is_word_char(self.buffer[idx]):
            idx += 1
        while idx < n and _is_word_char(self.buffer[idx]):
            idx += 1
        return idx

    def insert(self, text: str) -> None:
        self._clamp()
        self.buffer = self.buffer[: self.cursor] + text + self.buffer[self.cursor :]
        self.cursor += len(text)

    def backspace(self) -> None:
        self._clamp()
        if self.cursor == 0:
            return
        self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
        self.cursor -= 1

    def delete(self) -> None:
        self._clamp()
        if self.cursor >= len(self.buffer):
            return
        self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]

    def backspace_word(self) -> None:
        self._clamp()
        start = self._word_start_before(self.cursor)
        self.buffer = self.buffer[:start] + self.buffer[self.cursor :]
        self.cursor = start

    def delete_word(self) -> None:
        self._clamp()
        end = self._word_end_after(self.cursor)
        self.buffer = self.buffer[: self.cursor] + self.buffer[end:]

    def clear_backwards(self) -> None:
        self._clamp()
        self.buffer = self.buffer[self.cursor :]
        self.cursor = 0

    def clear_forwards(self) -> None:
        self._clamp()
        self.buffer = self.buffer[: self.cursor]

    def left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def right(self) -> None:
        self.cursor = min(len(self.buffer), self.cursor + 1)

    def left_word(self) -> None:
        self._clamp()
        self.cursor = self._word_start_before(self.cursor)

    def right_word(self) -> None:
        self._clamp()
        self.cursor = self._word_end_after(self.cursor)

    def home(self) -> None:
        self.cursor = 0

    def end(self) -> None:
        self.cursor = len(self.buffer)


__all__ = ["DialogState"]
