"""Clamped selection cursor over a displayed list."""

from __future__ import annotations


class SelectionCursor:
    """Index into a list of ``length`` rows plus its scroll offset.

    ``selected`` is ``None`` when the list is empty. ``index`` is always a
    valid position once ``set``/``move`` have been called with the current
    length.
    """

    def __init__(self) -> None:
        self.index = 0
        self.selected: int | None = None
        self.offset = 0

    def set(self, index: int, length: int) -> None:
        """Select ``index`` clamped to ``[0, length - 1]``."""
        self.index = max(0, min(index, length - 1))
        self.selected = self.index if length > 0 else None

    def move(self, delta: int, length: int) -> None:
        self.set(self.index + delta, length)

    def revalidate(self, length: int) -> None:
        self.move(0, length)

    def reset_offset(self) -> None:
        self.offset = 0

    def scroll_to_visible(self, visible_rows: int, length: int) -> int:
        """Adjust ``offset`` so the selected row lies within ``visible_rows``."""
        visible_rows = max(1, visible_rows)
        if self.index < self.offset:
            self.offset = self.index
        elif self.index >= self.offset + visible_rows:
            self.offset = self.index - visible_rows + 1
        self.offset = max(0, min(self.offset, max(0, length - visible_rows)))
        return self.offset


__all__ = ["SelectionCursor"]
