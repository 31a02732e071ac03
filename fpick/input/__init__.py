"""Terminal input: key decoding, the input thread, and key maps."""

from __future__ import annotations

from .events import Event, EventHandler, EventKind
from .keys import PickerKeyHandler
from .reader import KeyReader

__all__ = [
    "Event",
    "EventHandler",
    "EventKind",
    "KeyReader",
    "PickerKeyHandler",
]
