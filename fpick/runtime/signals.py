"""Signal handlers that turn process signals into loop events."""

from __future__ import annotations

import signal
from collections.abc import Callable
from typing import Any

from ..input.events import Event, EventKind

# Handlers only enqueue; SimpleQueue.put is safe to call from a signal handler.
_SIGNAL_EVENTS = {
    signal.SIGINT: EventKind.QUIT,
    signal.SIGTERM: EventKind.QUIT,
}
if hasattr(signal, "SIGWINCH"):
    _SIGNAL_EVENTS[signal.SIGWINCH] = EventKind.RESIZE


def install_signal_handlers(
    post: Callable[[Event], None],
    terminal_released: Callable[[], bool] | None = None,
) -> dict[int, Any]:
    """Route SIGINT/SIGTERM to ``QUIT`` and SIGWINCH to ``RESIZE``.

    While ``terminal_released()`` is true a child program owns the terminal
    and SIGINT belongs to it, so it is not turned into ``QUIT``.

    Returns the previous handlers for ``restore_signal_handlers``.
    """
    previous: dict[int, Any] = {}
    for signum, kind in _SIGNAL_EVENTS.items():

        def handler(received: int, _frame: object, kind: EventKind = kind) -> None:
            if received == signal.SIGINT and terminal_released is not None and terminal_released():
                return
            post(Event(kind))

        previous[signum] = signal.signal(signum, handler)
    return previous


def restore_signal_handlers(previous: dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


__all__ = [
    "install_signal_handlers",
    "restore_signal_handlers",
]
