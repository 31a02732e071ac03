"""Main interactive event loop.

Each iteration takes at most one background result, redraws when something
changed, then waits briefly for one event and handles it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..app import PickerApp
from ..input.events import Event, EventKind

logger = logging.getLogger(__name__)

DEFAULT_WAIT_SECONDS = 0.25


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Operations the loop drives; injected so the loop runs without a tty."""

    draw: Callable[[], None]
    next_event: Callable[[float], Event | None]
    handle_key: Callable[[str], None]


def handle_event(app: PickerApp, event: Event, handle_key: Callable[[str], None]) -> None:
    if event.kind is EventKind.QUIT:
        logger.info("quit requested")
        app.quit()
    elif event.kind is EventKind.KEY:
        handle_key(event.key)
    elif event.kind is EventKind.RESIZE:
        logger.debug("terminal resized")
    elif event.kind is EventKind.TICK:
        pass
    else:
        raise TypeError(f"unknown event kind: {event.kind!r}")


def run_main_loop(
    app: PickerApp,
    callbacks: RuntimeLoopCallbacks,
    wait_seconds: float = DEFAULT_WAIT_SECONDS,
) -> None:
    """Run until ``app.should_quit`` is set."""
    dirty = True
    while not app.should_quit:
        if app.check_background_events():
            dirty = True
        if dirty:
            callbacks.draw()
            dirty = False
        event = callbacks.next_event(wait_seconds)
        if event is None:
            continue
        handle_event(app, event, callbacks.handle_key)
        dirty = True


__all__ = [
    "RuntimeLoopCallbacks",
    "handle_event",
    "run_main_loop",
]
