"""Input thread and the event queue feeding the main loop.

A daemon thread polls the terminal and posts ``KEY`` and periodic ``TICK``
events; signal handlers post ``RESIZE`` and ``QUIT`` onto the same queue.
Suspend/resume are commands on a separate control queue so the thread alone
decides when it touches the terminal.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from queue import Empty, SimpleQueue

from .reader import KeyReader

logger = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 5.0
DEFAULT_POLL_SECONDS = 0.1
ACK_TIMEOUT_SECONDS = 2.0

_SUSPEND = "suspend"
_RESUME = "resume"
_STOP = "stop"


class EventKind(Enum):
    TICK = "tick"
    KEY = "key"
    RESIZE = "resize"
    QUIT = "quit"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    key: str = ""


class EventHandler:
    """Owns the input thread and the queue it feeds."""

    def __init__(
        self,
        reader: KeyReader,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        poll_seconds: float = DEFAULT_POLL_SECONDS,
    ) -> None:
        self.reader = reader
        self.tick_seconds = tick_seconds
        self.poll_seconds = poll_seconds
        self._events: SimpleQueue[Event] = SimpleQueue()
        self._control: SimpleQueue[tuple[str, threading.Event]] = SimpleQueue()
        self._thread: threading.Thread | None = None

    def listen(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._run, name="fpick-input", daemon=True)
        self._thread.start()

    def post(self, event: Event) -> None:
        """Queue ``event``; safe to call from signal handlers and other threads."""
        self._events.put(event)

    def next(self, timeout: float | None = None) -> Event | None:
        try:
            return self._events.get(timeout=timeout)
        except Empty:
            return None

    def _command(self, command: str) -> bool:
        thread = self._thread
        if thread is None or not thread.is_alive():
            return False
        ack = threading.Event()
        self._control.put((command, ack))
        acknowledged = ack.wait(ACK_TIMEOUT_SECONDS)
        if not acknowledged:
            logger.warning("input thread did not acknowledge %s", command)
        return acknowledged

    def suspend(self) -> bool:
        """Stop reading the terminal; returns once the input thread has paused."""
        return self._command(_SUSPEND)

    def resume(self) -> bool:
        """Discard input typed meanwhile and start reading again."""
        return self._command(_RESUME)

    def stop(self) -> None:
        thread = self._thread
        if thread is None:
            return
        self._command(_STOP)
        thread.join(ACK_TIMEOUT_SECONDS)
        self._thread = None

    def _run(self) -> None:
        suspended = False
        next_tick = time.monotonic() + self.tick_seconds
        while True:
            while True:
                try:
                    if suspended:
                        command, ack = self._control.get()
                    else:
                        command, ack = self._control.get_nowait()
                except Empty:
                    break
                if command == _STOP:
                    ack.set()
                    return
                if command == _SUSPEND:
                    suspended = True
                elif command == _RESUME and suspended:
                    self.reader.discard_pending_input()
                    suspended = False
                    next_tick = time.monotonic() + self.tick_seconds
                ack.set()

            try:
                key = self.reader.read_key(timeout_ms=int(self.poll_seconds * 1000))
            except OSError as exc:
                logger.error("terminal read failed: %s", exc)
                self.post(Event(EventKind.QUIT))
                return
            if key:
                self.post(Event(EventKind.KEY, key))
            elif self.reader.eof:
                logger.info("terminal closed")
                self.post(Event(EventKind.QUIT))
                return

            now = time.monotonic()
            if now >= next_tick:
                self.post(Event(EventKind.TICK))
                next_tick = now + self.tick_seconds


__all__ = [
    "DEFAULT_TICK_SECONDS",
    "EventKind",
    "Event",
    "EventHandler",
]
