"""Channel carrying background command results back to the main loop."""

from __future__ import annotations

from dataclasses import dataclass
from queue import Empty, SimpleQueue


@dataclass(frozen=True)
class InfoMessage:
    text: str


@dataclass(frozen=True)
class ErrorMessage:
    text: str


BackgroundEvent = InfoMessage | ErrorMessage


class BackgroundEventChannel:
    """Multi-producer, single-consumer FIFO of ``BackgroundEvent``.

    Worker threads call ``send``; only the main loop calls ``try_receive``.
    """

    def __init__(self) -> None:
        self._queue: SimpleQueue[BackgroundEvent] = SimpleQueue()

    def send(self, event: BackgroundEvent) -> None:
        self._queue.put(event)

    def try_receive(self) -> BackgroundEvent | None:
        try:
            return self._queue.get_nowait()
        except Empty:
            return None

    def empty(self) -> bool:
        return self._queue.empty()


__all__ = [
    "InfoMessage",
    "ErrorMessage",
    "BackgroundEvent",
    "BackgroundEventChannel",
]
