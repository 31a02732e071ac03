"""Key-token to handler tables used by the per-focus key maps."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """One or more key tokens bound to the same action."""

    combos: tuple[str, ...]
    handler: Callable[[], None]


class KeyComboRegistry:
    """Exact-match key dispatch table; later bindings override earlier ones."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            for combo in binding.combos:
                self._handlers[combo] = binding.handler
        return self

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool:
        """Run the handler bound to ``key``; return whether one was bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True


__all__ = [
    "KeyComboBinding",
    "KeyComboRegistry",
]
