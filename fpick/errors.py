"""Error taxonomy for fpick.

Startup errors abort before the TUI starts. Every other error is caught at the
action seam and turned into a dismissible message via ``contextualized_error``.
"""

from __future__ import annotations


class FpickError(Exception):
    """Base class for all errors raised by fpick itself."""


class StartupError(FpickError):
    """Bad arguments or unusable starting path; fatal before the main loop."""


class ListingError(FpickError):
    """Directory could not be listed while browsing."""


class OperationError(FpickError):
    """An action could not be performed (bad input, unsupported target, ...)."""


class CommandError(OperationError):
    """External command failed to start or exited with a non-zero status."""

    def __init__(
        self,
        command: str,
        returncode: int | None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.returncode is None:
            lines = [f"failed to run command: {self.command}"]
        else:
            lines = [
                f"command failed: {self.command}",
                f"exit status: {self.returncode}",
            ]
        stdout = self.stdout.strip()
        stderr = self.stderr.strip()
        if stdout:
            lines.append(f"stdout: {stdout}")
        if stderr:
            lines.append(f"stderr: {stderr}")
        return "\n".join(lines)


class ClipboardError(OperationError):
    """No clipboard backend accepted the text."""


class MetadataError(OperationError):
    """File metadata could not be read."""


class RelativePathError(OperationError):
    """Path is outside the starting directory while relative output is forced."""


def contextualized_error(error: BaseException) -> str:
    """Join ``error`` and its ``__cause__`` chain into one ``a: b: c`` message."""
    parts: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current).strip()
        if not text:
            text = type(current).__name__
        parts.append(text)
        current = current.__cause__
    return ": ".join(parts)


__all__ = [
    "FpickError",
    "StartupError",
    "ListingError",
    "OperationError",
    "CommandError",
    "ClipboardError",
    "MetadataError",
    "RelativePathError",
    "contextualized_error",
]
