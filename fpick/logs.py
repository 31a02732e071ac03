"""Session log buffering.

Records are kept in memory while the TUI owns the terminal and written out
once at shutdown: to stderr when ``FPICK_DEBUG`` is set, and appended to a log
file when ``FPICK_LOG_FILE`` is set.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

from platformdirs import user_log_path

from .config import debug_requested

APP_NAME = "fpick"
LOG_FILENAME = "fpick.log"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


class LogBuffer(logging.Handler):
    """Collects formatted records in memory until ``take_lines`` drains them."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.lines: list[str] = []
        self.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.acquire()
        try:
            self.lines.append(line)
        finally:
            self.release()

    def take_lines(self) -> list[str]:
        self.acquire()
        try:
            lines, self.lines = self.lines, []
        finally:
            self.release()
        return lines


def default_log_path() -> Path:
    return user_log_path(APP_NAME, appauthor=False) / LOG_FILENAME


def resolve_log_path(value: str | None) -> Path | None:
    """Interpret ``FPICK_LOG_FILE``: a path is used as-is, ``1``/``true`` means the default."""
    if not value:
        return None
    if value.strip().lower() in {"1", "true", "yes", "on"}:
        return default_log_path()
    return Path(value).expanduser()


def init_logging(debug: bool = False) -> LogBuffer:
    """Install a fresh ``LogBuffer`` on the ``fpick`` logger and return it."""
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, LogBuffer):
            logger.removeHandler(handler)
    buffer = LogBuffer()
    logger.addHandler(buffer)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    return buffer


def flush_logs(
    buffer: LogBuffer,
    environ: Mapping[str, str] | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Write the buffered session log to the configured destinations."""
    environ = os.environ if environ is None else environ
    lines = buffer.take_lines()
    if not lines:
        return
    text = "".join(line + "\n" for line in lines)

    if debug_requested(environ):
        stream = sys.stderr if stderr is None else stderr
        stream.write(text)
        stream.flush()

    log_path = resolve_log_path(environ.get("FPICK_LOG_FILE"))
    if log_path is None:
        return
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("a", encoding="utf-8") as handle:
            handle.write(text)
    except OSError as exc:
        stream = sys.stderr if stderr is None else stderr
        stream.write(f"fpick: could not write log file {log_path}: {exc}\n")


__all__ = [
    "LOG_FILENAME",
    "LogBuffer",
    "default_log_path",
    "flush_logs",
    "init_logging",
    "resolve_log_path",
]
