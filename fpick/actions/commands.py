"""External command execution.

Three modes share one shell code path (``sh -c``):

- foreground: block the main loop, capture stdout/stderr
- interactive: hand the terminal to the child until it exits
- background: run the foreground logic on a worker thread and report the
  outcome as one ``BackgroundEvent``

File mutations (rename, create, delete) are shell invocations too, so every
mutation failure surfaces as a ``CommandError``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shlex
import subprocess
import threading
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import BinaryIO

from ..errors import CommandError, FpickError, OperationError, contextualized_error
from ..filesystem import join_path, parent_dir
from ..runtime.background import BackgroundEventChannel, ErrorMessage, InfoMessage

logger = logging.getLogger(__name__)

DEFAULT_TTY_PATH = "/dev/tty"
PATH_PLACEHOLDER = "{}"

TerminalRelease = Callable[[], AbstractContextManager[object]]


@dataclass(frozen=True)
class CommandOutput:
    """Captured result of a successful foreground command."""

    command: str
    stdout: str
    stderr: str

    def summary(self) -> str:
        text = "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)
        return text or f"Command finished: {self.command}"


def expand_template(template: str, path: str) -> str:
    """Substitute the shell-quoted ``path`` for every ``{}`` in ``template``."""
    return template.replace(PATH_PLACEHOLDER, shlex.quote(path))


def run_shell_command(command: str) -> CommandOutput:
    """Run ``command`` with ``sh -c`` and capture its output.

    Raises ``CommandError`` when the shell cannot be started or the command
    exits with a non-zero status.
    """
    logger.info("executing command: %s", command)
    try:
        proc = subprocess.run(
            ["sh", "-c", command],
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise CommandError(command, None) from exc
    if proc.returncode != 0:
        raise CommandError(command, proc.returncode, proc.stdout or "", proc.stderr or "")
    return CommandOutput(command=command, stdout=proc.stdout or "", stderr=proc.stderr or "")


def rename_file(path: str, new_name: str) -> str:
    """Rename ``path`` to ``new_name`` inside the same directory; return the new path."""
    target = join_path(parent_dir(path), new_name)
    if target == path:
        return target
    if os.path.lexists(target):
        raise OperationError(f"'{target}' already exists")
    run_shell_command(f"mv -- {shlex.quote(path)} {shlex.quote(target)}")
    return target


def create_file(path: str) -> None:
    run_shell_command(f"touch -- {shlex.quote(path)}")


def create_directory(path: str) -> None:
    run_shell_command(f"mkdir -p -- {shlex.quote(path)}")


def delete_path(path: str, is_directory: bool) -> None:
    if is_directory:
        run_shell_command(f"rm -rf -- {shlex.quote(path)}")
    else:
        run_shell_command(f"rm -- {shlex.quote(path)}")


class CommandExecutor:
    """Runs commands in the three execution modes.

    ``release_terminal`` returns a context manager that suspends the input
    thread and leaves TUI mode for its duration; it is a no-op when omitted.
    """

    def __init__(
        self,
        background: BackgroundEventChannel,
        release_terminal: TerminalRelease | None = None,
        tty_path: str = DEFAULT_TTY_PATH,
    ) -> None:
        self.background = background
        self._release_terminal = release_terminal
        self.tty_path = tty_path

    def _released(self) -> AbstractContextManager[object]:
        if self._release_terminal is None:
            return contextlib.nullcontext()
        return self._release_terminal()

    @contextlib.contextmanager
    def _controlling_tty(self) -> Iterator[BinaryIO | None]:
        try:
            handle = open(self.tty_path, "r+b", buffering=0)
        except OSError:
            # No controlling terminal: the child inherits our stdio.
            yield None
            return
        with handle:
            yield handle

    def run_foreground(self, command: str) -> CommandOutput:
        with self._released():
            return run_shell_command(command)

    def run_interactive(self, command: str, input_text: str | None = None) -> None:
        """Run ``command`` on the real terminal and block until it exits.

        ``input_text`` is piped to the child's stdin (used to feed a pager);
        otherwise stdin is the terminal as well.
        """
        logger.info("executing interactive command: %s", command)
        with self._released(), self._controlling_tty() as tty:
            kwargs: dict[str, object] = {"stdout": tty, "stderr": tty}
            if input_text is None:
                kwargs["stdin"] = tty
            else:
                kwargs["input"] = input_text.encode("utf-8", errors="replace")
            try:
                proc = subprocess.run(["sh", "-c", command], check=False, **kwargs)
            except OSError as exc:
                raise CommandError(command, None) from exc
        if proc.returncode != 0:
            raise CommandError(command, proc.returncode)

    def run_background(self, command: str) -> threading.Thread:
        """Start ``command`` on a daemon worker; the result arrives on the channel."""
        worker = threading.Thread(
            target=self._run_in_background,
            args=(command,),
            name="fpick-background-command",
            daemon=True,
        )
        worker.start()
        return worker

    def _run_in_background(self, command: str) -> None:
        try:
            output = run_shell_command(command)
        except FpickError as exc:
            self.background.send(ErrorMessage(contextualized_error(exc)))
            return
        self.background.send(InfoMessage(output.summary()))


__all__ = [
    "DEFAULT_TTY_PATH",
    "CommandOutput",
    "CommandExecutor",
    "expand_template",
    "run_shell_command",
    "rename_file",
    "create_file",
    "create_directory",
    "delete_path",
]
