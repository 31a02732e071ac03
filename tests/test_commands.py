"""Tests for shell command execution and file mutations.

Commands run through a real ``sh`` inside temporary directories; the terminal
release hook is replaced by a recording context manager.
"""

from __future__ import annotations

import contextlib
import os
import shlex
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fpick.actions.commands import (
    CommandExecutor,
    CommandOutput,
    create_directory,
    create_file,
    delete_path,
    expand_template,
    rename_file,
    run_shell_command,
)
from fpick.errors import CommandError, OperationError
from fpick.filesystem import list_files
from fpick.runtime.background import BackgroundEventChannel, ErrorMessage, InfoMessage


class TemplateTests(unittest.TestCase):
    def test_every_placeholder_is_replaced_with_quoted_path(self) -> None:
        command = expand_template("cp {} {}.bak", "/tmp/my file.txt")

        self.assertEqual(command, "cp '/tmp/my file.txt' '/tmp/my file.txt'.bak")

    def test_plain_path_is_left_unquoted(self) -> None:
        self.assertEqual(expand_template("less {}", "/tmp/x"), "less /tmp/x")


class RunShellCommandTests(unittest.TestCase):
    def test_captures_stdout_and_stderr(self) -> None:
        output = run_shell_command("echo out; echo err >&2")

        self.assertEqual(output.stdout, "out\n")
        self.assertEqual(output.stderr, "err\n")
        self.assertEqual(output.summary(), "out\nerr")

    def test_summary_for_silent_command(self) -> None:
        self.assertEqual(CommandOutput("true", "", "").summary(), "Command finished: true")

    def test_non_zero_exit_raises_command_error(self) -> None:
        with self.assertRaises(CommandError) as ctx:
            run_shell_command("echo bad >&2; exit 3")

        self.assertEqual(ctx.exception.returncode, 3)
        self.assertEqual(ctx.exception.stderr, "bad\n")
        self.assertIn("exit status: 3", str(ctx.exception))

    def test_shell_start_failure_raises_command_error(self) -> None:
        with mock.patch("fpick.actions.commands.subprocess.run", side_effect=FileNotFoundError("sh")):
            with self.assertRaises(CommandError) as ctx:
                run_shell_command("anything")

        self.assertIsNone(ctx.exception.returncode)


class FileMutationTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)

    def _names(self) -> set[str]:
        return {node.name for node in list_files(self.root)}

    def test_rename_runs_mv_and_listing_reflects_it(self) -> None:
        source = self.root / "foo.txt"
        source.write_text("x", encoding="utf-8")

        with mock.patch(
            "fpick.actions.commands.run_shell_command", wraps=run_shell_command
        ) as run_mock:
            new_path = rename_file(str(source), "bar.txt")

        expected = f"mv -- {shlex.quote(str(source))} {shlex.quote(str(self.root / 'bar.txt'))}"
        run_mock.assert_called_once_with(expected)
        self.assertEqual(new_path, str(self.root / "bar.txt"))
        self.assertIn("bar.txt", self._names())
        self.assertNotIn("foo.txt", self._names())

    def test_rename_refuses_existing_target(self) -> None:
        (self.root / "a.txt").write_text("a", encoding="utf-8")
        (self.root / "b.txt").write_text("b", encoding="utf-8")

        with self.assertRaises(OperationError):
            rename_file(str(self.root / "a.txt"), "b.txt")

        self.assertEqual((self.root / "b.txt").read_text(encoding="utf-8"), "b")

    def test_create_file_and_directory(self) -> None:
        create_file(str(self.root / "new file.txt"))
        create_directory(str(self.root / "nested" / "dir"))

        self.assertTrue((self.root / "new file.txt").is_file())
        self.assertTrue((self.root / "nested" / "dir").is_dir())

    def test_delete_file_and_directory(self) -> None:
        (self.root / "gone.txt").write_text("x", encoding="utf-8")
        (self.root / "tree" / "sub").mkdir(parents=True)
        (self.root / "tree" / "sub" / "f").write_text("x", encoding="utf-8")

        delete_path(str(self.root / "gone.txt"), is_directory=False)
        delete_path(str(self.root / "tree"), is_directory=True)

        self.assertEqual(self._names(), set())

    def test_delete_missing_file_is_command_error(self) -> None:
        with self.assertRaises(CommandError):
            delete_path(str(self.root / "missing"), is_directory=False)


class CommandExecutorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.background = BackgroundEventChannel()
        self.released: list[str] = []

        @contextlib.contextmanager
        def release_terminal():
            self.released.append("suspend")
            try:
                yield
            finally:
                self.released.append("resume")

        self.executor = CommandExecutor(self.background, release_terminal, tty_path="/nonexistent/tty")

    def test_foreground_releases_terminal_around_command(self) -> None:
        output = self.executor.run_foreground("echo hi")

        self.assertEqual(output.stdout, "hi\n")
        self.assertEqual(self.released, ["suspend", "resume"])

    def test_interactive_failure_raises_after_restoring_terminal(self) -> None:
        with self.assertRaises(CommandError):
            self.executor.run_interactive("exit 4")

        self.assertEqual(self.released, ["suspend", "resume"])

    def test_interactive_feeds_input_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = os.path.join(tmp, "out.txt")
            self.executor.run_interactive(f"cat > {shlex.quote(target)}", input_text="paged text")

            with open(target, encoding="utf-8") as handle:
                self.assertEqual(handle.read(), "paged text")

    def test_background_success_sends_one_info_message(self) -> None:
        worker = self.executor.run_background("echo done")
        worker.join(5)

        self.assertEqual(self.background.try_receive(), InfoMessage("done"))
        self.assertIsNone(self.background.try_receive())
        self.assertEqual(self.released, [])

    def test_background_failure_sends_exactly_one_error_message(self) -> None:
        worker = self.executor.run_background("echo broken >&2; exit 2")
        worker.join(5)

        event = self.background.try_receive()
        self.assertIsInstance(event, ErrorMessage)
        self.assertIn("exit status: 2", event.text)
        self.assertIn("stderr: broken", event.text)
        self.assertIsNone(self.background.try_receive())


if __name__ == "__main__":
    unittest.main()
