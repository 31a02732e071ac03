"""Tests for error messages shown to the user."""

from __future__ import annotations

import unittest

from fpick.errors import CommandError, OperationError, contextualized_error


class ContextualizedErrorTests(unittest.TestCase):
    def test_joins_cause_chain(self) -> None:
        try:
            try:
                raise FileNotFoundError("no such file")
            except FileNotFoundError as exc:
                raise OperationError("cannot view '/x'") from exc
        except OperationError as exc:
            message = contextualized_error(exc)

        self.assertEqual(message, "cannot view '/x': no such file")

    def test_empty_message_falls_back_to_type_name(self) -> None:
        self.assertEqual(contextualized_error(OperationError()), "OperationError")


class CommandErrorTests(unittest.TestCase):
    def test_failed_command_lists_status_and_streams(self) -> None:
        error = CommandError("false", 1, stdout="out\n", stderr="boom\n")

        self.assertEqual(str(error), "command failed: false\nexit status: 1\nstdout: out\nstderr: boom")
        self.assertEqual(error.returncode, 1)

    def test_unstartable_command(self) -> None:
        error = CommandError("missing-tool", None)

        self.assertEqual(str(error), "failed to run command: missing-tool")
        self.assertIsInstance(error, OperationError)


if __name__ == "__main__":
    unittest.main()
