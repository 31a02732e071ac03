"""Tests for session log buffering and its destinations."""

from __future__ import annotations

import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fpick import logs


class LogBufferTests(unittest.TestCase):
    def setUp(self) -> None:
        self.buffer = logs.init_logging(debug=False)
        self.addCleanup(logging.getLogger("fpick").removeHandler, self.buffer)

    def test_records_are_buffered_and_drained(self) -> None:
        logging.getLogger("fpick.test").info("hello %s", "world")
        logging.getLogger("fpick.test").debug("hidden without debug")

        lines = self.buffer.take_lines()

        self.assertEqual(len(lines), 1)
        self.assertIn("INFO fpick.test: hello world", lines[0])
        self.assertEqual(self.buffer.take_lines(), [])

    def test_reinit_replaces_previous_buffer(self) -> None:
        second = logs.init_logging(debug=True)
        self.addCleanup(logging.getLogger("fpick").removeHandler, second)

        logging.getLogger("fpick.test").debug("detail")

        self.assertEqual(self.buffer.take_lines(), [])
        self.assertEqual(len(second.take_lines()), 1)

    def test_flush_writes_stderr_when_debugging(self) -> None:
        logging.getLogger("fpick.test").warning("careful")
        stderr = io.StringIO()

        logs.flush_logs(self.buffer, environ={"FPICK_DEBUG": "1"}, stderr=stderr)

        self.assertIn("WARNING fpick.test: careful", stderr.getvalue())

    def test_flush_respects_disabled_debug_flag(self) -> None:
        logging.getLogger("fpick.test").info("hello")
        stderr = io.StringIO()

        logs.flush_logs(self.buffer, environ={"FPICK_DEBUG": "0"}, stderr=stderr)

        self.assertEqual(stderr.getvalue(), "")

    def test_flush_is_silent_without_destinations(self) -> None:
        logging.getLogger("fpick.test").warning("careful")
        stderr = io.StringIO()

        logs.flush_logs(self.buffer, environ={}, stderr=stderr)

        self.assertEqual(stderr.getvalue(), "")

    def test_flush_appends_to_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "nested" / "fpick.log"
            logging.getLogger("fpick.test").info("first")
            logs.flush_logs(self.buffer, environ={"FPICK_LOG_FILE": str(log_path)})
            logging.getLogger("fpick.test").info("second")
            logs.flush_logs(self.buffer, environ={"FPICK_LOG_FILE": str(log_path)})

            text = log_path.read_text(encoding="utf-8")

        self.assertIn("first", text)
        self.assertIn("second", text)
        self.assertEqual(len(text.splitlines()), 2)


class LogPathTests(unittest.TestCase):
    def test_resolve_log_path(self) -> None:
        with mock.patch("fpick.logs.user_log_path", return_value=Path("/state/fpick")):
            self.assertEqual(logs.resolve_log_path("1"), Path("/state/fpick/fpick.log"))
            self.assertEqual(logs.resolve_log_path("true"), Path("/state/fpick/fpick.log"))
        self.assertEqual(logs.resolve_log_path("/tmp/x.log"), Path("/tmp/x.log"))
        self.assertIsNone(logs.resolve_log_path(""))
        self.assertIsNone(logs.resolve_log_path(None))


if __name__ == "__main__":
    unittest.main()
