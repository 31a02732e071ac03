"""CLI argument, exit status, and output tests.

Verifies how ``fpick.cli.main`` resolves the starting directory, forwards the
path mode, and prints the picked path.
"""

from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fpick import cli
from fpick.errors import StartupError
from fpick.filesystem import PathMode
from fpick.highlight import DEFAULT_STYLE


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(os.path.realpath(tmp.name))
        patcher = mock.patch("fpick.cli.flush_logs")
        patcher.start()
        self.addCleanup(patcher.stop)

    def run_main(self, argv: list[str], picked: str | None = None) -> tuple[int, str, str, mock.Mock]:
        stdout = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        stderr = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        with mock.patch("fpick.cli.run_picker", return_value=picked) as run_picker, contextlib.redirect_stdout(
            stdout
        ), contextlib.redirect_stderr(stderr):
            status = cli.main(argv)
        stdout.flush()
        stderr.flush()
        self.stdout_bytes = stdout.buffer.getvalue()
        out = self.stdout_bytes.decode("utf-8", "surrogateescape")
        return status, out, stderr.buffer.getvalue().decode("utf-8"), run_picker


class CliBehaviorTests(CliTestCase):
    def test_defaults_to_current_working_directory(self) -> None:
        previous_cwd = Path.cwd()
        try:
            os.chdir(self.root)
            status, _out, _err, run_picker = self.run_main([])
        finally:
            os.chdir(previous_cwd)

        config = run_picker.call_args.args[0]
        self.assertEqual(status, cli.EXIT_NO_PICK)
        self.assertEqual(config.start_dir, str(self.root))
        self.assertIsNone(config.path_mode)

    def test_pick_is_printed_with_exit_zero(self) -> None:
        status, out, err, _run_picker = self.run_main([str(self.root)], picked="docs/a.txt")

        self.assertEqual(status, cli.EXIT_PICKED)
        self.assertEqual(out, "docs/a.txt\n")
        self.assertEqual(err, "")

    def test_undecodable_name_is_printed_with_original_bytes(self) -> None:
        status, _out, _err, _run_picker = self.run_main([str(self.root)], picked="caf\udce9.txt")

        self.assertEqual(status, cli.EXIT_PICKED)
        self.assertEqual(self.stdout_bytes, b"caf\xe9.txt\n")

    def test_quit_without_pick_prints_nothing(self) -> None:
        status, out, _err, _run_picker = self.run_main([str(self.root)])

        self.assertEqual(status, cli.EXIT_NO_PICK)
        self.assertEqual(out, "")

    def test_stderr_flag_duplicates_pick_when_stdout_is_redirected(self) -> None:
        status, out, err, _run_picker = self.run_main(["--stderr", str(self.root)], picked="/x")

        self.assertEqual(status, cli.EXIT_PICKED)
        self.assertEqual(out, "/x\n")
        self.assertEqual(err, "/x\n")

    def test_path_mode_flags(self) -> None:
        for flag, mode in (
            ("-r", PathMode.RELATIVE),
            ("--rel", PathMode.RELATIVE),
            ("--relative", PathMode.RELATIVE),
            ("-a", PathMode.ABSOLUTE),
            ("--abs", PathMode.ABSOLUTE),
            ("--absolute", PathMode.ABSOLUTE),
        ):
            with self.subTest(flag=flag):
                _status, _out, _err, run_picker = self.run_main([flag, str(self.root)])
                self.assertIs(run_picker.call_args.args[0].path_mode, mode)

    def test_relative_and_absolute_are_mutually_exclusive(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as caught:
            cli.main(["-r", "-a", str(self.root)])

        self.assertEqual(caught.exception.code, 2)

    def test_style_and_no_color_options(self) -> None:
        _status, _out, _err, run_picker = self.run_main(["--style", "friendly", "--no-color", str(self.root)])

        config = run_picker.call_args.args[0]
        self.assertEqual(config.view_style, "friendly")
        self.assertTrue(config.no_color)

    def test_default_style(self) -> None:
        with mock.patch.dict(os.environ, {"FPICK_STYLE": ""}):
            _status, _out, _err, run_picker = self.run_main([str(self.root)])

        self.assertEqual(run_picker.call_args.args[0].view_style, DEFAULT_STYLE)

    def test_trailing_slash_and_symlinks_are_resolved(self) -> None:
        (self.root / "real").mkdir()
        (self.root / "alias").symlink_to(self.root / "real")

        _status, _out, _err, run_picker = self.run_main([str(self.root / "alias") + "/"])

        self.assertEqual(run_picker.call_args.args[0].start_dir, str(self.root / "real"))


class CliStartupErrorTests(CliTestCase):
    def test_missing_start_directory_exits_two(self) -> None:
        status, out, err, run_picker = self.run_main([str(self.root / "missing")])

        self.assertEqual(status, cli.EXIT_STARTUP_ERROR)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("fpick: "))
        self.assertIn("missing", err)
        run_picker.assert_not_called()

    def test_startup_error_from_session_exits_two(self) -> None:
        stderr = io.StringIO()
        with mock.patch(
            "fpick.cli.run_picker",
            side_effect=StartupError("cannot open terminal '/dev/tty'"),
        ), contextlib.redirect_stderr(stderr):
            status = cli.main([str(self.root)])

        self.assertEqual(status, cli.EXIT_STARTUP_ERROR)
        self.assertEqual(stderr.getvalue(), "fpick: cannot open terminal '/dev/tty'\n")


if __name__ == "__main__":
    unittest.main()
