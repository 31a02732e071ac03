"""Command-line front door for fpick.

Parses options, resolves the starting directory, runs the interactive picker,
and prints the picked path. Exit status: 0 after a pick, 1 after quitting
without one, 2 on startup errors.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from typing import TextIO

from . import __version__
from .config import config_from_environment, debug_requested
from .errors import StartupError, contextualized_error
from .filesystem import PathMode, resolve_start_dir
from .logs import flush_logs, init_logging
from .runtime import run_picker

logger = logging.getLogger(__name__)

EXIT_PICKED = 0
EXIT_NO_PICK = 1
EXIT_STARTUP_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fpick",
        description="Interactively pick a file or directory and print its path.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Starting directory. Defaults to the current directory.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-r",
        "--relative",
        "--rel",
        dest="path_mode",
        action="store_const",
        const=PathMode.RELATIVE,
        help="Always print the path relative to the starting directory.",
    )
    mode.add_argument(
        "-a",
        "--absolute",
        "--abs",
        dest="path_mode",
        action="store_const",
        const=PathMode.ABSOLUTE,
        help="Always print the absolute path.",
    )
    parser.add_argument(
        "--stderr",
        action="store_true",
        help="Also write the picked path to stderr when stdout is not a terminal.",
    )
    parser.add_argument("--style", default=None, help="Pygments style for the view action (default: monokai).")
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the picker and viewer.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def write_path(stream: TextIO, path: str) -> None:
    """Write ``path`` as one line with its original filesystem bytes."""
    stream.flush()
    stream.buffer.write(os.fsencode(path) + b"\n")
    stream.buffer.flush()


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, run the picker, and return the process exit status."""
    args = build_parser().parse_args(argv)
    log_buffer = init_logging(debug_requested())
    try:
        try:
            start_dir = resolve_start_dir(args.path)
            config = config_from_environment(
                start_dir,
                path_mode=args.path_mode,
                duplicate_to_stderr=args.stderr,
            )
            if args.style:
                config = dataclasses.replace(config, view_style=args.style)
            if args.no_color:
                config = dataclasses.replace(config, no_color=True)
            picked = run_picker(config)
        except StartupError as exc:
            message = contextualized_error(exc)
            logger.error("startup failed: %s", message)
            sys.stderr.write(f"fpick: {message}\n")
            return EXIT_STARTUP_ERROR
    finally:
        flush_logs(log_buffer)

    if picked is None:
        return EXIT_NO_PICK
    write_path(sys.stdout, picked)
    if config.duplicate_to_stderr and not sys.stdout.isatty():
        write_path(sys.stderr, picked)
    return EXIT_PICKED


if __name__ == "__main__":
    raise SystemExit(main())
